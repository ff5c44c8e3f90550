"""An off-screen 8-bit frame buffer with the drawing primitives of mode 13h."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike

SCREEN_WIDTH = 320
SCREEN_HEIGHT = 200
NUM_COLORS = 256
PALETTE_BYTES = NUM_COLORS * 3

_BMP_HEADER_SIZE = 54


class BitmapError(Exception):
    """Raised when a bitmap file cannot be read or is malformed."""


@dataclass(frozen=True)
class Bitmap:
    """An 8-bit image with a 256-entry palette of 6-bit RGB triples."""

    width: int
    height: int
    palette: bytes
    data: bytes


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class FrameBuffer:
    """A width x height array of palette indices, stored row by row."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("frame buffer dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the buffer")
        return y * self.width + x

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y)."""
        return self._pixels[self._offset(x, y)]

    def plot(self, x: int, y: int, color: int) -> None:
        """Set the pixel at (x, y) to color."""
        self._pixels[self._offset(x, y)] = color & 0xFF

    def clear(self, color: int = 0) -> None:
        """Fill the whole buffer with one colour."""
        self._pixels[:] = bytes([color & 0xFF]) * len(self._pixels)

    def line(self, x1: int, y1: int, x2: int, y2: int, color: int) -> None:
        """Draw a line with Bresenham's algorithm."""
        dx = x2 - x1
        dy = y2 - y1
        dxabs = abs(dx)
        dyabs = abs(dy)
        sdx = _sign(dx)
        sdy = _sign(dy)
        xerr = dyabs >> 1
        yerr = dxabs >> 1
        px, py = x1, y1
        self.plot(px, py, color)
        if dxabs >= dyabs:
            for _ in range(dxabs):
                yerr += dyabs
                if yerr >= dxabs:
                    yerr -= dxabs
                    py += sdy
                px += sdx
                self.plot(px, py, color)
        else:
            for _ in range(dyabs):
                xerr += dxabs
                if xerr >= dyabs:
                    xerr -= dyabs
                    px += sdx
                py += sdy
                self.plot(px, py, color)

    def vert_line(self, x: int, y1: int, y2: int, color: int) -> None:
        """Draw a vertical line at x from y1 to y2, clipped to the buffer."""
        if y2 < y1:
            y1, y2 = y2, y1
        if y2 < 0 or y1 >= self.height or x < 0 or x >= self.width:
            return
        y1 = max(y1, 0)
        y2 = min(y2, self.height - 1)
        for y in range(y1, y2 + 1):
            self.plot(x, y, color)

    @staticmethod
    def _order(left: int, top: int, right: int, bottom: int) -> tuple[int, int, int, int]:
        if top > bottom:
            top, bottom = bottom, top
        if left > right:
            left, right = right, left
        return left, top, right, bottom

    def rect(self, left: int, top: int, right: int, bottom: int, color: int) -> None:
        """Draw the outline of a rectangle."""
        left, top, right, bottom = self._order(left, top, right, bottom)
        for x in range(left, right + 1):
            self.plot(x, top, color)
            self.plot(x, bottom, color)
        for y in range(top, bottom + 1):
            self.plot(left, y, color)
            self.plot(right, y, color)

    def rect_fill(self, left: int, top: int, right: int, bottom: int, color: int) -> None:
        """Draw a filled rectangle."""
        left, top, right, bottom = self._order(left, top, right, bottom)
        self._offset(left, top)
        self._offset(right, bottom)
        span = bytes([color & 0xFF]) * (right - left + 1)
        for y in range(top, bottom + 1):
            start = y * self.width + left
            self._pixels[start:start + len(span)] = span

    def _check_region(self, x: int, y: int, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("region dimensions must not be negative")
        if width and height:
            self._offset(x, y)
            self._offset(x + width - 1, y + height - 1)

    def grab(self, x: int, y: int, width: int, height: int) -> bytes:
        """Copy a rectangular region out of the buffer, row by row."""
        self._check_region(x, y, width, height)
        rows = (
            self._pixels[(y + row) * self.width + x:(y + row) * self.width + x + width]
            for row in range(height)
        )
        return b"".join(bytes(r) for r in rows)

    def blit(self, x: int, y: int, width: int, height: int, sprite: bytes) -> None:
        """Copy a width x height sprite into the buffer at (x, y)."""
        self._check_region(x, y, width, height)
        if len(sprite) < width * height:
            raise ValueError("sprite is smaller than the region it is drawn into")
        for row in range(height):
            start = (y + row) * self.width + x
            self._pixels[start:start + width] = sprite[row * width:(row + 1) * width]

    def to_bytes(self) -> bytes:
        """Return the buffer contents."""
        return bytes(self._pixels)


def palette_grid() -> FrameBuffer:
    """Return a screen showing all 256 colours as a 16 by 16 grid of squares."""
    buffer = FrameBuffer()
    for square in range(NUM_COLORS):
        row, col = divmod(square, 16)
        buffer.rect_fill(col * 20, row * 12, col * 20 + 19, row * 12 + 11, square)
    return buffer


def show_image(pixels: bytes, width: int, height: int) -> FrameBuffer:
    """Return a screen with an image copied into its upper left corner."""
    if width > SCREEN_WIDTH or height > SCREEN_HEIGHT:
        raise ValueError(f"image {width}x{height} does not fit on the screen")
    buffer = FrameBuffer()
    buffer.blit(0, 0, width, height, pixels)
    return buffer


def parse_bmp(data: bytes) -> Bitmap:
    """Decode an uncompressed 8-bit BMP image."""
    if data[:2] != b"BM":
        raise BitmapError("not a bitmap file")
    if len(data) < _BMP_HEADER_SIZE:
        raise BitmapError("bitmap header is truncated")
    (width,) = struct.unpack_from("<H", data, 18)
    (height,) = struct.unpack_from("<H", data, 22)
    (num_colors,) = struct.unpack_from("<H", data, 46)
    if num_colors == 0:
        num_colors = NUM_COLORS
    if num_colors > NUM_COLORS:
        raise BitmapError(f"too many palette entries: {num_colors}")

    pixel_start = _BMP_HEADER_SIZE + num_colors * 4
    if len(data) < pixel_start:
        raise BitmapError("bitmap palette is truncated")
    palette = bytearray(PALETTE_BYTES)
    for index in range(num_colors):
        blue, green, red, _ = data[_BMP_HEADER_SIZE + index * 4:_BMP_HEADER_SIZE + index * 4 + 4]
        palette[index * 3:index * 3 + 3] = bytes((red >> 2, green >> 2, blue >> 2))

    raw = data[pixel_start:pixel_start + width * height]
    if len(raw) < width * height:
        raise BitmapError("bitmap image data is truncated")
    rows = [raw[row * width:(row + 1) * width] for row in range(height)]
    return Bitmap(width, height, bytes(palette), b"".join(reversed(rows)))


def load_bmp(path: str | PathLike) -> Bitmap:
    """Read and decode a BMP file."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise BitmapError(f"Error opening file {path}.") from exc
    try:
        return parse_bmp(data)
    except BitmapError as exc:
        raise BitmapError(f"{path}: {exc}") from exc
"""Loading, decoding and compressing 256-colour PCX images."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike

HEADER_SIZE = 128
PALETTE_BYTES = 768
MAX_WIDTH = 320
MAX_HEIGHT = 200
PCX_VERSION = 5
MAX_RUN = 127

_HEADER_FORMAT = "<4B6h48s2B2h58s"
_RUN_MARKER = 0xBF


class PcxError(Exception):
    """Raised when a PCX file cannot be read or is not supported."""


@dataclass(frozen=True)
class PcxHeader:
    """The fixed 128-byte header at the start of a PCX file."""

    manufacturer: int
    version: int
    encoding: int
    bits_per_pixel: int
    xmin: int
    ymin: int
    xmax: int
    ymax: int
    hres: int
    vres: int
    palette16: bytes
    reserved: int
    color_planes: int
    bytes_per_line: int
    palette_type: int
    filler: bytes

    @classmethod
    def unpack(cls, data: bytes) -> PcxHeader:
        """Decode a header from the first 128 bytes of data."""
        if len(data) < HEADER_SIZE:
            raise PcxError("PCX header is truncated")
        return cls(*struct.unpack_from(_HEADER_FORMAT, data))

    @property
    def width(self) -> int:
        return self.xmax - self.xmin + 1

    @property
    def height(self) -> int:
        return self.ymax - self.ymin + 1


@dataclass(frozen=True)
class PcxImage:
    """A decoded PCX image: header, pixel indices and a 6-bit palette."""

    header: PcxHeader
    pixels: bytes
    palette: bytes

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height


def decode_rle(data: bytes, size: int) -> bytes:
    """Expand PCX run-length data into exactly size bytes.

    A byte above 0xBF starts a run whose length is its low six bits
    (a length of zero still yields one byte). If the data ends early,
    the remaining pixels are zero.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    out = bytearray()
    pos = 0
    end = len(data)
    while len(out) < size and pos < end:
        value = data[pos]
        pos += 1
        run = 1
        if value > _RUN_MARKER:
            if pos >= end:
                break
            run = max(value & 0x3F, 1)
            value = data[pos]
            pos += 1
        out.extend(bytes([value]) * min(run, size - len(out)))
    out.extend(bytes(size - len(out)))
    return bytes(out)


def parse_pcx(data: bytes) -> PcxImage:
    """Decode a 256-colour PCX image that fits on a 320x200 screen."""
    header = PcxHeader.unpack(data)
    width, height = header.width, header.height
    if width <= 0 or height <= 0:
        raise PcxError(f"invalid image dimensions {width}x{height}")
    if width > MAX_WIDTH or height > MAX_HEIGHT:
        raise PcxError(f"image {width}x{height} is too big")
    if header.version != PCX_VERSION:
        raise PcxError(f"unsupported PCX version {header.version}")
    if len(data) < PALETTE_BYTES:
        raise PcxError("PCX palette is missing")
    pixels = decode_rle(data[HEADER_SIZE:], width * height)
    palette = bytes(value >> 2 for value in data[-PALETTE_BYTES:])
    return PcxImage(header, pixels, palette)


def load_pcx(path: str | PathLike) -> PcxImage:
    """Read and decode a PCX file."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise PcxError(f"cannot open {path}") from exc
    return parse_pcx(data)


def compress(pixels: bytes) -> bytes:
    """Compress pixels into runs of transparent (zero) and literal bytes.

    A run of up to 127 zeros is stored as (128 + length, 0); a run of up
    to 127 non-zero pixels as (length, pixel, pixel, ...).
    """
    out = bytearray()
    ptr = 0
    total = len(pixels)
    while ptr < total:
        start = ptr
        if pixels[ptr] == 0:
            while ptr < total and pixels[ptr] == 0 and ptr - start < MAX_RUN:
                ptr += 1
            out += bytes((ptr - start + 128, 0))
        else:
            while ptr < total and pixels[ptr] != 0 and ptr - start < MAX_RUN:
                ptr += 1
            out.append(ptr - start)
            out += pixels[start:ptr]
    return bytes(out)


def transpose_bitmap(pixels: bytes, width: int, height: int) -> bytes:
    """Swap rows and columns, so pixel (x, y) moves to (y, x)."""
    if len(pixels) != width * height:
        raise ValueError("pixel data does not match the given dimensions")
    return bytes(pixels[j * width + i] for i in range(width) for j in range(height))
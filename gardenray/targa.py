"""Loading 8-bit uncompressed colour-mapped Targa images."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from os import PathLike

HEADER_SIZE = 18
MAX_WIDTH = 320
MAX_HEIGHT = 200
PALETTE_ENTRIES = 256

_HEADER_FORMAT = "<BBBHHBHHHHBB"


class TgaError(Exception):
    """Raised when a Targa file cannot be read or is not supported."""


@dataclass(frozen=True)
class TgaHeader:
    """The 18-byte header at the start of a Targa file."""

    id_length: int
    color_map_type: int
    image_type: int
    first_color_map_entry: int
    color_map_length: int
    color_map_entry_size: int
    image_x_origin: int
    image_y_origin: int
    image_width: int
    image_height: int
    bits_per_pixel: int
    image_descriptor_bits: int


@dataclass(frozen=True)
class TgaImage:
    """A decoded Targa image with a 6-bit RGB palette."""

    header: TgaHeader
    id: bytes
    palette: bytes
    pixels: bytes

    @property
    def width(self) -> int:
        return self.header.image_width

    @property
    def height(self) -> int:
        return self.header.image_height


def _check(header: TgaHeader) -> None:
    if header.image_type != 1:
        raise TgaError("not an uncompressed colour-mapped image")
    if header.image_width > MAX_WIDTH:
        raise TgaError(f"image is wider than {MAX_WIDTH} pixels")
    if header.image_height > MAX_HEIGHT:
        raise TgaError(f"image is taller than {MAX_HEIGHT} pixels")
    if header.bits_per_pixel != 8:
        raise TgaError("not an 8-bit image")
    if header.color_map_entry_size != 24:
        raise TgaError("palette is not 24-bit")


def parse_tga(data: bytes) -> TgaImage:
    """Decode an 8-bit uncompressed Targa image with a 24-bit palette."""
    if len(data) < HEADER_SIZE:
        raise TgaError("Targa header is truncated")
    header = TgaHeader(*struct.unpack_from(_HEADER_FORMAT, data))
    _check(header)

    pos = HEADER_SIZE
    image_id = data[pos:pos + header.id_length]
    pos += header.id_length

    raw_palette = data[pos:pos + PALETTE_ENTRIES * 3]
    if len(raw_palette) < PALETTE_ENTRIES * 3:
        raise TgaError("Targa palette is truncated")
    pos += PALETTE_ENTRIES * 3
    palette = bytearray()
    for entry in range(PALETTE_ENTRIES):
        blue, green, red = raw_palette[entry * 3:entry * 3 + 3]
        palette += bytes((red >> 2, green >> 2, blue >> 2))

    size = header.image_width * header.image_height
    pixels = data[pos:pos + size]
    if len(pixels) < size:
        raise TgaError("Targa image data is truncated")
    return TgaImage(header, bytes(image_id), bytes(palette), bytes(pixels))


def load_tga(path: str | PathLike) -> TgaImage:
    """Read and decode a Targa file."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise TgaError(f"cannot open {path}") from exc
    return parse_tga(data)
import struct

import pytest

from gardenray.targa import TgaError, load_tga, parse_tga


def make_tga(width, height, pixels, image_id=b"", image_type=1, bpp=8, entry_size=24):
    header = struct.pack(
        "<BBBHHBHHHHBB",
        len(image_id), 1, image_type, 0, 256, entry_size, 0, 0, width, height, bpp, 0,
    )
    palette = b"".join(bytes((i, (i * 3) % 256, 255 - i)) for i in range(256))
    return header + image_id + palette + pixels


def test_parse_pixels_and_size():
    pixels = bytes(range(12))
    image = parse_tga(make_tga(4, 3, pixels))
    assert (image.width, image.height) == (4, 3)
    assert image.pixels == pixels
    assert image.id == b""


def test_palette_converted_to_rgb_six_bit():
    image = parse_tga(make_tga(1, 1, b"\x00"))
    for i in range(256):
        blue, green, red = i, (i * 3) % 256, 255 - i
        assert image.palette[i * 3:i * 3 + 3] == bytes((red >> 2, green >> 2, blue >> 2))


def test_id_string_read():
    image = parse_tga(make_tga(2, 1, b"\x01\x02", image_id=b"label"))
    assert image.id == b"label"
    assert image.pixels == b"\x01\x02"


def test_load_from_file(tmp_path):
    path = tmp_path / "a.tga"
    path.write_bytes(make_tga(2, 2, bytes([9, 8, 7, 6])))
    assert load_tga(path).pixels == bytes([9, 8, 7, 6])


def test_missing_file(tmp_path):
    with pytest.raises(TgaError):
        load_tga(tmp_path / "none.tga")


@pytest.mark.parametrize(
    "kwargs",
    [{"image_type": 2}, {"bpp": 16}, {"entry_size": 16}],
)
def test_unsupported_formats(kwargs):
    with pytest.raises(TgaError):
        parse_tga(make_tga(1, 1, b"\x00", **kwargs))


def test_too_wide():
    with pytest.raises(TgaError):
        parse_tga(make_tga(321, 1, bytes(321)))


def test_too_tall():
    with pytest.raises(TgaError):
        parse_tga(make_tga(1, 201, bytes(201)))


def test_truncated_pixels():
    with pytest.raises(TgaError):
        parse_tga(make_tga(4, 4, bytes(10)))


def test_truncated_header():
    with pytest.raises(TgaError):
        parse_tga(b"\x00\x01")
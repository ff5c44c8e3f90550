import struct

import pytest

from gardenray.framebuffer import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    Bitmap,
    BitmapError,
    FrameBuffer,
    load_bmp,
    palette_grid,
    parse_bmp,
    show_image,
)


def _bmp(width, height, palette_bgrx, rows_bottom_up, num_colors=None):
    count = len(palette_bgrx) if num_colors is None else num_colors
    header = (
        b"BM"
        + bytes(16)
        + struct.pack("<H", width)
        + bytes(2)
        + struct.pack("<H", height)
        + bytes(22)
        + struct.pack("<H", count)
        + bytes(6)
    )
    pal = b"".join(bytes(entry) for entry in palette_bgrx)
    return header + pal + b"".join(rows_bottom_up)


def test_default_size_matches_screen():
    fb = FrameBuffer()
    assert len(fb.to_bytes()) == SCREEN_WIDTH * SCREEN_HEIGHT


def test_plot_and_pixel_round_trip():
    fb = FrameBuffer(10, 5)
    fb.plot(3, 4, 77)
    assert fb.pixel(3, 4) == 77
    assert fb.to_bytes()[4 * 10 + 3] == 77


def test_plot_outside_raises():
    fb = FrameBuffer(10, 5)
    with pytest.raises(IndexError):
        fb.plot(10, 0, 1)
    with pytest.raises(IndexError):
        fb.pixel(0, -1)


def test_clear_fills_everything():
    fb = FrameBuffer(8, 8)
    fb.clear(9)
    assert set(fb.to_bytes()) == {9}


def test_horizontal_line_covers_span():
    fb = FrameBuffer(20, 5)
    fb.line(2, 1, 12, 1, 15)
    assert [fb.pixel(x, 1) for x in range(2, 13)] == [15] * 11
    assert fb.to_bytes().count(15) == 11


def test_line_is_symmetric_in_pixel_count_and_hits_endpoints():
    fb = FrameBuffer(320, 200)
    fb.line(82, 19, 135, 44, 15)
    assert fb.pixel(82, 19) == 15
    assert fb.pixel(135, 44) == 15
    assert fb.to_bytes().count(15) == max(135 - 82, 44 - 19) + 1


def test_steep_line_one_pixel_per_row():
    fb = FrameBuffer(50, 50)
    fb.line(10, 40, 14, 2, 3)
    for y in range(2, 41):
        assert sum(1 for x in range(50) if fb.pixel(x, y) == 3) == 1


def test_vert_line_swaps_and_clips():
    fb = FrameBuffer(10, 10)
    fb.vert_line(4, 20, -5, 6)
    assert [fb.pixel(4, y) for y in range(10)] == [6] * 10
    assert fb.to_bytes().count(6) == 10


def test_vert_line_off_screen_draws_nothing():
    fb = FrameBuffer(10, 10)
    fb.vert_line(12, 0, 5, 6)
    fb.vert_line(3, -8, -2, 6)
    assert fb.to_bytes().count(6) == 0


def test_rect_draws_outline_only():
    fb = FrameBuffer(20, 20)
    fb.rect(15, 12, 5, 2, 1)
    assert fb.pixel(5, 2) == 1
    assert fb.pixel(15, 12) == 1
    assert fb.pixel(10, 7) == 0
    perimeter = 2 * (15 - 5 + 1) + 2 * (12 - 2 - 1)
    assert fb.to_bytes().count(1) == perimeter


def test_rect_fill_area():
    fb = FrameBuffer(20, 20)
    fb.rect_fill(8, 9, 3, 4, 2)
    assert fb.to_bytes().count(2) == 6 * 6
    assert fb.pixel(3, 4) == 2 and fb.pixel(8, 9) == 2
    assert fb.pixel(9, 9) == 0


def test_grab_blit_round_trip():
    src = FrameBuffer(30, 30)
    for y in range(30):
        for x in range(30):
            src.plot(x, y, (x * 7 + y) % 256)
    sprite = src.grab(5, 6, 10, 4)
    assert len(sprite) == 40
    dst = FrameBuffer(30, 30)
    dst.blit(5, 6, 10, 4, sprite)
    assert dst.grab(5, 6, 10, 4) == sprite
    assert dst.pixel(4, 6) == 0


def test_blit_rejects_short_sprite_and_bad_region():
    fb = FrameBuffer(10, 10)
    with pytest.raises(ValueError):
        fb.blit(0, 0, 3, 3, b"\x01" * 8)
    with pytest.raises(IndexError):
        fb.grab(8, 8, 3, 3)


def test_palette_grid_layout():
    fb = palette_grid()
    assert fb.pixel(0, 0) == 0
    assert fb.pixel(319, 199 - 8) == 255
    assert fb.pixel(20, 0) == 1
    assert fb.pixel(0, 12) == 16
    assert set(fb.to_bytes()) == set(range(256))


def test_show_image_copies_top_left():
    pixels = bytes(range(12))
    fb = show_image(pixels, 4, 3)
    assert fb.grab(0, 0, 4, 3) == pixels
    assert fb.pixel(4, 0) == 0


def test_show_image_too_large():
    with pytest.raises(ValueError):
        show_image(bytes(321), 321, 1)


def test_parse_bmp_palette_and_row_order():
    data = _bmp(2, 2, [(4, 8, 252, 0), (0, 0, 0, 0)], [b"\x01\x00", b"\x00\x01"])
    bmp = parse_bmp(data)
    assert isinstance(bmp, Bitmap)
    assert (bmp.width, bmp.height) == (2, 2)
    assert bmp.palette[:3] == bytes((252 >> 2, 8 >> 2, 4 >> 2))
    assert len(bmp.palette) == 768
    assert bmp.data == b"\x00\x01\x01\x00"


def test_parse_bmp_zero_colors_means_256():
    palette = [(i, i, i, 0) for i in range(256)]
    data = _bmp(1, 1, palette, [b"\x05"], num_colors=0)
    bmp = parse_bmp(data)
    assert bmp.palette[255 * 3] == 255 >> 2
    assert bmp.data == b"\x05"


def test_parse_bmp_rejects_bad_magic():
    with pytest.raises(BitmapError):
        parse_bmp(b"XX" + bytes(100))


def test_parse_bmp_rejects_truncated_pixels():
    data = _bmp(4, 4, [(0, 0, 0, 0)], [b"\x00" * 4])
    with pytest.raises(BitmapError):
        parse_bmp(data)


def test_load_bmp_from_file(tmp_path):
    path = tmp_path / "pic.bmp"
    path.write_bytes(_bmp(1, 2, [(0, 0, 0, 0)], [b"\x02", b"\x03"]))
    assert load_bmp(path).data == b"\x03\x02"


def test_load_bmp_missing_file(tmp_path):
    with pytest.raises(BitmapError):
        load_bmp(tmp_path / "absent.bmp")
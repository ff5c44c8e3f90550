import struct

import pytest

from gardenray.lighting import (
    MAXDISTANCE,
    MAXLIGHT,
    PALETTE_SIZE,
    build_light_table,
    light_levels,
    load_light_table,
    main,
    save_light_table,
)


def gray_palette():
    return b"".join(bytes((i % 64,) * 3) for i in range(256))


def make_pcx(palette):
    header = struct.pack(
        "<4B6h48s2B2h58s",
        10, 5, 1, 8, 0, 0, 1, 0, 72, 72, bytes(48), 0, 1, 2, 1, bytes(58),
    )
    return header + bytes((0xC1, 1, 0xC1, 2)) + b"\x0c" + palette


@pytest.fixture(scope="module")
def table():
    return build_light_table(gray_palette())


def test_table_shape(table):
    assert len(table) == MAXLIGHT + 1
    assert all(len(row) == PALETTE_SIZE for row in table)


def test_full_brightness_maps_to_first_matching_colour(table):
    for color in range(256):
        assert table[MAXLIGHT][color] == color % 64


def test_darkness_maps_to_black(table):
    assert set(table[0]) == {0}


def test_brightness_never_increases_as_level_falls(table):
    palette = gray_palette()
    for color in range(256):
        shades = [palette[table[level][color] * 3] for level in range(MAXLIGHT + 1)]
        assert shades == sorted(shades)


def test_target_colour_used_at_level_zero():
    table = build_light_table(gray_palette(), (63, 63, 63))
    assert set(table[0]) == {63}


def test_bad_palette_length():
    with pytest.raises(ValueError):
        build_light_table(bytes(10))


def test_light_levels_shape_and_bounds():
    levels = light_levels()
    assert len(levels) == MAXDISTANCE
    assert max(levels) == MAXLIGHT
    assert all(a >= b for a, b in zip(levels[1:], levels[2:]))


def test_light_levels_scale_with_intensity():
    dim = light_levels(4)
    bright = light_levels(16)
    assert all(d <= b for d, b in zip(dim, bright))


def test_negative_intensity_rejected():
    with pytest.raises(ValueError):
        light_levels(-1)


def test_save_load_round_trip(tmp_path, table):
    path = tmp_path / "lite.dat"
    save_light_table(table, path)
    assert load_light_table(path) == table


def test_load_wrong_size(tmp_path):
    path = tmp_path / "bad.dat"
    path.write_bytes(bytes(100))
    with pytest.raises(ValueError):
        load_light_table(path)


def test_save_wrong_shape(tmp_path):
    with pytest.raises(ValueError):
        save_light_table([bytes(256)] * 3, tmp_path / "x.dat")


def test_main_writes_table(tmp_path):
    source = tmp_path / "pal.pcx"
    source.write_bytes(make_pcx(bytes(v * 4 for v in gray_palette())))
    out = tmp_path / "out.dat"
    assert main([str(source), "-o", str(out)]) == 0
    assert load_light_table(out) == build_light_table(gray_palette())


def test_main_requires_filename(capsys):
    assert main([]) == 1
    assert "You must type a filename." in capsys.readouterr().out
import pytest

from gardenray import lit, textured
from gardenray.framebuffer import FrameBuffer
from gardenray.lighting import MAXLIGHT
from gardenray.maps import get_map

TEXTURES = bytes(range(256)) * 192
IDENTITY = tuple(bytes(range(256)) for _ in range(MAXLIGHT + 1))
LEVEL_TABLE = tuple(bytes([level]) * 256 for level in range(MAXLIGHT + 1))
POS = lit.DEFAULT_POSITION


def _lit(buffer, table, levels, ambient):
    lit.draw_maze(
        buffer, get_map("map"), get_map("floor"), get_map("ceiling"),
        get_map("floor_lights"), get_map("ceiling_lights"),
        POS, POS, lit.DEFAULT_VIEWING_ANGLE, 32, ambient, TEXTURES, table, levels,
    )


def test_identity_table_matches_unlit_renderer():
    shaded = FrameBuffer()
    _lit(shaded, IDENTITY, bytes(1024), 0)
    plain = FrameBuffer()
    textured.draw_maze(
        plain, get_map("map"), get_map("floor"), get_map("ceiling"),
        POS, POS, lit.DEFAULT_VIEWING_ANGLE, 32, TEXTURES,
    )
    assert shaded.to_bytes() == plain.to_bytes()


def test_full_ambient_light_saturates_every_pixel():
    buffer = FrameBuffer()
    _lit(buffer, LEVEL_TABLE, bytes(1024), MAXLIGHT)
    drawn = buffer.grab(0, 0, 319, 200)
    assert set(drawn) <= {0, MAXLIGHT}
    assert drawn.count(MAXLIGHT) > len(drawn) // 2


def test_dark_scene_shows_only_map_lights():
    buffer = FrameBuffer()
    _lit(buffer, LEVEL_TABLE, bytes(1024), 0)
    assert set(buffer.to_bytes()) <= {0, 16, 32}


def test_last_column_is_never_drawn():
    buffer = lit.render(TEXTURES, LEVEL_TABLE, ambient_level=MAXLIGHT)
    assert buffer.grab(319, 0, 1, 200) == bytes(200)
    assert set(buffer.to_bytes()) <= {0, MAXLIGHT}


def test_wrong_light_table_size_is_rejected():
    with pytest.raises(ValueError):
        lit.render(TEXTURES, IDENTITY[:-1])


def test_empty_levels_are_rejected():
    with pytest.raises(ValueError):
        _lit(FrameBuffer(), IDENTITY, b"", 0)
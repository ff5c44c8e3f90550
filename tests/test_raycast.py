import math

import pytest

from gardenray.raycast import (
    GRID,
    VIEWPORT_BOT,
    VIEWPORT_CENTER,
    VIEWPORT_LEFT,
    VIEWPORT_RIGHT,
    VIEWPORT_TOP,
    RayHit,
    cast_ray,
    draw_maze,
    render,
)
from gardenray.framebuffer import FrameBuffer


def _column(buffer, x):
    return [buffer.pixel(x, y) for y in range(buffer.height)]


def test_ray_along_x_hits_far_wall():
    hit = cast_ray(GRID, 512, 512, 0.0)
    assert hit.xmaze == 15
    assert hit.ymaze == 8
    assert hit.tile == 15


@pytest.mark.parametrize("angle", [0.0, 0.5, 1.2, 2.0, 3.14, 4.0, 5.5, 62.0])
def test_hit_is_a_wall_square(angle):
    hit = cast_ray(GRID, 512, 512, angle)
    assert isinstance(hit, RayHit)
    assert hit.tile != 0
    assert hit.tile == GRID[hit.xmaze][hit.ymaze]
    assert 0 <= hit.texture_column < 64
    assert -1 <= hit.x <= 1024
    assert -1 <= hit.y <= 1024


def test_empty_map_raises():
    empty = [[0] * 16 for _ in range(16)]
    with pytest.raises(ValueError):
        cast_ray(empty, 512, 512, 1.0)


def test_nothing_drawn_outside_viewport():
    buffer = render(GRID, 512, 512, 0.7)
    for x in list(range(VIEWPORT_LEFT)) + list(range(VIEWPORT_RIGHT, 320)):
        assert set(_column(buffer, x)) == {0}
    for x in range(VIEWPORT_LEFT, VIEWPORT_RIGHT):
        column = _column(buffer, x)
        assert set(column[:VIEWPORT_TOP]) == {0}
        assert set(column[VIEWPORT_BOT + 1:]) == {0}


def test_centre_column_has_colour_of_wall_hit():
    buffer = render(GRID, 512, 512, 0.0)
    hit = cast_ray(GRID, 512, 512, 0.0)
    assert buffer.pixel(160, VIEWPORT_CENTER) == hit.tile


def test_each_column_is_one_contiguous_run_of_one_colour():
    buffer = render()
    for x in range(VIEWPORT_LEFT, VIEWPORT_RIGHT):
        column = _column(buffer, x)
        rows = [y for y, value in enumerate(column) if value]
        assert rows, f"column {x} is empty"
        assert rows == list(range(rows[0], rows[-1] + 1))
        assert len({column[y] for y in rows}) == 1


def test_colours_come_from_map():
    buffer = render(GRID, 512, 512, 2.5)
    values = {v for row in GRID for v in row}
    assert set(buffer.to_bytes()) <= values | {0}


def test_near_wall_is_clipped_to_viewport():
    buffer = render(GRID, 900, 512, 0.0)
    rows = [y for y, value in enumerate(_column(buffer, 160)) if value]
    assert rows[0] == VIEWPORT_TOP
    assert rows[-1] == VIEWPORT_BOT


def test_render_matches_draw_maze_into_fresh_buffer():
    buffer = FrameBuffer()
    draw_maze(buffer, GRID, 512, 512, 1.0)
    assert render(GRID, 512, 512, 1.0).to_bytes() == buffer.to_bytes()


def test_single_colour_box_renders_only_that_colour():
    box = [[3 if i in (0, 15) or j in (0, 15) else 0 for j in range(16)] for i in range(16)]
    buffer = render(box, 512, 512, math.pi / 3)
    assert set(buffer.to_bytes()) == {0, 3}
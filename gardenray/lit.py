"""Light-sourced, texture-mapped raycasting with lit floors and ceilings."""

from __future__ import annotations

import math
from typing import Sequence

from gardenray.framebuffer import FrameBuffer
from gardenray.lighting import DEFAULT_MULTIPLIER, MAXLIGHT, light_levels
from gardenray.maps import get_map
from gardenray.textured import (
    CELL_SIZE,
    HORIZON,
    IMAGE_HEIGHT,
    RAY_LENGTH,
    SCREEN_CENTER_X,
    SHEET_WIDTH,
    VIEWER_DISTANCE,
    VIEWPORT_BOT,
    VIEWPORT_CENTER,
    VIEWPORT_LEFT,
    VIEWPORT_RIGHT,
    VIEWPORT_TOP,
    WALL_HEIGHT,
    _tile_offset,
    _walk_ray,
    _wall_distance,
)

DEFAULT_VIEWING_ANGLE = 3.14
DEFAULT_VIEWER_HEIGHT = 32
DEFAULT_POSITION = 8 * CELL_SIZE + CELL_SIZE // 2

_CELL_MASK = CELL_SIZE - 1

Grid = Sequence[Sequence[int]]
LightTable = Sequence[bytes]


def _shade(
    light_table: LightTable, levels: bytes, distance: int, extra: int, texel: int
) -> int:
    """Remap a texel by the light reaching it from the given distance."""
    level = levels[min(max(distance, 0), len(levels) - 1)] + extra
    level = max(0, min(level, MAXLIGHT))
    return light_table[level][texel]


def _surface_pixel(
    tiles: Grid,
    lights: Grid,
    textures: bytes,
    light_table: LightTable,
    levels: bytes,
    ambient_level: int,
    ratio: float,
    cos_column: float,
    sin_ray: float,
    cos_ray: float,
    xview: int,
    yview: int,
) -> int:
    distance = int(ratio * VIEWER_DISTANCE / cos_column)
    x = int(-distance * sin_ray) + xview
    y = int(distance * cos_ray) + yview
    xmaze = int(x / CELL_SIZE)
    ymaze = int(y / CELL_SIZE)
    t = (y & _CELL_MASK) * SHEET_WIDTH + (x & _CELL_MASK)
    texel = textures[_tile_offset(tiles[xmaze][ymaze] - 1) + t]
    return _shade(light_table, levels, distance, ambient_level + lights[xmaze][ymaze], texel)


def draw_maze(
    buffer: FrameBuffer,
    grid: Grid,
    floor: Grid,
    ceiling: Grid,
    floor_lights: Grid,
    ceiling_lights: Grid,
    xview: int,
    yview: int,
    viewing_angle: float,
    viewer_height: int,
    ambient_level: int,
    textures: bytes,
    light_table: LightTable,
    levels: bytes,
) -> None:
    """Draw lit, textured walls, floor and ceiling as seen from (xview, yview).

    light_table[level][color] gives the colour shown at a light level;
    levels[distance] gives the light level reaching a distance. Walls
    take their extra light from floor_lights at the wall's square.
    """
    if len(light_table) != MAXLIGHT + 1:
        raise ValueError(f"light table must have {MAXLIGHT + 1} levels")
    if not levels:
        raise ValueError("light levels must not be empty")

    for column in range(VIEWPORT_LEFT, VIEWPORT_RIGHT):
        column_angle = math.atan((column - SCREEN_CENTER_X) / VIEWER_DISTANCE)
        radians = viewing_angle + column_angle
        sin_ray, cos_ray = math.sin(radians), math.cos(radians)
        cos_column = math.cos(column_angle)

        xdiff = int(-RAY_LENGTH * sin_ray)
        ydiff = int(RAY_LENGTH * cos_ray)
        hit = _walk_ray(grid, xview, yview, xdiff, ydiff)
        distance = _wall_distance(hit, xview, yview, column_angle)

        height = VIEWER_DISTANCE * WALL_HEIGHT // distance
        bot = VIEWER_DISTANCE * viewer_height // distance + VIEWPORT_CENTER
        top = bot - height + 1

        t = hit.texture_column
        iheight = IMAGE_HEIGHT
        yratio = WALL_HEIGHT / height
        if top < VIEWPORT_TOP:
            diff = VIEWPORT_TOP - top
            t += int(diff * yratio) * SHEET_WIDTH
            iheight = int(iheight - diff * yratio)
            top = VIEWPORT_TOP
        if bot > VIEWPORT_BOT:
            diff = bot - VIEWPORT_BOT
            iheight = int(iheight - diff * yratio)
            bot = VIEWPORT_BOT

        wall_extra = ambient_level + floor_lights[hit.xmaze][hit.ymaze]
        row = top
        tyerror = IMAGE_HEIGHT
        tileptr = _tile_offset(hit.tile - 1) + t
        for _ in range(iheight):
            while tyerror >= IMAGE_HEIGHT:
                if row < buffer.height:
                    buffer.plot(column, row, _shade(
                        light_table, levels, distance, wall_extra, textures[tileptr]))
                tyerror -= IMAGE_HEIGHT
                row += 1
            tyerror += height
            tileptr += SHEET_WIDTH

        for row in range(bot + 1, VIEWPORT_BOT + 1):
            if row == HORIZON:
                continue
            ratio = viewer_height / (row - HORIZON)
            buffer.plot(column, row, _surface_pixel(
                floor, floor_lights, textures, light_table, levels, ambient_level,
                ratio, cos_column, sin_ray, cos_ray, xview, yview))

        for row in range(top - 1, VIEWPORT_TOP - 1, -1):
            if row == HORIZON:
                continue
            ratio = (WALL_HEIGHT - viewer_height) / (HORIZON - row)
            buffer.plot(column, row, _surface_pixel(
                ceiling, ceiling_lights, textures, light_table, levels, ambient_level,
                ratio, cos_column, sin_ray, cos_ray, xview, yview))


def render(
    textures: bytes,
    light_table: LightTable,
    viewing_angle: float = DEFAULT_VIEWING_ANGLE,
    intensity: float = MAXLIGHT,
    ambient_level: int = 0,
) -> FrameBuffer:
    """Return a screen with the lit view of the standard maps from their centre."""
    buffer = FrameBuffer()
    draw_maze(
        buffer,
        get_map("map"),
        get_map("floor"),
        get_map("ceiling"),
        get_map("floor_lights"),
        get_map("ceiling_lights"),
        DEFAULT_POSITION,
        DEFAULT_POSITION,
        viewing_angle,
        DEFAULT_VIEWER_HEIGHT,
        ambient_level,
        textures,
        light_table,
        light_levels(intensity, DEFAULT_MULTIPLIER),
    )
    return buffer
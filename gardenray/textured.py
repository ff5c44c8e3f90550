"""Texture-mapped raycasting with textured floors and ceilings."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from gardenray.framebuffer import FrameBuffer
from gardenray.maps import get_map

CELL_SIZE = 64
RAY_LENGTH = 1024

WALL_HEIGHT = 64
VIEWER_DISTANCE = 192
VIEWPORT_LEFT = 0
VIEWPORT_RIGHT = 319
VIEWPORT_TOP = 0
VIEWPORT_BOT = 199
VIEWPORT_HEIGHT = VIEWPORT_BOT - VIEWPORT_TOP
VIEWPORT_CENTER = VIEWPORT_TOP + VIEWPORT_HEIGHT // 2

IMAGE_HEIGHT = 64
IMAGE_WIDTH = 64
SHEET_WIDTH = 256
TILES_PER_ROW = SHEET_WIDTH // IMAGE_WIDTH

SCREEN_CENTER_X = 160
HORIZON = 100
DEFAULT_VIEWING_ANGLE = 3.0
DEFAULT_VIEWER_HEIGHT = 32
DEFAULT_POSITION = 8 * CELL_SIZE

_CELL_MASK = CELL_SIZE - 1
_GRID_MASK = 0xFFC0

Grid = Sequence[Sequence[int]]


@dataclass(frozen=True)
class _WallHit:
    """Where a ray met a solid map square."""

    x: float
    y: float
    xmaze: int
    ymaze: int
    tile: int
    texture_column: int


def _walk_ray(grid: Grid, xview: int, yview: int, xdiff: int, ydiff: int) -> _WallHit:
    """Step a ray from grid line to grid line until it enters a solid square."""
    if xdiff == 0:
        xdiff = 1
    slope = ydiff / xdiff
    if slope == 0:
        slope = 0.0001

    x, y = float(xview), float(yview)
    while True:
        base_x = int(x) & _GRID_MASK
        grid_x = base_x + CELL_SIZE if xdiff > 0 else base_x - 1
        base_y = int(y) & _GRID_MASK
        grid_y = base_y + CELL_SIZE if ydiff > 0 else base_y - 1

        xcross_y = y + slope * (grid_x - x)
        ycross_x = x + (grid_y - y) / slope

        xdist = int(math.hypot(grid_x - x, xcross_y - y))
        ydist = int(math.hypot(ycross_x - x, grid_y - y))

        if xdist < ydist:
            x, y = float(grid_x), xcross_y
            column = int(y) & _CELL_MASK
        else:
            x, y = ycross_x, float(grid_y)
            column = int(x) & _CELL_MASK

        xmaze = int(x / CELL_SIZE)
        ymaze = int(y / CELL_SIZE)
        if not (0 <= xmaze < len(grid) and 0 <= ymaze < len(grid[xmaze])):
            raise ValueError("ray left the map without meeting a wall")
        tile = grid[xmaze][ymaze]
        if tile:
            return _WallHit(x, y, xmaze, ymaze, tile, column)


def _wall_distance(hit: _WallHit, xview: int, yview: int, column_angle: float) -> int:
    """Distance to the wall corrected for the fish-eye effect; at least 1."""
    distance = int(int(math.hypot(hit.x - xview, hit.y - yview)) * math.cos(column_angle))
    return distance or 1


def _tile_offset(tile: int) -> int:
    """Offset of the upper left pixel of a tile in the texture sheet."""
    if tile < 0:
        raise ValueError("map square has no texture")
    row, col = divmod(tile, TILES_PER_ROW)
    return row * SHEET_WIDTH * IMAGE_HEIGHT + col * IMAGE_WIDTH


def _surface_pixel(
    tiles: Grid,
    textures: bytes,
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
    return textures[_tile_offset(tiles[xmaze][ymaze] - 1) + t]


def draw_maze(
    buffer: FrameBuffer,
    grid: Grid,
    floor: Grid,
    ceiling: Grid,
    xview: int,
    yview: int,
    viewing_angle: float,
    viewer_height: int,
    textures: bytes,
) -> None:
    """Draw textured walls, floor and ceiling as seen from (xview, yview).

    textures is a sheet 256 pixels wide holding 64x64 tiles, four per row;
    a map value n selects tile n - 1.
    """
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

        row = top
        tyerror = IMAGE_HEIGHT
        tileptr = _tile_offset(hit.tile - 1) + t
        for _ in range(iheight):
            while tyerror >= IMAGE_HEIGHT:
                if row < buffer.height:
                    buffer.plot(column, row, textures[tileptr])
                tyerror -= IMAGE_HEIGHT
                row += 1
            tyerror += height
            tileptr += SHEET_WIDTH

        for row in range(bot + 1, VIEWPORT_BOT + 1):
            if row == HORIZON:
                continue
            ratio = viewer_height / (row - HORIZON)
            buffer.plot(column, row, _surface_pixel(
                floor, textures, ratio, cos_column, sin_ray, cos_ray, xview, yview))

        for row in range(top - 1, VIEWPORT_TOP - 1, -1):
            if row == HORIZON:
                continue
            ratio = (WALL_HEIGHT - viewer_height) / (HORIZON - row)
            buffer.plot(column, row, _surface_pixel(
                ceiling, textures, ratio, cos_column, sin_ray, cos_ray, xview, yview))


def render(
    grid: Grid,
    floor: Grid,
    ceiling: Grid,
    textures: bytes,
    viewing_angle: float = DEFAULT_VIEWING_ANGLE,
) -> FrameBuffer:
    """Return a screen with the textured view from the middle of the map."""
    buffer = FrameBuffer()
    draw_maze(
        buffer, grid, floor, ceiling, DEFAULT_POSITION, DEFAULT_POSITION,
        viewing_angle, DEFAULT_VIEWER_HEIGHT, textures,
    )
    return buffer


def render_default_maps(textures: bytes, viewing_angle: float = DEFAULT_VIEWING_ANGLE) -> FrameBuffer:
    """Render the standard level maps with the given texture sheet."""
    return render(get_map("map"), get_map("floor"), get_map("ceiling"), textures, viewing_angle)
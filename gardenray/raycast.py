"""Flat-shaded raycasting of a grid maze into a viewport."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from gardenray.framebuffer import FrameBuffer

WALL_HEIGHT = 64
VIEWER_HEIGHT = 32
VIEWER_DISTANCE = 128
VIEWPORT_LEFT = 40
VIEWPORT_RIGHT = 280
VIEWPORT_TOP = 50
VIEWPORT_BOT = 150
VIEWPORT_HEIGHT = 100
VIEWPORT_CENTER = 100

SCREEN_CENTER_X = 160
CELL_SIZE = 64
RAY_LENGTH = 1024
DEFAULT_VIEWING_ANGLE = 62.0
DEFAULT_POSITION = 8 * CELL_SIZE

_GRID_MASK = 0xFFC0
_CELL_MASK = CELL_SIZE - 1
_MIN_SLOPE = 0.0001

Grid = Sequence[Sequence[int]]

GRID: tuple[tuple[int, ...], ...] = (
    (5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5),
    (7, 5, 0, 5, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 0, 3, 0, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 0, 0, 6, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 0, 0, 0, 5, 4, 0, 0, 0, 5),
    (12, 0, 0, 0, 0, 0, 0, 0, 0, 0, 11, 11, 0, 0, 0, 5),
    (11, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 11, 10, 0, 0, 5),
    (11, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 10, 0, 0, 5),
    (11, 7, 7, 0, 0, 0, 0, 0, 0, 0, 0, 11, 10, 0, 0, 5),
    (12, 0, 0, 0, 0, 0, 0, 0, 0, 0, 11, 11, 0, 0, 0, 5),
    (12, 7, 7, 0, 0, 0, 5, 1, 0, 1, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 12),
    (7, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 11),
    (7, 6, 6, 6, 6, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 10),
    (7, 5, 5, 5, 5, 5, 5, 15, 15, 15, 5, 5, 5, 5, 5, 5),
)


@dataclass(frozen=True)
class RayHit:
    """Where a ray struck a wall: the point, the map square and its value."""

    x: float
    y: float
    xmaze: int
    ymaze: int
    tile: int
    texture_column: int


def _next_line(coord: float, positive: bool) -> int:
    base = int(coord) & _GRID_MASK
    return base + CELL_SIZE if positive else base - 1


def _cell(grid: Grid, x: float, y: float) -> tuple[int, int, int]:
    xmaze = int(x / CELL_SIZE)
    ymaze = int(y / CELL_SIZE)
    if not (0 <= xmaze < len(grid) and 0 <= ymaze < len(grid[xmaze])):
        raise ValueError("ray left the map without striking a wall")
    return xmaze, ymaze, grid[xmaze][ymaze]


def _trace(grid: Grid, xview: int, yview: int, xdiff: int, ydiff: int) -> RayHit:
    """Follow a ray from grid line to grid line until it enters a wall square."""
    if xdiff == 0:
        xdiff = 1
    slope = ydiff / xdiff
    if slope == 0.0:
        slope = _MIN_SLOPE

    x, y = float(xview), float(yview)
    while True:
        grid_x = _next_line(x, xdiff > 0)
        grid_y = _next_line(y, ydiff > 0)

        xcross_x, xcross_y = float(grid_x), y + slope * (grid_x - x)
        ycross_x, ycross_y = x + (grid_y - y) / slope, float(grid_y)

        xd, yd = xcross_x - x, xcross_y - y
        xdist = int(math.sqrt(xd * xd + yd * yd))
        xd, yd = ycross_x - x, ycross_y - y
        ydist = int(math.sqrt(xd * xd + yd * yd))

        if xdist < ydist:
            x, y = xcross_x, xcross_y
            column = int(y) & _CELL_MASK
        else:
            x, y = ycross_x, ycross_y
            column = int(x) & _CELL_MASK

        xmaze, ymaze, tile = _cell(grid, x, y)
        if tile:
            return RayHit(x, y, xmaze, ymaze, tile, column)


def _wall_distance(hit: RayHit, xview: int, yview: int, column_angle: float) -> int:
    """Distance to the wall, corrected for the angle of the column (never 0)."""
    xd = hit.x - xview
    yd = hit.y - yview
    distance = int(int(math.sqrt(xd * xd + yd * yd)) * math.cos(column_angle))
    return distance or 1


def cast_ray(grid: Grid, xview: int, yview: int, radians: float) -> RayHit:
    """Cast a ray at an angle (0 along increasing x) and return the wall it hits."""
    xdiff = int(RAY_LENGTH * math.cos(radians))
    ydiff = int(RAY_LENGTH * math.sin(radians))
    return _trace(grid, xview, yview, xdiff, ydiff)


def draw_maze(
    buffer: FrameBuffer, grid: Grid, xview: int, yview: int, viewing_angle: float
) -> None:
    """Draw one wall column per screen column of the viewport, in the wall's colour."""
    for column in range(VIEWPORT_LEFT, VIEWPORT_RIGHT):
        column_angle = math.atan((column - SCREEN_CENTER_X) / VIEWER_DISTANCE)
        hit = cast_ray(grid, xview, yview, viewing_angle + column_angle)
        distance = _wall_distance(hit, xview, yview, column_angle)

        height = VIEWER_DISTANCE * WALL_HEIGHT // distance
        bot = VIEWER_DISTANCE * VIEWER_HEIGHT // distance + VIEWPORT_CENTER
        top = bot - height + 1

        if top < VIEWPORT_TOP:
            height -= VIEWPORT_TOP - top
            top = VIEWPORT_TOP
        if top + height > VIEWPORT_BOT:
            height -= bot - VIEWPORT_BOT

        for row in range(top, top + height):
            buffer.plot(column, row, hit.tile)


def render(
    grid: Grid = GRID,
    xview: int = DEFAULT_POSITION,
    yview: int = DEFAULT_POSITION,
    viewing_angle: float = DEFAULT_VIEWING_ANGLE,
) -> FrameBuffer:
    """Return a screen with the raycast view of the maze."""
    buffer = FrameBuffer()
    draw_maze(buffer, grid, xview, yview, viewing_angle)
    return buffer
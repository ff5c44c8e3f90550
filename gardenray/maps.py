"""The 16 by 16 level maps: walls, floor and ceiling tiles and their lights."""

from __future__ import annotations

GRID_SIZE = 16

Grid = tuple[tuple[int, ...], ...]

_WALLS: Grid = (
    (5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5),
    (7, 5, 0, 5, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 0, 3, 0, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 0, 0, 6, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 0, 0, 0, 5, 4, 0, 0, 0, 5),
    (8, 0, 0, 0, 0, 0, 0, 0, 0, 0, 6, 6, 0, 0, 0, 5),
    (6, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 6, 8, 0, 0, 5),
    (6, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 8, 0, 0, 5),
    (6, 10, 8, 0, 0, 0, 0, 0, 8, 0, 0, 6, 8, 0, 0, 5),
    (8, 0, 0, 0, 0, 0, 0, 0, 0, 0, 6, 6, 0, 0, 0, 5),
    (8, 7, 7, 0, 0, 0, 5, 1, 0, 1, 0, 0, 0, 0, 0, 5),
    (6, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 5),
    (7, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 8),
    (7, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 6),
    (7, 6, 6, 6, 6, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 8),
    (7, 5, 5, 5, 5, 5, 5, 8, 8, 8, 5, 5, 5, 5, 5, 5),
)


def _uniform(value: int) -> Grid:
    return tuple((value,) * GRID_SIZE for _ in range(GRID_SIZE))


def _sparse(cells: dict[tuple[int, int], int]) -> Grid:
    return tuple(
        tuple(cells.get((row, col), 0) for col in range(GRID_SIZE))
        for row in range(GRID_SIZE)
    )


_FLOOR_LIGHTS = _sparse({
    (3, 0): 32,
    (6, 3): 16, (6, 4): 16,
    (7, 3): 16, (7, 4): 16,
    (8, 1): 32,
    (9, 0): 32, (9, 1): 32, (9, 2): 32,
    (10, 1): 32,
    **{(row, col): 32 for row in (12, 13, 14) for col in (7, 8, 9)},
    (15, 8): 32,
})

_CEILING_LIGHTS = _sparse({
    (5, 3): 32, (5, 4): 32,
    (6, 3): 32, (6, 4): 32,
    (8, 1): 32, (8, 2): 32,
    (12, 8): 32, (12, 9): 32,
    (13, 8): 32,
    (14, 8): 32,
    (15, 8): 32,
})

_MAPS: dict[str, Grid] = {
    "map": _WALLS,
    "floor": _uniform(1),
    "floor_lights": _FLOOR_LIGHTS,
    "ceiling": _uniform(5),
    "ceiling_lights": _CEILING_LIGHTS,
}

MAP_NAMES = tuple(_MAPS)


def get_map(name: str) -> Grid:
    """Return the named 16 by 16 grid, indexed as grid[x][y]."""
    try:
        return _MAPS[name]
    except KeyError:
        raise KeyError(f"unknown map {name!r}; choose from {', '.join(MAP_NAMES)}") from None
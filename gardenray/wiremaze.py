"""A wireframe view of a grid maze, seen from inside it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from gardenray.framebuffer import FrameBuffer
from gardenray.keyboard import Key, Keyboard

WALL_COLOR = 15
MAX_VISIBILITY = 4

Maze = Sequence[Sequence[int]]
_Segment = tuple[int, int, int, int]

MAZE: tuple[tuple[int, ...], ...] = (
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 0, 1, 1, 1, 0, 0, 0, 0, 0, 1, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 1, 0, 0, 0, 1, 0, 0, 1, 0, 1),
    (1, 0, 1, 1, 1, 0, 1, 0, 1, 0, 1, 1, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 1, 1, 1, 1, 1, 0, 1, 1, 0, 1),
    (1, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 1, 0, 1, 0, 1, 0, 1, 1, 1, 1, 0, 1),
    (1, 0, 0, 0, 1, 0, 1, 0, 1, 0, 0, 0, 0, 1, 0, 1),
    (1, 0, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 1, 1, 0, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
)

# Steps for directions 0..3: north, east, south, west.
INCREMENT = ((-1, 0), (0, 1), (1, 0), (0, -1))
LEFT = ((0, -1), (-1, 0), (0, 1), (1, 0))
RIGHT = ((0, 1), (1, 0), (0, -1), (-1, 0))

_BOX = (82, 19, 294, 119)

_FRONT: dict[int, tuple[_Segment, ...]] = {
    1: ((135, 44, 135, 93), (242, 44, 242, 93), (135, 44, 242, 44), (135, 93, 242, 93)),
    2: ((162, 57, 162, 80), (215, 57, 215, 80), (162, 57, 215, 57), (162, 80, 215, 80)),
    3: ((175, 63, 175, 74), (202, 63, 202, 74), (175, 63, 202, 63), (175, 74, 202, 74)),
}

_LEFT_WALL: tuple[tuple[_Segment, ...], ...] = (
    ((82, 19, 135, 44), (135, 44, 135, 93), (135, 93, 82, 118)),
    ((135, 44, 162, 57), (162, 57, 162, 80), (162, 80, 135, 93)),
    ((162, 57, 175, 63), (175, 63, 175, 74), (175, 74, 162, 80)),
    ((175, 63, 182, 66), (182, 66, 182, 70), (182, 70, 175, 74)),
)

_LEFT_OPEN: tuple[tuple[_Segment, ...], ...] = (
    ((82, 44, 135, 44), (135, 44, 135, 93), (135, 93, 82, 93)),
    ((135, 57, 162, 57), (162, 57, 162, 80), (162, 80, 135, 80)),
    ((162, 63, 175, 63), (175, 63, 175, 74), (175, 74, 162, 74)),
    ((175, 66, 182, 66), (182, 66, 182, 70), (182, 70, 175, 70)),
)

_RIGHT_WALL: tuple[tuple[_Segment, ...], ...] = (
    ((294, 19, 242, 44), (242, 44, 242, 93), (294, 118, 242, 93)),
    ((242, 44, 215, 57), (215, 57, 215, 80), (215, 80, 242, 93)),
    ((215, 57, 202, 63), (202, 63, 202, 74), (202, 74, 215, 80)),
    ((202, 63, 195, 66), (195, 66, 195, 70), (195, 70, 202, 74)),
)

_RIGHT_OPEN: tuple[tuple[_Segment, ...], ...] = (
    ((294, 44, 242, 44), (242, 44, 242, 93), (242, 93, 294, 93)),
    ((242, 57, 215, 57), (215, 57, 215, 80), (215, 80, 242, 80)),
    ((215, 63, 202, 63), (202, 63, 202, 74), (202, 74, 215, 74)),
    ((202, 66, 195, 66), (195, 66, 195, 70), (195, 70, 202, 70)),
)


@dataclass
class Viewer:
    """Position in the maze and heading (0 north, 1 east, 2 south, 3 west)."""

    x: int = 1
    y: int = 3
    direction: int = 3

    def _step(self, maze: Maze, sign: int) -> bool:
        dx, dy = INCREMENT[self.direction]
        nx, ny = self.x + sign * dx, self.y + sign * dy
        if maze[nx][ny]:
            return False
        self.x, self.y = nx, ny
        return True

    def move_forward(self, maze: Maze) -> bool:
        """Step one square ahead unless a wall is there; return whether moved."""
        return self._step(maze, 1)

    def move_back(self, maze: Maze) -> bool:
        """Step one square back unless a wall is there; return whether moved."""
        return self._step(maze, -1)

    def turn_left(self) -> None:
        """Turn a quarter circle anticlockwise."""
        self.direction = (self.direction - 1) % 4

    def turn_right(self) -> None:
        """Turn a quarter circle clockwise."""
        self.direction = (self.direction + 1) % 4


def _draw(buffer: FrameBuffer, segments: Sequence[_Segment]) -> None:
    for x1, y1, x2, y2 in segments:
        buffer.line(x1, y1, x2, y2, WALL_COLOR)


def draw_box(buffer: FrameBuffer) -> None:
    """Draw the frame around the view window."""
    buffer.rect(*_BOX, WALL_COLOR)


def draw_maze(
    buffer: FrameBuffer, maze: Maze, viewer: Viewer, visibility: int = MAX_VISIBILITY
) -> None:
    """Draw the maze ahead of the viewer, up to visibility squares deep."""
    ix, iy = INCREMENT[viewer.direction]
    lx, ly = LEFT[viewer.direction]
    rx, ry = RIGHT[viewer.direction]

    for dist in range(min(visibility, MAX_VISIBILITY)):
        bx, by = viewer.x + dist * ix, viewer.y + dist * iy
        blocked = bool(maze[bx][by])
        left_filled = bool(maze[bx + lx][by + ly])
        right_filled = bool(maze[bx + rx][by + ry])

        if dist == 0:
            # The nearest left side is judged by the viewer's own square.
            _draw(buffer, _LEFT_WALL[0] if blocked else _LEFT_OPEN[0])
            _draw(buffer, _RIGHT_WALL[0] if right_filled else _RIGHT_OPEN[0])
        elif blocked:
            _draw(buffer, _FRONT[dist])
        else:
            _draw(buffer, _LEFT_WALL[dist] if left_filled else _LEFT_OPEN[dist])
            _draw(buffer, _RIGHT_WALL[dist] if right_filled else _RIGHT_OPEN[dist])

        if blocked:
            break


def render(maze: Maze = MAZE, viewer: Viewer | None = None) -> FrameBuffer:
    """Return a screen showing the view window and the maze inside it."""
    buffer = FrameBuffer()
    draw_box(buffer)
    draw_maze(buffer, maze, viewer if viewer is not None else Viewer())
    return buffer


def apply_input(viewer: Viewer, maze: Maze, keyboard: Keyboard) -> None:
    """Move and turn the viewer according to the arrow keys held down."""
    if keyboard.is_key_down(Key.UP):
        viewer.move_forward(maze)
    elif keyboard.is_key_down(Key.DOWN):
        viewer.move_back(maze)
    if keyboard.is_key_down(Key.RIGHT):
        viewer.turn_left()
    elif keyboard.is_key_down(Key.LEFT):
        viewer.turn_right()
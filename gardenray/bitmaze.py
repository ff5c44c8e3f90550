"""A walk through a grid maze drawn from pre-rendered wall bitmaps."""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Sequence

from gardenray.events import Events
from gardenray.framebuffer import FrameBuffer
from gardenray.targa import TgaImage, load_tga
from gardenray.wiremaze import INCREMENT as FORWARD
from gardenray.wiremaze import LEFT

VIEW_LIMIT = 4
XWINDOW = 110
YWINDOW = 0
WWIDTH = 188
WHEIGHT = 120
IMAGE_COUNT = VIEW_LIMIT * 2 + 1
FRAMES_PER_SECOND = 5

IMAGE_NAMES = (
    "front1.tga", "front2.tga", "front3.tga", "front4.tga", "front5.tga",
    "side1.tga", "side2.tga", "side3.tga", "side4.tga",
)

COMPASS_X = 20
COMPASS_Y = 35
COMPASS_WIDTH = 42
COMPASS_HEIGHT = 41
_COMPASS_SHEET_WIDTH = 320

MAZE: tuple[tuple[int, ...], ...] = (
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1),
    (1, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 1, 0, 1),
    (1, 0, 1, 1, 1, 1, 1, 0, 0, 0, 1, 0, 0, 0, 1, 1),
    (1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 1, 0, 1, 1),
    (1, 0, 0, 0, 0, 1, 0, 1, 1, 1, 1, 0, 0, 0, 1, 1),
    (1, 1, 1, 0, 0, 1, 1, 0, 1, 0, 0, 1, 1, 0, 1, 1),
    (1, 0, 1, 0, 1, 1, 1, 0, 0, 0, 1, 0, 0, 0, 1, 1),
    (1, 0, 1, 0, 0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 1),
    (1, 0, 0, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1, 1, 1),
    (1, 1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 1, 1),
    (1, 0, 0, 0, 1, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1),
    (1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 1),
    (1, 0, 0, 0, 1, 0, 1, 1, 1, 1, 0, 1, 0, 0, 0, 1),
    (1, 1, 0, 0, 0, 1, 1, 0, 0, 0, 0, 1, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
)

# Window columns of the visible grid intersections, by distance ahead.
MATRIX = (
    (187, 187, 187, 187, 143, 47, 0, 0, 0, 0),
    (187, 187, 187, 179, 123, 66, 10, 0, 0, 0),
    (187, 187, 187, 158, 117, 73, 31, 0, 0, 0),
    (187, 187, 177, 144, 111, 78, 45, 12, 0, 0),
    (187, 185, 159, 133, 107, 82, 56, 30, 4, 0),
)

Maze = Sequence[Sequence[int]]


class BitmapMaze:
    """A viewer in a maze, drawn by pasting slices of wall bitmaps.

    images holds nine WWIDTH x WHEIGHT bitmaps: five front views by
    distance, then four side views.
    """

    def __init__(
        self,
        images: Sequence[bytes],
        maze: Maze = MAZE,
        position: tuple[int, int] = (3, 7),
        direction: int = 0,
    ) -> None:
        if len(images) != IMAGE_COUNT:
            raise ValueError(f"expected {IMAGE_COUNT} images, got {len(images)}")
        if any(len(image) < WWIDTH * WHEIGHT for image in images):
            raise ValueError(f"every image must hold {WWIDTH}x{WHEIGHT} pixels")
        if not 0 <= direction < 4:
            raise ValueError("direction must be 0, 1, 2 or 3")
        self.images = [bytes(image) for image in images]
        self.maze = maze
        self.x, self.y = position
        self.direction = direction

    def _square(self, side: int, ahead: int) -> int:
        fx, fy = FORWARD[self.direction]
        lx, ly = LEFT[self.direction]
        return self.maze[self.x + side * lx + ahead * fx][self.y + side * ly + ahead * fy]

    def draw(self, buffer: FrameBuffer) -> None:
        """Draw the whole view from the viewer's square into the window."""
        self._draw_view(buffer, 0, 0, 0, WWIDTH - 1)

    def _draw_view(
        self, buffer: FrameBuffer, xshift: int, yshift: int, lview: int, rview: int
    ) -> None:
        if abs(xshift) > VIEW_LIMIT or abs(yshift) > VIEW_LIMIT:
            return
        row = MATRIX[yshift]

        vleft = lview
        vright = min(row[xshift + VIEW_LIMIT + 1], rview)
        if vright - vleft > 0:
            if self._square(xshift + 1, yshift):
                self.display_slice(buffer, xshift + VIEW_LIMIT + 1, vleft, vright)
            else:
                self._draw_view(buffer, xshift + 1, yshift, vleft, vright)

        vleft = max(row[xshift + VIEW_LIMIT + 1], lview)
        vright = min(row[xshift + VIEW_LIMIT], rview)
        if vright - vleft > 0:
            if self._square(xshift, yshift + 1):
                self.display_slice(buffer, yshift, vleft, vright)
            else:
                self._draw_view(buffer, xshift, yshift + 1, vleft, vright)

        vleft = max(row[xshift + VIEW_LIMIT], lview)
        vright = rview
        if vright - vleft > 0:
            if self._square(xshift - 1, yshift):
                self.display_slice(buffer, VIEW_LIMIT + 1 - xshift, vleft, vright)
            else:
                self._draw_view(buffer, xshift - 1, yshift, vleft, vright)

    def display_slice(
        self, buffer: FrameBuffer, image_index: int, left: int, right: int
    ) -> None:
        """Copy columns left..right (inclusive) of an image into the window."""
        if not 0 <= image_index < IMAGE_COUNT:
            raise IndexError(f"no image {image_index}")
        if not 0 <= left <= right < WWIDTH:
            raise ValueError(f"slice {left}..{right} is outside the window")
        image = self.images[image_index]
        sprite = b"".join(
            image[y * WWIDTH + left:y * WWIDTH + right + 1] for y in range(WHEIGHT)
        )
        buffer.blit(XWINDOW + left, YWINDOW, right - left + 1, WHEIGHT, sprite)

    def _step(self, sign: int) -> bool:
        fx, fy = FORWARD[self.direction]
        nx, ny = self.x + sign * fx, self.y + sign * fy
        if self.maze[nx][ny]:
            return False
        self.x, self.y = nx, ny
        return True

    def move_forward(self) -> bool:
        """Step one square ahead unless it is filled; return whether moved."""
        return self._step(1)

    def move_back(self) -> bool:
        """Step one square back unless it is filled; return whether moved."""
        return self._step(-1)

    def turn_left(self) -> None:
        """Turn a quarter circle to the left."""
        self.direction = (self.direction - 1) % 4

    def turn_right(self) -> None:
        """Turn a quarter circle to the right."""
        self.direction = (self.direction + 1) % 4

    def apply_events(self, events: Events) -> bool:
        """Move and turn as the events request; return whether to quit."""
        if events.go_forward:
            self.move_forward()
        elif events.go_back:
            self.move_back()
        if events.go_left:
            self.turn_left()
        elif events.go_right:
            self.turn_right()
        return events.quit_game


def grab_compass_faces(pixels: bytes) -> tuple[bytes, ...]:
    """Cut the four 42x41 compass faces out of a 320-pixel-wide picture."""
    height = len(pixels) // _COMPASS_SHEET_WIDTH
    if height == 0:
        raise ValueError("compass picture is empty")
    sheet = FrameBuffer(_COMPASS_SHEET_WIDTH, height)
    sheet.blit(0, 0, _COMPASS_SHEET_WIDTH, height, pixels)
    return tuple(
        sheet.grab(17 + face * 50, 18, COMPASS_WIDTH, COMPASS_HEIGHT) for face in range(4)
    )


def load_images(directory: str | PathLike) -> tuple[TgaImage, ...]:
    """Load the nine wall bitmaps from a directory."""
    base = Path(directory)
    return tuple(load_tga(base / name) for name in IMAGE_NAMES)
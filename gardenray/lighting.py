"""Light-sourcing tables: palette remapping by brightness and distance."""

from __future__ import annotations

import argparse
import sys
from os import PathLike
from pathlib import Path
from typing import Sequence

from gardenray.pcx import PcxError, load_pcx

MAXLIGHT = 32
PALETTE_SIZE = 256
GRIDSIZE = 16
MAXDISTANCE = 64 * GRIDSIZE
DEFAULT_MULTIPLIER = 3.0
TABLE_BYTES = (MAXLIGHT + 1) * PALETTE_SIZE


def build_light_table(
    palette: bytes, target: Sequence[float] = (0, 0, 0)
) -> tuple[bytes, ...]:
    """Map every colour at every light level to its nearest palette entry.

    Level MAXLIGHT is full brightness; level 0 is the target colour.
    The result is indexed as table[level][color].
    """
    if len(palette) != PALETTE_SIZE * 3:
        raise ValueError(f"palette must hold {PALETTE_SIZE * 3} bytes")
    colors = [tuple(palette[i * 3:i * 3 + 3]) for i in range(PALETTE_SIZE)]
    first_index: dict[tuple[int, ...], int] = {}
    for index, rgb in enumerate(colors):
        first_index.setdefault(rgb, index)
    candidates = list(first_index.items())
    tr, tg, tb = (int(value) for value in target)

    cache: dict[tuple[float, float, float], int] = {}

    def nearest(ideal: tuple[float, float, float]) -> int:
        if ideal not in cache:
            ir, ig, ib = ideal
            cache[ideal] = min(
                candidates,
                key=lambda c: abs(c[0][0] - ir) + abs(c[0][1] - ig) + abs(c[0][2] - ib),
            )[1]
        return cache[ideal]

    table = []
    for level in range(MAXLIGHT + 1):
        row = bytes(
            nearest((
                (r - tr) / MAXLIGHT * level + tr,
                (g - tg) / MAXLIGHT * level + tg,
                (b - tb) / MAXLIGHT * level + tb,
            ))
            for r, g, b in colors
        )
        table.append(row)
    return tuple(table)


def light_levels(intensity: float = MAXLIGHT, multiplier: float = DEFAULT_MULTIPLIER) -> bytes:
    """Light level for every distance up to MAXDISTANCE, brightest when near."""
    if intensity < 0 or multiplier < 0:
        raise ValueError("intensity and multiplier must not be negative")
    levels = bytearray([MAXLIGHT])
    for distance in range(1, MAXDISTANCE):
        ratio = min(intensity / distance * multiplier, 1.0)
        levels.append(int(ratio * MAXLIGHT))
    return bytes(levels)


def save_light_table(table: Sequence[bytes], path: str | PathLike) -> None:
    """Write a light table as 33 consecutive rows of 256 bytes."""
    if len(table) != MAXLIGHT + 1 or any(len(row) != PALETTE_SIZE for row in table):
        raise ValueError("light table must be 33 rows of 256 entries")
    Path(path).write_bytes(b"".join(bytes(row) for row in table))


def load_light_table(path: str | PathLike) -> tuple[bytes, ...]:
    """Read a light table written by save_light_table."""
    data = Path(path).read_bytes()
    if len(data) != TABLE_BYTES:
        raise ValueError(f"{path}: expected {TABLE_BYTES} bytes, found {len(data)}")
    return tuple(
        data[level * PALETTE_SIZE:(level + 1) * PALETTE_SIZE] for level in range(MAXLIGHT + 1)
    )


def main(argv: list[str] | None = None) -> int:
    """Build a light-sourcing table from the palette of a PCX file."""
    parser = argparse.ArgumentParser(description="Generate light-sourcing tables.")
    parser.add_argument("filename", nargs="?", help="PCX file supplying the palette")
    parser.add_argument("red", nargs="?", type=float, default=0.0)
    parser.add_argument("green", nargs="?", type=float, default=0.0)
    parser.add_argument("blue", nargs="?", type=float, default=0.0)
    parser.add_argument("-o", "--output", default="litesorc.dat", help="output file")
    args = parser.parse_args(argv)

    if args.filename is None:
        print("You must type a filename.")
        return 1

    print("Loading palette.")
    try:
        image = load_pcx(args.filename)
    except PcxError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Calculating palette tables.")
    table = build_light_table(image.palette, (args.red, args.green, args.blue))

    print(f"\nWriting {args.output}.")
    try:
        save_light_table(table, args.output)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("\nAll done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
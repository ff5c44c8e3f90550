"""Fixed-point trigonometry tables and arithmetic."""

from __future__ import annotations

import argparse
import math
import sys
from functools import lru_cache
from os import PathLike
from pathlib import Path

NUMBER_OF_DEGREES = 4096
SHIFT = 16
SHIFT_MULT = 1 << SHIFT

_PI_APPROX = 3.14159
_ENTRIES_PER_LINE = 8


def _radians(step: int) -> float:
    return step / NUMBER_OF_DEGREES * _PI_APPROX * 2


@lru_cache(maxsize=None)
def cos_table() -> tuple[int, ...]:
    """Cosines of the 4096 table angles in 16.16 fixed point."""
    return tuple(int(math.cos(_radians(i)) * SHIFT_MULT) for i in range(NUMBER_OF_DEGREES))


@lru_cache(maxsize=None)
def sin_table() -> tuple[int, ...]:
    """Sines of the 4096 table angles in 16.16 fixed point."""
    return tuple(int(math.sin(_radians(i)) * SHIFT_MULT) for i in range(NUMBER_OF_DEGREES))


def fixed_cos(angle: int) -> int:
    """Fixed-point cosine of an angle measured in 4096ths of a circle."""
    return cos_table()[angle & (NUMBER_OF_DEGREES - 1)]


def fixed_sin(angle: int) -> int:
    """Fixed-point sine of an angle measured in 4096ths of a circle."""
    return sin_table()[angle & (NUMBER_OF_DEGREES - 1)]


def fixmul(a: int, b: int) -> int:
    """Multiply two 16.16 fixed-point numbers."""
    return (a * b) >> SHIFT


def fixdiv(a: int, b: int) -> int:
    """Divide two 16.16 fixed-point numbers, truncating toward zero."""
    if b == 0:
        raise ZeroDivisionError("fixed-point division by zero")
    quotient = abs(a << SHIFT) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def header_text() -> str:
    """Text of the header that declares the tables and their macros."""
    return (
        "#define COS(X) cos_table[X & (NUMBER_OF_DEGREES - 1)]\n"
        "#define SIN(X) sin_table[X & (NUMBER_OF_DEGREES - 1)]\n"
        f"\n\nconst NUMBER_OF_DEGREES = {NUMBER_OF_DEGREES};\n"
        f"const SHIFT = {SHIFT};\n"
        "const SHIFT_MULT = 1 << SHIFT;\n\n"
        f"extern long cos_table[{NUMBER_OF_DEGREES}];\n"
        f"extern long sin_table[{NUMBER_OF_DEGREES}];\n"
    )


def _hex(value: int) -> str:
    return format(value & 0xFFFFFFFF, "x")


def _table_text(name: str, values: tuple[int, ...]) -> str:
    parts = [f"long {name}[{NUMBER_OF_DEGREES}] = {{\n\t"]
    for count, value in enumerate(values, start=1):
        parts.append(f"0x{_hex(value)}, ")
        if count % _ENTRIES_PER_LINE == 0:
            parts.append("\n\t")
    parts.append("};\n\n")
    return "".join(parts)


def tables_text() -> str:
    """Text of the source file that defines the cosine and sine tables."""
    return (
        "\n//TRIG.CPP\n"
        "//\tComputer generated fixed point math tables\n\n"
        + _table_text("cos_table", cos_table())
        + _table_text("sin_table", sin_table())
    )


def write_tables(header_path: str | PathLike, source_path: str | PathLike) -> None:
    """Write the header and the table source to the given paths."""
    Path(header_path).write_text(header_text())
    Path(source_path).write_text(tables_text())


def main(argv: list[str] | None = None) -> int:
    """Generate trig.h and trig.cpp in a directory."""
    parser = argparse.ArgumentParser(description="Generate fixed point trig tables.")
    parser.add_argument("directory", nargs="?", default=".", help="output directory")
    args = parser.parse_args(argv)

    out = Path(args.directory)
    print("\nGenerating trig.h and trig.cpp fixed point math tables.\n")
    try:
        write_tables(out / "trig.h", out / "trig.cpp")
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("All done!\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
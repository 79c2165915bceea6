"""Side-by-side composition of independently sized text blocks."""

from __future__ import annotations

from itertools import zip_longest
from typing import List, Sequence


def required_width(lines: Sequence[str]) -> int:
    """Return the length of the longest line, ``0`` for no lines."""

    return max((len(line) for line in lines), default=0)


def pad_block(lines: Sequence[str]) -> List[str]:
    """Left-justify every line to the width of the widest one."""

    width = required_width(lines)
    return [f"{line:<{width}}" for line in lines]


def center_block(lines: Sequence[str], width: int) -> List[str]:
    return [f"{line:^{width}}" for line in lines]


def compose_columns(left: Sequence[str], right: Sequence[str], gap: int = 2) -> List[str]:
    """Place ``left`` and ``right`` next to each other.

    Each side is padded to its own widest line and the sides are separated by
    ``gap`` spaces.  The shorter side is continued with empty lines, so the
    result has ``max(len(left), len(right))`` rows.
    """

    left_width = required_width(left)
    right_width = required_width(right)
    separator = " " * gap
    return [
        f"{a:<{left_width}}{separator}{b:<{right_width}}"
        for a, b in zip_longest(left, right, fillvalue="")
    ]

"""Renderable path operations built from compiled strokes."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Literal, Union

from .geometry import ORIGIN, Point

Anchor = Literal["top_left", "center"]


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class ClosePath:
    pass


PathOp = Union[MoveTo, LineTo, ClosePath]


@dataclass
class Path:
    ops: list[PathOp] = field(default_factory=list)

    @property
    def closed(self) -> bool:
        return bool(self.ops) and isinstance(self.ops[-1], ClosePath)

    def points(self) -> list[Point]:
        return [op.point for op in self.ops if not isinstance(op, ClosePath)]

    def subpaths(self) -> list[list[Point]]:
        """Points grouped per ``MoveTo``."""
        groups: list[list[Point]] = []
        for op in self.ops:
            if isinstance(op, MoveTo):
                groups.append([op.point])
            elif isinstance(op, LineTo):
                groups[-1].append(op.point)
        return groups

    def bounds(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y) of every emitted point."""
        pts = self.points()
        if not pts:
            raise ValueError("bounds() of an empty path")
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for x, y in pts:
            min_x = min(min_x, x)
            max_x = max(max_x, x)
            min_y = min(min_y, y)
            max_y = max(max_y, y)
        return (min_x, min_y, max_x, max_y)


def origin_for(width: float, height: float, anchor: Anchor = "center") -> Point:
    """Offset that places the turtle origin at ``anchor`` of a width x height box."""
    if anchor == "top_left":
        return ORIGIN
    if anchor == "center":
        return Point(width / 2, height / 2)
    raise ValueError(f"unknown anchor {anchor!r}")


def translate(point: Point, origin: Point = ORIGIN, flip_y: bool = False) -> Point:
    """Map a turtle point into the target space.

    With ``flip_y`` the y axis is mirrored first, for spaces whose y grows
    downwards (screen coordinates).
    """
    if flip_y:
        point = point.flipped()
    return origin + point


def is_closed(strokes: Sequence[Sequence[Point]]) -> bool:
    """Whether visible strokes form a closed outline.

    Compares the start of the first stroke with the start of the last one;
    with a single stroke its start is compared with its end.
    """
    if not strokes:
        return False
    first, last = strokes[0], strokes[-1]
    if len(strokes) == 1:
        return first[0] == first[-1]
    return first[0] == last[0]


def build_path(
    strokes: Iterable[Sequence[Point]],
    origin: Point = ORIGIN,
    flip_y: bool = False,
) -> Path:
    """Turn compiled strokes into move/line/close operations.

    Strokes with fewer than two points carry no geometry and are skipped.
    """
    visible = [stroke for stroke in strokes if len(stroke) >= 2]
    path = Path()
    for stroke in visible:
        path.ops.append(MoveTo(translate(stroke[0], origin, flip_y)))
        for point in stroke[1:]:
            path.ops.append(LineTo(translate(point, origin, flip_y)))

    if is_closed(visible):
        path.ops.append(ClosePath())
    return path

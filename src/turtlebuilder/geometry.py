"""Plane geometry used by the compiler and the path adapter."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y))

    def flipped(self) -> Point:
        """Mirror across the x axis."""
        return Point(self.x, -self.y)


ORIGIN = Point(0.0, 0.0)


def deg2rad(degrees: float) -> float:
    return degrees * math.pi / 180


def heading_vector(radians: float) -> Point:
    """Unit vector for a heading, snapped to the axis on cardinal directions.

    cos/sin of a cardinal heading leak residue like 6.1e-17 into the
    orthogonal component; when one component is exactly +-1 the other is
    forced to 0.
    """
    x = math.cos(radians)
    y = math.sin(radians)
    if abs(x) == 1.0:
        y = 0.0
    elif abs(y) == 1.0:
        x = 0.0
    return Point(x, y)

"""Turtle commands.

A program is an ordered sequence of these values. ``Loop`` and ``SetMacro``
carry nested bodies, so a program forms a tree. Commands have no behavior of
their own; ``turtlebuilder.turtle.Compiler`` interprets them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union


def _freeze(body: Iterable[Command]) -> tuple[Command, ...]:
    return tuple(body)


@dataclass(frozen=True)
class Pass:
    """Does nothing."""


@dataclass(frozen=True)
class Center:
    """Move the turtle back to the origin."""


@dataclass(frozen=True)
class ResetHeading:
    """Face north again."""


@dataclass(frozen=True)
class SetHeading:
    """Face ``degrees`` counter-clockwise from north."""

    degrees: int


@dataclass(frozen=True)
class SetPosition:
    x: int
    y: int


@dataclass(frozen=True)
class PenUp:
    pass


@dataclass(frozen=True)
class PenDown:
    pass


@dataclass(frozen=True)
class Turn:
    """Turn left by ``degrees``; negative values turn right."""

    degrees: int


@dataclass(frozen=True)
class Forward:
    distance: int


@dataclass(frozen=True)
class Loop:
    count: int
    body: tuple[Command, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "body", _freeze(self.body))


@dataclass(frozen=True)
class SetMacro:
    name: str
    body: tuple[Command, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "body", _freeze(self.body))


@dataclass(frozen=True)
class PlayMacro:
    name: str


Command = Union[
    Pass,
    Center,
    ResetHeading,
    SetHeading,
    SetPosition,
    PenUp,
    PenDown,
    Turn,
    Forward,
    Loop,
    SetMacro,
    PlayMacro,
]

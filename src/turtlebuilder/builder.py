"""Helpers for assembling turtle programs.

Two styles are supported. Constructor functions build command trees
directly::

    square = [pen_down(), loop(4, forward(40), right(90)), pen_up()]

``ProgramBuilder`` appends commands as methods are called and uses ``with``
blocks for loops, macros and conditional sections::

    b = ProgramBuilder()
    b.pen_down()
    with b.loop(4):
        b.forward(40).right(90)
    b.pen_up()
    square = b.build()

Both produce plain command tuples; the compiler cannot tell them apart.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from .commands import (
    Center,
    Command,
    Forward,
    Loop,
    Pass,
    PenDown,
    PenUp,
    PlayMacro,
    ResetHeading,
    SetHeading,
    SetMacro,
    SetPosition,
    Turn,
)


def pass_() -> Command:
    return Pass()


def center() -> Command:
    return Center()


def reset_heading() -> Command:
    return ResetHeading()


def set_heading(degrees: int) -> Command:
    return SetHeading(degrees)


def set_position(x: int, y: int) -> Command:
    return SetPosition(x, y)


def pen_up() -> Command:
    return PenUp()


def pen_down() -> Command:
    return PenDown()


def left(angle: int) -> Command:
    return Turn(angle)


def right(angle: int) -> Command:
    return Turn(-angle)


def forward(length: int) -> Command:
    return Forward(length)


def loop(count: int, *commands: Command) -> Command:
    return Loop(count, commands)


def set_macro(name: str, *commands: Command) -> Command:
    return SetMacro(name, commands)


def play_macro(name: str) -> Command:
    return PlayMacro(name)


def optional(commands: Iterable[Command] | None) -> Command:
    """Wrap an optional block: one pass through it if present, else ``Pass``."""
    if commands is None:
        return Pass()
    return Loop(1, commands)


def either(
    condition: bool, first: Iterable[Command], second: Iterable[Command]
) -> Command:
    """Pick one of two blocks and wrap it as a single command."""
    return Loop(1, first if condition else second)


# Short aliases
reset_h = reset_heading
set_h = set_heading
lt = left
rt = right
fd = forward
repeat = loop


@dataclass
class _Block:
    commands: list[Command] = field(default_factory=list)
    # Outcome of the `when` that closed immediately before, for `otherwise`.
    last_condition: bool | None = None


class ProgramBuilder:
    """Accumulates commands, with nested blocks opened by ``with`` statements."""

    def __init__(self):
        self._blocks: list[_Block] = [_Block()]

    @property
    def _current(self) -> _Block:
        return self._blocks[-1]

    def _emit(self, command: Command, condition: bool | None = None):
        self._current.commands.append(command)
        self._current.last_condition = condition

    def add(self, *commands: Command) -> ProgramBuilder:
        for command in commands:
            self._emit(command)
        return self

    def pass_(self) -> ProgramBuilder:
        return self.add(Pass())

    def center(self) -> ProgramBuilder:
        return self.add(Center())

    def reset_heading(self) -> ProgramBuilder:
        return self.add(ResetHeading())

    def set_heading(self, degrees: int) -> ProgramBuilder:
        return self.add(SetHeading(degrees))

    def set_position(self, x: int, y: int) -> ProgramBuilder:
        return self.add(SetPosition(x, y))

    def pen_up(self) -> ProgramBuilder:
        return self.add(PenUp())

    def pen_down(self) -> ProgramBuilder:
        return self.add(PenDown())

    def left(self, angle: int) -> ProgramBuilder:
        return self.add(left(angle))

    def right(self, angle: int) -> ProgramBuilder:
        return self.add(right(angle))

    def forward(self, length: int) -> ProgramBuilder:
        return self.add(Forward(length))

    def play_macro(self, name: str) -> ProgramBuilder:
        return self.add(PlayMacro(name))

    reset_h = reset_heading
    set_h = set_heading
    lt = left
    rt = right
    fd = forward

    @contextmanager
    def _block(self) -> Iterator[list[Command]]:
        block = _Block()
        self._blocks.append(block)
        try:
            yield block.commands
        finally:
            self._blocks.pop()

    @contextmanager
    def loop(self, count: int) -> Iterator[ProgramBuilder]:
        with self._block() as body:
            yield self
        self._emit(Loop(count, body))

    repeat = loop

    @contextmanager
    def macro(self, name: str) -> Iterator[ProgramBuilder]:
        with self._block() as body:
            yield self
        self._emit(SetMacro(name, body))

    @contextmanager
    def when(self, condition: bool) -> Iterator[ProgramBuilder]:
        """Include the block only when ``condition`` holds."""
        with self._block() as body:
            yield self
        self._emit(optional(body if condition else None), condition=bool(condition))

    @contextmanager
    def otherwise(self) -> Iterator[ProgramBuilder]:
        """Alternative to the ``when`` block that directly precedes it."""
        previous = self._current.last_condition
        if previous is None:
            raise RuntimeError("otherwise() must directly follow a when() block")
        with self._block() as body:
            yield self
        self._emit(optional(None if previous else body))

    def build(self) -> tuple[Command, ...]:
        if len(self._blocks) != 1:
            raise RuntimeError("build() called inside an open block")
        return tuple(self._blocks[0].commands)

"""Turtle graphics compiler: command trees in, polyline strokes out."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import cached_property

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
from .config import CompilerConfig
from .errors import RecursionLimitExceeded, StepLimitExceeded
from .geometry import ORIGIN, Point, deg2rad, heading_vector
from .path import Path, build_path

LOGGER = logging.getLogger(__name__)

NORTH = 90

Stroke = list[Point]


@dataclass
class CompilerState:
    """Turtle state for a single compile run."""

    heading: float = field(default_factory=lambda: deg2rad(NORTH))
    position: Point = ORIGIN
    pen_down: bool = False
    strokes: list[Stroke] = field(default_factory=list)
    macros: dict[str, tuple[Command, ...]] = field(default_factory=dict)
    depth: int = 0
    deepest: int = 0
    steps: int = 0

    def lower_pen(self):
        if not self.pen_down:
            self.strokes.append([self.position])
        self.pen_down = True

    def move_to(self, point: Point):
        if self.pen_down and self.strokes:
            self.strokes[-1].append(point)
        self.position = point


class Compiler:
    """Walks a command tree depth-first, threading one state through it.

    Loop bodies and macro playback run against the same state as the
    enclosing scope, and macros registered inside them stay registered for
    the rest of the run.
    """

    def __init__(self, config: CompilerConfig | None = None):
        self.config = config or CompilerConfig()

    def compile(self, program: Iterable[Command]) -> list[Stroke]:
        """Compile ``program`` into strokes, one per pen-down run.

        Strokes are returned as produced, including ones with fewer than two
        points; ``build_path`` drops those.
        """
        state = CompilerState()
        try:
            self._run(program, state)
        except RecursionError as e:
            # Interpreter stack ran out before max_depth was reached.
            raise RecursionLimitExceeded(state.deepest, self.config.max_depth) from e
        LOGGER.debug(
            "compiled %d commands into %d strokes", state.steps, len(state.strokes)
        )
        return state.strokes

    def _run(self, commands: Iterable[Command], state: CompilerState):
        for command in commands:
            self._exec(command, state)

    def _tick(self, state: CompilerState):
        state.steps += 1
        if state.steps > self.config.max_steps:
            raise StepLimitExceeded(self.config.max_steps)

    def _descend(self, body: tuple[Command, ...], state: CompilerState, times: int = 1):
        state.depth += 1
        state.deepest = max(state.deepest, state.depth)
        if state.depth > self.config.max_depth:
            raise RecursionLimitExceeded(state.depth, self.config.max_depth)
        try:
            for _ in range(times):
                self._tick(state)
                self._run(body, state)
        finally:
            state.depth -= 1

    def _exec(self, command: Command, state: CompilerState):
        self._tick(state)

        match command:
            case Pass():
                pass
            case PenUp():
                state.pen_down = False
            case PenDown():
                state.lower_pen()
            case Center():
                state.move_to(ORIGIN)
            case ResetHeading():
                state.heading = deg2rad(NORTH)
            case SetHeading(degrees=degrees):
                state.heading = deg2rad(NORTH + degrees)
            case SetPosition(x=x, y=y):
                point = Point(float(x), float(y))
                if point == state.position:
                    return
                state.move_to(point)
            case Turn(degrees=degrees):
                state.heading += deg2rad(degrees)
            case Forward(distance=distance):
                direction = heading_vector(state.heading)
                step = Point(direction.x * distance, direction.y * distance)
                state.move_to(state.position + step)
            case Loop(count=count, body=body):
                if count < 0:
                    LOGGER.debug("loop count %d treated as zero iterations", count)
                    return
                self._descend(body, state, times=count)
            case SetMacro(name=name, body=body):
                state.macros[name] = body
            case PlayMacro(name=name):
                body = state.macros.get(name)
                if body is None:
                    LOGGER.debug("ignoring unknown macro %r", name)
                    return
                self._descend(body, state)
            case _:
                raise TypeError(f"not a turtle command: {command!r}")


def compile_program(
    program: Iterable[Command], config: CompilerConfig | None = None
) -> list[Stroke]:
    """Compile a command sequence into strokes."""
    return Compiler(config).compile(program)


class Turtle:
    """A turtle program, compiled the first time its strokes are needed."""

    def __init__(
        self,
        program: Iterable[Command] | Callable[[], Iterable[Command]],
        config: CompilerConfig | None = None,
    ):
        if callable(program):
            program = program()
        self.commands: tuple[Command, ...] = tuple(program)
        self.config = config or CompilerConfig()

    @cached_property
    def strokes(self) -> list[Stroke]:
        return Compiler(self.config).compile(self.commands)

    def path(self, origin: Point = ORIGIN, flip_y: bool = False) -> Path:
        return build_path(self.strokes, origin=origin, flip_y=flip_y)

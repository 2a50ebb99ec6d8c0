"""turtlebuilder - declarative turtle graphics compiled to polyline paths."""

from .builder import ProgramBuilder
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
from .errors import (
    CompileError,
    ProgramError,
    RecursionLimitExceeded,
    StepLimitExceeded,
    TurtleError,
)
from .geometry import Point
from .path import ClosePath, LineTo, MoveTo, Path, build_path
from .turtle import Compiler, Turtle, compile_program

__version__ = "0.1.0"

__all__ = [
    "Center",
    "ClosePath",
    "Command",
    "CompileError",
    "Compiler",
    "Forward",
    "LineTo",
    "Loop",
    "MoveTo",
    "Pass",
    "Path",
    "PenDown",
    "PenUp",
    "PlayMacro",
    "Point",
    "ProgramBuilder",
    "ProgramError",
    "RecursionLimitExceeded",
    "ResetHeading",
    "SetHeading",
    "SetMacro",
    "SetPosition",
    "StepLimitExceeded",
    "Turn",
    "Turtle",
    "TurtleError",
    "build_path",
    "compile_program",
]

"""JSON serialization of turtle programs.

A program is a JSON array. Parameterless commands are bare strings, the rest
are single-key objects::

    [
      "pen_down",
      {"loop": {"count": 4, "body": [{"forward": 40}, {"right": 90}]}},
      "pen_up"
    ]

``left`` and ``right`` are accepted on input and stored as ``turn``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, cast

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
from .errors import ProgramError

SIMPLE_COMMANDS: dict[str, type] = {
    "pass": Pass,
    "center": Center,
    "reset_heading": ResetHeading,
    "pen_up": PenUp,
    "pen_down": PenDown,
}


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ProgramError(msg)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_list(x: Any, path: str) -> list[Any]:
    _require(isinstance(x, list), f"{path} must be an array")
    return cast(list[Any], x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


def _parse_block(obj: Any, path: str) -> tuple[Command, ...]:
    items = _as_list(obj, path)
    return tuple(_parse_command(item, f"{path}[{i}]") for i, item in enumerate(items))


def _parse_command(obj: Any, path: str) -> Command:
    if isinstance(obj, str):
        cls = SIMPLE_COMMANDS.get(obj)
        _require(cls is not None, f"{path}: unknown command {obj!r}")
        return cls()

    obj = _as_dict(obj, path)
    _require(len(obj) == 1, f"{path} must have exactly one key")
    (name, arg), = obj.items()
    where = f"{path}.{name}"

    if name == "set_heading":
        return SetHeading(_as_int(arg, where))
    if name == "set_position":
        xy = _as_list(arg, where)
        _require(len(xy) == 2, f"{where} must be [x, y]")
        return SetPosition(_as_int(xy[0], f"{where}[0]"), _as_int(xy[1], f"{where}[1]"))
    if name in ("turn", "left"):
        return Turn(_as_int(arg, where))
    if name == "right":
        return Turn(-_as_int(arg, where))
    if name == "forward":
        return Forward(_as_int(arg, where))
    if name == "loop":
        fields = _as_dict(arg, where)
        return Loop(
            _as_int(fields.get("count"), f"{where}.count"),
            _parse_block(fields.get("body", []), f"{where}.body"),
        )
    if name == "set_macro":
        fields = _as_dict(arg, where)
        return SetMacro(
            _as_str(fields.get("name"), f"{where}.name"),
            _parse_block(fields.get("body", []), f"{where}.body"),
        )
    if name == "play_macro":
        return PlayMacro(_as_str(arg, where))
    if name in SIMPLE_COMMANDS:
        _require(arg is None, f"{where} takes no argument")
        return SIMPLE_COMMANDS[name]()

    raise ProgramError(f"{path}: unknown command {name!r}")


def parse_program(obj: Any) -> tuple[Command, ...]:
    """Build commands from decoded JSON, raising ``ProgramError`` on bad input."""
    try:
        return _parse_block(obj, "program")
    except RecursionError as e:
        raise ProgramError("program nested too deeply") from e


def load_program(path: str | Path) -> tuple[Command, ...]:
    with open(path, encoding="utf-8") as f:
        try:
            obj = json.load(f)
        except json.JSONDecodeError as e:
            raise ProgramError(f"Invalid JSON in {path}: {e}") from e
        except RecursionError as e:
            raise ProgramError(f"{path}: program nested too deeply") from e
    return parse_program(obj)


def command_to_json(command: Command) -> Any:
    match command:
        case SetHeading(degrees=degrees):
            return {"set_heading": degrees}
        case SetPosition(x=x, y=y):
            return {"set_position": [x, y]}
        case Turn(degrees=degrees):
            return {"turn": degrees}
        case Forward(distance=distance):
            return {"forward": distance}
        case Loop(count=count, body=body):
            return {"loop": {"count": count, "body": program_to_json(body)}}
        case SetMacro(name=name, body=body):
            return {"set_macro": {"name": name, "body": program_to_json(body)}}
        case PlayMacro(name=name):
            return {"play_macro": name}

    for name, cls in SIMPLE_COMMANDS.items():
        if type(command) is cls:
            return name
    raise TypeError(f"not a turtle command: {command!r}")


def program_to_json(program: Iterable[Command]) -> list[Any]:
    return [command_to_json(command) for command in program]


def dump_program(program: Iterable[Command], path: str | Path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(program_to_json(program), f, indent=2)
        f.write("\n")

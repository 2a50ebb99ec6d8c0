"""Configuration management."""

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class CompilerConfig(BaseModel):
    # Loop bodies and macro playback nested deeper than this abort the compile.
    max_depth: int = Field(default=200, gt=0)
    max_steps: int = Field(default=5_000_000, gt=0)


class CanvasConfig(BaseModel):
    width: float = Field(default=300.0, gt=0)
    height: float = Field(default=500.0, gt=0)
    anchor: Literal["top_left", "center"] = "center"
    # Screen space grows y downwards; flip to keep turtle "north" pointing up.
    flip_y: bool = False
    margin: float = Field(default=0.0, ge=0)


class StyleConfig(BaseModel):
    stroke: str = "green"
    stroke_width: float = Field(default=4.0, ge=0)
    fill: str = "none"
    precision: int = Field(default=3, ge=0, le=10)


class PenConfig(BaseModel):
    up_angle: int = 90
    down_angle: int = 40
    travel_speed: int = 1000
    draw_speed: int = 500


class Config(BaseModel):
    compiler: CompilerConfig = CompilerConfig()
    canvas: CanvasConfig = CanvasConfig()
    style: StyleConfig = StyleConfig()
    pen: PenConfig = PenConfig()

    @classmethod
    def load(cls, path: str | Path = "turtlebuilder.json") -> "Config":
        with open(path) as f:
            return cls(**json.load(f))

    def save(self, path: str | Path = "turtlebuilder.json"):
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=4)

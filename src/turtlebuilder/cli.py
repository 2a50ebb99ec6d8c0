"""CLI for turtlebuilder."""

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError

from .config import Config
from .errors import TurtleError


def _load(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path) if config_path else Config()
    except (OSError, ValueError, ValidationError) as e:
        raise click.ClickException(f"Config error: {e}") from e


def _compile(program_path: Path, config: Config):
    from .program import load_program
    from .turtle import Turtle

    try:
        turtle = Turtle(load_program(program_path), config.compiler)
        turtle.strokes  # compile eagerly so failures surface here
    except TurtleError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"File error: {e}") from e
    return turtle


def _canvas_path(turtle, config: Config):
    from .path import build_path, origin_for

    canvas = config.canvas
    origin = origin_for(canvas.width, canvas.height, canvas.anchor)
    return build_path(turtle.strokes, origin=origin, flip_y=canvas.flip_y)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log compiler details")
def main(verbose: bool):
    """turtlebuilder - Turtle programs to vector paths."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command()
@click.argument("program", type=Path)
@click.option("--output", "-o", required=True, type=Path)
@click.option("--config", "-c", "config_path", type=Path)
@click.option("--flip-y/--no-flip-y", default=None, help="Mirror the y axis")
@click.option("--anchor", type=click.Choice(["top_left", "center"]))
def render(
    program: Path,
    output: Path,
    config_path: Path | None,
    flip_y: bool | None,
    anchor: str | None,
):
    """Render a JSON turtle program to SVG."""
    from .svg import write_svg

    config = _load(config_path)
    if flip_y is not None:
        config.canvas.flip_y = flip_y
    if anchor:
        config.canvas.anchor = anchor

    turtle = _compile(program, config)
    path = _canvas_path(turtle, config)
    write_svg(path, output, config.canvas, config.style, title=program.stem)
    click.echo(f"Saved: {output}")


@main.command()
@click.argument("program", type=Path)
@click.option("--output", "-o", type=Path)
@click.option("--config", "-c", "config_path", type=Path)
def gcode(program: Path, output: Path | None, config_path: Path | None):
    """Convert a JSON turtle program to plotter gcode."""
    from .gcode import GcodeExporter
    from .path import build_path

    config = _load(config_path)
    turtle = _compile(program, config)
    # Plotter coordinates keep the turtle origin at the machine origin.
    path = build_path(turtle.strokes)
    text = GcodeExporter(config).export(path, comment=f"Source: {program.name}")

    if output:
        output.write_text(text)
        click.echo(f"Saved: {output}")
    else:
        click.echo(text)


@main.command()
@click.argument("program", type=Path)
@click.option("--config", "-c", "config_path", type=Path)
def strokes(program: Path, config_path: Path | None):
    """Print compiled strokes as JSON."""
    turtle = _compile(program, _load(config_path))
    click.echo(json.dumps([[[p.x, p.y] for p in s] for s in turtle.strokes]))


@main.command()
@click.argument("program", type=Path)
@click.option("--config", "-c", "config_path", type=Path)
def validate(program: Path, config_path: Path | None):
    """Check that a program loads and compiles."""
    config = _load(config_path)
    turtle = _compile(program, config)
    path = _canvas_path(turtle, config)

    visible = [s for s in turtle.strokes if len(s) >= 2]
    click.echo(f"commands: {len(turtle.commands)}")
    click.echo(f"strokes: {len(turtle.strokes)} ({len(visible)} visible)")
    click.echo(f"closed: {path.closed}")
    if visible:
        min_x, min_y, max_x, max_y = path.bounds()
        click.echo(f"bounds: ({min_x:g}, {min_y:g}) - ({max_x:g}, {max_y:g})")
    else:
        click.echo(click.style("No drawable geometry", fg="yellow"))
    click.echo(click.style("OK", fg="green"))


@main.command("init-config")
@click.argument("output", type=Path)
def init_config(output: Path):
    """Write the default configuration."""
    Config().save(output)
    click.echo(f"Saved: {output}")


if __name__ == "__main__":
    main()

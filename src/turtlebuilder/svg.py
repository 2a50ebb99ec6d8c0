"""SVG export of turtle paths."""

from __future__ import annotations

from pathlib import Path as FilePath

from .config import CanvasConfig, StyleConfig
from .path import ClosePath, LineTo, MoveTo, Path


def _fmt(x: float, precision: int) -> str:
    # Normalise -0.0 so it never produces "-0" in SVG output.
    if not x:
        x = 0.0
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s or "0"


def _escape(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def path_data(path: Path, precision: int = 3) -> str:
    """Render path operations as an SVG ``d`` attribute."""
    parts = []
    for op in path.ops:
        if isinstance(op, MoveTo):
            parts.append(f"M{_fmt(op.point.x, precision)},{_fmt(op.point.y, precision)}")
        elif isinstance(op, LineTo):
            parts.append(f"L{_fmt(op.point.x, precision)},{_fmt(op.point.y, precision)}")
        elif isinstance(op, ClosePath):
            parts.append("Z")
    return " ".join(parts)


def to_svg(
    path: Path,
    canvas: CanvasConfig | None = None,
    style: StyleConfig | None = None,
    title: str | None = None,
) -> str:
    """Build an SVG document holding ``path`` on a canvas-sized viewBox."""
    canvas = canvas or CanvasConfig()
    style = style or StyleConfig()
    p = style.precision

    m = canvas.margin
    view_box = " ".join(
        _fmt(v, p) for v in (-m, -m, canvas.width + 2 * m, canvas.height + 2 * m)
    )

    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    lines.append(
        '<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
        f'viewBox="{view_box}" width="{_fmt(canvas.width, p)}" '
        f'height="{_fmt(canvas.height, p)}">'
    )
    if title:
        lines.append(f"  <title>{_escape(title)}</title>")
    if path.ops:
        lines.append(
            f'  <path d="{path_data(path, p)}" stroke="{_escape(style.stroke)}" '
            f'stroke-width="{_fmt(style.stroke_width, p)}" fill="{_escape(style.fill)}" '
            'stroke-linecap="round" stroke-linejoin="round" />'
        )
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def write_svg(
    path: Path,
    out_path: str | FilePath,
    canvas: CanvasConfig | None = None,
    style: StyleConfig | None = None,
    title: str | None = None,
) -> None:
    out = FilePath(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(to_svg(path, canvas, style, title), encoding="utf-8")

"""GCode generation from turtle paths, for servo-lifted pen plotters."""

from .config import Config
from .path import ClosePath, LineTo, MoveTo, Path


class GcodeExporter:
    """Exports a path to gcode."""

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self.pen = self.config.pen

    def export(self, path: Path, comment: str = "") -> str:
        """Convert path operations to a gcode string."""
        lines = []

        if comment:
            lines.append(f"; {comment}")
        lines.append("; turtlebuilder")
        lines.append("")
        lines.append("G21 ; mm")
        lines.append("G90 ; absolute")
        lines.append(f"M280 P0 S{self.pen.up_angle} ; pen up")
        lines.append("G28 ; home")
        lines.append("")

        start = None
        drawing = False
        for op in path.ops:
            if isinstance(op, MoveTo):
                if drawing:
                    lines.append(f"M280 P0 S{self.pen.up_angle} ; pen up")
                    lines.append("")
                # Travel to subpath start with pen up
                start = op.point
                lines.append(f"G0 X{start.x:.2f} Y{start.y:.2f} F{self.pen.travel_speed}")
                lines.append(f"M280 P0 S{self.pen.down_angle} ; pen down")
                drawing = True
            elif isinstance(op, LineTo):
                lines.append(f"G1 X{op.point.x:.2f} Y{op.point.y:.2f} F{self.pen.draw_speed}")
            elif isinstance(op, ClosePath) and start is not None:
                lines.append(f"G1 X{start.x:.2f} Y{start.y:.2f} F{self.pen.draw_speed}")

        if drawing:
            lines.append(f"M280 P0 S{self.pen.up_angle} ; pen up")
            lines.append("")

        # Footer
        lines.append("G0 X0 Y0 F{} ; return home".format(self.pen.travel_speed))
        lines.append(f"M280 P0 S{self.pen.up_angle} ; pen up")
        lines.append("M84 ; motors off")

        return "\n".join(lines)

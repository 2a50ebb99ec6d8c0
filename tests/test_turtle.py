import pytest

from turtlebuilder.commands import (
    Center,
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
from turtlebuilder.config import CompilerConfig
from turtlebuilder.errors import RecursionLimitExceeded, StepLimitExceeded
from turtlebuilder.geometry import Point
from turtlebuilder.path import build_path
from turtlebuilder.turtle import Compiler, Turtle, compile_program


def P(x: float, y: float) -> Point:
    return Point(float(x), float(y))


class TestPen:
    def test_nothing_drawn_with_pen_up(self) -> None:
        assert compile_program([Forward(10), Turn(90), Forward(10)]) == []

    def test_pen_down_seeds_stroke_with_position(self) -> None:
        strokes = compile_program([Forward(10), PenDown()])
        assert strokes == [[P(0, 10)]]

    def test_repeated_pen_down_keeps_one_stroke(self) -> None:
        strokes = compile_program([PenDown(), Forward(10), PenDown(), Forward(5)])
        assert strokes == [[P(0, 0), P(0, 10), P(0, 15)]]

    def test_each_pen_down_transition_starts_a_stroke(self) -> None:
        strokes = compile_program(
            [PenDown(), Forward(10), PenUp(), Forward(10), PenDown(), Forward(10)]
        )
        assert strokes == [[P(0, 0), P(0, 10)], [P(0, 20), P(0, 30)]]

    def test_strokes_are_not_compacted(self) -> None:
        strokes = compile_program([PenDown(), PenUp(), PenDown(), PenUp()])
        assert strokes == [[P(0, 0)], [P(0, 0)]]

    def test_pass_is_a_no_op(self) -> None:
        program = [PenDown(), Forward(10), Turn(90), Forward(10)]
        with_pass = [Pass(), PenDown(), Pass(), Forward(10), Turn(90), Pass(), Forward(10)]
        assert compile_program(with_pass) == compile_program(program)


class TestMovement:
    def test_square_corner_snaps_to_axes(self) -> None:
        strokes = compile_program(
            [PenDown(), Forward(40), Turn(90), Forward(40), PenUp()]
        )
        # Exact equality: cardinal headings carry no floating point residue.
        assert strokes == [[P(0, 0), P(0, 40), P(-40, 40)]]

    def test_full_square_returns_to_start(self) -> None:
        strokes = compile_program(
            [PenDown(), Loop(4, [Forward(40), Turn(90)]), PenUp()]
        )
        assert strokes == [[P(0, 0), P(0, 40), P(-40, 40), P(-40, 0), P(0, 0)]]

    def test_diagonal_forward(self) -> None:
        strokes = compile_program([PenDown(), Turn(-45), Forward(10)])
        end = strokes[0][1]
        assert end.x == pytest.approx(7.0710678, abs=1e-6)
        assert end.y == pytest.approx(7.0710678, abs=1e-6)

    def test_heading_is_not_normalized(self) -> None:
        strokes = compile_program([PenDown(), Turn(720), Turn(-90), Forward(10)])
        end = strokes[0][1]
        assert end.x == pytest.approx(10, abs=1e-9)
        assert end.y == pytest.approx(0, abs=1e-9)

    def test_set_heading_is_relative_to_north(self) -> None:
        strokes = compile_program(
            [
                PenDown(),
                SetHeading(90),
                Forward(10),
                SetHeading(-90),
                Forward(10),
                SetHeading(0),
                Forward(10),
            ]
        )
        assert strokes == [[P(0, 0), P(-10, 0), P(0, 0), P(0, 10)]]

    def test_reset_heading(self) -> None:
        strokes = compile_program([PenDown(), Turn(123), ResetHeading(), Forward(5)])
        assert strokes == [[P(0, 0), P(0, 5)]]

    def test_negative_distance_walks_backwards(self) -> None:
        strokes = compile_program([PenDown(), Forward(-10)])
        assert strokes == [[P(0, 0), P(0, -10)]]

    def test_center_draws_back_to_origin(self) -> None:
        strokes = compile_program([PenDown(), Forward(10), Turn(90), Forward(10), Center()])
        assert strokes == [[P(0, 0), P(0, 10), P(-10, 10), P(0, 0)]]

    def test_center_with_pen_up_only_moves(self) -> None:
        strokes = compile_program([Forward(10), Center(), PenDown(), Forward(3)])
        assert strokes == [[P(0, 0), P(0, 3)]]

    def test_center_at_origin_still_appends(self) -> None:
        assert compile_program([PenDown(), Center()]) == [[P(0, 0), P(0, 0)]]

    def test_set_position_draws_when_pen_down(self) -> None:
        strokes = compile_program([PenDown(), SetPosition(5, -3)])
        assert strokes == [[P(0, 0), P(5, -3)]]

    def test_set_position_same_point_is_idempotent(self) -> None:
        assert compile_program([SetPosition(5, 5), SetPosition(5, 5)]) == []

        strokes = compile_program(
            [PenDown(), SetPosition(5, 5), SetPosition(5, 5), Forward(1)]
        )
        assert strokes == [[P(0, 0), P(5, 5), P(5, 6)]]

    def test_set_position_to_current_origin_adds_nothing(self) -> None:
        assert compile_program([PenDown(), SetPosition(0, 0)]) == [[P(0, 0)]]

    def test_set_position_with_pen_up_moves(self) -> None:
        strokes = compile_program([SetPosition(5, 5), PenDown(), Forward(10)])
        assert strokes == [[P(5, 5), P(5, 15)]]


class TestLoop:
    def test_loop_repeats_body_in_order(self) -> None:
        strokes = compile_program([PenDown(), Loop(3, [Forward(1), Forward(2)])])
        assert strokes == [[P(0, y) for y in (0, 1, 3, 4, 6, 7, 9)]]

    def test_nested_loops(self) -> None:
        strokes = compile_program([PenDown(), Loop(3, [Loop(2, [Forward(1)])])])
        assert strokes[0][-1] == P(0, 6)
        assert len(strokes[0]) == 7

    def test_zero_loop_is_omitted(self) -> None:
        body = [PenDown(), Forward(10), Turn(30)]
        base = [Forward(5), PenDown(), Forward(5)]
        with_loop = [Forward(5), Loop(0, body), PenDown(), Forward(5)]
        assert compile_program(with_loop) == compile_program(base)

    def test_negative_loop_runs_zero_times(self) -> None:
        assert compile_program([PenDown(), Loop(-3, [Forward(10)])]) == [[P(0, 0)]]

    def test_hexagon_returns_near_start(self) -> None:
        strokes = compile_program([PenDown(), Loop(6, [Forward(10), Turn(60)])])
        first, last = strokes[0][0], strokes[0][-1]
        assert last.x == pytest.approx(first.x, abs=1e-9)
        assert last.y == pytest.approx(first.y, abs=1e-9)
        # Off-axis headings leave rounding residue, and closing needs exact equality.
        assert last != first
        assert not build_path(strokes).closed


class TestMacro:
    body = [PenDown(), Forward(10), Turn(90), Forward(5), PenUp(), Forward(2)]

    def test_playback_matches_inline(self) -> None:
        played = compile_program([Turn(30), SetMacro("m", self.body), PlayMacro("m")])
        inline = compile_program([Turn(30), *self.body])
        assert played == inline

    def test_missing_macro_is_silent(self) -> None:
        program = [PenDown(), Forward(10), Turn(45)]
        with_missing = [PenDown(), Forward(10), PlayMacro("missing"), Turn(45)]
        assert compile_program(with_missing) == compile_program(program)
        assert compile_program([PlayMacro("missing")]) == []

    def test_define_only_draws_nothing(self) -> None:
        assert compile_program([SetMacro("m", self.body)]) == []

    def test_last_definition_wins(self) -> None:
        strokes = compile_program(
            [
                SetMacro("m", [Forward(1)]),
                SetMacro("m", [Forward(7)]),
                PenDown(),
                PlayMacro("m"),
            ]
        )
        assert strokes == [[P(0, 0), P(0, 7)]]

    def test_macro_shares_turtle_state(self) -> None:
        strokes = compile_program(
            [
                SetMacro("turn", [Turn(90)]),
                PenDown(),
                Loop(2, [Forward(10), PlayMacro("turn")]),
            ]
        )
        assert strokes == [[P(0, 0), P(0, 10), P(-10, 10)]]

    def test_macro_defined_in_loop_is_global(self) -> None:
        strokes = compile_program(
            [
                Loop(1, [SetMacro("step", [Forward(3)])]),
                PenDown(),
                PlayMacro("step"),
            ]
        )
        assert strokes == [[P(0, 0), P(0, 3)]]

    def test_macro_can_define_macros(self) -> None:
        strokes = compile_program(
            [
                SetMacro("outer", [SetMacro("inner", [Forward(4)])]),
                PlayMacro("outer"),
                PenDown(),
                PlayMacro("inner"),
            ]
        )
        assert strokes == [[P(0, 0), P(0, 4)]]


class TestGuards:
    def test_self_referencing_macro(self) -> None:
        program = [SetMacro("m", [Forward(1), PlayMacro("m")]), PlayMacro("m")]
        with pytest.raises(RecursionLimitExceeded) as excinfo:
            compile_program(program)
        assert excinfo.value.limit == CompilerConfig().max_depth

    def test_mutual_recursion(self) -> None:
        program = [
            SetMacro("a", [PlayMacro("b")]),
            SetMacro("b", [PlayMacro("a")]),
            PlayMacro("a"),
        ]
        with pytest.raises(RecursionLimitExceeded):
            compile_program(program, CompilerConfig(max_depth=20))

    def test_deep_nesting_within_limit(self) -> None:
        program = [PenDown(), Forward(1)]
        for _ in range(10):
            program = [Loop(1, program)]
        assert compile_program(program, CompilerConfig(max_depth=10)) == [[P(0, 0), P(0, 1)]]
        with pytest.raises(RecursionLimitExceeded):
            compile_program(program, CompilerConfig(max_depth=9))

    def test_depth_limit_above_interpreter_stack(self) -> None:
        program = [SetMacro("m", [Forward(1), PlayMacro("m")]), PlayMacro("m")]
        with pytest.raises(RecursionLimitExceeded) as excinfo:
            compile_program(program, CompilerConfig(max_depth=5000))
        assert excinfo.value.limit == 5000
        assert 0 < excinfo.value.depth < 5000

    def test_deep_loops_above_interpreter_stack(self) -> None:
        program = [PenDown(), Forward(1)]
        for _ in range(2000):
            program = [Loop(1, program)]
        with pytest.raises(RecursionLimitExceeded):
            compile_program(program, CompilerConfig(max_depth=5000))

    def test_huge_loop_count(self) -> None:
        with pytest.raises(StepLimitExceeded):
            compile_program([Loop(10**12, [Forward(1)])], CompilerConfig(max_steps=1000))

    def test_huge_empty_loop(self) -> None:
        with pytest.raises(StepLimitExceeded):
            compile_program([Loop(10**12, [])], CompilerConfig(max_steps=1000))

    def test_rejects_non_commands(self) -> None:
        with pytest.raises(TypeError):
            compile_program([PenDown(), "forward"])  # type: ignore[list-item]


class TestTurtle:
    def test_compiles_lazily_once(self) -> None:
        turtle = Turtle([PenDown(), Forward(10)])
        assert turtle.strokes is turtle.strokes
        assert turtle.strokes == [[P(0, 0), P(0, 10)]]

    def test_accepts_builder_callable(self) -> None:
        turtle = Turtle(lambda: [PenDown(), Forward(10)])
        assert turtle.commands == (PenDown(), Forward(10))

    def test_runs_do_not_share_state(self) -> None:
        compiler = Compiler()
        program = [SetMacro("m", [Forward(1)]), PenDown(), PlayMacro("m"), Turn(90)]
        assert compiler.compile(program) == compiler.compile(program)
        assert compiler.compile([PenDown(), PlayMacro("m")]) == [[P(0, 0)]]

    def test_path(self) -> None:
        path = Turtle([PenDown(), Loop(4, [Forward(40), Turn(90)])]).path()
        assert path.closed

"""Exceptions raised while loading and compiling turtle programs."""


class TurtleError(Exception):
    """Base class for turtlebuilder failures."""


class ProgramError(TurtleError, ValueError):
    """A serialized program is malformed."""


class CompileError(TurtleError):
    """Compilation aborted; no strokes are produced."""


class RecursionLimitExceeded(CompileError):
    def __init__(self, depth: int, limit: int):
        super().__init__(f"nesting depth {depth} exceeds limit of {limit}")
        self.depth = depth
        self.limit = limit


class StepLimitExceeded(CompileError):
    def __init__(self, limit: int):
        super().__init__(f"program executes more than {limit} commands")
        self.limit = limit

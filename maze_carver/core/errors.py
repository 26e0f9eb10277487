class MazeError(Exception):
    """Base class for every error raised by maze_carver."""


class InvalidDimensionError(MazeError, ValueError):
    def __init__(self, width: int, height: int):
        super().__init__(f"Grid dimensions must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height


class SelfDirectionError(MazeError, ValueError):
    """
    Raised when asking for the direction from a cell to itself.
    Correct generator/solver flow never does this, so it always points at a caller bug.
    """
    def __init__(self, point):
        super().__init__(f"No direction from {point} to itself")
        self.point = point


class NotAdjacentError(MazeError, ValueError):
    def __init__(self, a, b):
        super().__init__(f"{a} and {b} are not adjacent")
        self.a = a
        self.b = b


class AlreadyInitializedError(MazeError, RuntimeError):
    pass

"""
Maze text rendering format.

Generated mazes carry a ``textRender`` grid that uses the same alphabet
as hand-written maze files:

    S = Start position
    E = Exit (goal)
    X = Wall (impassable)
    . = Open path (can also be space)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MazeParseError(Exception):
    """Exception raised when maze text parsing fails."""

    pass


class MazeValidationError(Exception):
    """Exception raised when maze text validation fails."""

    pass


class CellType(Enum):
    """Types of cells in a rendered maze."""
    OPEN = "."
    WALL = "X"
    START = "S"
    EXIT = "E"


@dataclass
class ParsedMaze:
    """Dimensions and endpoints recovered from a text render."""

    grid_data: str
    width: int
    height: int
    start_x: int
    start_y: int
    exit_x: int
    exit_y: int


VALID_CHARS = {"S", "E", "X", ".", " "}


def render_grid(grid: list[list[CellType]]) -> str:
    """Join a grid of cells into maze text."""
    return "\n".join("".join(cell.value for cell in row) for row in grid)


def parse_maze_text(maze_text: str) -> ParsedMaze:
    """
    Parse maze text and extract metadata.

    Args:
        maze_text: Multi-line string representing the maze grid.

    Returns:
        ParsedMaze with grid data and metadata.

    Raises:
        MazeParseError: If the maze cannot be parsed.
        MazeValidationError: If the maze is invalid.
    """
    if not maze_text or not maze_text.strip():
        raise MazeParseError("Maze text is empty")

    grid_data = maze_text.strip()
    lines = grid_data.split("\n")

    height = len(lines)
    width = max(len(line) for line in lines)

    if width == 0:
        raise MazeParseError("Maze has no columns")

    start_pos: Optional[tuple[int, int]] = None
    exit_pos: Optional[tuple[int, int]] = None

    for y, line in enumerate(lines):
        for x, char in enumerate(line):
            if char not in VALID_CHARS:
                raise MazeValidationError(
                    f"Invalid character '{char}' at position ({x}, {y}). "
                    f"Valid characters: {', '.join(sorted(VALID_CHARS))}"
                )

            if char == "S":
                if start_pos is not None:
                    raise MazeValidationError(
                        f"Multiple start positions found: "
                        f"first at {start_pos}, second at ({x}, {y})"
                    )
                start_pos = (x, y)
            elif char == "E":
                if exit_pos is not None:
                    raise MazeValidationError(
                        f"Multiple exit positions found: "
                        f"first at {exit_pos}, second at ({x}, {y})"
                    )
                exit_pos = (x, y)

    if start_pos is None:
        raise MazeValidationError("Maze must have a start position (S)")

    if exit_pos is None:
        raise MazeValidationError("Maze must have an exit position (E)")

    return ParsedMaze(
        grid_data=grid_data,
        width=width,
        height=height,
        start_x=start_pos[0],
        start_y=start_pos[1],
        exit_x=exit_pos[0],
        exit_y=exit_pos[1],
    )

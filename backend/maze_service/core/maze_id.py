"""Maze identifiers.

A maze is addressed by the string ``"<height>:<width>:<seed>"``.
"""

from dataclasses import dataclass


class MazeIdError(ValueError):
    """Raised when a maze id cannot be parsed."""


@dataclass(frozen=True)
class MazeKey:
    """The parts of a maze id."""

    height: int
    width: int
    seed: str


def format_maze_id(height: int, width: int, seed: str) -> str:
    """Build the maze id for the given dimensions and seed."""
    return f"{int(height)}:{int(width)}:{seed}"


def parse_maze_id(maze_id: str) -> MazeKey:
    """
    Split a maze id into height, width and seed.

    Only the first two separators split, so a seed may contain ``:``.

    Raises:
        MazeIdError: If the id does not have three parts or the
            dimensions are not integers.
    """
    parts = maze_id.split(":", 2)
    if len(parts) != 3 or not parts[2]:
        raise MazeIdError(f'Invalid maze id "{maze_id}". Expected format: H:W:Seed')

    try:
        height = int(parts[0])
        width = int(parts[1])
    except ValueError as e:
        raise MazeIdError(
            f'Invalid maze id "{maze_id}". Height and width must be integers'
        ) from e

    return MazeKey(height=height, width=width, seed=parts[2])

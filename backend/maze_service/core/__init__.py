# Core module
from .maze_generator import (
    BacktrackingGenerator,
    MazeGenerationError,
    MazeGenerator,
    load_generator,
)
from .maze_id import MazeIdError, MazeKey, format_maze_id, parse_maze_id
from .maze_text import (
    CellType,
    MazeParseError,
    MazeValidationError,
    ParsedMaze,
    parse_maze_text,
)

__all__ = [
    "BacktrackingGenerator",
    "MazeGenerationError",
    "MazeGenerator",
    "load_generator",
    "MazeIdError",
    "MazeKey",
    "format_maze_id",
    "parse_maze_id",
    "CellType",
    "MazeParseError",
    "MazeValidationError",
    "ParsedMaze",
    "parse_maze_text",
]

"""
Maze generation.

The service does not own a maze algorithm: it talks to any object that
provides ``generate(height, width, seed, challenge) -> dict`` and stores
the returned document untouched. ``BacktrackingGenerator`` is the
default implementation, selected through the ``MAZE_GENERATOR`` setting.

Generated document:
    id          "<height>:<width>:<seed>"
    height      rows of cells
    width       columns of cells
    seed        seed string
    challenge   challenge level
    cells       height x width grid of exit bitmasks (N=1, S=2, E=4, W=8)
    start       {"row", "col"} of the entry cell (top row)
    finish      {"row", "col"} of the exit cell (bottom row)
    textRender  (2h+1) x (2w+1) maze text, see maze_service.core.maze_text
"""

import importlib
import random
from typing import Any, Protocol

from maze_service.core.maze_id import format_maze_id
from maze_service.core.maze_text import CellType, render_grid

MIN_SIZE = 3
MAX_SIZE = 50
MIN_CHALLENGE = 1
MAX_CHALLENGE = 10
MAX_SEED_LENGTH = 64

NORTH = 1
SOUTH = 2
EAST = 4
WEST = 8

# (bit, row delta, col delta, opposite bit)
MOVES = [
    (NORTH, -1, 0, SOUTH),
    (SOUTH, 1, 0, NORTH),
    (EAST, 0, 1, WEST),
    (WEST, 0, -1, EAST),
]


class MazeGenerationError(Exception):
    """Raised when a maze cannot be generated from the given values."""

    pass


class MazeGenerator(Protocol):
    """Anything that can build a maze document."""

    def generate(self, height: int, width: int, seed: str, challenge: int) -> dict[str, Any]:
        ...


def check_values(height: int, width: int, seed: str, challenge: int) -> None:
    """Raise MazeGenerationError when the generation inputs are out of range."""
    if not MIN_SIZE <= height <= MAX_SIZE:
        raise MazeGenerationError(
            f"Invalid height {height}. Must be between {MIN_SIZE} and {MAX_SIZE}."
        )
    if not MIN_SIZE <= width <= MAX_SIZE:
        raise MazeGenerationError(
            f"Invalid width {width}. Must be between {MIN_SIZE} and {MAX_SIZE}."
        )
    if not seed or len(seed) > MAX_SEED_LENGTH:
        raise MazeGenerationError(
            f"Invalid seed. Must be 1 to {MAX_SEED_LENGTH} characters long."
        )
    if not MIN_CHALLENGE <= challenge <= MAX_CHALLENGE:
        raise MazeGenerationError(
            f"Invalid challenge level {challenge}. "
            f"Must be between {MIN_CHALLENGE} and {MAX_CHALLENGE}."
        )


class BacktrackingGenerator:
    """
    Seeded depth-first ("recursive backtracker") maze generator.

    The same height, width and seed always produce the same maze.

    Example usage:
        generator = BacktrackingGenerator()
        maze = generator.generate(10, 15, "SimpleSample", 1)
        print(maze["textRender"])
    """

    def generate(self, height: int, width: int, seed: str, challenge: int) -> dict[str, Any]:
        check_values(height, width, seed, challenge)

        maze_id = format_maze_id(height, width, seed)
        rng = random.Random(maze_id)

        start = {"row": 0, "col": rng.randrange(width)}
        finish = {"row": height - 1, "col": rng.randrange(width)}
        cells = self._carve(height, width, start, rng)

        return {
            "id": maze_id,
            "height": height,
            "width": width,
            "seed": seed,
            "challenge": challenge,
            "cells": cells,
            "start": start,
            "finish": finish,
            "textRender": self.render(cells, start, finish),
            "note": f"Generated by {type(self).__name__}",
        }

    def _carve(self, height: int, width: int, start: dict, rng: random.Random) -> list[list[int]]:
        """Open passages with an iterative depth-first walk."""
        cells = [[0] * width for _ in range(height)]
        visited = [[False] * width for _ in range(height)]

        stack = [(start["row"], start["col"])]
        visited[start["row"]][start["col"]] = True

        while stack:
            row, col = stack[-1]
            options = [
                (bit, row + dr, col + dc, back)
                for bit, dr, dc, back in MOVES
                if 0 <= row + dr < height
                and 0 <= col + dc < width
                and not visited[row + dr][col + dc]
            ]
            if not options:
                stack.pop()
                continue

            bit, next_row, next_col, back = rng.choice(options)
            cells[row][col] |= bit
            cells[next_row][next_col] |= back
            visited[next_row][next_col] = True
            stack.append((next_row, next_col))

        return cells

    @staticmethod
    def render(cells: list[list[int]], start: dict, finish: dict) -> str:
        """Draw the cell grid as maze text with S and E on the outer wall."""
        height = len(cells)
        width = len(cells[0])
        grid = [[CellType.WALL] * (2 * width + 1) for _ in range(2 * height + 1)]

        for row in range(height):
            for col in range(width):
                y, x = 2 * row + 1, 2 * col + 1
                grid[y][x] = CellType.OPEN
                if cells[row][col] & EAST:
                    grid[y][x + 1] = CellType.OPEN
                if cells[row][col] & SOUTH:
                    grid[y + 1][x] = CellType.OPEN

        grid[0][2 * start["col"] + 1] = CellType.START
        grid[2 * height][2 * finish["col"] + 1] = CellType.EXIT
        return render_grid(grid)


def load_generator(path: str) -> MazeGenerator:
    """
    Instantiate the generator named by ``"package.module:ClassName"``.

    Raises:
        MazeGenerationError: If the path cannot be resolved or the
            generator cannot be created.
    """
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise MazeGenerationError(
            f'Invalid generator path "{path}". Expected format: package.module:ClassName'
        )

    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise MazeGenerationError(f'Unable to load maze generator "{path}": {e}') from e

    try:
        generator = factory()
    except Exception as e:
        raise MazeGenerationError(f'Unable to create maze generator "{path}": {e}') from e

    if not callable(getattr(generator, "generate", None)):
        raise MazeGenerationError(f'"{path}" does not provide a generate() method')
    return generator

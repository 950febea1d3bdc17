"""Tests for the default maze generator."""

import pytest

from maze_service.core.maze_generator import (
    EAST,
    NORTH,
    SOUTH,
    WEST,
    BacktrackingGenerator,
    MazeGenerationError,
    load_generator,
)
from maze_service.core.maze_text import parse_maze_text


@pytest.fixture
def generator() -> BacktrackingGenerator:
    return BacktrackingGenerator()


class TestBacktrackingGenerator:
    """Tests for BacktrackingGenerator."""

    def test_document_fields(self, generator):
        maze = generator.generate(10, 15, "SimpleSample", 3)

        assert maze["id"] == "10:15:SimpleSample"
        assert maze["height"] == 10
        assert maze["width"] == 15
        assert maze["seed"] == "SimpleSample"
        assert maze["challenge"] == 3
        assert len(maze["cells"]) == 10
        assert all(len(row) == 15 for row in maze["cells"])
        assert maze["start"]["row"] == 0
        assert maze["finish"]["row"] == 9

    def test_same_seed_same_maze(self, generator):
        first = generator.generate(12, 8, "repeat", 1)
        second = BacktrackingGenerator().generate(12, 8, "repeat", 1)
        assert first == second

    def test_different_seed_different_maze(self, generator):
        first = generator.generate(12, 12, "one", 1)
        second = generator.generate(12, 12, "two", 1)
        assert first["cells"] != second["cells"]

    def test_passages_are_symmetric(self, generator):
        cells = generator.generate(8, 9, "symmetry", 1)["cells"]

        for row in range(8):
            for col in range(9):
                if cells[row][col] & EAST:
                    assert cells[row][col + 1] & WEST
                if cells[row][col] & SOUTH:
                    assert cells[row + 1][col] & NORTH

    def test_every_cell_is_reachable(self, generator):
        maze = generator.generate(7, 11, "reach", 1)
        cells = maze["cells"]
        moves = {NORTH: (-1, 0), SOUTH: (1, 0), EAST: (0, 1), WEST: (0, -1)}

        seen = {(maze["start"]["row"], maze["start"]["col"])}
        pending = list(seen)
        while pending:
            row, col = pending.pop()
            for bit, (dr, dc) in moves.items():
                if cells[row][col] & bit and (row + dr, col + dc) not in seen:
                    seen.add((row + dr, col + dc))
                    pending.append((row + dr, col + dc))

        assert len(seen) == 7 * 11

    def test_text_render_is_valid_maze_text(self, generator):
        maze = generator.generate(5, 6, "render", 1)
        layout = parse_maze_text(maze["textRender"])

        assert layout.height == 2 * 5 + 1
        assert layout.width == 2 * 6 + 1
        assert layout.start_y == 0
        assert layout.start_x == 2 * maze["start"]["col"] + 1
        assert layout.exit_y == 2 * 5
        assert layout.exit_x == 2 * maze["finish"]["col"] + 1

    @pytest.mark.parametrize(
        "height,width,seed,challenge,message",
        [
            (2, 10, "s", 1, "Invalid height"),
            (51, 10, "s", 1, "Invalid height"),
            (10, 2, "s", 1, "Invalid width"),
            (10, 51, "s", 1, "Invalid width"),
            (10, 10, "", 1, "Invalid seed"),
            (10, 10, "x" * 65, 1, "Invalid seed"),
            (10, 10, "s", 0, "Invalid challenge level"),
            (10, 10, "s", 11, "Invalid challenge level"),
        ],
    )
    def test_rejects_out_of_range_values(self, generator, height, width, seed, challenge, message):
        with pytest.raises(MazeGenerationError, match=message):
            generator.generate(height, width, seed, challenge)


class TestLoadGenerator:
    """Tests for load_generator."""

    def test_loads_default_generator(self):
        generator = load_generator("maze_service.core.maze_generator:BacktrackingGenerator")
        assert isinstance(generator, BacktrackingGenerator)

    def test_rejects_path_without_class(self):
        with pytest.raises(MazeGenerationError, match="Expected format"):
            load_generator("maze_service.core.maze_generator")

    def test_rejects_unknown_module(self):
        with pytest.raises(MazeGenerationError, match="Unable to load maze generator"):
            load_generator("no_such_module_here:Generator")

    def test_rejects_unknown_class(self):
        with pytest.raises(MazeGenerationError, match="Unable to load maze generator"):
            load_generator("maze_service.core.maze_generator:NoSuchGenerator")

    def test_rejects_object_without_generate(self):
        with pytest.raises(MazeGenerationError, match="does not provide a generate"):
            load_generator("maze_service.core.maze_id:MazeIdError")

    def test_rejects_class_that_cannot_be_created(self):
        # MazeKey requires constructor arguments
        with pytest.raises(MazeGenerationError, match="Unable to create maze generator"):
            load_generator("maze_service.core.maze_id:MazeKey")

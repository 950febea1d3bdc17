"""Database models package."""

from maze_service.models.maze import MazeRecord

__all__ = ["MazeRecord"]

"""API dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from maze_service.config import get_settings
from maze_service.core.maze_generator import MazeGenerator, load_generator
from maze_service.db.database import get_db
from maze_service.services.maze_store import MazeStore

# Shared by the app state and the route decorators. Counters are per
# client and endpoint, not per URL, since every generate URL is unique.
limiter = Limiter(key_func=get_remote_address, key_style="endpoint")


def get_maze_store(db: AsyncSession = Depends(get_db)) -> MazeStore:
    """Get a maze store bound to the request's database session."""
    return MazeStore(db)


@lru_cache
def get_generator() -> MazeGenerator:
    """Get the configured maze generator (loaded once)."""
    return load_generator(get_settings().maze_generator)


# Type aliases for cleaner route signatures
Store = Annotated[MazeStore, Depends(get_maze_store)]

"""Maze record storage backed by SQLAlchemy."""

import logging
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from maze_service.models.maze import MazeRecord

logger = logging.getLogger("maze_service.store")

# Name reported in status messages
COLLECTION_NAME = MazeRecord.__tablename__


class MazeStore:
    """Find, insert and delete maze records.

    Every method issues a single statement; database errors propagate
    as ``sqlalchemy.exc.SQLAlchemyError``.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, maze_id: str) -> list[MazeRecord]:
        """Get all records with the given maze id, oldest first."""
        result = await self.db.execute(
            select(MazeRecord)
            .where(MazeRecord.id == maze_id)
            .order_by(MazeRecord.pk)
        )
        return list(result.scalars().all())

    async def find_first(self, maze_id: str) -> Optional[MazeRecord]:
        """Get the oldest record with the given maze id."""
        result = await self.db.execute(
            select(MazeRecord)
            .where(MazeRecord.id == maze_id)
            .order_by(MazeRecord.pk)
            .limit(1)
        )
        return result.scalars().first()

    async def list_all(self) -> list[MazeRecord]:
        """Get every stored record ordered by maze id."""
        result = await self.db.execute(
            select(MazeRecord).order_by(MazeRecord.id, MazeRecord.pk)
        )
        return list(result.scalars().all())

    async def insert(
        self,
        maze_id: str,
        height: int,
        width: int,
        seed: str,
        challenge: int,
        body: Any,
    ) -> MazeRecord:
        """Store a generated maze document as-is.

        The key fields come from the request, never from ``body``.
        """
        record = MazeRecord(
            id=maze_id,
            height=height,
            width=width,
            seed=seed,
            challenge=challenge,
            body=body,
        )
        self.db.add(record)
        await self.db.flush()
        return record

    async def delete_one(self, maze_id: str) -> int:
        """Delete the oldest record with the given maze id.

        Returns:
            Number of deleted records (0 or 1).
        """
        pk = (
            await self.db.execute(
                select(MazeRecord.pk)
                .where(MazeRecord.id == maze_id)
                .order_by(MazeRecord.pk)
                .limit(1)
            )
        ).scalar_one_or_none()
        if pk is None:
            return 0

        result = await self.db.execute(delete(MazeRecord).where(MazeRecord.pk == pk))
        await self.db.flush()
        return result.rowcount or 0

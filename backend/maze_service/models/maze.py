"""Maze record model."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, String, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from maze_service.db.database import Base


class MazeRecord(Base):
    """A stored maze document keyed by ``height:width:seed``.

    The ``id`` column is expected to be unique but is not constrained;
    readers take the first match.
    """

    __tablename__ = "mazes"

    pk: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )  # insertion order
    id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    height: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    width: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    seed: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    challenge: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )
    body: Mapped[Any] = mapped_column(
        JSON,
        nullable=False,
    )  # opaque generator output
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<MazeRecord {self.id}>"

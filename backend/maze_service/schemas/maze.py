"""Maze schemas for responses."""

from pydantic import BaseModel


class StatusResponse(BaseModel):
    """Schema for status and error payloads."""

    status: str


class MazeStub(BaseModel):
    """Schema for the key fields of a stored maze plus its URL."""

    id: str
    height: int
    width: int
    seed: str
    url: str


class DeleteResponse(BaseModel):
    """Schema for delete results."""

    status: str = "ok"
    count: int

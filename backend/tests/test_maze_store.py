"""Tests for the maze record store."""

import pytest

from maze_service.services.maze_store import MazeStore


async def add(store: MazeStore, maze_id: str, note: str = ""):
    height, width, seed = maze_id.split(":", 2)
    return await store.insert(maze_id, int(height), int(width), seed, 1, {"id": maze_id, "note": note})


@pytest.mark.asyncio
async def test_insert_stores_document_untouched(test_session):
    store = MazeStore(test_session)
    maze = {"id": "4:5:abc", "note": "kept as-is", "extra": {"nested": [1, 2, 3]}}

    record = await store.insert("4:5:abc", 4, 5, "abc", 4, maze)

    assert record.pk is not None
    assert record.id == "4:5:abc"
    assert record.height == 4
    assert record.width == 5
    assert record.seed == "abc"
    assert record.challenge == 4
    assert record.body == maze


@pytest.mark.asyncio
async def test_insert_takes_key_fields_from_arguments(test_session):
    store = MazeStore(test_session)
    body = {"mazeId": "something else", "grid": [[0]]}

    record = await store.insert("3:4:xyz", 3, 4, "xyz", 2, body)

    assert (record.id, record.height, record.width, record.seed) == ("3:4:xyz", 3, 4, "xyz")
    assert record.body == body
    assert (await store.find_first("3:4:xyz")).body == body


@pytest.mark.asyncio
async def test_find_returns_all_matches_oldest_first(test_session):
    store = MazeStore(test_session)
    await add(store, "3:3:dup", note="first")
    await add(store, "3:3:dup", note="second")
    await add(store, "3:3:other")

    records = await store.find("3:3:dup")

    assert [r.body["note"] for r in records] == ["first", "second"]
    first = await store.find_first("3:3:dup")
    assert first.body["note"] == "first"


@pytest.mark.asyncio
async def test_find_first_missing(test_session):
    store = MazeStore(test_session)
    assert await store.find("9:9:none") == []
    assert await store.find_first("9:9:none") is None


@pytest.mark.asyncio
async def test_list_all_orders_by_id(test_session):
    store = MazeStore(test_session)
    await add(store, "5:5:b")
    await add(store, "3:3:a")

    records = await store.list_all()

    assert [r.id for r in records] == ["3:3:a", "5:5:b"]


@pytest.mark.asyncio
async def test_delete_one_removes_only_first_match(test_session):
    store = MazeStore(test_session)
    await add(store, "3:3:dup", note="first")
    await add(store, "3:3:dup", note="second")

    assert await store.delete_one("3:3:dup") == 1

    remaining = await store.find("3:3:dup")
    assert [r.body["note"] for r in remaining] == ["second"]


@pytest.mark.asyncio
async def test_delete_one_missing(test_session):
    store = MazeStore(test_session)
    assert await store.delete_one("3:3:none") == 0

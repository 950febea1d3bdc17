"""Maze routes for generating, fetching and deleting maze records."""

import logging
import secrets
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError

from maze_service.api.deps import Store, get_generator, limiter
from maze_service.config import get_settings
from maze_service.core.maze_generator import MazeGenerator
from maze_service.core.maze_id import MazeIdError, format_maze_id, parse_maze_id
from maze_service.schemas.maze import DeleteResponse, MazeStub, StatusResponse
from maze_service.services.maze_store import COLLECTION_NAME

settings = get_settings()
logger = logging.getLogger("maze_service.routes")

router = APIRouter(tags=["Mazes"])

ERROR_RESPONSES = {
    404: {"model": StatusResponse},
    500: {"model": StatusResponse},
}


def database_error(request: Request, message: str, exc: SQLAlchemyError) -> HTTPException:
    """Log a database failure and build the 500 response for it."""
    logger.error(f"{request.url.path}: {type(exc).__name__}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"{message}: {exc}",
    )


def maze_url(request: Request, path: str) -> str:
    """Absolute URL on this host for the given path."""
    host = request.headers.get("host", request.url.netloc)
    return f"{request.url.scheme}://{host}{path}"


@router.get("/get", response_model=list[MazeStub], responses=ERROR_RESPONSES)
async def get_all_mazes(request: Request, store: Store) -> list[MazeStub]:
    """List the key fields of every stored maze with a link to each."""
    try:
        records = await store.list_all()
    except SQLAlchemyError as e:
        raise database_error(
            request, f'Error getting mazes from "{COLLECTION_NAME}"', e
        )

    if not records:
        logger.debug(f"No mazes found in collection {COLLECTION_NAME}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No mazes found in collection {COLLECTION_NAME}",
        )

    logger.debug(f"{len(records)} mazes found in {COLLECTION_NAME}, returning JSON ...")
    return [
        MazeStub(
            id=record.id,
            height=record.height,
            width=record.width,
            seed=record.seed,
            url=maze_url(
                request,
                f"/get/{record.height}/{record.width}/{quote(record.seed, safe='')}",
            ),
        )
        for record in records
    ]


@router.get("/get/{maze_id}", responses=ERROR_RESPONSES)
async def get_maze(maze_id: str, request: Request, store: Store) -> Any:
    """Get the stored document for a maze id (``height:width:seed``)."""
    try:
        records = await store.find(maze_id)
    except SQLAlchemyError as e:
        raise database_error(request, f'Error finding "{maze_id}" in "{COLLECTION_NAME}"', e)

    if len(records) > 1:
        logger.warning(f'{len(records)} mazes found with id "{maze_id}", returning first match.')

    if not records:
        logger.debug(f'Maze "{maze_id}" not found.')
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'Maze "{maze_id}" not found.',
        )

    logger.debug(f'Maze "{maze_id}" found, return as JSON...')
    return records[0].body


@router.get("/get/{height}/{width}/{seed}", response_class=RedirectResponse)
async def get_maze_by_parts(height: int, width: int, seed: str) -> RedirectResponse:
    """Deprecated: redirect ``/get/H/W/Seed`` to ``/get/H:W:Seed``."""
    logger.debug("Deprecated route - redirecting to /get/mazeId...")
    maze_id = format_maze_id(height, width, seed)
    return RedirectResponse(
        f"/get/{quote(maze_id, safe=':')}",
        status_code=status.HTTP_302_FOUND,
    )


@router.get(
    "/generate/{height}/{width}/{seed}/{challenge_level}",
    responses={400: {"model": StatusResponse}, **ERROR_RESPONSES},
)
@limiter.limit(f"{settings.rate_limit_generate}/minute")
async def generate_maze(
    request: Request,
    height: int,
    width: int,
    seed: str,
    challenge_level: int,
    store: Store,
    generator: MazeGenerator = Depends(get_generator),
) -> Any:
    """Generate, store and return a new maze.

    Fails with 400 when a maze with the same id already exists.
    """
    maze_id = format_maze_id(height, width, seed)

    try:
        existing = await store.find(maze_id)
    except SQLAlchemyError as e:
        raise database_error(request, f'Error finding "{maze_id}" in "{COLLECTION_NAME}"', e)

    if existing:
        logger.warning(f'{len(existing)} maze(s) found with id "{maze_id}", aborting.')
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f'Maze "{maze_id}" already exists.',
        )

    logger.debug(f'Generating maze "{maze_id}"...')
    try:
        maze = await run_in_threadpool(generator.generate, height, width, seed, challenge_level)
    except Exception as e:
        logger.error(f"Error during maze generation: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f'Error generating "{maze_id}": {e}',
        )

    logger.debug(f'Maze "{maze_id}" generated.  Storing...')
    try:
        await store.insert(maze_id, height, width, seed, challenge_level, maze)
    except SQLAlchemyError as e:
        raise database_error(request, f'Error storing "{maze_id}" in "{COLLECTION_NAME}"', e)

    logger.debug(f'Returning Maze "{maze_id}" as JSON...')
    return maze


@router.get("/generate/{maze_id}", status_code=status.HTTP_400_BAD_REQUEST)
@router.get("/generate/{height}/{width}/{seed}", status_code=status.HTTP_400_BAD_REQUEST)
async def generate_deprecated() -> StatusResponse:
    """Deprecated generation routes."""
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Deprecated. Please use /generate/mazeId/challengeLevel",
    )


@router.get("/generate/{maze_id}/{challenge_level}", response_class=RedirectResponse)
async def generate_maze_by_id(maze_id: str, challenge_level: int) -> RedirectResponse:
    """Redirect ``/generate/H:W:Seed/Level`` to ``/generate/H/W/Seed/Level``."""
    logger.debug("Attempting to parse and redirect single mazeId parameter for /generate.")
    try:
        key = parse_maze_id(maze_id)
    except MazeIdError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unable to generate maze. Bad URL? "
            "Expected format: /generate/H:W:Seed/ChallengeLevel",
        )

    return RedirectResponse(
        f"/generate/{key.height}/{key.width}/{quote(key.seed, safe='')}/{challenge_level}",
        status_code=status.HTTP_302_FOUND,
    )


@router.get(
    "/delete/{maze_id}/{password}",
    response_model=DeleteResponse,
    responses={401: {"model": StatusResponse}, 500: {"model": StatusResponse}},
)
async def delete_maze(maze_id: str, password: str, request: Request, store: Store) -> DeleteResponse:
    """Delete the first maze record with the given id."""
    expected = settings.delete_password
    if not expected or not secrets.compare_digest(expected.encode(), password.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or incorrect password.",
        )

    try:
        count = await store.delete_one(maze_id)
    except SQLAlchemyError as e:
        raise database_error(request, f'Error deleting "{maze_id}" from "{COLLECTION_NAME}"', e)

    logger.info(f'{count} document(s) deleted with id "{maze_id}"')
    return DeleteResponse(status="ok", count=count)

"""HTML pages: maze list, maze view and API documentation."""

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError

from maze_service.api.deps import Store
from maze_service.api.routes.maze import database_error, maze_url
from maze_service.core.maze_text import MazeParseError, MazeValidationError, parse_maze_text
from maze_service.services.maze_store import COLLECTION_NAME

logger = logging.getLogger("maze_service.routes")

PACKAGE_DIR = Path(__file__).resolve().parent.parent.parent
templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))
FAVICON_PATH = PACKAGE_DIR / "static" / "favicon.ico"

router = APIRouter(tags=["Pages"])


@router.get("/list", response_class=HTMLResponse)
async def list_mazes(request: Request, store: Store) -> HTMLResponse:
    """Render every stored maze as an HTML table."""
    # TODO: paginate once the collection grows past a few hundred mazes
    try:
        records = await store.list_all()
    except SQLAlchemyError as e:
        raise database_error(
            request, f'Error getting all documents from "{COLLECTION_NAME}"', e
        )

    return templates.TemplateResponse(
        request,
        "list.html",
        {"title": "List Mazes", "mazes": records},
    )


@router.get("/view/{maze_id}", response_class=HTMLResponse)
async def view_maze(maze_id: str, request: Request, store: Store) -> HTMLResponse:
    """Render a simple view of a stored maze."""
    try:
        record = await store.find_first(maze_id)
    except SQLAlchemyError as e:
        raise database_error(request, f'Error finding "{maze_id}" in "{COLLECTION_NAME}"', e)

    if record is None:
        logger.debug(f"No maze with id {maze_id} found.")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'Maze "{maze_id}" not found.',
        )

    logger.debug(f'Maze "{maze_id}" found in DB, viewing...')

    # The body is opaque; only draw it when it carries a readable render
    layout = None
    render = record.body.get("textRender") if isinstance(record.body, dict) else None
    if isinstance(render, str):
        try:
            layout = parse_maze_text(render)
        except (MazeParseError, MazeValidationError) as e:
            logger.warning(f'Maze "{maze_id}" has an unreadable textRender: {e}')

    return templates.TemplateResponse(
        request,
        "view.html",
        {"title": "View Maze", "record": record, "maze": record.body, "layout": layout},
    )


@router.get("/favicon.ico", include_in_schema=False)
async def favicon() -> FileResponse:
    """Serve the site icon."""
    return FileResponse(FAVICON_PATH, media_type="image/x-icon")


def render_index(request: Request, status_code: int) -> HTMLResponse:
    """Render the API documentation page with sample links for this host."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "API Documentation",
            "sample_get_all": maze_url(request, "/get"),
            "sample_get": maze_url(request, "/get/10:15:SimpleSample"),
            "sample_generate": maze_url(request, "/generate/10/15/SimpleSample/1"),
            "sample_delete": maze_url(request, "/delete/10:15:SimpleSample/pw"),
            "sample_view": maze_url(request, "/view/10:15:SimpleSample"),
            "sample_list": maze_url(request, "/list"),
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """API documentation page."""
    return render_index(request, status.HTTP_200_OK)


@router.get("/{path:path}", response_class=HTMLResponse, include_in_schema=False)
async def unhandled_route(path: str, request: Request) -> HTMLResponse:
    """Mis-routed traffic catch-all."""
    logger.debug(f"Unhandled route /{path} - showing API documentation.")
    return render_index(request, status.HTTP_404_NOT_FOUND)

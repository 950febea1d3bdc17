"""Maze Service - Main FastAPI Application."""

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from maze_service.config import get_settings
from maze_service.api.deps import limiter
from maze_service.api.routes import maze, pages
from maze_service.core.maze_generator import MazeGenerationError
from maze_service.db.database import close_db, init_db

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("maze_service")


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as a status payload."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render bad path parameters as a 400 status payload."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.debug(f"Invalid request {request.url.path}: {problems}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": f"Invalid request parameters. {problems}"},
    )


def generation_exception_handler(request: Request, exc: MazeGenerationError):
    """Handle generator failures raised outside a route body."""
    logger.error(f"Maze generator unavailable: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": str(exc)},
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors."""
    logger.warning(
        f"Rate limit exceeded for {request.client.host if request.client else 'unknown'} "
        f"on {request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "status": "Rate limit exceeded. Please slow down.",
            "retry_after": str(exc.detail),
        },
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests with correlation IDs."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        # Add request ID to request state for use in handlers
        request.state.request_id = request_id

        logger.info(
            f"[{request_id}] --> {request.method} {request.url.path} "
            f"from {request.client.host if request.client else 'unknown'}"
        )

        try:
            response = await call_next(request)
            process_time = (time.time() - start_time) * 1000

            logger.info(
                f"[{request_id}] <-- {response.status_code} "
                f"({process_time:.2f}ms)"
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            process_time = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] <-- ERROR: {type(e).__name__}: {str(e)} "
                f"({process_time:.2f}ms)"
            )
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}...")
    logger.info(f"Starting service with environment settings for: {settings.environment}")
    logger.info(f"Connecting to database: {settings.masked_database_url}")

    if settings.create_tables:
        await init_db()
        logger.info("Database tables ready")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    logger.info("Closing database connections...")
    await close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Stores, generates and serves maze documents",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(MazeGenerationError, generation_exception_handler)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Any origin may read mazes
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


# Include routers - pages last, it ends with the catch-all route
app.include_router(maze.router)
app.include_router(pages.router)

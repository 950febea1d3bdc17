"""Run the maze service with uvicorn."""

import uvicorn

from maze_service.config import get_settings


def main() -> None:
    """Serve the application on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "maze_service.main:app",
        host=settings.maze_svc_host,
        port=settings.maze_svc_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

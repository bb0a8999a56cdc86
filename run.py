"""Entry point for the CRUD API server.

Serves ``crud_api.app.main:app`` with Uvicorn.  Host, port, log level
and environment come from the same environment variables as the
application settings (``HOST``, ``PORT``, ``LOG_LEVEL``, ``APP_ENV``).
Uvicorn handles SIGINT/SIGTERM and drains open connections before the
process exits.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from crud_api.app.core.config import settings
from crud_api.app.main import app


logger = logging.getLogger("crud_api.server")


async def main() -> None:
    """Start the API server and block until it shuts down."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # One line per request already comes from the log_requests middleware.
        access_log=False,
    )
    server = Server(config)

    base_url = f"http://localhost:{settings.port}"
    logger.info("Server is running on %s (%s)", base_url, settings.environment)
    logger.info("Health check: %s/health", base_url)
    logger.info("API info: %s/info", base_url)
    logger.info("Users API: %s/api/users", base_url)
    logger.info("Posts API: %s/api/posts", base_url)

    await server.serve()
    logger.info("Process terminated")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

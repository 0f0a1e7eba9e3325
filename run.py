"""Entry point for serving the API.

This script starts the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example inside a
container where you only specify a single Python file to run.

Host, port and the number of workers are read from the environment
variables ``HOST``, ``PORT`` and ``WORKERS`` (defaults ``0.0.0.0``,
``8000`` and ``1``).  With more than one worker Uvicorn's process
supervisor is used; a single worker is served in-process.
Application settings such as ``DATABASE_URL`` and ``ENVIRONMENT`` are
documented in ``api_template.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

import uvicorn
from uvicorn import Config, Server

APP = "api_template.app.main:app"


def main() -> None:
    """Serve the API until interrupted."""
    options = dict(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=False,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
    workers = int(os.getenv("WORKERS", "1"))
    if workers > 1:
        # Only uvicorn.run spawns worker processes; Server.serve is single-process.
        uvicorn.run(APP, workers=workers, **options)
        return
    server = Server(Config(app=APP, **options))
    asyncio.run(server.serve())


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")

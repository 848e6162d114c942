"""Entry point for the Product Catalog API.

Starts the FastAPI application with Uvicorn.  Intended to be executed
from the project root, for example under Docker, where you only
specify a single Python file to run.

Configuration such as the data file path, log level and bind address
should be placed in a `.env` file in the same directory.  See
`.env.example` for the supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from product_catalog_api.app.core.config import settings
from product_catalog_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted.

    Host and port are read from the ``HOST`` and ``PORT`` environment
    variables.  Defaults are ``0.0.0.0`` and ``8000``.
    """
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")

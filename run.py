"""Entry point for serving the MiniLink API.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (or a ``.env`` file next to this script).  Defaults are
``0.0.0.0`` and ``5000``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from minilink_api.app.core.config import settings
from minilink_api.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting server on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

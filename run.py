"""Entry point for the Water Reports API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example in Docker, where you only
specify a single Python file to run.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``8080``); see
``water_reports_api/app/core/config.py`` for the other settings.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from water_reports_api.app.core.config import settings
from water_reports_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        # Server logs propagate to the handlers set up by create_app.
        log_config=None,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass

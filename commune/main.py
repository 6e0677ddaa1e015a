"""FastAPI application entry point.

This module initialises the FastAPI app, configures logging and
registers API routes.  The `uvicorn` ASGI server can point to
``commune.main:app`` to serve the application.
"""

from fastapi import FastAPI
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .utils.logger import setup_logging
from .controllers.commune_controller import router as commune_router
from .utils.error_handler import CommuneError, commune_exception_handler, router_exception_handler


def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    # Calling setup_logging() initialises Loguru with console and file sinks.
    setup_logging()

    app = FastAPI(title="Commune", version="0.1.0")

    # CORS headers are set by the commune routes themselves so that
    # preflight and error responses keep their exact bodies.
    app.add_exception_handler(CommuneError, commune_exception_handler)
    app.add_exception_handler(StarletteHTTPException, router_exception_handler)

    app.include_router(commune_router)

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        logger.debug("Health check invoked")
        return {"status": "ok"}

    return app


# Create an application instance for ASGI servers
app = create_app()

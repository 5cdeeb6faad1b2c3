"""
Hospital bed management API.
FastAPI with WebSocket for real-time updates.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bedflow.api.router import api_router
from bedflow.config import settings
from bedflow.core.state import BedManagementState
from bedflow.core.websocket_manager import ConnectionManager
from bedflow.utils.logger import configure_logging, get_logger

logger = get_logger("main")


def create_app(state: Optional[BedManagementState] = None) -> FastAPI:
    """
    Builds the application.

    Args:
        state: Allocation state to serve; a fresh one is built at
            startup when omitted

    Returns:
        Configured FastAPI application
    """
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        bed_state = state or BedManagementState()
        manager = ConnectionManager()
        manager.attach(bed_state.broadcaster)

        app.state.bed_state = bed_state
        app.state.connection_manager = manager
        logger.info(f"{settings.APP_TITLE} {settings.APP_VERSION} started")

        yield

        manager.detach()
        bed_state.shutdown()
        logger.info("Application stopped")

    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root():
        return {"message": f"{settings.APP_TITLE} API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

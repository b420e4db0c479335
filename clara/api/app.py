"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clara.agent.session import SessionManager
from clara.api.chat import router as chat_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Clara Chat API...")
    yield
    # Shutdown
    app.state.session_manager.reset()
    logger.info("Shutting down Clara Chat API...")


def create_app(session_manager: SessionManager | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        session_manager: Optional session manager.
                         A default one reading the environment is created
                         if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Clara Chat API",
        description=(
            "Persona-driven assistant API. Keeps one conversation session per "
            "selected mode and streams model replies as Server-Sent Events."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.session_manager = session_manager or SessionManager()

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "clara-chat"}

    return application


app = create_app()

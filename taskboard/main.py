"""
FastAPI application entry point
Application factory: builds the store client, task service and list view
once and wires them into the page and API routers
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskboard.api.v1.api import build_api_router
from taskboard.core.config import Settings
from taskboard.core.database import create_engine_from_settings, create_session_factory
from taskboard.core.events import InvalidationSignal
from taskboard.core.logging_setup import setup_logging
from taskboard.repositories.task import TaskGateway
from taskboard.services.task import TaskService
from taskboard.ui.view import TaskListView
from taskboard.web import routes as pages
from taskboard.web.guard import SubmissionGuard

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> FastAPI:
    """
    Build the application

    Args:
        settings: Configuration; defaults to the environment-loaded settings
        session_factory: Pre-built session factory (tests); when omitted an
            engine is created from DATABASE_URL and disposed on shutdown

    Returns:
        Configured FastAPI instance
    """
    if settings is None:
        from taskboard.core.config import settings as default_settings
        settings = default_settings

    setup_logging(settings.LOG_LEVEL)

    engine = None
    if session_factory is None:
        engine = create_engine_from_settings(settings)
        session_factory = create_session_factory(engine)

    gateway = TaskGateway(session_factory)
    signal = InvalidationSignal()
    service = TaskService(gateway, signal)
    view = TaskListView(service, signal)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Validates database connection on startup, disposes it on shutdown
        Reference: https://fastapi.tiangolo.com/advanced/events/
        """
        try:
            await gateway.ping()
            logger.info("Database connection successful")
        except Exception as e:
            # Don't raise - the page renders an empty list until the store is back
            logger.error(f"Database connection failed: {e}")

        yield

        view.close()
        if engine is not None:
            await engine.dispose()
            logger.info("Database connections closed")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Task tracking with a server-rendered page and a JSON API",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.task_gateway = gateway
    app.state.invalidation_signal = signal
    app.state.task_service = service
    app.state.task_view = view
    app.state.submission_guard = SubmissionGuard()

    app.include_router(pages.router)
    app.include_router(build_api_router(settings.API_V1_PREFIX))

    return app

"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hiring_dashboard.core.config import settings
from hiring_dashboard.core.logging_config import configure_logging
from hiring_dashboard.errors import AppError, app_error_handler
from hiring_dashboard.routers import (
    auth,
    candidates,
    companies,
    dashboard,
    documents,
    health,
    jobs,
    pipeline_stages,
    team_members,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.

    Logging is configured on startup; the engine is disposed on shutdown.
    """
    configure_logging()
    logger.info("Starting %s (stage delete policy: %s)", settings.APP_NAME, settings.STAGE_DELETE_POLICY)

    yield

    from hiring_dashboard.db.session import engine

    await engine.dispose()
    logger.info("Shutting down %s", settings.APP_NAME)


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Backend API for the hiring dashboard: jobs, candidates and the hiring pipeline",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AppError, app_error_handler)


# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router)
app.include_router(companies.router)
app.include_router(team_members.router)
app.include_router(jobs.router)
app.include_router(pipeline_stages.router)
app.include_router(candidates.router)
app.include_router(documents.router)
app.include_router(dashboard.router)

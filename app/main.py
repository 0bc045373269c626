"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.core.config import settings
from app.db.session import engine
from app.errors import AppError, app_error_handler
from app.routers import billing, health, task

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.
    
    - On startup: configure logging.
    - On shutdown: release pooled database connections.
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger.info("Starting %s...", settings.APP_NAME)
    
    yield
    
    logger.info("Shutting down %s...", settings.APP_NAME)
    await engine.dispose()


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Task tracking and billing API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AppError, app_error_handler)

# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(task.router)
app.include_router(billing.router)

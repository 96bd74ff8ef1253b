"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError

from logitrack import __version__
from logitrack.core.config import settings
from logitrack.errors import (
    AppError,
    app_error_handler,
    integrity_error_handler,
    request_validation_handler,
    unhandled_error_handler,
)
from logitrack.routers import (
    analytics,
    auth,
    drivers,
    employees,
    expenses,
    health,
    shipments,
    superadmin,
    tenants,
    users,
    vehicles,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure the root logger from LOG_LEVEL."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.

    This runs code when the server starts and stops.
    """
    # Startup: runs when the server starts
    configure_logging()
    logger.info("Starting %s %s...", settings.APP_NAME, __version__)

    yield  # The server runs while we're "yielded" here

    # Shutdown: runs when the server stops
    logger.info("Shutting down %s...", settings.APP_NAME)


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Multi-tenant logistics and transport management API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Every error leaves the API as {"error": {"code", "message", "details"}}
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)


# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router)
app.include_router(tenants.router)
app.include_router(users.router)
app.include_router(shipments.router)
app.include_router(vehicles.router)
app.include_router(drivers.router)
app.include_router(employees.router)
app.include_router(expenses.router)
app.include_router(analytics.router)
app.include_router(superadmin.router)

# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from db import get_store
from db.config import store_settings
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .routes import (
    admin,
    auth,
    borrower,
    campaigns,
    customers,
    dashboard,
    health,
    public,
    verifications,
)
from .schemas.error import ErrorResponse
from .services.aggregators import log_aggregator_status
from .services.notifications import log_notification_status, shutdown_notification_service

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Apply ``LOG_LEVEL`` to the application's loggers; handlers stay with the server."""
    logging.getLogger(__name__.partition(".")[0]).setLevel(settings.LOG_LEVEL.upper())


configure_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    log_aggregator_status()
    log_notification_status()
    if store_settings.SEED_DEMO_DATA:
        from .services.seed.seeder import seed_demo_data

        seed_demo_data(get_store())
    yield
    shutdown_notification_service()


app = FastAPI(
    title=settings.APP_NAME,
    description="Bank account verification for lending institutions",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    body = ErrorResponse.for_status(exc.status_code, str(exc.detail), request_id, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    body = ErrorResponse.for_status(422, str(exc.errors()), request_id, request.url.path)
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    body = ErrorResponse.for_status(
        500, "An unexpected error occurred.", request_id, request.url.path
    )
    return JSONResponse(status_code=500, content=body.model_dump())


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(verifications.router, prefix="/api/verifications", tags=["verifications"])
app.include_router(customers.router, prefix="/api/customers", tags=["customers"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(borrower.router, prefix="/api/verify", tags=["borrower"])
app.include_router(campaigns.router, prefix="/api/campaigns", tags=["campaigns"])
app.include_router(public.router, prefix="/api/public", tags=["public"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": f"Welcome to the {settings.APP_NAME} API"}

# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from portal_db import DatabaseService
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.tokens import check_token_config
from .routes import auth, health, societa
from .schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle.

    Refuses to start without a signing secret; owns the database pool.
    """
    check_token_config()
    logger.info(
        "Starting %s %s (token lifetime=%s, CORS origins=%s)",
        settings.APP_NAME,
        settings.APP_VERSION,
        settings.JWT_EXPIRES_IN,
        settings.ALLOWED_HOSTS,
    )
    db_service = DatabaseService.from_settings()
    app.state.db_service = db_service
    try:
        yield
    finally:
        await db_service.close()
        logger.info("Database pool closed")


app = FastAPI(
    title="M&A Portal API",
    description="Company listings with role-gated visibility",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


def _error(status_code: int, body: ErrorResponse, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTPException as ``{"error": ...}``.

    A dict ``detail`` carries extra context (e.g. RBAC denials) and is
    merged into the body as-is.
    """
    if isinstance(exc.detail, dict):
        body = ErrorResponse(**exc.detail)
    elif exc.status_code == 404 and exc.detail == HTTPStatus.NOT_FOUND.phrase:
        # raised by the router itself: no route matched
        body = ErrorResponse(error="route not found", path=request.url.path)
    else:
        body = ErrorResponse(error=str(exc.detail))
    return _error(exc.status_code, body, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed requests are validation errors (400), like payload checks."""
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        message = "malformed JSON body"
    elif errors:
        first = errors[0]
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "invalid request"
    return _error(400, ErrorResponse(error=message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error(500, ErrorResponse(error="internal server error"))


# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(societa.router, prefix="/api/societa", tags=["societa"])

"""FastAPI server for the healthcare portal.

Features:
- CORS middleware for the browser client
- Global exception handling mapped to JSON error bodies
- Request IDs and structured logging
- One in-memory store per app, injected into handlers

Middleware order, outermost first: CORS, request ID, unhandled-error
catch-all. Unexpected failures are turned into a 500 inside the stack,
so those responses still carry CORS headers and X-Request-ID.

Usage:
    uvicorn portal.api_server:app --port 5000
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portal import config
from portal.api.models import ErrorResponse
from portal.api.routes import router
from portal.auth import PasswordHasher
from portal.errors import PortalError
from portal.logging_config import RequestIDMiddleware, configure_logging, get_logger
from portal.storage import MemStorage

logger = get_logger(__name__)


def format_validation_errors(errors) -> str:
    """Render pydantic errors as 'field: reason' pairs."""
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


class UnhandledErrorMiddleware:
    """Catch-all for unexpected exceptions, running inside the middleware stack.

    Logs the failure (with the bound request_id) and answers 500 with a
    generic body. If the response had already started, the exception is
    re-raised since no clean error response can be sent.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def tracking_send(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
        except Exception:
            logger.error("unexpected_error", path=scope.get("path"), exc_info=True)
            if response_started:
                raise
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(
                    message="Server error",
                    code="INTERNAL_ERROR"
                ).model_dump(exclude_none=True)
            )
            await response(scope, receive, send)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown logic."""
    logger.info(
        "server_starting",
        doctors=len(app.state.storage.get_doctors()),
        insurance_options=len(app.state.storage.get_insurance_options()),
        assistance_programs=len(app.state.storage.get_assistance_programs()),
    )
    yield
    # In-memory store: nothing to close
    logger.info("server_shutting_down")


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors consistently."""
        formatted = format_validation_errors(exc.errors())
        logger.warning("validation_error", path=request.url.path, errors=formatted)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                message="Invalid input data",
                errors=formatted,
                code="VALIDATION_ERROR"
            ).model_dump(exclude_none=True)
        )

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        """Handle domain errors raised by route handlers."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                message=exc.message,
                errors=exc.errors,
                code=exc.code
            ).model_dump(exclude_none=True)
        )


def create_app(
    storage: Optional[MemStorage] = None,
    password_hasher: Optional[PasswordHasher] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        storage: Store to serve; a freshly seeded MemStorage by default
        password_hasher: Hasher for user passwords

    Returns:
        Configured FastAPI app
    """
    configure_logging(config.LOG_LEVEL, config.LOG_FORMAT)

    app = FastAPI(
        title=config.APP_NAME,
        description="Doctors, appointments, and insurance assistance for patients",
        version=config.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.storage = storage if storage is not None else MemStorage(
        seed_sample_data=config.SEED_SAMPLE_DATA
    )
    app.state.password_hasher = password_hasher or PasswordHasher()

    # add_middleware wraps, so the last one added is outermost
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials="*" not in config.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)
    app.include_router(router)

    return app


app = create_app()

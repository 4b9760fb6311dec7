"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Request path (outermost first):
  CORS → CorrelationId → AccessGuard → Dishka → router
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka

from myumkm import __version__
from myumkm.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from myumkm.config.settings import get_config
from myumkm.domain.exceptions import DomainError
from myumkm.infrastructure.security import CredentialCodec
from myumkm.middleware.access_guard import AccessGuardMiddleware
from myumkm.presentation.api import auth_router, conversations_router, users_router
from myumkm.presentation.pages import router as pages_router
from myumkm.setup.ioc import create_container

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers["X-Correlation-ID"] = correlation_id
        return response


def create_fastapi_app(
    config=None,
    container: Optional[AsyncContainer] = None,
) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        config: Config class; defaults to the one selected by APP_ENV
        container: DI container; defaults to one built from config

    Raises:
        ConfigurationError: JWT_SECRET is not set
    """
    config = config or get_config()
    setup_logging(config.LOG_LEVEL, config.LOG_PATH)

    # Fails fast without a signing secret
    codec = CredentialCodec.from_config(config)
    if container is None:
        container = create_container(config, credential_codec=codec)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("FastAPI application started. DI container initialized.")
        yield
        # Disconnects Prisma when that backend is active
        await container.close()
        logger.info("FastAPI application shutdown. DI container closed.")

    app = FastAPI(
        title="MyUMKM API",
        description="Identity, session and direct messaging for the MyUMKM network",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.credential_codec = codec

    # Dishka first: middleware added later wraps it
    setup_dishka(container, app)

    app.add_middleware(AccessGuardMiddleware, codec=codec, config=config)

    # Correlation ID wraps the guard so its log lines carry the id
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError):
        if exc.status_code >= 500:
            logger.error(f"[DOMAIN ERROR] {type(exc).__name__}: {exc.message}")
        else:
            logger.info(f"[DOMAIN ERROR {exc.status_code}] {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info(f"[VALIDATION ERROR] {errors}")
        content = {"error": "Validation error"}
        if config.DEBUG:
            content["details"] = [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in errors
            ]
        return JSONResponse(status_code=400, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info(f"[HTTP ERROR {exc.status_code}] {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        content = {"error": "Internal server error"}
        if config.DEBUG:
            content["details"] = f"{type(exc).__name__}: {exc}"
        return JSONResponse(status_code=500, content=content)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    app.include_router(auth_router, prefix=config.API_PREFIX)
    app.include_router(users_router, prefix=config.API_PREFIX)
    app.include_router(conversations_router, prefix=config.API_PREFIX)
    app.include_router(pages_router)

    return app


# Create the app instance
app = create_fastapi_app()

"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    ConfigurationError,
    CopywiseError,
    ExternalServiceError,
    StorageError,
    ValidationError,
)

from .dependencies import ServiceContainer, set_session_cookie
from .models.errors import ErrorResponse
from .routes import account, auth, descriptions, health

logger = logging.getLogger(__name__)

# Most specific first
ERROR_STATUS = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(exc: CopywiseError) -> int:
    for exc_type, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def copywise_error_handler(request: Request, exc: CopywiseError) -> JSONResponse:
    body = ErrorResponse(**exc.to_dict())
    response = JSONResponse(status_code=status_for(exc), content=body.model_dump(mode="json"))
    session_id = getattr(request.state, "issued_session_id", None)
    if session_id is not None:
        set_session_cookie(response, request.app.state.container.settings, session_id)
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup lets sessions be restored; shutdown disposes every auth context.
    """
    container: ServiceContainer = app.state.container
    settings = container.settings
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    await container.startup()
    yield
    logger.info("Shutting down %s", settings.app_name)
    await container.shutdown()


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Service container to use; a default one is built from
                   settings when omitted

    Returns:
        Configured FastAPI instance
    """
    container = container or ServiceContainer(get_settings())
    settings = container.settings

    app = FastAPI(
        title=settings.app_name,
        description="AI-assisted e-commerce product description API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.container = container

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(CopywiseError, copywise_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(account.router, prefix="/api/account", tags=["account"])
    app.include_router(descriptions.router, prefix="/api/descriptions", tags=["descriptions"])

    return app

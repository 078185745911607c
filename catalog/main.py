"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup/shutdown logging
   - Uses async context manager in FastAPI 0.109+

3. Middleware Stack
   - Rate limiting (slowapi)
   - CORS: Allow cross-origin requests

4. Exception Handlers
   - Every error leaves the API as {"message": "..."}
   - Server faults are logged with a traceback and answered with a
     generic message, never with internals
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.config import get_settings
from catalog.exceptions import SERVER_ERROR_MESSAGE, CatalogError
from catalog.routers import auth_router, books_router
from catalog.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
# Configure logging before creating the app
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validation_message(exc: RequestValidationError) -> str:
    """
    Collapse Pydantic's error list into the catalog's single message.

    Only the first error is reported. Its location, minus the leading
    "body"/"path"/"query" part, names the field:

        [{"loc": ("body", "ratings", "count"), ...}]
        -> "Invalid or missing ratings.count - please refer to documentation"
    """
    errors = exc.errors()
    loc = [str(part) for part in errors[0]["loc"][1:]] if errors else []
    field = ".".join(loc) if loc else "request body"
    return f"Invalid or missing {field} - please refer to documentation"


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    Tables are managed by Alembic (``alembic upgrade head``), not created here.
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API version: {settings.api_version}")
    logger.info(f"Environment: {settings.environment}")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Catalog API

A catalog of books, their authors and their rating aggregates.

### Features
- **Books**: Insert, look up by ISBN, title or author, delete
- **Ratings**: Replace a book's rating aggregate, search by rating range
- **Pagination**: Offset pagination over the whole catalog

### Authentication
Register or log in under `/auth`, then send the access token as
`Authorization: Bearer <token>` on every `/books` request.

### Errors
Every error response has the shape `{"message": "..."}`.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # Attach the limiter to the app state so it can be accessed by decorators
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(
        request: Request,
        exc: CatalogError,
    ) -> JSONResponse:
        """
        Map catalog errors to their status code.

        Client errors (400/404) carry their own message. Server faults were
        already logged where they were raised; here they are logged once
        more with the request path and their detail is replaced.
        """
        if exc.server_fault:
            logger.error(
                f"Server fault on {request.method} {request.url.path}: {exc.message}",
                exc_info=exc,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.client_message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Answer unparseable request bodies with a 400 single message."""
        message = validation_message(exc)
        logger.info(f"Rejected request: {message}")
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Re-shape HTTPException (401, unknown routes, ...) as {"message": ...}."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy errors that escaped the catalog services.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"message": SERVER_ERROR_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all exception handler."""
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"message": SERVER_ERROR_MESSAGE},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    # prefix="/api/v1" creates versioned URLs: /api/v1/books, /api/v1/auth
    api_prefix = f"/api/{settings.api_version}"

    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(books_router, prefix=api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    async def health_check() -> dict:
        """
        Health check endpoint.

        Used by load balancers, Kubernetes probes and monitoring systems.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn catalog.main:app
app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m catalog.main
# In production, use: uvicorn catalog.main:app --host 0.0.0.0 --port 8000

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

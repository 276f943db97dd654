# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the User API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   user-api                      # console script, binds API_HOST:PORT
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.exceptions import (
    UserAPIException,
    user_api_exception_handler,
    validation_exception_handler,
)
from app.middleware import ErrorMiddleware
from app.routers import health, users
from app.routers.health import API_VERSION
from core.repositories.user_repository import USERS_COLLECTION, UserRepository
from core.services.user_service import UserService
from lib.mongo_client import MongoConnection, MongoConnectionError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(connection: MongoConnection | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        connection: MongoDB connection to use. When None, one is created
            from settings during startup.

    Returns:
        FastAPI: Configured application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: Connect to MongoDB, ensure indexes, build services.
          A failed connection aborts startup, which stops the server.
        - Shutdown: Close the MongoDB client.
        """
        logger.info(f"Starting User API in {settings.ENVIRONMENT} mode")

        mongo = connection or MongoConnection.from_settings(settings)
        try:
            await mongo.ping()
        except MongoConnectionError as e:
            logger.error(f"Startup aborted: {e}")
            raise

        repository = UserRepository(mongo.collection(USERS_COLLECTION))
        await repository.ensure_indexes()

        app.state.mongo = mongo
        app.state.user_service = UserService(repository)

        yield

        logger.info("Shutting down User API")
        mongo.close()

    app = FastAPI(
        title="User API",
        description="""
## User Management API

CRUD endpoints for a single **User** resource backed by MongoDB.

| Method | Path | Action |
|--------|------|--------|
| GET | `/api/users` | List users |
| POST | `/api/users` | Create a user |
| GET | `/api/users/{id}` | Get a user |
| PUT | `/api/users/{id}` | Update name and/or email |
| DELETE | `/api/users/{id}` | Delete a user |

### Quick Start

```bash
curl -X POST http://localhost:5000/api/users \\
  -H "Content-Type: application/json" \\
  -d '{"name": "John Doe", "email": "john@x.com", "password": "secret1"}'
```
""",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Users",
                "description": "Create, read, update and delete users",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    # Innermost: turns unhandled exceptions into JSON responses
    app.add_middleware(ErrorMiddleware)

    # CORS middleware - allows cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=settings.is_production,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(UserAPIException)
    async def handle_user_api_exception(request: Request, exc: UserAPIException):
        """Handle custom User API exceptions."""
        return await user_api_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_exception(request: Request, exc: RequestValidationError):
        """Handle request body/path validation failures."""
        return await validation_exception_handler(request, exc)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(
        health.router,
        prefix="/api",
        tags=["Health"]
    )

    app.include_router(
        users.router,
        prefix="/api/users",
        tags=["Users"]
    )

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "message": "Welcome to the User API",
            "version": API_VERSION,
            "docs": "/docs",
            "health": "/api/health",
        }

    return app


app = create_app()


def run() -> None:
    """Start the API server on API_HOST:PORT."""
    uvicorn.run(
        app,
        host=settings.API_HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    run()

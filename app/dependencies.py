# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services.user_service import UserService
from lib.mongo_client import MongoConnection


def get_mongo_connection(request: Request) -> MongoConnection:
    """
    Get the MongoDB connection opened by the application lifespan.
    """
    return request.app.state.mongo


def get_user_service(request: Request) -> UserService:
    """
    Get the UserService built during startup.
    """
    return request.app.state.user_service


# Type aliases for dependency injection
MongoDep = Annotated[MongoConnection, Depends(get_mongo_connection)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]

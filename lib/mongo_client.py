# =============================================================================
# lib/mongo_client.py - MongoDB Connection Handle
# =============================================================================
# This module owns the motor client used by the application.
#
# Unlike a module-level singleton, a MongoConnection is created once by the
# application lifespan, stored on app.state, and handed to repositories.
# Tests build one around an in-memory client instead of a real server.
#
# Usage:
#   from lib.mongo_client import MongoConnection
#   connection = MongoConnection.from_settings(settings)
#   await connection.ping()
#   users = connection.collection("users")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class MongoConnectionError(Exception):
    """
    Error establishing or using the MongoDB connection.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "MONGO_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class MongoConnection:
    """
    Explicitly owned handle around a motor client and one database.

    Example:
        connection = MongoConnection(
            client=AsyncIOMotorClient("mongodb://localhost:27017"),
            database_name="user_api",
        )
        await connection.ping()
        users = connection.collection("users")
        ...
        connection.close()
    """

    def __init__(self, client: Any, database_name: str):
        self._client = client
        self.database_name = database_name

    @classmethod
    def from_settings(cls, settings: Settings) -> MongoConnection:
        """
        Build a connection from application settings.

        Creating the motor client does not open sockets; the first
        operation (normally ping) does.

        Raises:
            MongoConnectionError: If the connection string is invalid
        """
        try:
            client = AsyncIOMotorClient(
                settings.MONGO_URI,
                serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            )
        except (PyMongoError, ValueError) as e:
            raise MongoConnectionError(
                message=f"Failed to create MongoDB client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check MONGO_URI in your .env file",
            )
        return cls(client=client, database_name=settings.MONGO_DB_NAME)

    @property
    def client(self) -> Any:
        return self._client

    @property
    def database(self) -> Any:
        return self._client[self.database_name]

    def collection(self, name: str) -> Any:
        """Return a collection from the configured database."""
        return self.database[name]

    async def ping(self) -> None:
        """
        Verify the server is reachable.

        Raises:
            MongoConnectionError: If the server does not answer
        """
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            raise MongoConnectionError(
                message=f"Could not connect to MongoDB: {e}",
                code="CONNECTION_FAILED",
                suggestion="Check that MongoDB is running and MONGO_URI is correct",
                details={"database": self.database_name},
            )
        logger.info(f"Connected to MongoDB database '{self.database_name}'")

    def close(self) -> None:
        """Close the underlying client."""
        self._client.close()
        logger.info("MongoDB connection closed")

# =============================================================================
# core/repositories/user_repository.py - User Data Access
# =============================================================================
# Primitive operations against the users collection:
# find-all, find-by-id, insert, save, delete.
#
# The repository receives its collection at construction time; it never
# reaches for a global client. Driver errors (including DuplicateKeyError
# from the unique email index) propagate to the caller unchanged.
# =============================================================================

import logging
from typing import Any

from pymongo import ASCENDING

from lib.utils import parse_object_id, utc_now

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


class UserRepository:
    """
    Data access object for the users collection.

    Example:
        repository = UserRepository(connection.collection(USERS_COLLECTION))
        await repository.ensure_indexes()
        user = await repository.insert({"name": "Ann", "email": "a@b.com", "password": "secret1"})
    """

    def __init__(self, collection: Any):
        """
        Args:
            collection: motor (or compatible) collection for users
        """
        self.collection = collection

    async def ensure_indexes(self) -> None:
        """Create the unique index that enforces email uniqueness."""
        await self.collection.create_index(
            [("email", ASCENDING)],
            unique=True,
            name="email_unique",
        )
        logger.debug("Ensured unique index on users.email")

    async def find_all(self) -> list[dict[str, Any]]:
        """Return every user document in storage order."""
        cursor = self.collection.find({})
        return await cursor.to_list(length=None)

    async def find_by_id(self, user_id: str) -> dict[str, Any] | None:
        """
        Look up a user by identifier.

        Returns:
            The document, or None if the id is malformed or unknown
        """
        object_id = parse_object_id(user_id)
        if object_id is None:
            return None
        return await self.collection.find_one({"_id": object_id})

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new user and stamp its timestamps.

        Returns:
            The stored document including _id

        Raises:
            DuplicateKeyError: If the email is already taken
        """
        now = utc_now()
        stored = {**document, "createdAt": now, "updatedAt": now}
        result = await self.collection.insert_one(stored)
        stored["_id"] = result.inserted_id
        return stored

    async def save(self, document: dict[str, Any]) -> dict[str, Any] | None:
        """
        Replace a mutated document by its _id and restamp updatedAt.

        Returns:
            The saved document, or None if no document has this _id

        Raises:
            DuplicateKeyError: If the new email belongs to another user
        """
        stored = {**document, "updatedAt": utc_now()}
        result = await self.collection.replace_one({"_id": stored["_id"]}, stored)
        if result.matched_count == 0:
            return None
        return stored

    async def delete(self, user_id: str) -> bool:
        """
        Remove a user permanently.

        Returns:
            True if a document was deleted
        """
        object_id = parse_object_id(user_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count > 0

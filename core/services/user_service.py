# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles the five user operations (list, create, read, update, delete).
# Separates HTTP concerns from database logic: routes call these methods,
# these methods call the repository and translate driver failures into
# API exceptions.
# =============================================================================

import logging
from typing import Any

from pymongo.errors import DuplicateKeyError, PyMongoError

from app.exceptions import DatabaseOperationError, DuplicateEmailError, UserNotFoundError
from core.models.user import UserCreate, UserDeleteResponse, UserPatch, UserResponse
from core.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user management operations.

    Holds no per-request state; every call reads from and writes to the
    repository it was built with.
    """

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def list_users(self) -> list[UserResponse]:
        """
        Return every stored user.

        Raises:
            DatabaseOperationError: If the query fails
        """
        try:
            documents = await self.repository.find_all()
        except PyMongoError as e:
            logger.error(f"Failed to list users: {e}")
            raise DatabaseOperationError("list_users", str(e))

        return [UserResponse.from_document(doc) for doc in documents]

    async def create_user(self, payload: UserCreate) -> UserResponse:
        """
        Create a new user.

        Args:
            payload: Validated create payload

        Returns:
            The stored user with id and timestamps

        Raises:
            DuplicateEmailError: If the email is already taken
            DatabaseOperationError: If the insert fails for another reason
        """
        try:
            document = await self.repository.insert(payload.to_document())
        except DuplicateKeyError:
            logger.info(f"Rejected duplicate email on create: {payload.email}")
            raise DuplicateEmailError(payload.email)
        except PyMongoError as e:
            logger.error(f"Failed to create user: {e}")
            raise DatabaseOperationError("create_user", str(e))

        logger.info(f"Created user: {document['_id']}")
        return UserResponse.from_document(document)

    async def get_user(self, user_id: str) -> UserResponse:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If no user has this id
        """
        document = await self._find_or_raise(user_id)
        return UserResponse.from_document(document)

    async def update_user(self, user_id: str, patch: UserPatch) -> UserResponse:
        """
        Apply a partial update to a user.

        Fields missing from the patch keep their stored values. The
        read and the save are separate round trips, so concurrent
        updates to one user resolve as last-write-wins.

        Raises:
            UserNotFoundError: If no user has this id
            DuplicateEmailError: If the new email belongs to another user
            DatabaseOperationError: If the save fails for another reason
        """
        document = await self._find_or_raise(user_id)
        merged = patch.apply_to(document)

        try:
            saved = await self.repository.save(merged)
        except DuplicateKeyError:
            logger.info(f"Rejected duplicate email on update of {user_id}: {merged['email']}")
            raise DuplicateEmailError(merged["email"])
        except PyMongoError as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            raise DatabaseOperationError("update_user", str(e))

        # Removed by a concurrent request between the lookup and the save
        if saved is None:
            raise UserNotFoundError(user_id)

        if patch.is_empty:
            logger.info(f"Update of user {user_id} carried no changes")
        else:
            logger.info(f"Updated user: {user_id}")
        return UserResponse.from_document(saved)

    async def delete_user(self, user_id: str) -> UserDeleteResponse:
        """
        Permanently remove a user.

        Raises:
            UserNotFoundError: If no user has this id
            DatabaseOperationError: If the delete fails
        """
        await self._find_or_raise(user_id)

        try:
            deleted = await self.repository.delete(user_id)
        except PyMongoError as e:
            logger.error(f"Failed to delete user {user_id}: {e}")
            raise DatabaseOperationError("delete_user", str(e))

        # Removed by a concurrent request between the lookup and the delete
        if not deleted:
            raise UserNotFoundError(user_id)

        logger.info(f"Deleted user: {user_id}")
        return UserDeleteResponse()

    async def _find_or_raise(self, user_id: str) -> dict[str, Any]:
        try:
            document = await self.repository.find_by_id(user_id)
        except PyMongoError as e:
            logger.error(f"Failed to fetch user {user_id}: {e}")
            raise DatabaseOperationError("get_user", str(e))

        if document is None:
            logger.debug(f"User not found: {user_id}")
            raise UserNotFoundError(user_id)
        return document

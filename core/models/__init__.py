# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User create/patch/response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import (
    EMAIL_PATTERN,
    PASSWORD_MIN_LENGTH,
    UserCreate,
    UserDeleteResponse,
    UserPatch,
    UserResponse,
)

__all__ = [
    "EMAIL_PATTERN",
    "PASSWORD_MIN_LENGTH",
    "UserCreate",
    "UserDeleteResponse",
    "UserPatch",
    "UserResponse",
]

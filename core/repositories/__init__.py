# =============================================================================
# core/repositories/ - Data Access Layer
# =============================================================================

from .user_repository import UserRepository, USERS_COLLECTION

__all__ = [
    "UserRepository",
    "USERS_COLLECTION",
]

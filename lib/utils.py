# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId


# =============================================================================
# ObjectId Utilities
# =============================================================================

def parse_object_id(value: str | ObjectId) -> ObjectId | None:
    """
    Convert a path identifier into a Mongo ObjectId.

    Identifiers arrive as strings from the URL. Anything that is not a
    24-character hex string cannot name a stored document, so it maps to
    None instead of raising.

    Args:
        value: Identifier as string or ObjectId

    Returns:
        ObjectId, or None when the value is malformed

    Example:
        parse_object_id("65f1c2a9e4b0a1b2c3d4e5f6")  # ObjectId('65f1...')
        parse_object_id("not-an-id")                  # None
    """
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would generate a fresh id
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    """
    Current UTC time truncated to milliseconds.

    BSON dates carry millisecond precision, so truncating here keeps the
    value returned to the caller identical to the one read back later.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000, tzinfo=None)

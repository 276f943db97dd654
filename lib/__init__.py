# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: Owned MongoDB connection handle
# - utils.py: Shared utilities (ObjectId parsing, UTC timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongo_client import MongoConnection, MongoConnectionError
from lib.utils import parse_object_id, utc_now

__all__ = [
    # MongoDB
    "MongoConnection",
    "MongoConnectionError",
    # Utils
    "parse_object_id",
    "utc_now",
]

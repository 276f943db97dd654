# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Wraps an in-memory mongomock client in the async interface the
#   repository expects from motor
# - Builds the FastAPI app around that client
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB_NAME", "user_api_test")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.main import create_app
from lib.mongo_client import MongoConnection


# =============================================================================
# Async mongomock adapter
# =============================================================================

class AsyncCursor:
    """Async view over a mongomock cursor."""

    def __init__(self, cursor):
        self._cursor = cursor

    async def to_list(self, length=None):
        documents = list(self._cursor)
        return documents if length is None else documents[:length]


class AsyncCollection:
    """Async view over a mongomock collection."""

    def __init__(self, collection):
        self._collection = collection

    async def create_index(self, keys, **kwargs):
        return self._collection.create_index(keys, **kwargs)

    def find(self, *args, **kwargs):
        return AsyncCursor(self._collection.find(*args, **kwargs))

    async def find_one(self, *args, **kwargs):
        return self._collection.find_one(*args, **kwargs)

    async def insert_one(self, document):
        return self._collection.insert_one(document)

    async def replace_one(self, filter, replacement, **kwargs):
        return self._collection.replace_one(filter, replacement, **kwargs)

    async def delete_one(self, filter):
        return self._collection.delete_one(filter)

    def index_information(self):
        return self._collection.index_information()


class AsyncDatabase:
    """Async view over a mongomock database."""

    def __init__(self, database, reachable=True):
        self._database = database
        self._reachable = reachable

    def __getitem__(self, name):
        return AsyncCollection(self._database[name])

    async def command(self, name):
        if not self._reachable:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        return {"ok": 1.0}


class AsyncMongoMockClient:
    """Stand-in for AsyncIOMotorClient backed by mongomock."""

    def __init__(self, reachable=True):
        self._client = mongomock.MongoClient()
        self.reachable = reachable
        self.closed = False

    def __getitem__(self, name):
        return AsyncDatabase(self._client[name], self.reachable)

    @property
    def admin(self):
        return AsyncDatabase(self._client["admin"], self.reachable)

    def close(self):
        self.closed = True


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def mongo_client():
    """In-memory Mongo client with the motor call shape."""
    return AsyncMongoMockClient()


@pytest.fixture
def mongo_connection(mongo_client):
    """MongoConnection over the in-memory client."""
    return MongoConnection(client=mongo_client, database_name="user_api_test")


@pytest.fixture
def users_collection(mongo_connection):
    """The users collection used by the repository."""
    return mongo_connection.collection("users")


@pytest.fixture
def test_app(mongo_connection):
    """FastAPI app wired to the in-memory database."""
    return create_app(connection=mongo_connection)


@pytest.fixture
def client(test_app):
    """TestClient with the lifespan (connect, indexes) already run."""
    with TestClient(test_app) as test_client:
        yield test_client


@pytest.fixture
def sample_user_payload():
    """Valid create payload."""
    return {
        "name": "John Doe",
        "email": "JOHN@X.com",
        "password": "secret1",
    }


@pytest.fixture
def sample_user_document():
    """Stored user document as the repository returns it."""
    created = datetime(2024, 1, 15, 10, 30, 0)
    return {
        "_id": ObjectId("65f1c2a9e4b0a1b2c3d4e5f6"),
        "name": "Ann Smith",
        "email": "a@b.com",
        "password": "secret1",
        "createdAt": created,
        "updatedAt": created,
    }

"""
Pytest Configuration File

This module provides fixtures and configuration for all tests.
"""

import pytest
import os
import sys
from types import SimpleNamespace
from typing import Any, Dict, List

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from careadmin.app import app
from careadmin.features.uploads import LocalDiskStorage, UploadAcceptor, get_upload_acceptor
from careadmin.shared.auth import hash_password
from careadmin.shared.database import USERS, get_database

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = doc.get(key)
        if isinstance(condition, dict) and "$in" in condition:
            if value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    """Mimics the motor cursor methods used by the routers"""

    def __init__(self, docs: List[Dict[str, Any]]):
        self.docs = docs

    def sort(self, key, direction=1):
        self.docs = sorted(
            self.docs,
            key=lambda d: (d.get(key) is None, d.get(key)),
            reverse=direction < 0,
        )
        return self

    def limit(self, count):
        if count:
            self.docs = self.docs[:count]
        return self

    async def to_list(self, length=None):
        return [dict(d) for d in self.docs[:length]]


class FakeCollection:
    """In-memory stand-in for an AsyncIOMotorCollection"""

    def __init__(self):
        self.docs: List[Dict[str, Any]] = []

    def seed(self, document):
        document.setdefault("_id", ObjectId())
        self.docs.append(dict(document))
        return document["_id"]

    def find(self, query=None):
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    async def find_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    async def insert_one(self, document):
        inserted_id = self.seed(document)
        return SimpleNamespace(inserted_id=inserted_id)

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        for doc in self.docs:
            if _matches(doc, query):
                before = dict(doc)
                doc.update(update["$set"])
                return dict(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def update_many(self, query, update):
        matched = [d for d in self.docs if _matches(d, query)]
        for doc in matched:
            doc.update(update["$set"])
        return SimpleNamespace(matched_count=len(matched), modified_count=len(matched))

    async def delete_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                self.docs.remove(doc)
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, query):
        kept = [d for d in self.docs if not _matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted)

    async def count_documents(self, query):
        return len([d for d in self.docs if _matches(d, query)])


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def fake_db():
    """Fixture for the in-memory database"""
    return FakeDatabase()


@pytest.fixture
def upload_root(tmp_path):
    """Uploads directory isolated per test"""
    return tmp_path / "public" / "uploads"


@pytest.fixture
def acceptor(upload_root):
    return UploadAcceptor(LocalDiskStorage(upload_root))


@pytest.fixture
def test_client(fake_db, acceptor):
    """Fixture for FastAPI test client wired to the fakes"""
    app.dependency_overrides[get_database] = lambda: fake_db
    app.dependency_overrides[get_upload_acceptor] = lambda: acceptor
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(fake_db):
    """Seed an admin account"""
    user_id = fake_db[USERS].seed({
        "username": ADMIN_USERNAME,
        "password": hash_password(ADMIN_PASSWORD),
        "name": "Admin User",
    })
    return {"id": str(user_id), "username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}


@pytest.fixture
def auth_client(test_client, admin_user):
    """Test client holding an authenticated session"""
    response = test_client.post(
        "/api/login",
        json={"username": admin_user["username"], "password": admin_user["password"]},
    )
    assert response.status_code == 200
    return test_client

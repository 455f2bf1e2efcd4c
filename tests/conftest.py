from __future__ import annotations

import copy
import re
from typing import Any, Iterable, Optional

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from construction_portal.container import Container
from construction_portal.core.constants import CREDENTIALS_COLLECTION
from construction_portal.credentials.mongo_credential_repository import MongoCredentialRepository
from construction_portal.credentials.passwords import PasswordHasher
from construction_portal.credentials.service import CredentialResolver
from construction_portal.credentials.sources.factory import default_legacy_sources
from construction_portal.main import create_app
from construction_portal.profiles.mongo_profile_repository import MongoProfileRepository
from construction_portal.profiles.service import SignupService


def _matches(value: Any, cond: Any) -> bool:
    if isinstance(cond, re.Pattern):
        return isinstance(value, str) and cond.search(value) is not None
    return value == cond


def _doc_matches(doc: dict, query: dict) -> bool:
    for key, cond in query.items():
        if key == "$or":
            if not any(_doc_matches(doc, sub) for sub in cond):
                return False
        elif key not in doc:
            return False
        elif not _matches(doc[key], cond):
            return False
    return True


class FakeCollection:
    """The slice of pymongo's Collection API the repositories use."""

    def __init__(self, unique: Iterable[str] = ()):
        self.docs: list[dict] = []
        self.unique = tuple(unique)
        self.calls = 0

    def _check_unique(self, doc: dict, skip: Optional[dict] = None) -> None:
        for field in self.unique:
            if doc.get(field) is None:
                continue
            for other in self.docs:
                if other is not skip and other.get(field) == doc[field]:
                    raise DuplicateKeyError(f"E11000 duplicate key error {field}: {doc[field]!r}")

    def find(self, query: dict):
        self.calls += 1
        return [copy.deepcopy(d) for d in self.docs if _doc_matches(d, query)]

    def find_one(self, query: dict):
        self.calls += 1
        for d in self.docs:
            if _doc_matches(d, query):
                return copy.deepcopy(d)
        return None

    def count_documents(self, query: dict, limit: int = 0) -> int:
        self.calls += 1
        return len([d for d in self.docs if _doc_matches(d, query)])

    def insert_one(self, doc: dict):
        self.calls += 1
        stored = copy.deepcopy(doc)
        stored.setdefault("_id", ObjectId())
        self._check_unique(stored)
        self.docs.append(stored)

        class _Result:
            inserted_id = stored["_id"]

        return _Result()

    def delete_one(self, query: dict):
        self.calls += 1
        before = len(self.docs)
        for i, d in enumerate(self.docs):
            if _doc_matches(d, query):
                del self.docs[i]
                break

        class _Result:
            deleted_count = before - len(self.docs)

        return _Result()

    def update_one(self, query: dict, update: dict):
        self.calls += 1
        matched = 0
        for d in self.docs:
            if _doc_matches(d, query):
                d.update(copy.deepcopy(update.get("$set", {})))
                matched = 1
                break

        class _Result:
            matched_count = matched

        return _Result()


class FakeDatabase(dict):
    def __missing__(self, name: str) -> FakeCollection:
        coll = FakeCollection(unique=("email", "username") if name == CREDENTIALS_COLLECTION else ())
        self[name] = coll
        return coll

    def total_calls(self) -> int:
        return sum(c.calls for c in self.values())


class FakeConnection:
    def __init__(self):
        self.db = FakeDatabase()


@pytest.fixture
def conn() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def db(conn) -> FakeDatabase:
    return conn.db


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def credentials_repo(conn) -> MongoCredentialRepository:
    return MongoCredentialRepository(conn)


@pytest.fixture
def resolver(conn, credentials_repo, hasher) -> CredentialResolver:
    return CredentialResolver(credentials_repo, default_legacy_sources(conn), hasher)


@pytest.fixture
def signup_service(conn, credentials_repo, hasher) -> SignupService:
    return SignupService(MongoProfileRepository(conn), credentials_repo, hasher)


@pytest.fixture
def make_container(conn, credentials_repo, signup_service):
    def _make(resolver: CredentialResolver) -> Container:
        return Container(
            conn=None,
            credentials_repo=credentials_repo,
            profiles_repo=MongoProfileRepository(conn),
            credential_resolver=resolver,
            signup_service=signup_service,
        )

    return _make


@pytest.fixture
def client(monkeypatch, make_container, resolver):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(make_container(resolver))
    return app.test_client()


@pytest.fixture
def hashed(hasher):
    def _hashed(secret: str) -> str:
        return hasher.hash(secret).value.decode("utf-8")

    return _hashed

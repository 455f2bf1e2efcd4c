from __future__ import annotations

import logging
from typing import Iterable

import bcrypt
from pymongo import ASCENDING
from pymongo.database import Database

from ..core.constants import (
    ADMIN_PROFILES_COLLECTION,
    CLIENTS_COLLECTION,
    CREDENTIALS_COLLECTION,
    SUPERVISORS_COLLECTION,
)

logger = logging.getLogger(__name__)


def ensure_indexes(db: Database) -> list[str]:
    """Create the indexes the login flow relies on. Idempotent.

    The unique sparse indexes on the credential store let concurrent logins
    for the same legacy profile collide on insert instead of producing two
    credentials.
    """

    creds = db[CREDENTIALS_COLLECTION]
    created = [
        creds.create_index([("email", ASCENDING)], name="uniq_email", unique=True, sparse=True),
        creds.create_index([("username", ASCENDING)], name="uniq_username", unique=True, sparse=True),
        creds.create_index([("profileId", ASCENDING)], name="profile_id"),
    ]
    for collection in (ADMIN_PROFILES_COLLECTION, SUPERVISORS_COLLECTION, CLIENTS_COLLECTION):
        created.append(db[collection].create_index([("email", ASCENDING)], name="email"))
    logger.info("Indexes ready: %s", ", ".join(created))
    return created


def list_collections(db: Database) -> list[str]:
    return sorted(db.list_collection_names())


def _upsert_by_email(db: Database, collection: str, docs: Iterable[dict]) -> int:
    count = 0
    for doc in docs:
        db[collection].update_one({"email": doc["email"]}, {"$setOnInsert": doc}, upsert=True)
        count += 1
    return count


def ensure_demo_profiles(db: Database) -> int:
    """Seed legacy role profiles for local development.

    Mixes plaintext and bcrypt-hashed passwords on purpose so both login
    paths (hash verify and plaintext migration) can be tried by hand.
    """

    hashed = bcrypt.hashpw(b"supervisor123", bcrypt.gensalt(rounds=10)).decode("utf-8")

    count = _upsert_by_email(
        db,
        ADMIN_PROFILES_COLLECTION,
        [{"companyName": "Acme Builders", "adminName": "Root Admin", "email": "root@acme.test", "password": "hunter2"}],
    )
    count += _upsert_by_email(
        db,
        SUPERVISORS_COLLECTION,
        [
            {
                "name": "Site Supervisor",
                "email": "supervisor@acme.test",
                "username": "site.sup",
                "phone": "555-0100",
                "salary": 0,
                "address": "",
                "status": "Active",
                "password": hashed,
            }
        ],
    )
    count += _upsert_by_email(
        db,
        CLIENTS_COLLECTION,
        [
            {
                "name": "Harbor Homes",
                "email": "client@harbor.test",
                "phone": "555-0199",
                "address": "1 Pier Rd",
                "city": "Portsmouth",
                "state": "NH",
                "postalCode": "03801",
                "status": "Active",
                "projectTotalAmount": 250000,
                "password": "client123",
            }
        ],
    )
    logger.info("Demo profiles ready (%d upserts)", count)
    return count

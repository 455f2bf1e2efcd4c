from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Pattern, Sequence

from pymongo.errors import DuplicateKeyError

from ..common.validators import exact_match_pattern
from ..core.constants import CREDENTIALS_COLLECTION
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from .model import HashedPassword, PasswordValue, PlaintextPassword, UnifiedCredential
from .passwords import parse_password, to_storage
from .repository import CredentialRepository, DuplicateCredentialError

logger = logging.getLogger(__name__)

_KNOWN_FIELDS = {"_id", "email", "username", "password", "role", "profileId", "name", "createdAt", "updatedAt", "__v"}


def _to_credential(doc: Mapping[str, Any]) -> UnifiedCredential:
    return UnifiedCredential(
        credential_id=doc["_id"],
        email=doc.get("email"),
        username=doc.get("username"),
        password=parse_password(doc.get("password")) or PlaintextPassword(""),
        role=Role(doc.get("role")),
        profile_id=doc.get("profileId"),
        name=doc.get("name"),
        created_at=doc.get("createdAt"),
        updated_at=doc.get("updatedAt"),
        extra={k: v for k, v in doc.items() if k not in _KNOWN_FIELDS},
    )


class MongoCredentialRepository(CredentialRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @property
    def _collection(self):
        return self._conn.db[CREDENTIALS_COLLECTION]

    def find_by_identifier(self, pattern: Pattern[str], *, role: Optional[Role] = None) -> Sequence[UnifiedCredential]:
        query: dict = {"$or": [{"email": pattern}, {"username": pattern}]}
        if role is not None:
            query["role"] = role.value
        out: list[UnifiedCredential] = []
        for doc in self._collection.find(query):
            try:
                out.append(_to_credential(doc))
            except ValueError:
                # Unknown role (e.g. supplier) or no email/username: not a login candidate.
                logger.warning("Skipping credential %s with role %r", doc.get("_id"), doc.get("role"))
        return out

    def create(
        self,
        *,
        email: Optional[str],
        username: Optional[str],
        password: HashedPassword,
        role: Role,
        profile_id: object,
        name: Optional[str],
    ) -> UnifiedCredential:
        now = datetime.now(timezone.utc)
        doc: dict = {
            "password": to_storage(password),
            "role": role.value,
            "profileId": profile_id,
            "name": name,
            "createdAt": now,
            "updatedAt": now,
        }
        # Absent rather than null so the sparse unique indexes ignore them.
        if email:
            doc["email"] = email
        if username:
            doc["username"] = username
        try:
            result = self._collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise DuplicateCredentialError(str(e)) from e
        doc["_id"] = result.inserted_id
        return _to_credential(doc)

    def update_password(self, credential_id: object, password: PasswordValue) -> bool:
        result = self._collection.update_one(
            {"_id": credential_id},
            {"$set": {"password": to_storage(password), "updatedAt": datetime.now(timezone.utc)}},
        )
        return result.matched_count > 0

    def exists_for_email(self, email: str) -> bool:
        return self._collection.count_documents({"email": exact_match_pattern(email)}, limit=1) > 0

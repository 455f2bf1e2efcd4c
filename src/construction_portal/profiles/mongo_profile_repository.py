from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from ..common.validators import exact_match_pattern
from ..core.constants import CLIENTS_COLLECTION, SUPERVISORS_COLLECTION
from ..core.enums import ProfileStatus, Role
from ..database.connection import DatabaseConnection
from .model import Profile
from .repository import ProfileRepository

_COLLECTIONS = {
    Role.SUPERVISOR: SUPERVISORS_COLLECTION,
    Role.CLIENT: CLIENTS_COLLECTION,
}


def _to_profile(role: Role, doc: Mapping[str, Any]) -> Profile:
    return Profile(
        profile_id=doc["_id"],
        role=role,
        name=doc.get("name") or "",
        email=doc.get("email") or "",
        username=doc.get("username"),
    )


class MongoProfileRepository(ProfileRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def _collection(self, role: Role):
        try:
            return self._conn.db[_COLLECTIONS[role]]
        except KeyError:
            raise ValueError(f"No profile collection for role {role.value!r}")

    def find_by_email(self, role: Role, email: str) -> Optional[Profile]:
        doc = self._collection(role).find_one({"email": exact_match_pattern(email)})
        return _to_profile(role, doc) if doc else None

    def create(self, *, role: Role, name: str, email: str, password_hash: str) -> Profile:
        now = datetime.now(timezone.utc)
        doc = {
            "name": name,
            "email": email,
            "password": password_hash,
            "status": ProfileStatus.ACTIVE.value,
            "createdAt": now,
            "updatedAt": now,
        }
        result = self._collection(role).insert_one(doc)
        doc["_id"] = result.inserted_id
        return _to_profile(role, doc)

    def delete(self, role: Role, profile_id: Any) -> bool:
        result = self._collection(role).delete_one({"_id": profile_id})
        return result.deleted_count > 0

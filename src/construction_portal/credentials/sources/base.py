from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Pattern

from ...core.enums import Role
from ...database.connection import DatabaseConnection
from ..model import LegacyMatch
from ..passwords import parse_password


def _lower(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip().lower()
    return None


class LegacyProfileSource(ABC):
    """Strategy Pattern: one legacy role collection probed at login.

    Each source knows its collection, the role it grants and how its schema
    names the display name; `find` returns the first profile whose email or
    username matches, normalized to a `LegacyMatch`.
    """

    role: Role
    collection_name: str

    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    @abstractmethod
    def display_name(self, doc: Mapping[str, Any]) -> Optional[str]:
        raise NotImplementedError

    def find(self, pattern: Pattern[str]) -> Optional[LegacyMatch]:
        doc = self._conn.db[self.collection_name].find_one({"$or": [{"email": pattern}, {"username": pattern}]})
        if not doc:
            return None
        return self.to_match(doc)

    def to_match(self, doc: Mapping[str, Any]) -> LegacyMatch:
        return LegacyMatch(
            email=_lower(doc.get("email")),
            username=_lower(doc.get("username")),
            password=parse_password(doc.get("password")),
            role=self.role,
            profile_id=doc.get("_id"),
            name=self.display_name(doc),
        )

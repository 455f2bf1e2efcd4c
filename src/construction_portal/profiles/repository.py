from __future__ import annotations

from typing import Any, Optional, Protocol

from ..core.enums import Role
from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for the supervisor/client profile collections."""

    def find_by_email(self, role: Role, email: str) -> Optional[Profile]:
        raise NotImplementedError

    def create(self, *, role: Role, name: str, email: str, password_hash: str) -> Profile:
        raise NotImplementedError

    def delete(self, role: Role, profile_id: Any) -> bool:
        raise NotImplementedError

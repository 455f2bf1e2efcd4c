from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class HashedPassword:
    """A password stored in a recognized hash format (bcrypt)."""

    value: bytes


@dataclass(frozen=True)
class PlaintextPassword:
    """A legacy password stored as-is, awaiting migration to a hash."""

    value: str


PasswordValue = Union[HashedPassword, PlaintextPassword]


@dataclass(frozen=True)
class LegacyMatch:
    """A legacy role profile normalized to the shape of a unified credential."""

    email: Optional[str]
    username: Optional[str]
    password: Optional[PasswordValue]
    role: Role
    profile_id: Any
    name: Optional[str]


@dataclass(frozen=True)
class UnifiedCredential:
    """Domain entity: the canonical login record (collection `logincredentials`).

    Note: Pure data object, no DB access. The password stays on the entity but
    never leaves the service boundary; use `to_public_dict` for responses.
    """

    credential_id: Any
    email: Optional[str]
    username: Optional[str]
    password: PasswordValue
    role: Role
    profile_id: Any
    name: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.email and not self.username:
            raise ValueError("A credential needs an email or a username")

    def with_password(self, password: PasswordValue) -> "UnifiedCredential":
        return replace(self, password=password)

    def to_public_dict(self) -> dict:
        out: dict = {k: _jsonable(v) for k, v in self.extra.items()}
        out.update(
            {
                "_id": _jsonable(self.credential_id),
                "email": self.email,
                "username": self.username,
                "role": self.role.value,
                "profileId": _jsonable(self.profile_id),
                "name": self.name,
            }
        )
        if self.created_at:
            out["createdAt"] = self.created_at.isoformat()
        if self.updated_at:
            out["updatedAt"] = self.updated_at.isoformat()
        return {k: v for k, v in out.items() if v is not None}


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    # ObjectId, Decimal128 and other BSON scalars
    return str(value)

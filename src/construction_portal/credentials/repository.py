from __future__ import annotations

from typing import Optional, Pattern, Protocol, Sequence

from ..core.enums import Role
from .model import HashedPassword, LegacyMatch, PasswordValue, UnifiedCredential


class DuplicateCredentialError(Exception):
    """Raised by `create` when the email or username is already taken."""


class CredentialRepository(Protocol):
    """Repository interface for unified credentials.

    Note (DIP): the resolver depends on this interface, not on MongoDB.
    """

    def find_by_identifier(self, pattern: Pattern[str], *, role: Optional[Role] = None) -> Sequence[UnifiedCredential]:
        """All credentials whose email or username matches, in store order."""
        raise NotImplementedError

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
        raise NotImplementedError

    def update_password(self, credential_id: object, password: PasswordValue) -> bool:
        raise NotImplementedError

    def exists_for_email(self, email: str) -> bool:
        raise NotImplementedError


class LegacySource(Protocol):
    """One legacy role collection probed when no unified credential matches."""

    role: Role

    def find(self, pattern: Pattern[str]) -> Optional[LegacyMatch]:
        raise NotImplementedError

"""Password representation and the hashing primitive.

Stored passwords are parsed once into `HashedPassword` or `PlaintextPassword`
when a record is read; nothing downstream looks at raw prefixes again.
"""

from __future__ import annotations

import hmac
from typing import Optional

import bcrypt

from ..core.constants import DEFAULT_BCRYPT_ROUNDS
from .model import HashedPassword, PasswordValue, PlaintextPassword

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def parse_password(raw: object) -> Optional[PasswordValue]:
    if raw is None:
        return None
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    raw = str(raw)
    if raw.startswith(BCRYPT_PREFIXES):
        return HashedPassword(raw.encode("utf-8"))
    return PlaintextPassword(raw)


def to_storage(value: PasswordValue) -> str:
    if isinstance(value, HashedPassword):
        return value.value.decode("utf-8")
    return value.value


class PasswordHasher:
    """bcrypt hashing with a configurable cost (10 matches existing hashes)."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._rounds = int(rounds)

    def hash(self, secret: str) -> HashedPassword:
        return HashedPassword(bcrypt.hashpw(secret.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)))

    def ensure_hashed(self, value: Optional[PasswordValue]) -> HashedPassword:
        if isinstance(value, HashedPassword):
            return value
        return self.hash(value.value if value else "")

    def verify(self, secret: str, value: PasswordValue) -> bool:
        if isinstance(value, HashedPassword):
            try:
                return bcrypt.checkpw(secret.encode("utf-8"), value.value)
            except ValueError:
                # Corrupted hash with a valid prefix.
                return False
        return hmac.compare_digest(secret.encode("utf-8"), value.value.encode("utf-8"))

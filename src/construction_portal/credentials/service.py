from __future__ import annotations

import logging
from typing import List, Optional, Pattern, Sequence

from ..common.validators import exact_match_pattern
from ..core.constants import MSG_INVALID_CREDENTIALS, MSG_MISSING_CREDENTIALS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError, InternalError, ValidationError
from .model import HashedPassword, UnifiedCredential
from .passwords import PasswordHasher
from .repository import CredentialRepository, DuplicateCredentialError, LegacySource

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Use case: unified login across the credential store and legacy profiles.

    Lookup order is the credential store first, then the legacy sources in the
    order given (admin, supervisor, client). The first legacy profile that
    matches is copied into the credential store, so later logins never touch
    the legacy collections again. Plaintext passwords are replaced by a hash
    as soon as they verify.

    "Unknown identifier" and "wrong password" raise the same
    `AuthenticationError`. Store or hashing faults raise `InternalError`.
    """

    def __init__(
        self,
        credentials: CredentialRepository,
        legacy_sources: Sequence[LegacySource],
        hasher: Optional[PasswordHasher] = None,
    ):
        self._credentials = credentials
        self._legacy_sources = tuple(legacy_sources)
        self._hasher = hasher or PasswordHasher()

    def authenticate(self, identifier: Optional[str], password: Optional[str], *, role: Optional[Role] = None) -> UnifiedCredential:
        identifier = identifier.strip() if isinstance(identifier, str) else ""
        if not identifier or not isinstance(password, str) or not password:
            raise ValidationError(MSG_MISSING_CREDENTIALS)

        logger.info("Login attempt for identifier %r (role=%s)", identifier, role.value if role else "any")
        try:
            return self._authenticate(exact_match_pattern(identifier), password, role)
        except DomainError:
            raise
        except Exception as e:
            logger.exception("Unified login failed for identifier %r", identifier)
            raise InternalError(str(e)) from e

    def _authenticate(self, pattern: Pattern[str], password: str, role: Optional[Role]) -> UnifiedCredential:
        candidates: List[UnifiedCredential] = list(self._credentials.find_by_identifier(pattern, role=role))
        logger.debug("Credential candidates found: %d", len(candidates))

        if not candidates:
            candidates = self._unify_from_legacy(pattern, role)

        if not candidates:
            logger.info("No account matches the identifier")
            raise AuthenticationError(MSG_INVALID_CREDENTIALS)

        for candidate in candidates:
            verified = self._verify(candidate, password)
            if verified is not None:
                logger.info("Login succeeded for credential %s (%s)", verified.credential_id, verified.role.value)
                return verified

        logger.info("Password mismatch for all %d candidate(s)", len(candidates))
        raise AuthenticationError(MSG_INVALID_CREDENTIALS)

    def _unify_from_legacy(self, pattern: Pattern[str], role: Optional[Role]) -> List[UnifiedCredential]:
        for source in self._legacy_sources:
            if role is not None and source.role != role:
                continue
            match = source.find(pattern)
            logger.debug("Legacy %s source matched: %s", source.role.value, match is not None)
            if match is None:
                continue

            try:
                created = self._credentials.create(
                    email=match.email,
                    username=match.username,
                    password=self._hasher.ensure_hashed(match.password),
                    role=match.role,
                    profile_id=match.profile_id,
                    name=match.name,
                )
            except DuplicateCredentialError:
                # Another request unified the same profile first.
                logger.info("Credential for legacy %s profile %s already exists, re-fetching", match.role.value, match.profile_id)
                return list(self._credentials.find_by_identifier(pattern, role=role))

            logger.info("Created credential %s from legacy %s profile %s", created.credential_id, match.role.value, match.profile_id)
            return [created]

        return []

    def _verify(self, candidate: UnifiedCredential, password: str) -> Optional[UnifiedCredential]:
        if not self._hasher.verify(password, candidate.password):
            return None
        if isinstance(candidate.password, HashedPassword):
            return candidate

        hashed = self._hasher.hash(password)
        self._credentials.update_password(candidate.credential_id, hashed)
        logger.info("Migrated plaintext password to bcrypt for credential %s", candidate.credential_id)
        return candidate.with_password(hashed)

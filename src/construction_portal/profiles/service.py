from __future__ import annotations

import logging

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, ValidationError
from ..credentials.model import UnifiedCredential
from ..credentials.passwords import PasswordHasher, to_storage
from ..credentials.repository import CredentialRepository, DuplicateCredentialError
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

SIGNUP_ROLES = (Role.SUPERVISOR, Role.CLIENT)


class SignupService:
    """Use case: self-registration of a supervisor or client.

    Writes the role profile and its unified credential together, so the new
    account never goes through the legacy fallback and never stores plaintext.
    """

    def __init__(self, profiles: ProfileRepository, credentials: CredentialRepository, hasher: PasswordHasher):
        self._profiles = profiles
        self._credentials = credentials
        self._hasher = hasher

    def signup(self, *, name: str, email: str, password: str, role: str) -> UnifiedCredential:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        require_non_empty(password, "Password")
        require_min_length(password, "Password", 6)
        role_s = require_non_empty(role, "Role")

        try:
            role_enum = Role(role_s.lower())
        except ValueError:
            raise ValidationError("Unsupported role")
        if role_enum not in SIGNUP_ROLES:
            raise ValidationError("Unsupported role")

        if self._profiles.find_by_email(role_enum, email) or self._credentials.exists_for_email(email):
            raise ConflictError("User already exists")

        hashed = self._hasher.hash(password)
        profile = self._profiles.create(role=role_enum, name=name, email=email, password_hash=to_storage(hashed))
        try:
            credential = self._credentials.create(
                email=email,
                username=None,
                password=hashed,
                role=role_enum,
                profile_id=profile.profile_id,
                name=name,
            )
        except DuplicateCredentialError:
            self._profiles.delete(role_enum, profile.profile_id)
            raise ConflictError("User already exists")
        except Exception:
            # No credential was written, so the profile must not stay behind either.
            logger.exception("Credential insert failed, removing %s profile %s", role_enum.value, profile.profile_id)
            self._profiles.delete(role_enum, profile.profile_id)
            raise

        logger.info("Signed up %s profile %s", role_enum.value, profile.profile_id)
        return credential

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_BCRYPT_ROUNDS, DEFAULT_DB_NAME, DEFAULT_TIMEOUT_MS
from .credentials.mongo_credential_repository import MongoCredentialRepository
from .credentials.passwords import PasswordHasher
from .credentials.service import CredentialResolver
from .credentials.sources.factory import default_legacy_sources
from .database.connection import DBConfig, DatabaseConnection
from .profiles.mongo_profile_repository import MongoProfileRepository
from .profiles.service import SignupService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    credentials_repo: MongoCredentialRepository
    profiles_repo: MongoProfileRepository

    credential_resolver: CredentialResolver
    signup_service: SignupService


def build_container(*, db_config: dict, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> Container:
    config = DBConfig(
        uri=str(db_config["uri"]),
        database=str(db_config.get("database", DEFAULT_DB_NAME)),
        timeout_ms=int(db_config.get("timeout_ms", DEFAULT_TIMEOUT_MS)),
    )
    conn = DatabaseConnection.get_instance(config)

    credentials_repo = MongoCredentialRepository(conn)
    profiles_repo = MongoProfileRepository(conn)
    hasher = PasswordHasher(rounds=bcrypt_rounds)

    credential_resolver = CredentialResolver(credentials_repo, default_legacy_sources(conn), hasher)
    signup_service = SignupService(profiles_repo, credentials_repo, hasher)

    return Container(
        conn=conn,
        credentials_repo=credentials_repo,
        profiles_repo=profiles_repo,
        credential_resolver=credential_resolver,
        signup_service=signup_service,
    )

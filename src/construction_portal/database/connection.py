from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from ..core.constants import DEFAULT_DB_NAME, DEFAULT_TIMEOUT_MS

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    uri: str
    database: str = DEFAULT_DB_NAME
    timeout_ms: int = DEFAULT_TIMEOUT_MS


class DatabaseConnection:
    """Singleton-like MongoDB handle.

    Note: MongoClient is thread-safe and pools connections itself, so one
    client is shared by every request of the process. The timeouts bound each
    call; a slow or unreachable server surfaces as a PyMongoError.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig, client: Optional[MongoClient] = None):
        self._config = config
        self._client = client
        self._client_lock = threading.Lock()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def client(self) -> MongoClient:
        with self._client_lock:
            if self._client is None:
                timeout = int(self._config.timeout_ms)
                self._client = MongoClient(
                    self._config.uri,
                    serverSelectionTimeoutMS=timeout,
                    connectTimeoutMS=timeout,
                    socketTimeoutMS=timeout,
                )
                logger.info("MongoDB client created for database %s", self._config.database)
            return self._client

    @property
    def db(self) -> Database:
        return self.client[self._config.database]

    def close(self) -> None:
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None

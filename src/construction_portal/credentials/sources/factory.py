from __future__ import annotations

from typing import Sequence

from ...database.connection import DatabaseConnection
from .admin_source import AdminProfileSource
from .base import LegacyProfileSource
from .client_source import ClientSource
from .supervisor_source import SupervisorSource


def default_legacy_sources(conn: DatabaseConnection) -> Sequence[LegacyProfileSource]:
    """Legacy collections in the order they are probed: admin, supervisor, client."""

    return (
        AdminProfileSource(conn),
        SupervisorSource(conn),
        ClientSource(conn),
    )

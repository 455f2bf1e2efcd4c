from __future__ import annotations

from typing import Any, Mapping, Optional

from ...core.constants import ADMIN_PROFILES_COLLECTION
from ...core.enums import Role
from .base import LegacyProfileSource


class AdminProfileSource(LegacyProfileSource):
    """Admin profiles; they grant the super-administrator role."""

    role = Role.SUPERADMIN
    collection_name = ADMIN_PROFILES_COLLECTION

    def display_name(self, doc: Mapping[str, Any]) -> Optional[str]:
        return doc.get("adminName")

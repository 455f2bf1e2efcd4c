from __future__ import annotations

from typing import Any, Mapping, Optional

from ...core.constants import SUPERVISORS_COLLECTION
from ...core.enums import Role
from .base import LegacyProfileSource


class SupervisorSource(LegacyProfileSource):
    role = Role.SUPERVISOR
    collection_name = SUPERVISORS_COLLECTION

    def display_name(self, doc: Mapping[str, Any]) -> Optional[str]:
        return doc.get("name")

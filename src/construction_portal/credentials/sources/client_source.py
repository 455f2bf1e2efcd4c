from __future__ import annotations

from typing import Any, Mapping, Optional

from ...core.constants import CLIENTS_COLLECTION
from ...core.enums import Role
from .base import LegacyProfileSource


class ClientSource(LegacyProfileSource):
    role = Role.CLIENT
    collection_name = CLIENTS_COLLECTION

    def display_name(self, doc: Mapping[str, Any]) -> Optional[str]:
        # Some client records only carry a company name.
        return doc.get("name") or doc.get("company")

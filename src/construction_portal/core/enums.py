from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried by a unified credential."""

    SUPERADMIN = "superadmin"
    SUPERVISOR = "supervisor"
    CLIENT = "client"


class ProfileStatus(str, Enum):
    """Status values stored on supervisor/client profiles."""

    ACTIVE = "Active"

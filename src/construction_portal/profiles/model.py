from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """A role profile record (supervisor or client) created by signup."""

    profile_id: Any
    role: Role
    name: str
    email: str
    username: Optional[str] = None

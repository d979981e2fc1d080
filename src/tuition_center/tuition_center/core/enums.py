from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session roles used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Staff:
    """Domain entity: a tutor on the center's roster.

    Note: Plain data object (no DB access code).
    """

    staff_id: int
    name: str
    email: str
    is_active: bool = True

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class TeachingHoursEntry:
    """Domain entity: one logged unit of teaching time.

    Owned by the staff-facing logging screens; the reporting code only reads it.
    """

    entry_id: int
    staff_id: int
    date: datetime
    hours: float
    subject: str
    course: Optional[str] = None
    description: Optional[str] = None

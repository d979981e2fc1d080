from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import TeachingHoursEntry


class TeachingHoursRepository(Protocol):
    def find_for_staff(self, *, staff_id: int, start: datetime, end: datetime) -> Sequence[TeachingHoursEntry]:
        """Entries of one staff member with ``start <= date <= end``."""

        raise NotImplementedError

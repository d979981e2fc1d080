from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Staff


class StaffRepository(Protocol):
    """Repository interface for Staff.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Staff]:
        raise NotImplementedError

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import MonthlyReport, SubjectBreakdownEntry


class ReportRepository(Protocol):
    """Repository interface for MonthlyReport.

    Note: ``upsert`` is keyed by (staff_id, month, year) and must never create a
    second row for the same key; it leaves ``email_sent_at`` untouched.
    """

    def upsert(
        self,
        *,
        staff_id: int,
        month: int,
        year: int,
        staff_name: str,
        staff_email: str,
        total_hours: float,
        subject_breakdown: Sequence[SubjectBreakdownEntry],
        start_date: datetime,
        end_date: datetime,
        generated_at: datetime,
    ) -> MonthlyReport:
        raise NotImplementedError

    def mark_email_sent(self, *, report_ids: Sequence[int], sent_at: datetime) -> int:
        raise NotImplementedError

    def get_by_id(self, report_id: int) -> Optional[MonthlyReport]:
        raise NotImplementedError

    def delete_by_id(self, report_id: int) -> bool:
        raise NotImplementedError

    def list_reports(
        self,
        *,
        staff_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[MonthlyReport], int]:
        """Newest period first; returns (page of reports, total matching)."""

        raise NotImplementedError

    def list_for_staff(
        self,
        *,
        staff_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Sequence[MonthlyReport]:
        raise NotImplementedError

    def list_unsent(self, *, month: int, year: int) -> Sequence[MonthlyReport]:
        raise NotImplementedError

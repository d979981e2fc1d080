from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.exceptions import ValidationError
from ..staff.repository import StaffRepository
from .model import MonthlyReport, ReportPage
from .repository import ReportRepository


class ReportQueryService:
    """Read/delete access to stored reports for the admin and staff screens."""

    def __init__(self, reports: ReportRepository, staff: StaffRepository):
        self._reports = reports
        self._staff = staff

    def list_reports(
        self,
        *,
        staff_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ReportPage:
        page = page if page is not None else 1
        limit = limit if limit is not None else DEFAULT_PAGE_SIZE
        if page < 1:
            raise ValidationError("page must be >= 1")
        if limit < 1:
            raise ValidationError("limit must be >= 1")
        limit = min(limit, MAX_PAGE_SIZE)

        reports, total = self._reports.list_reports(
            staff_id=staff_id, year=year, month=month, page=page, limit=limit
        )
        return ReportPage(reports=list(reports), page=page, limit=limit, total=int(total))

    def get_report(self, report_id: int) -> Optional[MonthlyReport]:
        return self._reports.get_by_id(int(report_id))

    def delete_report(self, report_id: int) -> bool:
        return self._reports.delete_by_id(int(report_id))

    def list_for_staff(
        self,
        *,
        staff_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Optional[Sequence[MonthlyReport]]:
        """Own reports of an active staff member; None when missing or inactive."""
        member = self._staff.get_by_id(int(staff_id))
        if member is None or not member.is_active:
            return None
        return list(self._reports.list_for_staff(staff_id=member.staff_id, year=year, month=month))

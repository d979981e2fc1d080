from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import month_bounds, now_local, previous_month
from ..common.validators import require_month, require_year
from ..core.exceptions import ReportGenerationError
from ..staff.model import Staff
from ..staff.repository import StaffRepository
from ..teaching_hours.repository import TeachingHoursRepository
from .aggregation import summarize_hours
from .model import MonthlyReport
from .repository import ReportRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportPeriod:
    month: int
    year: int
    start: datetime
    end: datetime


def resolve_period(*, now: datetime, month: Optional[int] = None, year: Optional[int] = None) -> ReportPeriod:
    """Work out the target month.

    No month means the month before ``now`` (reports are written once a month has
    closed); in January that is December of the previous year. An explicit year
    always wins.
    """

    if month is None:
        target_month, default_year = previous_month(now.date())
    else:
        target_month, default_year = month, now.year

    target_month = require_month(target_month)
    target_year = require_year(year if year is not None else default_year)
    start, end = month_bounds(target_year, target_month)
    return ReportPeriod(month=target_month, year=target_year, start=start, end=end)


class ReportGenerationService:
    """Builds and stores MonthlyReport rows from logged teaching hours.

    Runs are fail-fast: the first staff member whose hours cannot be read or whose
    report cannot be written stops the run. Reports already written earlier in the
    same run stay in place; retrying is up to the caller (cron re-run, admin click).
    """

    def __init__(
        self,
        staff: StaffRepository,
        teaching_hours: TeachingHoursRepository,
        reports: ReportRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._staff = staff
        self._teaching_hours = teaching_hours
        self._reports = reports
        self._clock = clock

    def _select_staff(self, staff_id: Optional[int]) -> Sequence[Staff]:
        if staff_id is None:
            return list(self._staff.list_active())

        # An explicit id is honoured even for inactive staff.
        member = self._staff.get_by_id(int(staff_id))
        if member is None:
            logger.warning("No staff member with id=%s; nothing to generate", staff_id)
            return []
        return [member]

    def generate_reports(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        staff_id: Optional[int] = None,
    ) -> list[MonthlyReport]:
        period = resolve_period(now=self._clock(), month=month, year=year)
        members = self._select_staff(staff_id)

        logger.info(
            "Generating monthly reports for %02d/%s (%s staff)", period.month, period.year, len(members)
        )

        written: list[MonthlyReport] = []
        for member in members:
            written.append(self._generate_for_staff(member, period))

        logger.info("Generated %s monthly reports for %02d/%s", len(written), period.month, period.year)
        return written

    def _generate_for_staff(self, member: Staff, period: ReportPeriod) -> MonthlyReport:
        try:
            entries = self._teaching_hours.find_for_staff(
                staff_id=member.staff_id, start=period.start, end=period.end
            )
            summary = summarize_hours(entries)
            return self._reports.upsert(
                staff_id=member.staff_id,
                month=period.month,
                year=period.year,
                staff_name=member.name,
                staff_email=member.email,
                total_hours=summary.total_hours,
                subject_breakdown=summary.subject_breakdown,
                start_date=period.start,
                end_date=period.end,
                generated_at=self._clock(),
            )
        except Exception as exc:
            logger.exception("Report generation aborted at staff_id=%s", member.staff_id)
            raise ReportGenerationError(
                f"Failed to generate report for staff {member.staff_id}: {exc}",
                staff_id=member.staff_id,
            ) from exc

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .dispatch import DispatchResult, ReportDispatchService, StaffEmailResult
from .service import ReportGenerationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateAndSendResult:
    reports_generated: int
    email_results: DispatchResult = field(default_factory=lambda: DispatchResult(success=True, count=0))
    staff_email_results: Optional[tuple[StaffEmailResult, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        data = {"reportsGenerated": self.reports_generated, "emailResults": self.email_results.to_dict()}
        if self.staff_email_results is not None:
            data["staffEmailResults"] = [r.to_dict() for r in self.staff_email_results]
        return data


class MonthlyReportWorkflow:
    """Generation followed by the consolidated email; used by cron and admin triggers.

    With ``staff_emails=True`` every staff member also receives their own report.
    """

    def __init__(self, generator: ReportGenerationService, dispatcher: ReportDispatchService):
        self._generator = generator
        self._dispatcher = dispatcher

    def generate_and_send(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        staff_id: Optional[int] = None,
        staff_emails: bool = False,
    ) -> GenerateAndSendResult:
        reports = self._generator.generate_reports(month=month, year=year, staff_id=staff_id)
        email_results = self._dispatcher.send_consolidated_report(reports)
        if not email_results.success:
            logger.warning("Generated %s reports but the summary email failed: %s", len(reports), email_results.error)

        staff_results = None
        if staff_emails:
            staff_results = tuple(self._dispatcher.send_staff_reports(reports))
            failed = sum(1 for r in staff_results if not r.success)
            if failed:
                logger.warning("%s of %s staff report emails failed", failed, len(staff_results))

        return GenerateAndSendResult(
            reports_generated=len(reports),
            email_results=email_results,
            staff_email_results=staff_results,
        )

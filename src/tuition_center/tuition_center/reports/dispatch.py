from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_FROM_EMAIL, DEFAULT_ORGANIZATION_NAME
from ..notifications.model import EmailMessage
from ..notifications.transport import EmailTransport
from ..settings.repository import SettingsRepository
from .composer import compose_consolidated_summary, compose_staff_report
from .model import MonthlyReport
from .repository import ReportRepository
from .service import resolve_period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    success: bool
    recipient: Optional[str] = None
    error: Optional[str] = None
    count: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success}
        if self.recipient is not None:
            data["recipient"] = self.recipient
        if self.error is not None:
            data["error"] = self.error
        if self.count is not None:
            data["count"] = self.count
        return data


@dataclass(frozen=True)
class StaffEmailResult:
    success: bool
    staff_email: str
    report_id: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success, "staffEmail": self.staff_email}
        if self.report_id is not None:
            data["reportId"] = self.report_id
        if self.error is not None:
            data["error"] = self.error
        return data


def _format_sender(address: str, organization_name: str) -> str:
    if "<" in address:
        return address
    return f"{organization_name} <{address}>"


class ReportDispatchService:
    """Emails generated reports.

    The consolidated summary is all-or-nothing: one transport call for the whole
    batch, and ``email_sent_at`` is written for every report only when it succeeds.
    """

    def __init__(
        self,
        reports: ReportRepository,
        settings: SettingsRepository,
        transport: EmailTransport,
        *,
        default_from_email: Optional[str] = None,
        default_admin_email: Optional[str] = None,
        organization_name: str = DEFAULT_ORGANIZATION_NAME,
        clock: Callable[[], datetime] = now_local,
    ):
        self._reports = reports
        self._settings = settings
        self._transport = transport
        self._default_from_email = default_from_email
        self._default_admin_email = default_admin_email
        self._organization_name = organization_name
        self._clock = clock

    def _addresses(self) -> tuple[str, Optional[str]]:
        settings = self._settings.get_email_settings()
        from_email = settings.from_email or self._default_from_email
        sender = _format_sender(from_email, self._organization_name) if from_email else DEFAULT_FROM_EMAIL
        recipient = settings.admin_email or self._default_admin_email
        return sender, recipient

    def send_consolidated_report(self, reports: Sequence[MonthlyReport]) -> DispatchResult:
        try:
            sender, recipient = self._addresses()
        except Exception as exc:
            logger.exception("Could not load email settings; consolidated report not sent")
            return DispatchResult(success=False, error=f"Email settings unavailable: {exc}")

        if not recipient:
            logger.error("Admin email not configured; consolidated report not sent")
            return DispatchResult(success=False, error="Admin email not configured")

        if not reports:
            logger.info("No reports to send")
            return DispatchResult(success=True, recipient=recipient, count=0)

        email = compose_consolidated_summary(reports, organization_name=self._organization_name)
        message = EmailMessage(from_email=sender, to=recipient, subject=email.subject, html=email.html)

        try:
            result = self._transport.send(message)
        except Exception as exc:
            logger.exception("Sending consolidated report to %s failed", recipient)
            return DispatchResult(success=False, recipient=recipient, error=str(exc) or exc.__class__.__name__)

        if not result.ok:
            logger.error("Sending consolidated report to %s failed: %s", recipient, result.error)
            return DispatchResult(success=False, recipient=recipient, error=str(result.error))

        report_ids = [r.report_id for r in reports]
        try:
            self._reports.mark_email_sent(report_ids=report_ids, sent_at=self._clock())
        except Exception as exc:
            logger.exception("Consolidated report sent to %s but reports %s were not marked sent", recipient, report_ids)
            return DispatchResult(
                success=False,
                recipient=recipient,
                error=f"Summary delivered but reports were not marked as sent: {exc}",
                count=len(reports),
            )

        logger.info("Consolidated report for %s staff sent to %s", len(reports), recipient)
        return DispatchResult(success=True, recipient=recipient, count=len(reports))

    def send_pending_reports(self, *, month: Optional[int] = None, year: Optional[int] = None) -> DispatchResult:
        """Send the summary for a period's reports that were never emailed."""
        period = resolve_period(now=self._clock(), month=month, year=year)
        pending = list(self._reports.list_unsent(month=period.month, year=period.year))
        logger.info("%s unsent reports for %02d/%s", len(pending), period.month, period.year)
        return self.send_consolidated_report(pending)

    def send_staff_reports(self, reports: Sequence[MonthlyReport]) -> list[StaffEmailResult]:
        """Email each staff member their own report.

        Failures are reported per staff member and do not stop the batch. These
        emails leave ``email_sent_at`` alone; it tracks the consolidated summary.
        """

        try:
            sender, _ = self._addresses()
        except Exception as exc:
            logger.exception("Could not load email settings; staff report emails not sent")
            error = f"Email settings unavailable: {exc}"
            return [StaffEmailResult(success=False, staff_email=r.staff_email, error=error) for r in reports]

        today = self._clock().date()
        results: list[StaffEmailResult] = []

        for report in reports:
            email = compose_staff_report(report, organization_name=self._organization_name, today=today)
            message = EmailMessage(from_email=sender, to=report.staff_email, subject=email.subject, html=email.html)
            try:
                sent = self._transport.send(message)
            except Exception as exc:
                logger.exception("Error sending report email to %s", report.staff_email)
                results.append(StaffEmailResult(success=False, staff_email=report.staff_email, error=str(exc)))
                continue

            if sent.ok:
                results.append(
                    StaffEmailResult(success=True, staff_email=report.staff_email, report_id=report.report_id)
                )
            else:
                logger.warning("Report email to %s failed: %s", report.staff_email, sent.error)
                results.append(StaffEmailResult(success=False, staff_email=report.staff_email, error=sent.error))

        return results

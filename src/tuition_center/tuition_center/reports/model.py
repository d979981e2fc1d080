from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class SubjectBreakdownEntry:
    """Hours summed for one (subject, course) pair inside a report.

    ``course=None`` is its own group, distinct from ``course=""``.
    """

    subject: str
    course: Optional[str]
    hours: float

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"subject": self.subject, "hours": self.hours}
        if self.course is not None:
            data["course"] = self.course
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubjectBreakdownEntry":
        return cls(subject=data["subject"], course=data.get("course"), hours=float(data["hours"]))


@dataclass(frozen=True)
class MonthlyReport:
    """Domain entity: one staff member's teaching hours for one calendar month.

    ``staff_name``/``staff_email`` are a snapshot taken at generation time; they are
    never re-read from the staff record.
    """

    report_id: int
    staff_id: int
    staff_name: str
    staff_email: str
    month: int
    year: int
    total_hours: float
    start_date: datetime
    end_date: datetime
    generated_at: datetime
    subject_breakdown: tuple[SubjectBreakdownEntry, ...] = field(default_factory=tuple)
    email_sent_at: Optional[datetime] = None

    @property
    def key(self) -> tuple[int, int, int]:
        return self.staff_id, self.month, self.year

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.report_id,
            "staffId": self.staff_id,
            "staffName": self.staff_name,
            "staffEmail": self.staff_email,
            "month": self.month,
            "year": self.year,
            "totalHours": self.total_hours,
            "subjectBreakdown": [e.to_dict() for e in self.subject_breakdown],
            "startDate": _iso(self.start_date),
            "endDate": _iso(self.end_date),
            "generatedAt": _iso(self.generated_at),
            "emailSentAt": _iso(self.email_sent_at),
        }


@dataclass(frozen=True)
class ReportPage:
    reports: list[MonthlyReport]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "reports": [r.to_dict() for r in self.reports],
            "pagination": {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages},
        }

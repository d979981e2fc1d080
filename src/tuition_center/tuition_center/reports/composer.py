"""HTML email bodies for monthly reports.

Two documents are rendered from the Jinja templates next to this module:

- the consolidated summary sent to the administrator (one row per staff member)
- the individual report a staff member receives about their own month
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..common.datetime_utils import format_long_date
from ..core.constants import DEFAULT_ORGANIZATION_NAME
from ..core.exceptions import ValidationError
from .model import MonthlyReport

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_env = Environment(
    loader=FileSystemLoader(str(Path(__file__).resolve().parent / "templates")),
    autoescape=select_autoescape(["html"]),
)


@dataclass(frozen=True)
class ComposedEmail:
    subject: str
    html: str


def month_name(month: int) -> str:
    """1 -> January ... 12 -> December; anything else -> ''."""
    if isinstance(month, int) and 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return ""


def consolidated_subject(month: int, year: int) -> str:
    return f"Monthly Teaching Hours Report - All Staff - {month_name(month)} {year}"


def compose_consolidated_summary(
    reports: Sequence[MonthlyReport],
    *,
    organization_name: str = DEFAULT_ORGANIZATION_NAME,
) -> ComposedEmail:
    if not reports:
        raise ValidationError("Cannot compose a summary without reports")

    # One period per summary; callers never mix months.
    first = reports[0]
    ordered = sorted(reports, key=lambda r: r.staff_name)

    html = _env.get_template("consolidated_summary.html").render(
        month_name=month_name(first.month),
        year=first.year,
        staff_count=len(ordered),
        total_hours=sum(r.total_hours for r in ordered),
        reports=ordered,
        organization_name=organization_name,
    )
    return ComposedEmail(subject=consolidated_subject(first.month, first.year), html=html)


def compose_staff_report(
    report: MonthlyReport,
    *,
    organization_name: str = DEFAULT_ORGANIZATION_NAME,
    today: Optional[date] = None,
) -> ComposedEmail:
    name = month_name(report.month)
    html = _env.get_template("staff_report.html").render(
        report=report,
        month_name=name,
        period_start=format_long_date(report.start_date),
        period_end=format_long_date(report.end_date),
        generated_on=format_long_date(report.generated_at),
        organization_name=organization_name,
        current_year=(today or date.today()).year,
    )
    return ComposedEmail(subject=f"Your Teaching Hours Report - {name} {report.year}", html=html)

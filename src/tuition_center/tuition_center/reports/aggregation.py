from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..teaching_hours.model import TeachingHoursEntry
from .model import SubjectBreakdownEntry


@dataclass(frozen=True)
class HoursSummary:
    total_hours: float
    subject_breakdown: tuple[SubjectBreakdownEntry, ...]


def summarize_hours(entries: Iterable[TeachingHoursEntry]) -> HoursSummary:
    """Total hours plus a (subject, course) breakdown.

    Groups keep the order in which they first appear; sorting is left to the
    presentation layer.
    """

    total = 0.0
    groups: dict[tuple[str, Optional[str]], float] = {}

    for entry in entries:
        total += entry.hours
        key = (entry.subject, entry.course)
        groups[key] = groups.get(key, 0.0) + entry.hours

    breakdown = tuple(
        SubjectBreakdownEntry(subject=subject, course=course, hours=hours)
        for (subject, course), hours in groups.items()
    )
    return HoursSummary(total_hours=total, subject_breakdown=breakdown)

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.tuition_center.tuition_center.notifications.model import SendResult
from src.tuition_center.tuition_center.reports.model import MonthlyReport, SubjectBreakdownEntry
from src.tuition_center.tuition_center.settings.model import EmailSettings
from src.tuition_center.tuition_center.staff.model import Staff
from src.tuition_center.tuition_center.teaching_hours.model import TeachingHoursEntry


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeStaffRepo:
    def __init__(self, members=()):
        self._members = {m.staff_id: m for m in members}

    def add(self, member: Staff) -> None:
        self._members[member.staff_id] = member

    def get_by_id(self, staff_id):
        return self._members.get(int(staff_id))

    def list_active(self):
        return [m for m in self._members.values() if m.is_active]


class FakeTeachingHoursRepo:
    def __init__(self, entries=(), *, failing_staff_ids=()):
        self.entries = list(entries)
        self.failing_staff_ids = set(failing_staff_ids)
        self.calls = []

    def add(self, staff_id, when, hours, subject, course=None):
        self.entries.append(
            TeachingHoursEntry(
                entry_id=len(self.entries) + 1,
                staff_id=staff_id,
                date=when,
                hours=hours,
                subject=subject,
                course=course,
            )
        )

    def find_for_staff(self, *, staff_id, start, end):
        self.calls.append({"staff_id": staff_id, "start": start, "end": end})
        if staff_id in self.failing_staff_ids:
            raise ConnectionError("teaching_hours store unavailable")
        return [e for e in self.entries if e.staff_id == staff_id and start <= e.date <= end]


class FakeReportRepo:
    def __init__(self):
        self._next_id = 1
        self.by_key: dict[tuple[int, int, int], MonthlyReport] = {}
        self.upsert_calls = 0
        self.mark_calls = []

    def upsert(
        self,
        *,
        staff_id,
        month,
        year,
        staff_name,
        staff_email,
        total_hours,
        subject_breakdown,
        start_date,
        end_date,
        generated_at,
    ):
        self.upsert_calls += 1
        key = (staff_id, month, year)
        existing = self.by_key.get(key)
        if existing:
            report_id = existing.report_id
        else:
            report_id = self._next_id
            self._next_id += 1
        report = MonthlyReport(
            report_id=report_id,
            staff_id=staff_id,
            staff_name=staff_name,
            staff_email=staff_email,
            month=month,
            year=year,
            total_hours=total_hours,
            subject_breakdown=tuple(subject_breakdown),
            start_date=start_date,
            end_date=end_date,
            generated_at=generated_at,
            email_sent_at=existing.email_sent_at if existing else None,
        )
        self.by_key[key] = report
        return report

    def mark_email_sent(self, *, report_ids, sent_at):
        self.mark_calls.append((list(report_ids), sent_at))
        ids = set(report_ids)
        count = 0
        for key, report in list(self.by_key.items()):
            if report.report_id in ids:
                self.by_key[key] = replace(report, email_sent_at=sent_at)
                count += 1
        return count

    def get_by_id(self, report_id):
        for report in self.by_key.values():
            if report.report_id == int(report_id):
                return report
        return None

    def delete_by_id(self, report_id):
        for key, report in list(self.by_key.items()):
            if report.report_id == int(report_id):
                del self.by_key[key]
                return True
        return False

    def _matching(self, staff_id=None, year=None, month=None):
        rows = [
            r
            for r in self.by_key.values()
            if (staff_id is None or r.staff_id == staff_id)
            and (year is None or r.year == year)
            and (month is None or r.month == month)
        ]
        return sorted(rows, key=lambda r: (-r.year, -r.month, r.staff_name))

    def list_reports(self, *, staff_id=None, year=None, month=None, page=1, limit=20):
        rows = self._matching(staff_id, year, month)
        offset = (page - 1) * limit
        return rows[offset : offset + limit], len(rows)

    def list_for_staff(self, *, staff_id, year=None, month=None):
        return self._matching(staff_id, year, month)

    def list_unsent(self, *, month, year):
        return [r for r in self._matching(None, year, month) if r.email_sent_at is None]


class FakeSettingsRepo:
    def __init__(self, *, from_email="reports@example.com", admin_email="admin@example.com"):
        self.settings = EmailSettings(from_email=from_email, admin_email=admin_email)

    def get_email_settings(self):
        return self.settings


class FakeTransport:
    def __init__(self, *, error=None, raises=None):
        self.error = error
        self.raises = raises
        self.sent = []

    def send(self, message):
        self.sent.append(message)
        if self.raises is not None:
            raise self.raises
        return SendResult(error=self.error, message_id=None if self.error else f"msg-{len(self.sent)}")


def build_report(
    *,
    report_id=1,
    staff_id=1,
    staff_name="Alice",
    staff_email="alice@example.com",
    month=3,
    year=2024,
    total_hours=10.0,
    breakdown=(),
    email_sent_at=None,
):
    return MonthlyReport(
        report_id=report_id,
        staff_id=staff_id,
        staff_name=staff_name,
        staff_email=staff_email,
        month=month,
        year=year,
        total_hours=total_hours,
        subject_breakdown=tuple(SubjectBreakdownEntry(*b) for b in breakdown),
        start_date=datetime(year, month, 1),
        end_date=datetime(year, month, 28, 23, 59, 59, 999999),
        generated_at=datetime(year, month, 28, 12, 0),
        email_sent_at=email_sent_at,
    )


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 4, 1, 9, 0, 0))


@pytest.fixture
def staff_repo():
    return FakeStaffRepo(
        [
            Staff(staff_id=1, name="Alice Nguyen", email="alice@example.com", is_active=True),
            Staff(staff_id=2, name="Bob Tran", email="bob@example.com", is_active=True),
            Staff(staff_id=3, name="Carol Le", email="carol@example.com", is_active=False),
        ]
    )


@pytest.fixture
def hours_repo():
    return FakeTeachingHoursRepo()


@pytest.fixture
def report_repo():
    return FakeReportRepo()


@pytest.fixture
def settings_repo():
    return FakeSettingsRepo()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def make_report():
    return build_report

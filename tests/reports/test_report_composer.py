from __future__ import annotations

from datetime import date

import pytest

from src.tuition_center.tuition_center.core.exceptions import ValidationError
from src.tuition_center.tuition_center.reports.composer import (
    compose_consolidated_summary,
    compose_staff_report,
    month_name,
)


def test_consolidated_subject_line(make_report):
    email = compose_consolidated_summary([make_report(month=3, year=2024)])

    assert email.subject == "Monthly Teaching Hours Report - All Staff - March 2024"


@pytest.mark.parametrize(
    "month,expected",
    [(1, "January"), (6, "June"), (12, "December"), (0, ""), (13, ""), (-1, "")],
)
def test_month_name_mapping(month, expected):
    assert month_name(month) == expected


def test_summary_lists_staff_sorted_by_name_with_totals(make_report):
    reports = [
        make_report(report_id=1, staff_name="Charlie", staff_email="c@example.com", total_hours=3.25),
        make_report(report_id=2, staff_name="Alice", staff_email="a@example.com", total_hours=10),
        make_report(report_id=3, staff_name="Bob", staff_email="b@example.com", total_hours=0),
    ]

    html = compose_consolidated_summary(reports).html

    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert "March 2024" in html
    assert html.index("Alice") < html.index("Bob") < html.index("Charlie")
    assert "a@example.com" in html
    assert ">10.0<" in html
    assert ">0.0<" in html
    assert ">3.2<" in html or ">3.3<" in html
    assert "<strong>3</strong>" in html
    assert "<strong>13.2</strong>" in html or "<strong>13.3</strong>" in html
    assert html.count("<tr>") == 3


def test_summary_escapes_staff_names(make_report):
    html = compose_consolidated_summary([make_report(staff_name="<b>Eve</b>")]).html

    assert "&lt;b&gt;Eve&lt;/b&gt;" in html
    assert "<b>Eve</b>" not in html


def test_summary_requires_reports():
    with pytest.raises(ValidationError):
        compose_consolidated_summary([])


def test_staff_report_includes_breakdown(make_report):
    report = make_report(
        month=3,
        year=2024,
        total_hours=4.5,
        breakdown=[("Math", "Algebra I", 3.0), ("English", None, 1.5)],
    )

    email = compose_staff_report(report, organization_name="Zero to Hero Education", today=date(2024, 4, 1))

    assert email.subject == "Your Teaching Hours Report - March 2024"
    assert "Dear Alice," in email.html
    assert "March 1, 2024 - March 28, 2024" in email.html
    assert "Algebra I" in email.html
    assert ">-<" in email.html
    assert ">4.5<" in email.html
    assert "&copy; 2024" in email.html


def test_staff_report_without_breakdown_has_no_table(make_report):
    email = compose_staff_report(make_report(total_hours=0), today=date(2024, 4, 1))

    assert "Hours by Subject/Course" not in email.html
    assert "<table" not in email.html

from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest
from flask import Flask

from src.tuition_center.tuition_center.reports.controller import register
from src.tuition_center.tuition_center.reports.dispatch import ReportDispatchService
from src.tuition_center.tuition_center.reports.query_service import ReportQueryService
from src.tuition_center.tuition_center.reports.service import ReportGenerationService
from src.tuition_center.tuition_center.reports.workflow import MonthlyReportWorkflow

CRON_SECRET = "s3cret"


@pytest.fixture
def container(staff_repo, hours_repo, report_repo, settings_repo, transport, clock):
    generator = ReportGenerationService(staff_repo, hours_repo, report_repo, clock=clock)
    dispatcher = ReportDispatchService(report_repo, settings_repo, transport, clock=clock)
    return SimpleNamespace(
        report_generation_service=generator,
        report_dispatch_service=dispatcher,
        report_query_service=ReportQueryService(report_repo, staff_repo),
        report_workflow=MonthlyReportWorkflow(generator, dispatcher),
    )


@pytest.fixture
def app(container):
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config["TESTING"] = True
    app.config["CRON_SECRET"] = CRON_SECRET
    register(app, container)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, *, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_admin_routes_require_login(client):
    assert client.get("/api/admin/reports").status_code == 401


def test_admin_routes_reject_staff(client):
    login(client, user_id=1, role="staff")

    assert client.get("/api/admin/reports").status_code == 403


def test_generate_without_sending(client, hours_repo, transport):
    hours_repo.add(1, datetime(2024, 3, 4, 15, 0), 2.5, "Math", "Algebra I")
    login(client, user_id=100, role="admin")

    resp = client.post("/api/admin/reports", json={"month": 3, "year": 2024})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "Generated 2 reports"
    alice = next(r for r in body["reports"] if r["staffId"] == 1)
    assert alice["totalHours"] == 2.5
    assert alice["subjectBreakdown"] == [{"subject": "Math", "course": "Algebra I", "hours": 2.5}]
    assert alice["emailSentAt"] is None
    assert transport.sent == []


def test_generate_and_send_from_admin(client, transport):
    login(client, user_id=100, role="admin")

    resp = client.post("/api/admin/reports", json={"month": "3", "year": "2024", "sendEmails": True})

    assert resp.status_code == 200
    assert resp.get_json()["emailResults"] == {"success": True, "recipient": "admin@example.com", "count": 2}
    assert len(transport.sent) == 1


def test_generate_rejects_invalid_month(client):
    login(client, user_id=100, role="admin")

    resp = client.post("/api/admin/reports", json={"month": 13, "year": 2024})

    assert resp.status_code == 400


def test_generate_reports_store_failure(client, hours_repo):
    hours_repo.failing_staff_ids = {1}
    login(client, user_id=100, role="admin")

    resp = client.post("/api/admin/reports", json={"month": 3, "year": 2024})

    assert resp.status_code == 500
    assert resp.get_json()["staffId"] == 1


def test_list_reports_with_filters_and_pagination(client, report_repo, make_report):
    for i in range(1, 6):
        r = make_report(report_id=i, staff_id=i, staff_name=f"Staff {i}", month=3)
        report_repo.by_key[r.key] = r
    other = make_report(report_id=9, staff_id=1, month=2)
    report_repo.by_key[other.key] = other
    login(client, user_id=100, role="admin")

    resp = client.get("/api/admin/reports?year=2024&month=3&page=2&limit=2")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}
    assert [r["staffName"] for r in body["reports"]] == ["Staff 3", "Staff 4"]


def test_list_reports_rejects_bad_query(client):
    login(client, user_id=100, role="admin")

    assert client.get("/api/admin/reports?page=abc").status_code == 400
    assert client.get("/api/admin/reports?page=0").status_code == 400


def test_get_and_delete_report(client, report_repo, make_report):
    r = make_report(report_id=7)
    report_repo.by_key[r.key] = r
    login(client, user_id=100, role="admin")

    assert client.get("/api/admin/reports/7").get_json()["report"]["id"] == 7
    assert client.delete("/api/admin/reports/7").status_code == 200
    assert client.get("/api/admin/reports/7").status_code == 404
    assert client.delete("/api/admin/reports/7").status_code == 404


def test_send_pending_reports_route(client, report_repo, make_report, transport):
    r = make_report(report_id=1, month=3, year=2024)
    report_repo.by_key[r.key] = r
    login(client, user_id=100, role="admin")

    resp = client.post("/api/admin/reports/send", json={"month": 3, "year": 2024})

    assert resp.status_code == 200
    assert resp.get_json()["count"] == 1
    assert len(transport.sent) == 1


def test_cron_requires_bearer_secret(client):
    assert client.get("/api/cron/monthly-reports").status_code == 401
    assert (
        client.get("/api/cron/monthly-reports", headers={"Authorization": "Bearer wrong"}).status_code == 401
    )


def test_cron_rejects_non_ascii_secret(client, transport):
    resp = client.get("/api/cron/monthly-reports", headers={"Authorization": "Bearer s3crét"})

    assert resp.status_code == 401
    assert transport.sent == []


def test_cron_disabled_without_secret(app, client):
    app.config["CRON_SECRET"] = None

    resp = client.post("/api/cron/monthly-reports", headers={"Authorization": f"Bearer {CRON_SECRET}"})

    assert resp.status_code == 503


def test_cron_generates_previous_month_and_sends(client, report_repo, transport):
    resp = client.post("/api/cron/monthly-reports", headers={"Authorization": f"Bearer {CRON_SECRET}"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["results"]["count"] == 2
    assert {(k[1], k[2]) for k in report_repo.by_key} == {(3, 2024)}
    assert len(transport.sent) == 1


def test_staff_sees_only_own_reports(client, report_repo, make_report):
    for r in [make_report(report_id=1, staff_id=1), make_report(report_id=2, staff_id=2, staff_name="Bob")]:
        report_repo.by_key[r.key] = r
    login(client, user_id=1, role="staff")

    resp = client.get("/api/staff/reports")

    assert resp.status_code == 200
    assert [r["staffId"] for r in resp.get_json()["reports"]] == [1]


def test_inactive_staff_cannot_list_reports(client):
    login(client, user_id=3, role="staff")

    assert client.get("/api/staff/reports").status_code == 404


def test_generate_with_staff_emails_only(client, transport):
    login(client, user_id=100, role="admin")

    resp = client.post("/api/admin/reports", json={"month": 3, "year": 2024, "sendStaffEmails": True})

    body = resp.get_json()
    assert resp.status_code == 200
    assert [r["staffEmail"] for r in body["staffEmailResults"]] == ["alice@example.com", "bob@example.com"]
    assert all(r["success"] for r in body["staffEmailResults"])
    assert [m.to for m in transport.sent] == ["alice@example.com", "bob@example.com"]
    assert "emailResults" not in body


def test_generate_and_send_with_staff_emails(client, transport, report_repo):
    login(client, user_id=100, role="admin")

    resp = client.post(
        "/api/admin/reports",
        json={"month": 3, "year": 2024, "sendEmails": True, "sendStaffEmails": True},
    )

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["emailResults"]["count"] == 2
    assert len(body["staffEmailResults"]) == 2
    assert [m.to for m in transport.sent] == ["admin@example.com", "alice@example.com", "bob@example.com"]
    assert all(r.email_sent_at is not None for r in report_repo.by_key.values())

from __future__ import annotations

import hmac
import logging
from datetime import datetime, timezone
from functools import wraps

from flask import Flask, current_app, jsonify, request, session

from ..common.validators import optional_int
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ReportGenerationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def role_required(role: Role):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if "user_id" not in session:
                    return jsonify({"error": "Unauthorized"}), 401
                if session.get("role") != role.value:
                    return jsonify({"error": "Forbidden"}), 403
                return view(*args, **kwargs)

            return wrapper

        return decorator

    admin_required = role_required(Role.ADMIN)
    staff_required = role_required(Role.STAFF)

    def json_body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    @app.route("/api/admin/reports", methods=["GET"], endpoint="admin_reports_list")
    @admin_required
    def admin_reports_list():
        try:
            page = container.report_query_service.list_reports(
                staff_id=optional_int(request.args.get("staffId"), "staffId"),
                year=optional_int(request.args.get("year"), "year"),
                month=optional_int(request.args.get("month"), "month"),
                page=optional_int(request.args.get("page"), "page"),
                limit=optional_int(request.args.get("limit"), "limit"),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error fetching monthly reports")
            return jsonify({"error": "Internal server error"}), 500
        return jsonify(page.to_dict())

    @app.route("/api/admin/reports", methods=["POST"], endpoint="admin_reports_generate")
    @admin_required
    def admin_reports_generate():
        body = json_body()
        try:
            month = optional_int(body.get("month"), "month")
            year = optional_int(body.get("year"), "year")
            staff_id = optional_int(body.get("staffId"), "staffId")
            send_staff_emails = bool(body.get("sendStaffEmails"))

            if body.get("sendEmails"):
                result = container.report_workflow.generate_and_send(
                    month=month, year=year, staff_id=staff_id, staff_emails=send_staff_emails
                )
                data = {
                    "success": True,
                    "message": f"Generated {result.reports_generated} reports",
                    "emailResults": result.email_results.to_dict(),
                }
                if result.staff_email_results is not None:
                    data["staffEmailResults"] = [r.to_dict() for r in result.staff_email_results]
                return jsonify(data)

            reports = container.report_generation_service.generate_reports(month=month, year=year, staff_id=staff_id)
            data = {
                "success": True,
                "message": f"Generated {len(reports)} reports",
                "reports": [r.to_dict() for r in reports],
            }
            if send_staff_emails:
                staff_results = container.report_dispatch_service.send_staff_reports(reports)
                data["staffEmailResults"] = [r.to_dict() for r in staff_results]
            return jsonify(data)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except ReportGenerationError as e:
            return jsonify({"error": f"Failed to generate reports: {e}", "staffId": e.staff_id}), 500
        except Exception:
            logger.exception("Error generating monthly reports")
            return jsonify({"error": "Failed to generate reports"}), 500

    @app.route("/api/admin/reports/send", methods=["POST"], endpoint="admin_reports_send")
    @admin_required
    def admin_reports_send():
        body = json_body()
        try:
            result = container.report_dispatch_service.send_pending_reports(
                month=optional_int(body.get("month"), "month"),
                year=optional_int(body.get("year"), "year"),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error sending monthly reports")
            return jsonify({"error": "Failed to send reports"}), 500
        return jsonify(result.to_dict()), (200 if result.success else 502)

    @app.route("/api/admin/reports/<int:report_id>", methods=["GET"], endpoint="admin_report_detail")
    @admin_required
    def admin_report_detail(report_id: int):
        report = container.report_query_service.get_report(report_id)
        if report is None:
            return jsonify({"error": "Report not found"}), 404
        return jsonify({"report": report.to_dict()})

    @app.route("/api/admin/reports/<int:report_id>", methods=["DELETE"], endpoint="admin_report_delete")
    @admin_required
    def admin_report_delete(report_id: int):
        if not container.report_query_service.delete_report(report_id):
            return jsonify({"error": "Report not found"}), 404
        logger.info("Monthly report %s deleted by user %s", report_id, session.get("user_id"))
        return jsonify({"message": "Report deleted successfully"})

    @app.route("/api/cron/monthly-reports", methods=["GET", "POST"], endpoint="cron_monthly_reports")
    def cron_monthly_reports():
        cron_secret = current_app.config.get("CRON_SECRET")
        if not cron_secret:
            logger.warning("CRON_SECRET not set - cron endpoint is disabled")
            return jsonify({"error": "Cron endpoint not configured"}), 503

        auth_header = request.headers.get("Authorization", "")
        if not hmac.compare_digest(auth_header.encode("utf-8"), f"Bearer {cron_secret}".encode("utf-8")):
            return jsonify({"error": "Unauthorized"}), 401

        try:
            result = container.report_workflow.generate_and_send()
        except Exception as e:
            logger.exception("Monthly report cron error")
            return jsonify({"error": f"Failed to generate monthly reports: {e}"}), 500

        logger.info("Monthly report cron completed: %s reports generated", result.reports_generated)
        return jsonify(
            {
                "success": True,
                "message": f"Generated and sent {result.reports_generated} monthly reports",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "results": result.email_results.to_dict(),
            }
        )

    @app.route("/api/staff/reports", methods=["GET"], endpoint="staff_reports")
    @staff_required
    def staff_reports():
        try:
            reports = container.report_query_service.list_for_staff(
                staff_id=int(session["user_id"]),
                year=optional_int(request.args.get("year"), "year"),
                month=optional_int(request.args.get("month"), "month"),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        if reports is None:
            return jsonify({"error": "Staff not found or inactive"}), 404
        return jsonify({"reports": [r.to_dict() for r in reports]})

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_EMAIL_TIMEOUT_SECONDS, DEFAULT_ORGANIZATION_NAME
from .database.connection import DBConfig, DatabaseConnection
from .notifications.sendgrid_transport import SendGridEmailTransport
from .notifications.transport import EmailTransport
from .reports.dispatch import ReportDispatchService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.query_service import ReportQueryService
from .reports.service import ReportGenerationService
from .reports.workflow import MonthlyReportWorkflow
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .staff.mysql_staff_repository import MySQLStaffRepository
from .teaching_hours.mysql_teaching_hours_repository import MySQLTeachingHoursRepository


@dataclass(frozen=True)
class EmailConfig:
    sendgrid_api_key: Optional[str] = None
    from_email: Optional[str] = None
    admin_email: Optional[str] = None
    organization_name: str = DEFAULT_ORGANIZATION_NAME
    timeout_seconds: int = DEFAULT_EMAIL_TIMEOUT_SECONDS


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    staff_repo: MySQLStaffRepository
    teaching_hours_repo: MySQLTeachingHoursRepository
    reports_repo: MySQLReportRepository
    settings_repo: MySQLSettingsRepository
    email_transport: EmailTransport

    report_generation_service: ReportGenerationService
    report_dispatch_service: ReportDispatchService
    report_query_service: ReportQueryService
    report_workflow: MonthlyReportWorkflow


def build_container(
    *,
    db_config: dict,
    email_config: Optional[EmailConfig] = None,
    email_transport: Optional[EmailTransport] = None,
) -> Container:
    email_config = email_config or EmailConfig()
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    staff_repo = MySQLStaffRepository(conn)
    teaching_hours_repo = MySQLTeachingHoursRepository(conn)
    reports_repo = MySQLReportRepository(conn)
    settings_repo = MySQLSettingsRepository(conn)

    transport = email_transport or SendGridEmailTransport(
        email_config.sendgrid_api_key,
        timeout=email_config.timeout_seconds,
    )

    report_generation_service = ReportGenerationService(staff_repo, teaching_hours_repo, reports_repo)
    report_dispatch_service = ReportDispatchService(
        reports_repo,
        settings_repo,
        transport,
        default_from_email=email_config.from_email,
        default_admin_email=email_config.admin_email,
        organization_name=email_config.organization_name,
    )
    report_query_service = ReportQueryService(reports_repo, staff_repo)
    report_workflow = MonthlyReportWorkflow(report_generation_service, report_dispatch_service)

    return Container(
        conn=conn,
        staff_repo=staff_repo,
        teaching_hours_repo=teaching_hours_repo,
        reports_repo=reports_repo,
        settings_repo=settings_repo,
        email_transport=transport,
        report_generation_service=report_generation_service,
        report_dispatch_service=report_dispatch_service,
        report_query_service=report_query_service,
        report_workflow=report_workflow,
    )


def email_config_from_settings(settings) -> EmailConfig:
    return EmailConfig(
        sendgrid_api_key=getattr(settings, "SENDGRID_API_KEY", None),
        from_email=getattr(settings, "FROM_EMAIL", None),
        admin_email=getattr(settings, "ADMIN_EMAIL", None),
        organization_name=getattr(settings, "ORGANIZATION_NAME", DEFAULT_ORGANIZATION_NAME),
        timeout_seconds=int(getattr(settings, "EMAIL_TIMEOUT_SECONDS", DEFAULT_EMAIL_TIMEOUT_SECONDS)),
    )

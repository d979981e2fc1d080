"""Example: using the service layer directly (without Flask).

Controllers stay thin; report logic lives in services wired by the container.
"""

import importlib

from config import get_settings_module

from src.tuition_center.tuition_center.container import build_container, email_config_from_settings


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, email_config=email_config_from_settings(settings))

    reports = container.report_generation_service.generate_reports()
    for report in reports:
        print(report.staff_name, report.total_hours, [e.to_dict() for e in report.subject_breakdown])

    print(container.report_dispatch_service.send_consolidated_report(reports).to_dict())


if __name__ == "__main__":
    main()

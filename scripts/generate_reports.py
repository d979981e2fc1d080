"""Generate monthly teaching-hours reports from the command line.

Meant for a system cron entry such as ``0 0 1 * *`` (first day of every month),
which produces reports for the month that just closed.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.tuition_center.tuition_center.container import build_container, email_config_from_settings
from src.tuition_center.tuition_center.core.exceptions import DomainError
from src.tuition_center.tuition_center.main import configure_logging, load_settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--month", type=int, help="1-12; defaults to the previous month")
    parser.add_argument("--year", type=int, help="defaults to the year of the target month")
    parser.add_argument("--staff-id", type=int, help="only this staff member (inactive staff allowed)")
    parser.add_argument("--send", action="store_true", help="email the consolidated summary afterwards")
    parser.add_argument("--staff-emails", action="store_true", help="email each staff member their own report")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    _, settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), email_config=email_config_from_settings(settings))

    try:
        if args.send:
            result = container.report_workflow.generate_and_send(
                month=args.month, year=args.year, staff_id=args.staff_id, staff_emails=args.staff_emails
            )
            emails = result.email_results
            print(
                f"OK: generated {result.reports_generated} reports; "
                f"email success={emails.success} recipient={emails.recipient} error={emails.error}"
            )
            staff_ok = _report_staff_emails(result.staff_email_results or ())
            return 0 if emails.success and staff_ok else 2

        reports = container.report_generation_service.generate_reports(
            month=args.month, year=args.year, staff_id=args.staff_id
        )
        print(f"OK: generated {len(reports)} reports")
        if args.staff_emails:
            staff_results = container.report_dispatch_service.send_staff_reports(reports)
            return 0 if _report_staff_emails(staff_results) else 2
        return 0
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


def _report_staff_emails(results) -> bool:
    failed = [r for r in results if not r.success]
    if results:
        print(f"staff emails: {len(results) - len(failed)} sent, {len(failed)} failed")
    for r in failed:
        print(f"  {r.staff_email}: {r.error}", file=sys.stderr)
    return not failed


if __name__ == "__main__":
    sys.exit(main())

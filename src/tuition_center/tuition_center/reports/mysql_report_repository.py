from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from .model import MonthlyReport, SubjectBreakdownEntry
from .repository import ReportRepository

_COLUMNS = """
    report_id, staff_id, staff_name, staff_email, month, year, total_hours,
    subject_breakdown, start_date, end_date, generated_at, email_sent_at
"""


def _to_report(row: dict) -> MonthlyReport:
    breakdown = load_json_column(row.get("subject_breakdown")) or []
    return MonthlyReport(
        report_id=int(row["report_id"]),
        staff_id=int(row["staff_id"]),
        staff_name=row["staff_name"],
        staff_email=row["staff_email"],
        month=int(row["month"]),
        year=int(row["year"]),
        total_hours=float(row["total_hours"]),
        subject_breakdown=tuple(SubjectBreakdownEntry.from_dict(e) for e in breakdown),
        start_date=row["start_date"],
        end_date=row["end_date"],
        generated_at=row["generated_at"],
        email_sent_at=row.get("email_sent_at"),
    )


def _filters(*, staff_id: Optional[int], year: Optional[int], month: Optional[int]) -> tuple[str, list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if staff_id is not None:
        clauses.append("staff_id=%s")
        params.append(int(staff_id))
    if year is not None:
        clauses.append("year=%s")
        params.append(int(year))
    if month is not None:
        clauses.append("month=%s")
        params.append(int(month))
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        staff_id: int,
        month: int,
        year: int,
        staff_name: str,
        staff_email: str,
        total_hours: float,
        subject_breakdown: Sequence[SubjectBreakdownEntry],
        start_date: datetime,
        end_date: datetime,
        generated_at: datetime,
    ) -> MonthlyReport:
        breakdown_json = json.dumps([e.to_dict() for e in subject_breakdown])
        with db_cursor(self._conn_factory) as (_, cur):
            # email_sent_at is deliberately absent from the UPDATE list.
            cur.execute(
                """
                INSERT INTO monthly_reports(
                    staff_id, month, year, staff_name, staff_email, total_hours,
                    subject_breakdown, start_date, end_date, generated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    staff_name=VALUES(staff_name),
                    staff_email=VALUES(staff_email),
                    total_hours=VALUES(total_hours),
                    subject_breakdown=VALUES(subject_breakdown),
                    start_date=VALUES(start_date),
                    end_date=VALUES(end_date),
                    generated_at=VALUES(generated_at)
                """,
                (
                    int(staff_id),
                    int(month),
                    int(year),
                    staff_name,
                    staff_email,
                    float(total_hours),
                    breakdown_json,
                    start_date,
                    end_date,
                    generated_at,
                ),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM monthly_reports WHERE staff_id=%s AND month=%s AND year=%s",
                (int(staff_id), int(month), int(year)),
            )
            return _to_report(fetchone(cur))

    def mark_email_sent(self, *, report_ids: Sequence[int], sent_at: datetime) -> int:
        ids = [int(i) for i in report_ids]
        if not ids:
            return 0
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE monthly_reports SET email_sent_at=%s WHERE report_id IN ({placeholders})",
                (sent_at, *ids),
            )
            return int(cur.rowcount)

    def get_by_id(self, report_id: int) -> Optional[MonthlyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM monthly_reports WHERE report_id=%s", (int(report_id),))
            row = fetchone(cur)
            return _to_report(row) if row else None

    def delete_by_id(self, report_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM monthly_reports WHERE report_id=%s", (int(report_id),))
            return cur.rowcount > 0

    def list_reports(
        self,
        *,
        staff_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[MonthlyReport], int]:
        where, params = _filters(staff_id=staff_id, year=year, month=month)
        offset = (int(page) - 1) * int(limit)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM monthly_reports {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total", 0))

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM monthly_reports
                {where}
                ORDER BY year DESC, month DESC, staff_name ASC
                LIMIT %s OFFSET %s
                """,
                (*params, int(limit), offset),
            )
            return [_to_report(r) for r in fetchall(cur)], total

    def list_for_staff(
        self,
        *,
        staff_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Sequence[MonthlyReport]:
        where, params = _filters(staff_id=staff_id, year=year, month=month)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM monthly_reports {where} ORDER BY year DESC, month DESC",
                tuple(params),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def list_unsent(self, *, month: int, year: int) -> Sequence[MonthlyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM monthly_reports
                WHERE month=%s AND year=%s AND email_sent_at IS NULL
                ORDER BY staff_name
                """,
                (int(month), int(year)),
            )
            return [_to_report(r) for r in fetchall(cur)]

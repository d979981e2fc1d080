from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import TeachingHoursEntry
from .repository import TeachingHoursRepository


class MySQLTeachingHoursRepository(TeachingHoursRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_staff(self, *, staff_id: int, start: datetime, end: datetime) -> Sequence[TeachingHoursEntry]:
        # Single SELECT per staff member: one consistent read of the window.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, staff_id, entry_date, hours, subject, course, description
                FROM teaching_hours
                WHERE staff_id=%s AND entry_date BETWEEN %s AND %s
                ORDER BY entry_date, entry_id
                """,
                (int(staff_id), start, end),
            )
            return [
                TeachingHoursEntry(
                    entry_id=int(r["entry_id"]),
                    staff_id=int(r["staff_id"]),
                    date=r["entry_date"],
                    hours=float(r["hours"]),
                    subject=r["subject"],
                    course=r.get("course"),
                    description=r.get("description"),
                )
                for r in fetchall(cur)
            ]

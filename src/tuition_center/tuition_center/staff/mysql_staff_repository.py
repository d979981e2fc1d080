from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Staff
from .repository import StaffRepository


def _to_staff(row: dict) -> Staff:
    return Staff(
        staff_id=int(row["staff_id"]),
        name=row["name"],
        email=row["email"],
        is_active=bool(row.get("is_active", True)),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT staff_id, name, email, is_active
                FROM staff
                WHERE staff_id=%s
                """,
                (int(staff_id),),
            )
            row = fetchone(cur)
            return _to_staff(row) if row else None

    def list_active(self) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT staff_id, name, email, is_active
                FROM staff
                WHERE is_active=1
                ORDER BY staff_id
                """
            )
            return [_to_staff(r) for r in fetchall(cur)]

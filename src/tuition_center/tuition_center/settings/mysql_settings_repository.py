from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import EmailSettings
from .repository import SettingsRepository

FROM_EMAIL_KEY = "email.from_email"
ADMIN_EMAIL_KEY = "email.admin_email"


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_email_settings(self) -> EmailSettings:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT setting_key, setting_value FROM app_settings WHERE setting_key IN (%s, %s)",
                (FROM_EMAIL_KEY, ADMIN_EMAIL_KEY),
            )
            values = {r["setting_key"]: (r.get("setting_value") or "").strip() or None for r in fetchall(cur)}
        return EmailSettings(
            from_email=values.get(FROM_EMAIL_KEY),
            admin_email=values.get(ADMIN_EMAIL_KEY),
        )

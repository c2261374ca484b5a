from __future__ import annotations

from typing import Mapping

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import SETTING_KEYS
from .repository import PolicySettingsRepository


class MySQLPolicySettingsRepository(PolicySettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_settings(self, calendar_id: int) -> Mapping[str, str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT setting_key, setting_value
                FROM calendar_settings
                WHERE calendar_id=%s
                """,
                (int(calendar_id),),
            )
            return {r["setting_key"]: r["setting_value"] for r in fetchall(cur)}

    def save_settings(self, calendar_id: int, settings: Mapping[str, str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            for key, value in settings.items():
                if key not in SETTING_KEYS:
                    continue
                cur.execute(
                    """
                    INSERT INTO calendar_settings(calendar_id, setting_key, setting_value)
                    VALUES(%s,%s,%s)
                    ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value)
                    """,
                    (int(calendar_id), key, value),
                )

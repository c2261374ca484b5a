from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import WorkCalendar
from .repository import CalendarRepository


class MySQLCalendarRepository(CalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, calendar_id: int) -> Optional[WorkCalendar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT calendar_id, code, name, shift_template_id, apply_from, apply_to, plan_to_infinite
                FROM work_calendars
                WHERE calendar_id=%s
                """,
                (int(calendar_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return WorkCalendar(
                calendar_id=int(r["calendar_id"]),
                code=r["code"],
                name=r["name"],
                shift_template_id=int(r["shift_template_id"]),
                apply_from=r["apply_from"],
                apply_to=r.get("apply_to"),
                plan_to_infinite=bool(r.get("plan_to_infinite")),
            )

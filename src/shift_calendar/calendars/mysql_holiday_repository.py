from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(self, *, start: date, end: date, calendar_id: Optional[int] = None) -> Sequence[Holiday]:
        clauses = ["exception_date BETWEEN %s AND %s", "is_holiday=1"]
        params: list[object] = [start, end]
        if calendar_id is not None:
            clauses.append("(calendar_id IS NULL OR calendar_id=%s)")
            params.append(int(calendar_id))
        else:
            clauses.append("calendar_id IS NULL")

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT exception_date, name
                FROM calendar_exceptions
                WHERE {where}
                ORDER BY exception_date ASC
                """,
                tuple(params),
            )
            return [Holiday(day=r["exception_date"], name=r.get("name")) for r in fetchall(cur)]

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import RunStateInterval
from .repository import RunStateRepository


class MySQLRunStateRepository(RunStateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_machine(self, *, machine_id: int, start: datetime, end: datetime) -> Sequence[RunStateInterval]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT start_time, end_time, is_running
                FROM machine_run_state_records
                WHERE machine_id=%s AND start_time < %s AND end_time > %s
                ORDER BY start_time ASC
                """,
                (int(machine_id), end, start),
            )
            return [
                RunStateInterval(start=r["start_time"], end=r["end_time"], is_running=bool(r["is_running"]))
                for r in fetchall(cur)
            ]

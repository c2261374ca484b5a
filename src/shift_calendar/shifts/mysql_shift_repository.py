from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..core.enums import DayOfWeek, ShiftPattern, WeekType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ShiftBreak, ShiftDefinition, ShiftTemplate
from .repository import ShiftTemplateRepository


class MySQLShiftTemplateRepository(ShiftTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT template_id, code, name, description, week_type, shift_pattern
                FROM shift_templates
                ORDER BY template_id
                """
            )
            headers = fetchall(cur)
            return [self._load(cur, h) for h in headers]

    def get_by_id(self, template_id: int) -> Optional[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT template_id, code, name, description, week_type, shift_pattern
                FROM shift_templates
                WHERE template_id=%s
                """,
                (int(template_id),),
            )
            h = fetchone(cur)
            return self._load(cur, h) if h else None

    def get_by_code(self, code: str) -> Optional[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT template_id, code, name, description, week_type, shift_pattern
                FROM shift_templates
                WHERE code=%s
                """,
                (code,),
            )
            h = fetchone(cur)
            return self._load(cur, h) if h else None

    def create(self, template: ShiftTemplate) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_templates(code, name, description, week_type, shift_pattern)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    template.code,
                    template.name,
                    template.description,
                    template.week_type.value,
                    template.shift_pattern.value,
                ),
            )
            template_id = int(cur.lastrowid)
            self._insert_definitions(cur, template_id, template)
            return template_id

    def update(self, template_id: int, template: ShiftTemplate) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_templates
                SET code=%s, name=%s, description=%s, week_type=%s, shift_pattern=%s
                WHERE template_id=%s
                """,
                (
                    template.code,
                    template.name,
                    template.description,
                    template.week_type.value,
                    template.shift_pattern.value,
                    int(template_id),
                ),
            )
            cur.execute("SELECT template_id FROM shift_templates WHERE template_id=%s", (int(template_id),))
            if not fetchone(cur):
                return False

            cur.execute("DELETE FROM shift_breaks WHERE template_id=%s", (int(template_id),))
            cur.execute("DELETE FROM shift_definitions WHERE template_id=%s", (int(template_id),))
            self._insert_definitions(cur, int(template_id), template)
            return True

    def delete(self, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_breaks WHERE template_id=%s", (int(template_id),))
            cur.execute("DELETE FROM shift_definitions WHERE template_id=%s", (int(template_id),))
            cur.execute("DELETE FROM shift_templates WHERE template_id=%s", (int(template_id),))
            return cur.rowcount > 0

    @staticmethod
    def _insert_definitions(cur, template_id: int, template: ShiftTemplate) -> None:
        for sort_order, d in enumerate(template.definitions):
            cur.execute(
                """
                INSERT INTO shift_definitions(template_id, definition_id, name, start_time, end_time, days, sort_order)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    template_id,
                    d.id,
                    d.name,
                    d.start_time,
                    d.end_time,
                    ",".join(day.value for day in DayOfWeek if day in d.days),
                    sort_order,
                ),
            )
            for b in d.breaks:
                cur.execute(
                    """
                    INSERT INTO shift_breaks(template_id, definition_id, break_id, name, start_time, end_time)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (template_id, d.id, b.id, b.name, b.start_time, b.end_time),
                )

    @staticmethod
    def _load(cur, header: dict) -> ShiftTemplate:
        template_id = int(header["template_id"])

        cur.execute(
            """
            SELECT definition_id, break_id, name, start_time, end_time
            FROM shift_breaks
            WHERE template_id=%s
            ORDER BY definition_id, start_time
            """,
            (template_id,),
        )
        breaks_by_def: dict[str, list[ShiftBreak]] = defaultdict(list)
        for r in fetchall(cur):
            breaks_by_def[r["definition_id"]].append(
                ShiftBreak(
                    id=r["break_id"],
                    name=r.get("name"),
                    start_time=normalize_mysql_time(r["start_time"]),
                    end_time=normalize_mysql_time(r["end_time"]),
                )
            )

        cur.execute(
            """
            SELECT definition_id, name, start_time, end_time, days
            FROM shift_definitions
            WHERE template_id=%s
            ORDER BY sort_order
            """,
            (template_id,),
        )
        definitions = tuple(
            ShiftDefinition(
                id=r["definition_id"],
                name=r["name"],
                start_time=normalize_mysql_time(r["start_time"]),
                end_time=normalize_mysql_time(r["end_time"]),
                days=frozenset(DayOfWeek(d) for d in (r.get("days") or "").split(",") if d),
                breaks=tuple(breaks_by_def.get(r["definition_id"], [])),
            )
            for r in fetchall(cur)
        )

        return ShiftTemplate(
            id=template_id,
            code=header["code"],
            name=header["name"],
            description=header.get("description"),
            week_type=WeekType(header["week_type"]),
            shift_pattern=ShiftPattern(header["shift_pattern"]),
            definitions=definitions,
        )

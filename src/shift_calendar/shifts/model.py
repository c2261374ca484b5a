from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import time
from typing import Any, Mapping, Optional

from ..common.time_utils import duration_minutes, format_hhmm, minutes_of_day, parse_hhmm
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import DayOfWeek, ShiftPattern, WeekType
from ..core.exceptions import ValidationError


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    # Dashboard payloads use camelCase, DB rows use snake_case.
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class ShiftBreak:
    """Thực thể miền (domain): Giờ nghỉ trong ca."""

    id: str
    start_time: time
    end_time: time
    name: Optional[str] = None

    @property
    def duration_minutes(self) -> int:
        return duration_minutes(self.start_time, self.end_time)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShiftBreak":
        return cls(
            id=str(_pick(data, "id") or generate_id()),
            start_time=parse_hhmm(_pick(data, "startTime", "start_time", default="")),
            end_time=parse_hhmm(_pick(data, "endTime", "end_time", default="")),
            name=_pick(data, "name"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
        }


@dataclass(frozen=True)
class ShiftDefinition:
    """Thực thể miền (domain): Ca làm việc lặp lại theo tuần.

    Minute offsets returned by the ``*_span`` helpers are relative to midnight
    of the day the shift starts on, so an overnight shift ends past 1440.
    """

    id: str
    name: str
    start_time: time
    end_time: time
    days: frozenset[DayOfWeek] = frozenset()
    breaks: tuple[ShiftBreak, ...] = ()

    @property
    def is_overnight(self) -> bool:
        return minutes_of_day(self.end_time) <= minutes_of_day(self.start_time)

    @property
    def duration_minutes(self) -> int:
        return duration_minutes(self.start_time, self.end_time)

    @property
    def break_minutes(self) -> int:
        return sum(b.duration_minutes for b in self.breaks)

    @property
    def scheduled_minutes(self) -> int:
        return self.duration_minutes - self.break_minutes

    def is_active_on(self, day: DayOfWeek) -> bool:
        return day in self.days

    def span(self) -> tuple[int, int]:
        start_m = minutes_of_day(self.start_time)
        return start_m, start_m + self.duration_minutes

    def break_spans(self) -> list[tuple[int, int, ShiftBreak]]:
        start_m, _ = self.span()
        out = []
        for b in self.breaks:
            b_start = minutes_of_day(b.start_time)
            if b_start < start_m:
                b_start += MINUTES_PER_DAY
            out.append((b_start, b_start + b.duration_minutes, b))
        out.sort(key=lambda item: (item[0], item[1]))
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShiftDefinition":
        raw_days = _pick(data, "days", default=[]) or []
        try:
            days = frozenset(DayOfWeek(str(d).strip().lower()) for d in raw_days)
        except ValueError:
            raise ValidationError(f"Ngày trong tuần không hợp lệ: {list(raw_days)!r}")

        return cls(
            id=str(_pick(data, "id") or generate_id()),
            name=str(_pick(data, "name", default="")).strip(),
            start_time=parse_hhmm(_pick(data, "startTime", "start_time", default="")),
            end_time=parse_hhmm(_pick(data, "endTime", "end_time", default="")),
            days=days,
            breaks=tuple(ShiftBreak.from_dict(b) for b in (_pick(data, "breaks", default=[]) or [])),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "days": [d.value for d in DayOfWeek if d in self.days],
            "breaks": [b.to_dict() for b in self.breaks],
        }


@dataclass(frozen=True)
class ShiftTemplate:
    """Thực thể miền (domain): Mẫu ca (tập hợp các ca trong tuần)."""

    code: str
    name: str
    definitions: tuple[ShiftDefinition, ...] = ()
    description: Optional[str] = None
    week_type: WeekType = WeekType.FIVE_DAY
    shift_pattern: ShiftPattern = ShiftPattern.TWO_SHIFTS
    id: Optional[int] = None

    def active_on(self, day: DayOfWeek) -> list[ShiftDefinition]:
        """Definitions active on ``day``, sorted by start time then id."""
        active = [d for d in self.definitions if d.is_active_on(day)]
        active.sort(key=lambda d: (minutes_of_day(d.start_time), d.id))
        return active

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShiftTemplate":
        try:
            week_type = WeekType(_pick(data, "weekType", "week_type", default=WeekType.FIVE_DAY.value))
            shift_pattern = ShiftPattern(
                _pick(data, "shiftPattern", "shift_pattern", default=ShiftPattern.TWO_SHIFTS.value)
            )
        except ValueError as e:
            raise ValidationError(str(e))

        template_id = _pick(data, "id")
        return cls(
            id=int(template_id) if template_id is not None and str(template_id).isdigit() else None,
            code=str(_pick(data, "code", default="")).strip(),
            name=str(_pick(data, "name", default="")).strip(),
            description=_pick(data, "description"),
            week_type=week_type,
            shift_pattern=shift_pattern,
            definitions=tuple(ShiftDefinition.from_dict(d) for d in (_pick(data, "definitions", default=[]) or [])),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "weekType": self.week_type.value,
            "shiftPattern": self.shift_pattern.value,
            "definitions": [d.to_dict() for d in self.definitions],
        }

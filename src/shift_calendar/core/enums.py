from __future__ import annotations

from enum import Enum, IntEnum


class DayOfWeek(str, Enum):
    """Ngày trong tuần, thứ tự khớp với ``date.weekday()``."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_weekday(cls, weekday: int) -> "DayOfWeek":
        return _WEEK[weekday]

    @property
    def weekday(self) -> int:
        return _WEEK.index(self)


_WEEK = list(DayOfWeek)


class WeekType(str, Enum):
    FIVE_DAY = "5-day"
    SEVEN_DAY = "7-day"


class ShiftPattern(str, Enum):
    TWO_SHIFTS = "2-shifts"
    THREE_SHIFTS = "3-shifts"


class SegmentKind(str, Enum):
    """Loại khung thời gian trong ngày do resolver sinh ra."""

    NON_WORKING_DAY = "NON_WORKING_DAY"
    BEFORE_FIRST_SHIFT = "BEFORE_FIRST_SHIFT"
    IN_SHIFT = "IN_SHIFT"
    IN_BREAK = "IN_BREAK"
    GAP = "GAP"
    AFTER_LAST_SHIFT = "AFTER_LAST_SHIFT"
    UNSCHEDULED = "UNSCHEDULED"

    @property
    def is_anchored(self) -> bool:
        """Regions whose running time is measured against a late buffer."""
        return self in (SegmentKind.GAP, SegmentKind.AFTER_LAST_SHIFT)


class TimeCase(IntEnum):
    """Eight mutually exclusive time-attribution cases."""

    SHIFT_LOSS = 1
    PLANNED_BREAK = 2
    BREAK_RUN = 3
    EARLY_START = 4
    OVERTIME = 5
    NIGHT_RUN = 6
    SUNDAY = 7
    HOLIDAY = 8

    @property
    def label(self) -> str:
        return _CASE_LABELS[self]


_CASE_LABELS = {
    TimeCase.SHIFT_LOSS: "Shift Loss",
    TimeCase.PLANNED_BREAK: "Planned Break",
    TimeCase.BREAK_RUN: "Break Run",
    TimeCase.EARLY_START: "Early Start",
    TimeCase.OVERTIME: "Overtime",
    TimeCase.NIGHT_RUN: "Night Run",
    TimeCase.SUNDAY: "Sunday",
    TimeCase.HOLIDAY: "Holiday",
}

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Union

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Ngày không hợp lệ (YYYY-MM-DD): {value!r}")


def parse_hhmm(value: Union[str, time]) -> time:
    """Parse an ``HH:MM`` (or ``HH:MM:00``) time of day.

    ``24:00`` is accepted as an end-of-day marker and maps to ``00:00``; an end
    time at or before the start time already means "past midnight". Shift
    times are whole minutes, so non-zero seconds are rejected.
    """

    if isinstance(value, time):
        minutes_of_day(value)
        return value

    v = (value or "").strip()
    parts = v.split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValidationError(f"Giờ không hợp lệ (HH:MM): {value!r}")

    hours, minutes = int(parts[0]), int(parts[1])
    seconds = int(parts[2]) if len(parts) == 3 else 0
    if hours == 24 and minutes == 0 and seconds == 0:
        return time(0, 0)
    if not (0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 60):
        raise ValidationError(f"Giờ không hợp lệ (HH:MM): {value!r}")
    if seconds:
        raise ValidationError(f"Giờ phải tròn phút (HH:MM): {value!r}")
    return time(hours, minutes)


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def minutes_of_day(value: time) -> int:
    if value.second or value.microsecond:
        raise ValidationError(f"Giờ phải tròn phút (HH:MM): {value.isoformat()!r}")
    return value.hour * 60 + value.minute


def duration_minutes(start: time, end: time) -> int:
    """Minutes from start to end; an end at or before start wraps past midnight."""
    start_m = minutes_of_day(start)
    end_m = minutes_of_day(end)
    if end_m <= start_m:
        end_m += MINUTES_PER_DAY
    return end_m - start_m


def day_start(day: date) -> datetime:
    return datetime.combine(day, time(0, 0))


def at_minute(day: date, minute: int) -> datetime:
    """Datetime ``minute`` minutes after midnight of ``day`` (may exceed 24h)."""
    return day_start(day) + timedelta(minutes=minute)


def format_minutes(minutes: int) -> str:
    """Format minutes as ``HH:MM`` for reports."""
    minutes = int(minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    """Ngày ngoại lệ (ngày lễ) trong lịch làm việc."""

    day: date
    name: Optional[str] = None


@dataclass(frozen=True)
class WorkCalendar:
    """Binds one shift template to a range of dates; policy settings are keyed by ``calendar_id``."""

    calendar_id: int
    code: str
    name: str
    shift_template_id: int
    apply_from: date
    apply_to: Optional[date] = None
    plan_to_infinite: bool = False

    def applies_on(self, day: date) -> bool:
        if day < self.apply_from:
            return False
        if self.plan_to_infinite or self.apply_to is None:
            return True
        return day <= self.apply_to

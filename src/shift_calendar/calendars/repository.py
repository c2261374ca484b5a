from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday, WorkCalendar


class CalendarRepository(Protocol):
    def get_by_id(self, calendar_id: int) -> Optional[WorkCalendar]:
        """Calendar header without its policy settings."""

        raise NotImplementedError


class HolidayRepository(Protocol):
    def list_between(self, *, start: date, end: date, calendar_id: Optional[int] = None) -> Sequence[Holiday]:
        """Holidays in [start, end], global ones plus those of ``calendar_id``."""

        raise NotImplementedError

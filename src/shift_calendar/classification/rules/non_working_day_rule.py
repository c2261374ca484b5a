from __future__ import annotations

from typing import Optional

from ...core.enums import TimeCase
from ..model import DaySegment, DaySegments
from .base import CaseDecision, CaseRule


class NonWorkingDayRule(CaseRule):
    """Sunday (case 7) takes precedence over holiday (case 8), running or not."""

    def decide(self, *, segment: DaySegment, is_running: bool, within_buffer: Optional[bool], day: DaySegments) -> CaseDecision:
        return CaseDecision(case_id=TimeCase.SUNDAY if day.is_sunday else TimeCase.HOLIDAY)

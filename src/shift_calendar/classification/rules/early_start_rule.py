from __future__ import annotations

from typing import Optional

from ...core.enums import TimeCase
from ..model import DaySegment, DaySegments
from .base import CaseDecision, CaseRule


class EarlyStartRule(CaseRule):
    """Production before the first shift of the day."""

    def decide(self, *, segment: DaySegment, is_running: bool, within_buffer: Optional[bool], day: DaySegments) -> CaseDecision:
        return CaseDecision(case_id=TimeCase.EARLY_START if is_running else None)

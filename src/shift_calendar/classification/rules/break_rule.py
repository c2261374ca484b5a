from __future__ import annotations

from typing import Optional

from ...core.enums import TimeCase
from ..model import DaySegment, DaySegments
from .base import CaseDecision, CaseRule


class BreakRule(CaseRule):
    """Planned break (stopped) vs. break run (running)."""

    def decide(self, *, segment: DaySegment, is_running: bool, within_buffer: Optional[bool], day: DaySegments) -> CaseDecision:
        return CaseDecision(
            case_id=TimeCase.BREAK_RUN if is_running else TimeCase.PLANNED_BREAK,
            shift_definition_id=segment.definition_id,
        )

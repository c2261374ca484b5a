from __future__ import annotations

from typing import Optional

from ...core.enums import TimeCase
from ..model import DaySegment, DaySegments
from .base import CaseDecision, CaseRule


class ShiftRule(CaseRule):
    """Stopped inside a shift is shift loss; running is ordinary productive time."""

    def decide(self, *, segment: DaySegment, is_running: bool, within_buffer: Optional[bool], day: DaySegments) -> CaseDecision:
        return CaseDecision(
            case_id=None if is_running else TimeCase.SHIFT_LOSS,
            shift_definition_id=segment.definition_id,
        )

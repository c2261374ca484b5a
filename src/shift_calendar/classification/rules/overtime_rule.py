from __future__ import annotations

from typing import Optional

from ...core.enums import TimeCase
from ..model import DaySegment, DaySegments
from .base import CaseDecision, CaseRule


class OvertimeRule(CaseRule):
    """Running after a shift: overtime inside the late buffer, night run beyond it."""

    def decide(self, *, segment: DaySegment, is_running: bool, within_buffer: Optional[bool], day: DaySegments) -> CaseDecision:
        if not is_running:
            return CaseDecision(case_id=None)
        return CaseDecision(case_id=TimeCase.OVERTIME if within_buffer else TimeCase.NIGHT_RUN)

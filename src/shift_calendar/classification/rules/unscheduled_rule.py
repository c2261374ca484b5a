from __future__ import annotations

from typing import Optional

from ...core.enums import TimeCase
from ..model import DaySegment, DaySegments
from .base import CaseDecision, CaseRule


class UnscheduledRule(CaseRule):
    """Working day with no shift at all: any production is a night run."""

    def decide(self, *, segment: DaySegment, is_running: bool, within_buffer: Optional[bool], day: DaySegments) -> CaseDecision:
        return CaseDecision(case_id=TimeCase.NIGHT_RUN if is_running else None)

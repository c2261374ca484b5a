from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import SegmentKind
from .rules.base import CaseRule
from .rules.break_rule import BreakRule
from .rules.early_start_rule import EarlyStartRule
from .rules.non_working_day_rule import NonWorkingDayRule
from .rules.overtime_rule import OvertimeRule
from .rules.shift_rule import ShiftRule
from .rules.unscheduled_rule import UnscheduledRule


def _default_rules() -> dict[SegmentKind, CaseRule]:
    overtime = OvertimeRule()
    return {
        SegmentKind.NON_WORKING_DAY: NonWorkingDayRule(),
        SegmentKind.BEFORE_FIRST_SHIFT: EarlyStartRule(),
        SegmentKind.IN_BREAK: BreakRule(),
        SegmentKind.IN_SHIFT: ShiftRule(),
        SegmentKind.GAP: overtime,
        SegmentKind.AFTER_LAST_SHIFT: overtime,
        SegmentKind.UNSCHEDULED: UnscheduledRule(),
    }


@dataclass
class CaseRuleFactory:
    """Factory Pattern: choose the case rule for a day-segment kind."""

    rules: dict[SegmentKind, CaseRule] = field(default_factory=_default_rules)

    def for_segment(self, kind: SegmentKind) -> CaseRule:
        try:
            return self.rules[kind]
        except KeyError:
            raise LookupError(f"No case rule registered for {kind.value}")

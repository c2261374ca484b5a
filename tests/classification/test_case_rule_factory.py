from datetime import date, datetime

import pytest

from shift_calendar.classification.factory import CaseRuleFactory
from shift_calendar.classification.model import DaySegment, DaySegments
from shift_calendar.classification.rules.break_rule import BreakRule
from shift_calendar.classification.rules.overtime_rule import OvertimeRule
from shift_calendar.core.enums import SegmentKind, TimeCase


def _day(is_sunday=False):
    return DaySegments(day=date(2026, 10, 19), is_sunday=is_sunday, is_holiday=not is_sunday, segments=())


def _segment(kind, definition_id=None):
    return DaySegment(
        kind=kind,
        start=datetime(2026, 10, 19, 0),
        end=datetime(2026, 10, 20, 0),
        definition_id=definition_id,
    )


def test_factory_picks_rule_per_segment_kind():
    factory = CaseRuleFactory()

    assert isinstance(factory.for_segment(SegmentKind.IN_BREAK), BreakRule)
    assert isinstance(factory.for_segment(SegmentKind.GAP), OvertimeRule)
    assert factory.for_segment(SegmentKind.GAP) is factory.for_segment(SegmentKind.AFTER_LAST_SHIFT)


def test_factory_unknown_kind_raises():
    factory = CaseRuleFactory(rules={})

    with pytest.raises(LookupError):
        factory.for_segment(SegmentKind.IN_SHIFT)


@pytest.mark.parametrize(
    "kind, is_running, within_buffer, expected",
    [
        (SegmentKind.IN_SHIFT, False, None, TimeCase.SHIFT_LOSS),
        (SegmentKind.IN_SHIFT, True, None, None),
        (SegmentKind.IN_BREAK, False, None, TimeCase.PLANNED_BREAK),
        (SegmentKind.IN_BREAK, True, None, TimeCase.BREAK_RUN),
        (SegmentKind.BEFORE_FIRST_SHIFT, True, None, TimeCase.EARLY_START),
        (SegmentKind.BEFORE_FIRST_SHIFT, False, None, None),
        (SegmentKind.AFTER_LAST_SHIFT, True, True, TimeCase.OVERTIME),
        (SegmentKind.AFTER_LAST_SHIFT, True, False, TimeCase.NIGHT_RUN),
        (SegmentKind.GAP, False, True, None),
        (SegmentKind.UNSCHEDULED, True, None, TimeCase.NIGHT_RUN),
    ],
)
def test_rule_table(kind, is_running, within_buffer, expected):
    rule = CaseRuleFactory().for_segment(kind)

    decision = rule.decide(segment=_segment(kind), is_running=is_running, within_buffer=within_buffer, day=_day())

    assert decision.case_id == expected


def test_non_working_day_rule_sunday_vs_holiday():
    rule = CaseRuleFactory().for_segment(SegmentKind.NON_WORKING_DAY)
    segment = _segment(SegmentKind.NON_WORKING_DAY)

    sunday = rule.decide(segment=segment, is_running=False, within_buffer=None, day=_day(is_sunday=True))
    holiday = rule.decide(segment=segment, is_running=True, within_buffer=None, day=_day(is_sunday=False))

    assert sunday.case_id == TimeCase.SUNDAY
    assert holiday.case_id == TimeCase.HOLIDAY


def test_shift_rules_attribute_time_to_definition():
    rule = CaseRuleFactory().for_segment(SegmentKind.IN_SHIFT)

    decision = rule.decide(
        segment=_segment(SegmentKind.IN_SHIFT, definition_id="s1"),
        is_running=False,
        within_buffer=None,
        day=_day(),
    )

    assert decision.shift_definition_id == "s1"

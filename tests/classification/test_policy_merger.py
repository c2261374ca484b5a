from __future__ import annotations

from datetime import datetime

from shift_calendar.classification.merger import PolicyMerger
from shift_calendar.classification.model import ClassifiedSegment
from shift_calendar.core.enums import SegmentKind, TimeCase
from shift_calendar.policy.model import PolicyConfig


def _segments():
    return [
        ClassifiedSegment(
            start=datetime(2026, 10, 19, 6),
            end=datetime(2026, 10, 19, 8),
            case_id=TimeCase.EARLY_START,
            kind=SegmentKind.BEFORE_FIRST_SHIFT,
            is_running=True,
            anchor_definition_id="s1",
        ),
        ClassifiedSegment(
            start=datetime(2026, 10, 19, 8),
            end=datetime(2026, 10, 19, 16),
            case_id=None,
            kind=SegmentKind.IN_SHIFT,
            is_running=True,
            shift_definition_id="s1",
        ),
        ClassifiedSegment(
            start=datetime(2026, 10, 19, 16),
            end=datetime(2026, 10, 19, 18),
            case_id=TimeCase.OVERTIME,
            kind=SegmentKind.AFTER_LAST_SHIFT,
            is_running=True,
            anchor_definition_id="s2",
        ),
        ClassifiedSegment(
            start=datetime(2026, 10, 19, 18),
            end=datetime(2026, 10, 20, 0),
            case_id=TimeCase.NIGHT_RUN,
            kind=SegmentKind.AFTER_LAST_SHIFT,
            is_running=True,
            anchor_definition_id="s2",
        ),
    ]


def test_merge_with_flags_off_changes_nothing():
    segments = _segments()

    assert PolicyMerger().merge(segments, PolicyConfig()) == segments


def test_merge_case4_into_first_shift():
    merged = PolicyMerger().merge(_segments(), PolicyConfig(merge_case4_to_shift1=True))

    assert merged[0].shift_definition_id == "s1"
    assert merged[0].case_id == TimeCase.EARLY_START
    assert merged[2].shift_definition_id is None


def test_merge_case5_into_latest_shift_keeps_night_run_separate():
    merged = PolicyMerger().merge(_segments(), PolicyConfig(merge_case5_to_latest=True))

    assert merged[2].shift_definition_id == "s2"
    assert merged[2].case_id == TimeCase.OVERTIME
    assert merged[3].shift_definition_id is None
    assert merged[0].shift_definition_id is None


def test_merge_does_not_mutate_input():
    segments = _segments()

    PolicyMerger().merge(segments, PolicyConfig(merge_case4_to_shift1=True, merge_case5_to_latest=True))

    assert segments[0].shift_definition_id is None
    assert segments[2].shift_definition_id is None

from __future__ import annotations

from datetime import date, datetime

import pytest

from shift_calendar.calendars.model import Holiday
from shift_calendar.core.enums import TimeCase
from shift_calendar.core.exceptions import NotFoundError, ValidationError
from shift_calendar.policy.model import PolicyConfig
from shift_calendar.runstate.model import RunStateInterval

MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)


def _case_at(segments, moment):
    for seg in segments:
        if seg.start <= moment < seg.end:
            return seg.case_id
    raise AssertionError(f"no segment covers {moment}")


def test_classify_day_runs_full_pipeline(fakes, container):
    fakes.run_states.intervals[7] = [
        RunStateInterval(datetime(2026, 10, 19, 8), datetime(2026, 10, 19, 10), True),
        RunStateInterval(datetime(2026, 10, 19, 10), datetime(2026, 10, 19, 11), False),
    ]

    result = container.classification_service.classify_day(machine_id=7, day=MONDAY, calendar_id=1)

    assert result.machine_id == 7
    assert _case_at(result.segments, datetime(2026, 10, 19, 10, 30)) == TimeCase.SHIFT_LOSS


def test_classify_day_applies_merge_policy(fakes, container):
    fakes.policies.settings[1] = {"mergeCase5ToLatest": "true", "lateBufferMinutes": "60"}
    fakes.run_states.intervals[7] = [
        RunStateInterval(datetime(2026, 10, 20, 0), datetime(2026, 10, 20, 2), True),
    ]

    result = container.classification_service.classify_day(machine_id=7, day=TUESDAY, calendar_id=1)
    overtime = [s for s in result.segments if s.case_id == TimeCase.OVERTIME]

    assert [(s.start.hour, s.end.hour) for s in overtime] == [(0, 1)]
    assert overtime[0].shift_definition_id == "s2"


def test_classify_day_uses_calendar_holidays(fakes, container):
    fakes.holidays.holidays.append(Holiday(day=TUESDAY, name="Founding day"))
    fakes.run_states.intervals[7] = [
        RunStateInterval(datetime(2026, 10, 20, 9), datetime(2026, 10, 20, 10), True),
    ]

    result = container.classification_service.classify_day(machine_id=7, day=TUESDAY, calendar_id=1)

    assert _case_at(result.segments, datetime(2026, 10, 20, 9, 30)) == TimeCase.HOLIDAY
    assert fakes.holidays.calls == [(MONDAY, TUESDAY)]


def test_classify_day_unknown_calendar(container):
    with pytest.raises(NotFoundError):
        container.classification_service.classify_day(machine_id=7, day=MONDAY, calendar_id=99)


def test_classify_day_outside_calendar_range(container):
    with pytest.raises(ValidationError):
        container.classification_service.classify_day(machine_id=7, day=date(2025, 12, 31), calendar_id=1)


def test_classify_range_isolates_failures(fakes, make_container):
    container = make_container(fakes, max_workers=4)
    fakes.run_states.broken_machines.add(2)

    batch = container.classification_service.classify_range(
        machine_ids=[1, 2],
        start=MONDAY,
        end=TUESDAY,
        calendar_id=1,
    )

    assert not batch.ok
    assert sorted((r.machine_id, r.day) for r in batch.results) == [(1, MONDAY), (1, TUESDAY)]
    assert sorted((f.machine_id, f.day) for f in batch.failures) == [(2, MONDAY), (2, TUESDAY)]
    assert all("Interval" in f.error for f in batch.failures)


def test_classify_range_rejects_reversed_dates(container):
    with pytest.raises(ValidationError):
        container.classification_service.classify_range(machine_ids=[1], start=TUESDAY, end=MONDAY, calendar_id=1)


def test_classify_range_rejects_spans_over_a_year(fakes, container):
    with pytest.raises(ValidationError) as exc:
        container.classification_service.classify_range(
            machine_ids=[1], start=date(2026, 1, 1), end=date(2027, 1, 2), calendar_id=1
        )

    assert "end" in exc.value.errors
    assert fakes.holidays.calls == []


def test_classify_intervals_is_pure(two_shift_template, container):
    intervals = [RunStateInterval(datetime(2026, 10, 19, 12), datetime(2026, 10, 19, 12, 30), True)]

    segments = container.classification_service.classify_intervals(
        day=MONDAY,
        intervals=intervals,
        template=two_shift_template,
        policy=PolicyConfig(),
    )

    assert _case_at(segments, datetime(2026, 10, 19, 12, 10)) == TimeCase.BREAK_RUN

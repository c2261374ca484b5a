from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..core.exceptions import InputError
from ..policy.model import PolicyConfig
from ..runstate.model import RunStateInterval
from .factory import CaseRuleFactory
from .model import ClassifiedSegment, DaySegment, DaySegments


@dataclass(frozen=True)
class _State:
    start: datetime
    end: datetime
    is_running: Optional[bool]


@dataclass(frozen=True)
class _Zone:
    segment: DaySegment
    start: datetime
    end: datetime
    within_buffer: Optional[bool] = None


class IntervalClassifier:
    """Merges run-state intervals with a resolved day into classified segments.

    Both streams are turned into tilings of the day window and swept with two
    pointers, so every output segment lies inside exactly one run-state span
    and exactly one day segment. Time with no run-state data is emitted with
    ``is_running=None`` and no case.
    """

    def __init__(self, rule_factory: CaseRuleFactory | None = None):
        self._factory = rule_factory or CaseRuleFactory()

    def classify(
        self,
        day_intervals: Optional[Sequence[RunStateInterval]],
        segments: DaySegments,
        policy: Optional[PolicyConfig] = None,
    ) -> list[ClassifiedSegment]:
        policy = policy or PolicyConfig()
        window_start, window_end = segments.window
        states = self._states(day_intervals, window_start, window_end)
        zones = self._zones(segments, policy)
        self._check_tiling(zones, window_start, window_end)

        out: list[ClassifiedSegment] = []
        i = j = 0
        cursor = window_start
        while cursor < window_end:
            state, zone = states[i], zones[j]
            stop = min(state.end, zone.end)
            out.append(self._classify_span(cursor, stop, state, zone, segments))
            cursor = stop
            if state.end == stop:
                i += 1
            if zone.end == stop:
                j += 1
        return out

    def _classify_span(
        self,
        start: datetime,
        end: datetime,
        state: _State,
        zone: _Zone,
        day: DaySegments,
    ) -> ClassifiedSegment:
        segment = zone.segment
        if state.is_running is None:
            return ClassifiedSegment(
                start=start,
                end=end,
                case_id=None,
                kind=segment.kind,
                shift_definition_id=segment.definition_id,
                anchor_definition_id=segment.anchor_definition_id,
            )

        rule = self._factory.for_segment(segment.kind)
        decision = rule.decide(
            segment=segment,
            is_running=state.is_running,
            within_buffer=zone.within_buffer,
            day=day,
        )
        return ClassifiedSegment(
            start=start,
            end=end,
            case_id=decision.case_id,
            kind=segment.kind,
            is_running=state.is_running,
            shift_definition_id=decision.shift_definition_id,
            anchor_definition_id=segment.anchor_definition_id,
        )

    @staticmethod
    def _states(
        day_intervals: Optional[Sequence[RunStateInterval]],
        window_start: datetime,
        window_end: datetime,
    ) -> list[_State]:
        """Validate intervals, clip them to the day and fill uncovered time."""

        if day_intervals is None:
            raise InputError("Run-state intervals are missing")

        out: list[_State] = []
        cursor = window_start
        previous_end: Optional[datetime] = None
        for index, iv in enumerate(day_intervals):
            if iv.start is None or iv.end is None:
                raise InputError(f"Interval #{index} has no start/end")
            if iv.start.tzinfo is not None or iv.end.tzinfo is not None:
                raise InputError(f"Interval #{index} must use naive local datetimes")
            if iv.start >= iv.end:
                raise InputError(f"Interval #{index} is empty or reversed ({iv.start} >= {iv.end})")
            if previous_end is not None and iv.start < previous_end:
                raise InputError(f"Interval #{index} is unsorted or overlaps the previous interval")
            previous_end = iv.end

            start = max(iv.start, window_start)
            end = min(iv.end, window_end)
            if start >= end:
                continue
            if start > cursor:
                out.append(_State(start=cursor, end=start, is_running=None))
            out.append(_State(start=start, end=end, is_running=bool(iv.is_running)))
            cursor = end

        if cursor < window_end:
            out.append(_State(start=cursor, end=window_end, is_running=None))
        return out

    @staticmethod
    def _zones(segments: DaySegments, policy: PolicyConfig) -> list[_Zone]:
        """Day segments, with anchored regions split at the late-buffer boundary."""

        buffer = timedelta(minutes=int(policy.late_buffer_minutes))
        out: list[_Zone] = []
        for seg in segments.segments:
            if not seg.kind.is_anchored or seg.anchor_end is None:
                out.append(_Zone(segment=seg, start=seg.start, end=seg.end))
                continue

            cut = seg.anchor_end + buffer
            if cut <= seg.start:
                out.append(_Zone(segment=seg, start=seg.start, end=seg.end, within_buffer=False))
            elif cut >= seg.end:
                out.append(_Zone(segment=seg, start=seg.start, end=seg.end, within_buffer=True))
            else:
                out.append(_Zone(segment=seg, start=seg.start, end=cut, within_buffer=True))
                out.append(_Zone(segment=seg, start=cut, end=seg.end, within_buffer=False))
        return out

    @staticmethod
    def _check_tiling(zones: list[_Zone], window_start: datetime, window_end: datetime) -> None:
        cursor = window_start
        for zone in zones:
            if zone.start != cursor or zone.end <= zone.start:
                raise InputError(f"Day segments do not tile the day at {cursor.isoformat()}")
            cursor = zone.end
        if cursor != window_end:
            raise InputError(f"Day segments end at {cursor.isoformat()}, expected {window_end.isoformat()}")

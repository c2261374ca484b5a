from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import AbstractSet, Optional

from ..common.time_utils import at_minute, day_start, format_hhmm, minutes_of_day
from ..core.enums import DayOfWeek, SegmentKind
from ..core.exceptions import ConfigurationError
from ..policy.model import PolicyConfig
from ..shifts.model import ShiftDefinition, ShiftTemplate
from .model import DaySegment, DaySegments

SUNDAY = 6


@dataclass(frozen=True)
class _Window:
    """A definition's occurrence on a concrete date, in absolute time."""

    definition: ShiftDefinition
    base: datetime
    start: datetime
    end: datetime

    @classmethod
    def on(cls, definition: ShiftDefinition, day: date) -> "_Window":
        start_m, end_m = definition.span()
        return cls(
            definition=definition,
            base=day_start(day),
            start=at_minute(day, start_m),
            end=at_minute(day, end_m),
        )

    def breaks(self) -> list[tuple[datetime, datetime]]:
        return [
            (self.base + timedelta(minutes=b_start), self.base + timedelta(minutes=b_end))
            for b_start, b_end, _ in self.definition.break_spans()
        ]


def is_non_working_day(day: date, holidays: AbstractSet[date], policy: PolicyConfig) -> bool:
    if policy.auto_virtual_shift:
        return False
    return day.weekday() == SUNDAY or day in holidays


class ShiftCalendarResolver:
    """Turns a calendar date + shift template into the day's ordered windows.

    The day is the 24h window starting at midnight. Overnight definitions are
    split at 24:00; the part after midnight is carried into the next day's
    resolution as shift time.
    """

    def resolve(
        self,
        day: date,
        template: ShiftTemplate,
        holidays: Optional[AbstractSet[date]] = None,
        policy: Optional[PolicyConfig] = None,
    ) -> DaySegments:
        holidays = holidays or frozenset()
        policy = policy or PolicyConfig()
        start = day_start(day)
        end = start + timedelta(days=1)
        is_sunday = day.weekday() == SUNDAY
        is_holiday = day in holidays

        if is_non_working_day(day, holidays, policy):
            return DaySegments(
                day=day,
                is_sunday=is_sunday,
                is_holiday=is_holiday,
                segments=(DaySegment(kind=SegmentKind.NON_WORKING_DAY, start=start, end=end),),
            )

        own = self._windows(day, template)
        previous_day = day - timedelta(days=1)
        previous = [] if is_non_working_day(previous_day, holidays, policy) else self._windows(previous_day, template)
        carry = [w for w in previous if w.end > start]
        previous_last = max(previous, key=lambda w: (w.end, w.definition.id)) if previous else None

        self._check_overlaps(day, carry + own, start)

        segments: list[DaySegment] = []
        cursor = start
        for w in carry:
            segments.extend(self._shift_segments(w, start, end))
            cursor = max(cursor, w.end)

        first = own[0] if own else None
        lead_end = first.start if first else end
        segments.extend(self._leading(day, cursor, lead_end, policy, previous_last, first))
        cursor = max(cursor, lead_end)

        before: Optional[_Window] = None
        for w in own:
            if before is not None and cursor < w.start:
                segments.append(
                    DaySegment(
                        kind=SegmentKind.GAP,
                        start=cursor,
                        end=w.start,
                        anchor_definition_id=before.definition.id,
                        anchor_end=before.end,
                    )
                )
            segments.extend(self._shift_segments(w, start, end))
            cursor = min(w.end, end)
            before = w

        if before is not None and cursor < end:
            segments.append(
                DaySegment(
                    kind=SegmentKind.AFTER_LAST_SHIFT,
                    start=cursor,
                    end=end,
                    anchor_definition_id=before.definition.id,
                    anchor_end=before.end,
                )
            )

        return DaySegments(
            day=day,
            is_sunday=is_sunday,
            is_holiday=is_holiday,
            segments=tuple(segments),
            first_definition_id=first.definition.id if first else None,
            last_definition_id=own[-1].definition.id if own else None,
        )

    @staticmethod
    def _windows(day: date, template: ShiftTemplate) -> list[_Window]:
        weekday = DayOfWeek.from_weekday(day.weekday())
        return [_Window.on(d, day) for d in template.active_on(weekday)]

    @staticmethod
    def _check_overlaps(day: date, windows: list[_Window], start: datetime) -> None:
        ordered = sorted(windows, key=lambda w: (max(w.start, start), w.end))
        for a, b in zip(ordered, ordered[1:]):
            if max(b.start, start) < a.end:
                weekday = DayOfWeek.from_weekday(day.weekday()).value
                message = (
                    f"Shifts '{a.definition.name}' ({format_hhmm(a.definition.start_time)}-"
                    f"{format_hhmm(a.definition.end_time)}) and '{b.definition.name}' "
                    f"({format_hhmm(b.definition.start_time)}-{format_hhmm(b.definition.end_time)}) "
                    f"overlap on {day.isoformat()}"
                )
                raise ConfigurationError(message, {f"overlap-{weekday}": message})

    @staticmethod
    def _leading(
        day: date,
        cursor: datetime,
        lead_end: datetime,
        policy: PolicyConfig,
        previous_last: Optional[_Window],
        first: Optional[_Window],
    ) -> list[DaySegment]:
        """Region from midnight (or the carried-over shift) up to the first own shift."""

        if cursor >= lead_end:
            return []

        start = day_start(day)
        trailing_end = cursor
        if previous_last is not None:
            if policy.work_day_start is not None:
                boundary = at_minute(day, minutes_of_day(policy.work_day_start))
                trailing_end = min(max(boundary, cursor), lead_end)
            elif previous_last.end >= start:
                trailing_end = lead_end

        out: list[DaySegment] = []
        if trailing_end > cursor:
            out.append(
                DaySegment(
                    kind=SegmentKind.AFTER_LAST_SHIFT,
                    start=cursor,
                    end=trailing_end,
                    anchor_definition_id=previous_last.definition.id,
                    anchor_end=previous_last.end,
                )
            )
        if trailing_end < lead_end:
            if first is not None:
                out.append(
                    DaySegment(
                        kind=SegmentKind.BEFORE_FIRST_SHIFT,
                        start=trailing_end,
                        end=lead_end,
                        anchor_definition_id=first.definition.id,
                    )
                )
            else:
                out.append(DaySegment(kind=SegmentKind.UNSCHEDULED, start=trailing_end, end=lead_end))
        return out

    @staticmethod
    def _shift_segments(w: _Window, day_begin: datetime, day_end: datetime) -> list[DaySegment]:
        """Shift window clipped to the day, with its breaks cut out as IN_BREAK."""

        cursor = max(w.start, day_begin)
        stop = min(w.end, day_end)
        def_id = w.definition.id
        out: list[DaySegment] = []

        for b_start, b_end in w.breaks():
            b_start = max(b_start, cursor)
            b_end = min(b_end, stop)
            if b_end <= b_start:
                continue
            if b_start > cursor:
                out.append(DaySegment(kind=SegmentKind.IN_SHIFT, start=cursor, end=b_start, definition_id=def_id))
            out.append(DaySegment(kind=SegmentKind.IN_BREAK, start=b_start, end=b_end, definition_id=def_id))
            cursor = b_end

        if cursor < stop:
            out.append(DaySegment(kind=SegmentKind.IN_SHIFT, start=cursor, end=stop, definition_id=def_id))
        return out

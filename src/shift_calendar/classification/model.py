from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.enums import SegmentKind, TimeCase


@dataclass(frozen=True)
class DaySegment:
    """One shift/break/gap window of a resolved day.

    ``anchor_definition_id`` names the shift a non-shift region is measured
    against: the day's first shift for BEFORE_FIRST_SHIFT, the shift that
    just ended for GAP/AFTER_LAST_SHIFT (whose ``anchor_end`` starts the late
    buffer).
    """

    kind: SegmentKind
    start: datetime
    end: datetime
    definition_id: Optional[str] = None
    anchor_definition_id: Optional[str] = None
    anchor_end: Optional[datetime] = None


@dataclass(frozen=True)
class DaySegments:
    day: date
    is_sunday: bool
    is_holiday: bool
    segments: tuple[DaySegment, ...]
    first_definition_id: Optional[str] = None
    last_definition_id: Optional[str] = None

    @property
    def window(self) -> tuple[datetime, datetime]:
        start = datetime.combine(self.day, datetime.min.time())
        return start, start + timedelta(days=1)

    @property
    def is_non_working(self) -> bool:
        return len(self.segments) == 1 and self.segments[0].kind == SegmentKind.NON_WORKING_DAY


@dataclass(frozen=True)
class ClassifiedSegment:
    """Read-model: a span of the day with its time-shift case.

    ``case_id`` is None for ordinary productive shift time and for time that
    is outside every case (stopped outside shifts, no run-state data).
    """

    start: datetime
    end: datetime
    case_id: Optional[TimeCase]
    kind: SegmentKind
    is_running: Optional[bool] = None
    shift_definition_id: Optional[str] = None
    anchor_definition_id: Optional[str] = None

    @property
    def duration_seconds(self) -> int:
        return int((self.end - self.start).total_seconds())

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "caseId": int(self.case_id) if self.case_id is not None else None,
            "caseName": self.case_id.label if self.case_id is not None else None,
            "kind": self.kind.value,
            "isRunning": self.is_running,
            "shiftDefinitionId": self.shift_definition_id,
            "anchorDefinitionId": self.anchor_definition_id,
        }

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RunStateInterval:
    """A maximal span ``[start, end)`` during which a machine was running or stopped."""

    start: datetime
    end: datetime
    is_running: bool

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60

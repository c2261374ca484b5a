from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import RunStateInterval


class RunStateRepository(Protocol):
    def list_for_machine(self, *, machine_id: int, start: datetime, end: datetime) -> Sequence[RunStateInterval]:
        """Intervals overlapping [start, end), sorted by start."""

        raise NotImplementedError

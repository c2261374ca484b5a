from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import TimeCase
from ..model import DaySegment, DaySegments


@dataclass(frozen=True)
class CaseDecision:
    case_id: Optional[TimeCase]
    shift_definition_id: Optional[str] = None


class CaseRule(ABC):
    """Strategy Pattern: encapsulate how a span of one segment kind is classified.

    ``within_buffer`` is only set for regions measured against a late buffer.
    """

    @abstractmethod
    def decide(
        self,
        *,
        segment: DaySegment,
        is_running: bool,
        within_buffer: Optional[bool],
        day: DaySegments,
    ) -> CaseDecision:
        raise NotImplementedError

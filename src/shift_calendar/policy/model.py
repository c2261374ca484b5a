from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import time
from typing import Any, Mapping, Optional

from ..common.time_utils import format_hhmm, parse_hhmm
from ..common.validators import parse_bool
from ..core.constants import DEFAULT_LATE_BUFFER_MINUTES
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

LATE_BUFFER_KEY = "lateBufferMinutes"
MERGE_CASE4_KEY = "mergeCase4ToShift1"
MERGE_CASE5_KEY = "mergeCase5ToLatest"
AUTO_VIRTUAL_KEY = "autoVirtualShift"
WORK_DAY_START_KEY = "workDateStartTime"

SETTING_KEYS = (LATE_BUFFER_KEY, MERGE_CASE4_KEY, MERGE_CASE5_KEY, AUTO_VIRTUAL_KEY, WORK_DAY_START_KEY)


def _late_buffer(value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        minutes = int(str(value).strip())
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r, using default %d", LATE_BUFFER_KEY, value, default)
        return default
    if minutes < 0:
        logger.warning("Negative %s=%r, using default %d", LATE_BUFFER_KEY, value, default)
        return default
    return minutes


def _work_day_start(value: Any) -> Optional[time]:
    if value is None or value == "":
        return None
    try:
        return parse_hhmm(value)
    except ValidationError:
        logger.warning("Invalid %s=%r, ignoring", WORK_DAY_START_KEY, value)
        return None


@dataclass(frozen=True)
class PolicyConfig:
    """Time-shift case policy; immutable for the duration of a classification run.

    ``work_day_start`` optionally marks when a work date begins: time before
    it still belongs to the previous work date's trailing overtime/night run.
    """

    late_buffer_minutes: int = DEFAULT_LATE_BUFFER_MINUTES
    merge_case4_to_shift1: bool = False
    merge_case5_to_latest: bool = False
    auto_virtual_shift: bool = False
    work_day_start: Optional[time] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "late_buffer_minutes",
            _late_buffer(self.late_buffer_minutes, DEFAULT_LATE_BUFFER_MINUTES),
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Mapping[str, Any]],
        *,
        default_late_buffer: int = DEFAULT_LATE_BUFFER_MINUTES,
    ) -> "PolicyConfig":
        """Build from key/value settings; bad or missing values fall back to defaults."""

        settings = settings or {}
        return cls(
            late_buffer_minutes=_late_buffer(settings.get(LATE_BUFFER_KEY), default_late_buffer),
            merge_case4_to_shift1=parse_bool(settings.get(MERGE_CASE4_KEY)),
            merge_case5_to_latest=parse_bool(settings.get(MERGE_CASE5_KEY)),
            auto_virtual_shift=parse_bool(settings.get(AUTO_VIRTUAL_KEY)),
            work_day_start=_work_day_start(settings.get(WORK_DAY_START_KEY)),
        )

    def to_settings(self) -> dict[str, str]:
        return {
            LATE_BUFFER_KEY: str(int(self.late_buffer_minutes)),
            MERGE_CASE4_KEY: "true" if self.merge_case4_to_shift1 else "false",
            MERGE_CASE5_KEY: "true" if self.merge_case5_to_latest else "false",
            AUTO_VIRTUAL_KEY: "true" if self.auto_virtual_shift else "false",
            WORK_DAY_START_KEY: format_hhmm(self.work_day_start) if self.work_day_start else "",
        }

    def affected_cases(self) -> list[int]:
        """Cases whose attribution differs from the default policy (for the case overview)."""

        affected = []
        if self.merge_case4_to_shift1:
            affected.append(4)
        if self.late_buffer_minutes != DEFAULT_LATE_BUFFER_MINUTES or self.merge_case5_to_latest:
            affected.append(5)
        if self.late_buffer_minutes != DEFAULT_LATE_BUFFER_MINUTES:
            affected.append(6)
        if self.auto_virtual_shift:
            affected.extend([7, 8])
        return affected

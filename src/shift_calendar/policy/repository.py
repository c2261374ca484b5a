from __future__ import annotations

from typing import Mapping, Protocol


class PolicySettingsRepository(Protocol):
    """Key/value settings store, scoped per work calendar."""

    def get_settings(self, calendar_id: int) -> Mapping[str, str]:
        raise NotImplementedError

    def save_settings(self, calendar_id: int, settings: Mapping[str, str]) -> None:
        raise NotImplementedError

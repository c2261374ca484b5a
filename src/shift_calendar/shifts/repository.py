from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftTemplate


class ShiftTemplateRepository(Protocol):
    def list_all(self) -> Sequence[ShiftTemplate]:
        raise NotImplementedError

    def get_by_id(self, template_id: int) -> Optional[ShiftTemplate]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[ShiftTemplate]:
        raise NotImplementedError

    def create(self, template: ShiftTemplate) -> int:
        """Persist a new template with its definitions and breaks.

        Returns template_id.
        """

        raise NotImplementedError

    def update(self, template_id: int, template: ShiftTemplate) -> bool:
        """Replace header, definitions and breaks of an existing template."""

        raise NotImplementedError

    def delete(self, template_id: int) -> bool:
        raise NotImplementedError

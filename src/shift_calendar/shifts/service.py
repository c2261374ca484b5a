from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional

from ..common.time_utils import parse_hhmm
from ..core.enums import DayOfWeek
from ..core.exceptions import ConfigurationError, NotFoundError, ValidationError
from .model import ShiftTemplate, generate_id
from .repository import ShiftTemplateRepository
from .summary import WeeklyAggregator, WeekSummary
from .validation import validate_template

logger = logging.getLogger(__name__)

MODE_NORMAL = "normal"
MODE_ADVANCED = "advanced"


def _definition_errors(index: int, raw: Mapping[str, Any]) -> dict[str, str]:
    """Field errors for values that cannot even be parsed."""

    errors: dict[str, str] = {}
    try:
        parse_hhmm(raw.get("startTime", raw.get("start_time", "")))
        parse_hhmm(raw.get("endTime", raw.get("end_time", "")))
    except ValidationError:
        errors[f"def-{index}-time"] = "Start and end time are required (HH:MM)"

    valid_days = {d.value for d in DayOfWeek}
    if any(str(d).strip().lower() not in valid_days for d in raw.get("days") or []):
        errors[f"def-{index}-days"] = "Invalid day of week"

    for j, brk in enumerate(raw.get("breaks") or []):
        try:
            parse_hhmm(brk.get("startTime", brk.get("start_time", "")))
            parse_hhmm(brk.get("endTime", brk.get("end_time", "")))
        except ValidationError:
            errors[f"def-{index}-break-{j}"] = "Break start and end time are required (HH:MM)"
    return errors


class ShiftTemplateService:
    """Nghiệp vụ mẫu ca: kiểm tra, lưu và tổng hợp giờ theo tuần."""

    def __init__(self, templates: ShiftTemplateRepository, *, aggregator: Optional[WeeklyAggregator] = None):
        self._templates = templates
        self._aggregator = aggregator or WeeklyAggregator()

    @staticmethod
    def _apply_shared(payload: Mapping[str, Any]) -> dict:
        """Normal mode: shared days/breaks are copied onto every definition."""

        data = dict(payload)
        if str(data.get("mode") or MODE_ADVANCED).lower() != MODE_NORMAL:
            return data

        shared_days = list(data.get("sharedDays") or data.get("shared_days") or [])
        shared_breaks = list(data.get("sharedBreaks") or data.get("shared_breaks") or [])
        definitions = []
        for raw in data.get("definitions") or []:
            d = dict(raw)
            d["days"] = shared_days
            d["breaks"] = [{**b, "id": generate_id()} for b in shared_breaks]
            definitions.append(d)
        data["definitions"] = definitions
        return data

    def parse(self, payload: Mapping[str, Any]) -> tuple[Optional[ShiftTemplate], dict[str, str]]:
        if not isinstance(payload, Mapping):
            raise ValidationError("Dữ liệu mẫu ca không hợp lệ")

        data = self._apply_shared(payload)
        errors: dict[str, str] = {}
        if str(data.get("mode") or "").lower() == MODE_NORMAL and not data.get("sharedDays", data.get("shared_days")):
            errors["sharedDays"] = "Select at least one day"

        raw_definitions = data.get("definitions") or []
        for index, raw in enumerate(raw_definitions):
            errors.update(_definition_errors(index, raw))
        if errors:
            return None, errors

        try:
            template = ShiftTemplate.from_dict(data)
        except ValidationError as e:
            return None, e.errors or {"template": str(e)}
        return template, errors

    def validate(self, payload: Mapping[str, Any]) -> dict[str, str]:
        """Error map for the template editor; empty when the payload is valid."""

        template, errors = self.parse(payload)
        if template is None:
            return errors
        return validate_template(template)

    def _checked(self, payload: Mapping[str, Any]) -> ShiftTemplate:
        template, errors = self.parse(payload)
        if template is not None:
            errors = validate_template(template)
        if errors:
            if any(k.startswith("overlap-") for k in errors):
                raise ConfigurationError("Các ca trong mẫu bị chồng giờ", errors)
            raise ValidationError("Mẫu ca không hợp lệ", errors)
        return template

    def list_templates(self) -> list[ShiftTemplate]:
        return self._templates.list_all()

    def get(self, template_id: int) -> ShiftTemplate:
        template = self._templates.get_by_id(int(template_id))
        if not template:
            raise NotFoundError(f"Mẫu ca không tồn tại: {template_id}")
        return template

    def create(self, payload: Mapping[str, Any]) -> ShiftTemplate:
        template = self._checked(payload)
        if self._templates.get_by_code(template.code):
            raise ValidationError("Mã mẫu ca đã tồn tại", {"code": "Code already exists"})

        template_id = self._templates.create(template)
        logger.info("Created shift template %s (id=%s)", template.code, template_id)
        return replace(template, id=template_id)

    def update(self, template_id: int, payload: Mapping[str, Any]) -> ShiftTemplate:
        current = self.get(template_id)
        template = self._checked(payload)

        other = self._templates.get_by_code(template.code)
        if other and other.id != current.id:
            raise ValidationError("Mã mẫu ca đã tồn tại", {"code": "Code already exists"})

        template = replace(template, id=current.id)
        if not self._templates.update(int(template_id), template):
            raise NotFoundError(f"Mẫu ca không tồn tại: {template_id}")
        logger.info("Updated shift template %s (id=%s)", template.code, template_id)
        return template

    def delete(self, template_id: int) -> None:
        if not self._templates.delete(int(template_id)):
            raise NotFoundError(f"Mẫu ca không tồn tại: {template_id}")
        logger.info("Deleted shift template id=%s", template_id)

    def week_summary(self, template_id: int) -> WeekSummary:
        return self._aggregator.summarize(self.get(template_id))


from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import MINUTES_PER_DAY
from ..core.enums import DayOfWeek
from .model import ShiftDefinition, ShiftTemplate

WEEK_MINUTES = 7 * MINUTES_PER_DAY


@dataclass(frozen=True)
class ShiftOverlap:
    day: DayOfWeek
    first_id: str
    second_id: str


def _week_pieces(definition: ShiftDefinition) -> list[tuple[int, int]]:
    """Active windows of a definition as minute ranges within one week.

    Sunday overnight shifts spill into Monday, so a window wrapping past the
    end of the week is split in two.
    """

    start_m, end_m = definition.span()
    out: list[tuple[int, int]] = []
    for day in definition.days:
        offset = day.weekday * MINUTES_PER_DAY
        start, end = offset + start_m, offset + end_m
        if end <= WEEK_MINUTES:
            out.append((start, end))
        else:
            out.append((start, WEEK_MINUTES))
            out.append((0, end - WEEK_MINUTES))
    return out


def find_overlaps(template: ShiftTemplate) -> list[ShiftOverlap]:
    pieces = []
    for definition in template.definitions:
        for start, end in _week_pieces(definition):
            pieces.append((start, end, definition.id))
    pieces.sort()

    overlaps: list[ShiftOverlap] = []
    seen: set[tuple[int, str, str]] = set()
    for i, (start, end, def_id) in enumerate(pieces):
        for other_start, other_end, other_id in pieces[i + 1 :]:
            if other_start >= end:
                break
            if other_id == def_id:
                continue
            day = DayOfWeek.from_weekday(other_start // MINUTES_PER_DAY)
            key = (day.weekday, *sorted((def_id, other_id)))
            if key in seen:
                continue
            seen.add(key)
            overlaps.append(ShiftOverlap(day=day, first_id=def_id, second_id=other_id))
    return overlaps


def validate_template(template: ShiftTemplate) -> dict[str, str]:
    """Save-time checks, keyed like the template editor's error fields."""

    errors: dict[str, str] = {}

    if not template.code.strip():
        errors["code"] = "Code is required"
    if not template.name.strip():
        errors["name"] = "Name is required"
    if not template.definitions:
        errors["definitions"] = "At least one shift definition is required"

    ids = [d.id for d in template.definitions]
    if len(set(ids)) != len(ids):
        errors["definitions"] = "Shift definition ids must be unique"

    for index, definition in enumerate(template.definitions):
        if not definition.name.strip():
            errors[f"def-{index}-name"] = "Shift name is required"
        if not definition.days:
            errors[f"def-{index}-days"] = "Select at least one day"

        start_m, end_m = definition.span()
        previous_end = None
        for b_start, b_end, brk in definition.break_spans():
            key = f"def-{index}-break-{definition.breaks.index(brk)}"
            if b_start < start_m or b_end > end_m:
                errors[key] = "Break must be within the shift time"
            elif previous_end is not None and b_start < previous_end:
                errors[key] = "Break overlaps another break"
            previous_end = b_end if previous_end is None else max(previous_end, b_end)

    names = {d.id: d.name or d.id for d in template.definitions}
    for overlap in find_overlaps(template):
        errors[f"overlap-{overlap.day.value}"] = (
            f"Shifts '{names[overlap.first_id]}' and '{names[overlap.second_id]}' overlap on {overlap.day.value}"
        )

    return errors

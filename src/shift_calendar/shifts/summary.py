from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import DayOfWeek
from .model import ShiftTemplate


def _hours(minutes: int) -> float:
    return round(minutes / 60, 4)


@dataclass(frozen=True)
class WeekSummary:
    """Scheduled (non-break) hours per definition and weekday.

    Feeds the "Weekly Hours Summary" chart and serves as the scheduled-time
    denominator for OEE reporting.
    """

    per_definition: dict[str, dict[DayOfWeek, float]]
    totals_per_day: dict[DayOfWeek, float]
    grand_total: float
    break_hours_per_day: dict[DayOfWeek, float]
    total_break_hours: float

    def to_dict(self) -> dict:
        return {
            "perDefinition": {
                def_id: {day.value: hours for day, hours in per_day.items()}
                for def_id, per_day in self.per_definition.items()
            },
            "totalsPerDay": {day.value: hours for day, hours in self.totals_per_day.items()},
            "grandTotal": self.grand_total,
            "breakHoursPerDay": {day.value: hours for day, hours in self.break_hours_per_day.items()},
            "totalBreakHours": self.total_break_hours,
        }


class WeeklyAggregator:
    """Sums scheduled hours from the template alone (no run-state data)."""

    def summarize(self, template: ShiftTemplate) -> WeekSummary:
        per_definition: dict[str, dict[DayOfWeek, float]] = {}
        work_minutes = {day: 0 for day in DayOfWeek}
        break_minutes = {day: 0 for day in DayOfWeek}

        for definition in template.definitions:
            per_day: dict[DayOfWeek, float] = {}
            for day in DayOfWeek:
                if not definition.is_active_on(day):
                    continue
                # Overnight shifts count toward the day they start on.
                per_day[day] = _hours(definition.scheduled_minutes)
                work_minutes[day] += definition.scheduled_minutes
                break_minutes[day] += definition.break_minutes
            per_definition[definition.id] = per_day

        return WeekSummary(
            per_definition=per_definition,
            totals_per_day={day: _hours(m) for day, m in work_minutes.items()},
            grand_total=_hours(sum(work_minutes.values())),
            break_hours_per_day={day: _hours(m) for day, m in break_minutes.items()},
            total_break_hours=_hours(sum(break_minutes.values())),
        )

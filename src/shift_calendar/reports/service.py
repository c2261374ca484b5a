from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..classification.service import BatchResult, ClassificationService
from ..common.time_utils import format_minutes
from ..core.enums import TimeCase

NO_CASE = "-"

REPORT_FIELDS = [
    "machine_id",
    "work_date",
    "start",
    "end",
    "kind",
    "is_running",
    "case_id",
    "case_name",
    "shift_definition_id",
    "duration",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
    failures: list[dict]


class CaseReportService:
    """Báo cáo thời gian theo 8 trường hợp (case) cho từng máy."""

    def __init__(self, classification: ClassificationService):
        self._classification = classification

    def build_case_report(
        self,
        *,
        machine_ids: Sequence[int],
        start: date,
        end: date,
        calendar_id: int,
    ) -> ReportData:
        batch = self._classification.classify_range(
            machine_ids=machine_ids,
            start=start,
            end=end,
            calendar_id=calendar_id,
        )
        return self.from_batch(batch)

    def from_batch(self, batch: BatchResult) -> ReportData:
        summary_map: dict[tuple[int, Optional[int], Optional[str]], dict] = {}
        out_rows: list[dict] = []

        for result in sorted(batch.results, key=lambda r: (r.machine_id, r.day)):
            for seg in result.segments:
                seconds = seg.duration_seconds
                minutes = seconds // 60
                case_id = int(seg.case_id) if seg.case_id is not None else None

                out_rows.append(
                    {
                        "machine_id": result.machine_id,
                        "work_date": result.day.strftime("%Y-%m-%d"),
                        "start": seg.start.strftime("%H:%M"),
                        "end": seg.end.strftime("%H:%M") if seg.end.date() == result.day else "24:00",
                        "kind": seg.kind.value,
                        "is_running": NO_CASE if seg.is_running is None else ("1" if seg.is_running else "0"),
                        "case_id": case_id if case_id is not None else NO_CASE,
                        "case_name": seg.case_id.label if seg.case_id is not None else NO_CASE,
                        "shift_definition_id": seg.shift_definition_id or NO_CASE,
                        "duration": format_minutes(minutes),
                    }
                )

                if case_id is None:
                    continue
                key = (result.machine_id, case_id, seg.shift_definition_id)
                s = summary_map.get(key)
                if not s:
                    s = {
                        "machine_id": result.machine_id,
                        "case_id": case_id,
                        "shift_definition_id": seg.shift_definition_id,
                        "total_seconds": 0,
                    }
                    summary_map[key] = s
                s["total_seconds"] += seconds

        summary = []
        for s in summary_map.values():
            total_minutes = int(s["total_seconds"]) // 60
            summary.append(
                {
                    "machine_id": s["machine_id"],
                    "case_id": s["case_id"],
                    "case_name": TimeCase(s["case_id"]).label,
                    "shift_definition_id": s["shift_definition_id"] or NO_CASE,
                    "total_minutes": total_minutes,
                    "total_hours": format_minutes(total_minutes),
                }
            )

        summary.sort(key=lambda x: (x["machine_id"], x["case_id"], x["shift_definition_id"]))
        failures = [
            {"machine_id": f.machine_id, "work_date": f.day.strftime("%Y-%m-%d"), "error": f.error}
            for f in batch.failures
        ]
        return ReportData(rows=out_rows, summary=summary, failures=failures)

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, timedelta
from typing import AbstractSet, Optional, Sequence, Union

from ..calendars.model import WorkCalendar
from ..calendars.repository import CalendarRepository, HolidayRepository
from ..common.time_utils import day_start
from ..core.constants import DEFAULT_CLASSIFICATION_WORKERS, DEFAULT_LATE_BUFFER_MINUTES, MAX_RANGE_DAYS
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..policy.model import PolicyConfig
from ..policy.repository import PolicySettingsRepository
from ..runstate.model import RunStateInterval
from ..runstate.repository import RunStateRepository
from ..shifts.model import ShiftTemplate
from ..shifts.repository import ShiftTemplateRepository
from .classifier import IntervalClassifier
from .merger import PolicyMerger
from .model import ClassifiedSegment
from .resolver import ShiftCalendarResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarContext:
    calendar: WorkCalendar
    template: ShiftTemplate
    policy: PolicyConfig


@dataclass(frozen=True)
class DayClassification:
    machine_id: int
    day: date
    segments: tuple[ClassifiedSegment, ...]


@dataclass(frozen=True)
class ClassificationFailure:
    machine_id: int
    day: date
    error: str


@dataclass(frozen=True)
class BatchResult:
    results: list[DayClassification]
    failures: list[ClassificationFailure]

    @property
    def ok(self) -> bool:
        return not self.failures


def iter_days(start: date, end: date) -> list[date]:
    if end < start:
        raise ValidationError("Ngày kết thúc phải sau ngày bắt đầu", {"end": "End date must not be before start date"})
    if (end - start).days + 1 > MAX_RANGE_DAYS:
        raise ValidationError(
            f"Khoảng ngày tối đa {MAX_RANGE_DAYS} ngày",
            {"end": f"Date range must not exceed {MAX_RANGE_DAYS} days"},
        )
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


class ClassificationService:
    """Runs resolver → classifier → merger for machine-days.

    Each machine-day is independent; a batch shards them across a thread
    pool and reports failures per unit instead of aborting.
    """

    def __init__(
        self,
        calendars: CalendarRepository,
        templates: ShiftTemplateRepository,
        policies: PolicySettingsRepository,
        holidays: HolidayRepository,
        run_states: RunStateRepository,
        *,
        resolver: ShiftCalendarResolver | None = None,
        classifier: IntervalClassifier | None = None,
        merger: PolicyMerger | None = None,
        max_workers: int = DEFAULT_CLASSIFICATION_WORKERS,
        default_late_buffer: int = DEFAULT_LATE_BUFFER_MINUTES,
    ):
        self._calendars = calendars
        self._templates = templates
        self._policies = policies
        self._holidays = holidays
        self._run_states = run_states
        self._resolver = resolver or ShiftCalendarResolver()
        self._classifier = classifier or IntervalClassifier()
        self._merger = merger or PolicyMerger()
        self._max_workers = max(1, int(max_workers))
        self._default_late_buffer = int(default_late_buffer)

    def classify_intervals(
        self,
        *,
        day: date,
        intervals: Sequence[RunStateInterval],
        template: ShiftTemplate,
        policy: PolicyConfig,
        holidays: Optional[AbstractSet[date]] = None,
    ) -> list[ClassifiedSegment]:
        """Pure pipeline for one machine-day; no repository access."""

        segments = self._resolver.resolve(day, template, holidays or frozenset(), policy)
        classified = self._classifier.classify(intervals, segments, policy)
        return self._merger.merge(classified, policy)

    def load_context(self, calendar_id: int) -> CalendarContext:
        calendar = self._calendars.get_by_id(int(calendar_id))
        if not calendar:
            raise NotFoundError(f"Lịch làm việc không tồn tại: {calendar_id}")

        template = self._templates.get_by_id(calendar.shift_template_id)
        if not template:
            raise NotFoundError(f"Mẫu ca không tồn tại: {calendar.shift_template_id}")

        policy = PolicyConfig.from_settings(
            self._policies.get_settings(calendar.calendar_id),
            default_late_buffer=self._default_late_buffer,
        )
        return CalendarContext(calendar=calendar, template=template, policy=policy)

    def holiday_set(self, *, start: date, end: date, calendar_id: int) -> frozenset[date]:
        # The day before `start` decides whether its overnight shift carries over.
        rows = self._holidays.list_between(start=start - timedelta(days=1), end=end, calendar_id=int(calendar_id))
        return frozenset(h.day for h in rows)

    def classify_day(self, *, machine_id: int, day: date, calendar_id: int) -> DayClassification:
        context = self.load_context(calendar_id)
        holidays = self.holiday_set(start=day, end=day, calendar_id=calendar_id)
        return self._classify_unit(context, holidays, int(machine_id), day)

    def classify_range(
        self,
        *,
        machine_ids: Sequence[int],
        start: date,
        end: date,
        calendar_id: int,
    ) -> BatchResult:
        days = iter_days(start, end)
        context = self.load_context(calendar_id)
        holidays = self.holiday_set(start=start, end=end, calendar_id=calendar_id)
        units = [(int(m), d) for m in machine_ids for d in days]

        def run(unit: tuple[int, date]) -> Union[DayClassification, ClassificationFailure]:
            machine_id, day = unit
            try:
                return self._classify_unit(context, holidays, machine_id, day)
            except DomainError as e:
                logger.warning("Classification failed for machine %s on %s: %s", machine_id, day, e)
                return ClassificationFailure(machine_id=machine_id, day=day, error=str(e))
            except Exception as e:
                logger.exception("Unexpected error classifying machine %s on %s", machine_id, day)
                return ClassificationFailure(machine_id=machine_id, day=day, error=f"{type(e).__name__}: {e}")

        if self._max_workers > 1 and len(units) > 1:
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(units))) as pool:
                outcomes = list(pool.map(run, units))
        else:
            outcomes = [run(u) for u in units]

        results = [o for o in outcomes if isinstance(o, DayClassification)]
        failures = [o for o in outcomes if isinstance(o, ClassificationFailure)]
        logger.info(
            "Classified %d machine-days for calendar %s (%d failed)",
            len(results),
            calendar_id,
            len(failures),
        )
        return BatchResult(results=results, failures=failures)

    def _classify_unit(
        self,
        context: CalendarContext,
        holidays: frozenset[date],
        machine_id: int,
        day: date,
    ) -> DayClassification:
        if not context.calendar.applies_on(day):
            raise ValidationError(f"Lịch {context.calendar.code} không áp dụng cho ngày {day.isoformat()}")

        begin = day_start(day)
        intervals = self._run_states.list_for_machine(
            machine_id=machine_id,
            start=begin,
            end=begin + timedelta(days=1),
        )
        segments = self.classify_intervals(
            day=day,
            intervals=intervals,
            template=context.template,
            policy=context.policy,
            holidays=holidays,
        )
        return DayClassification(machine_id=machine_id, day=day, segments=tuple(segments))

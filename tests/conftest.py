from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
import pytest

from shift_calendar.calendars.model import Holiday, WorkCalendar
from shift_calendar.container import wire
from shift_calendar.core.enums import DayOfWeek
from shift_calendar.runstate.model import RunStateInterval
from shift_calendar.shifts.model import ShiftBreak, ShiftDefinition, ShiftTemplate

WEEKDAYS = frozenset(
    {DayOfWeek.MONDAY, DayOfWeek.TUESDAY, DayOfWeek.WEDNESDAY, DayOfWeek.THURSDAY, DayOfWeek.FRIDAY}
)


def make_definition(def_id, start, end, *, days=WEEKDAYS, breaks=(), name=None) -> ShiftDefinition:
    return ShiftDefinition(
        id=def_id,
        name=name or def_id,
        start_time=start,
        end_time=end,
        days=frozenset(days),
        breaks=tuple(ShiftBreak(id=f"{def_id}-b{i}", start_time=s, end_time=e) for i, (s, e) in enumerate(breaks)),
    )


@pytest.fixture
def two_shift_template() -> ShiftTemplate:
    """Shift 1 08:00-16:00 (break 12:00-12:30), Shift 2 16:00-24:00, Mon-Fri."""

    return ShiftTemplate(
        code="2S",
        name="Two shifts",
        id=1,
        definitions=(
            make_definition("s1", time(8, 0), time(16, 0), breaks=[(time(12, 0), time(12, 30))]),
            make_definition("s2", time(16, 0), time(0, 0)),
        ),
    )


@pytest.fixture
def day_shift_template() -> ShiftTemplate:
    """Office hours 08:00-17:00 with a 12:00-13:00 lunch break, Mon-Fri."""

    return ShiftTemplate(
        code="HC",
        name="Office",
        id=2,
        definitions=(make_definition("day", time(8, 0), time(17, 0), breaks=[(time(12, 0), time(13, 0))]),),
    )


@pytest.fixture
def single_shift_template() -> ShiftTemplate:
    return ShiftTemplate(
        code="1S",
        name="One shift",
        id=3,
        definitions=(make_definition("s1", time(8, 0), time(16, 0)),),
    )


class FakeTemplatesRepo:
    def __init__(self, templates=()):
        self._next_id = 100
        self._items: dict[int, ShiftTemplate] = {t.id: t for t in templates}

    def list_all(self):
        return list(self._items.values())

    def get_by_id(self, template_id):
        return self._items.get(int(template_id))

    def get_by_code(self, code):
        for t in self._items.values():
            if t.code == code:
                return t
        return None

    def create(self, template):
        tid = self._next_id
        self._next_id += 1
        self._items[tid] = replace(template, id=tid)
        return tid

    def update(self, template_id, template):
        if int(template_id) not in self._items:
            return False
        self._items[int(template_id)] = template
        return True

    def delete(self, template_id):
        return self._items.pop(int(template_id), None) is not None


@dataclass
class FakePoliciesRepo:
    settings: dict[int, dict[str, str]] = field(default_factory=dict)

    def get_settings(self, calendar_id):
        return dict(self.settings.get(int(calendar_id), {}))

    def save_settings(self, calendar_id, settings):
        self.settings[int(calendar_id)] = dict(settings)


@dataclass
class FakeCalendarsRepo:
    calendars: dict[int, WorkCalendar] = field(default_factory=dict)

    def get_by_id(self, calendar_id):
        return self.calendars.get(int(calendar_id))


@dataclass
class FakeHolidaysRepo:
    holidays: list[Holiday] = field(default_factory=list)
    calls: list[tuple[date, date]] = field(default_factory=list)

    def list_between(self, *, start, end, calendar_id=None):
        self.calls.append((start, end))
        return [h for h in self.holidays if start <= h.day <= end]


@dataclass
class FakeRunStatesRepo:
    intervals: dict[int, list[RunStateInterval]] = field(default_factory=dict)
    broken_machines: set[int] = field(default_factory=set)

    def list_for_machine(self, *, machine_id, start, end):
        if machine_id in self.broken_machines:
            return [RunStateInterval(start=datetime(2026, 10, 19, 10), end=datetime(2026, 10, 19, 9), is_running=True)]
        return [iv for iv in self.intervals.get(int(machine_id), []) if iv.end > start and iv.start < end]


@dataclass
class Fakes:
    templates: FakeTemplatesRepo
    policies: FakePoliciesRepo
    calendars: FakeCalendarsRepo
    holidays: FakeHolidaysRepo
    run_states: FakeRunStatesRepo


@pytest.fixture
def fakes(two_shift_template) -> Fakes:
    calendar = WorkCalendar(
        calendar_id=1,
        code="CAL-2026",
        name="Factory 2026",
        shift_template_id=two_shift_template.id,
        apply_from=date(2026, 1, 1),
        apply_to=date(2026, 12, 31),
    )
    return Fakes(
        templates=FakeTemplatesRepo([two_shift_template]),
        policies=FakePoliciesRepo(),
        calendars=FakeCalendarsRepo({1: calendar}),
        holidays=FakeHolidaysRepo(),
        run_states=FakeRunStatesRepo(),
    )


def build_container(fakes: Fakes, *, max_workers: int = 1):
    return wire(
        templates_repo=fakes.templates,
        policies_repo=fakes.policies,
        calendars_repo=fakes.calendars,
        holidays_repo=fakes.holidays,
        run_states_repo=fakes.run_states,
        max_workers=max_workers,
    )


@pytest.fixture
def container(fakes):
    return build_container(fakes)


@pytest.fixture
def definition():
    return make_definition


@pytest.fixture
def make_container():
    return build_container

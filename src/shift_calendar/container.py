from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .calendars.mysql_calendar_repository import MySQLCalendarRepository
from .calendars.mysql_holiday_repository import MySQLHolidayRepository
from .calendars.repository import CalendarRepository, HolidayRepository
from .classification.factory import CaseRuleFactory
from .classification.classifier import IntervalClassifier
from .classification.service import ClassificationService
from .core.constants import DEFAULT_CLASSIFICATION_WORKERS, DEFAULT_LATE_BUFFER_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .policy.mysql_policy_repository import MySQLPolicySettingsRepository
from .policy.repository import PolicySettingsRepository
from .reports.service import CaseReportService
from .runstate.mysql_runstate_repository import MySQLRunStateRepository
from .runstate.repository import RunStateRepository
from .shifts.mysql_shift_repository import MySQLShiftTemplateRepository
from .shifts.repository import ShiftTemplateRepository
from .shifts.service import ShiftTemplateService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    templates_repo: ShiftTemplateRepository
    policies_repo: PolicySettingsRepository
    calendars_repo: CalendarRepository
    holidays_repo: HolidayRepository
    run_states_repo: RunStateRepository

    shift_template_service: ShiftTemplateService
    classification_service: ClassificationService
    case_report_service: CaseReportService


def wire(
    *,
    templates_repo: ShiftTemplateRepository,
    policies_repo: PolicySettingsRepository,
    calendars_repo: CalendarRepository,
    holidays_repo: HolidayRepository,
    run_states_repo: RunStateRepository,
    conn: Optional[DatabaseConnection] = None,
    max_workers: int = DEFAULT_CLASSIFICATION_WORKERS,
    default_late_buffer: int = DEFAULT_LATE_BUFFER_MINUTES,
) -> Container:
    classification_service = ClassificationService(
        calendars_repo,
        templates_repo,
        policies_repo,
        holidays_repo,
        run_states_repo,
        classifier=IntervalClassifier(rule_factory=CaseRuleFactory()),
        max_workers=max_workers,
        default_late_buffer=default_late_buffer,
    )

    return Container(
        conn=conn,
        templates_repo=templates_repo,
        policies_repo=policies_repo,
        calendars_repo=calendars_repo,
        holidays_repo=holidays_repo,
        run_states_repo=run_states_repo,
        shift_template_service=ShiftTemplateService(templates_repo),
        classification_service=classification_service,
        case_report_service=CaseReportService(classification_service),
    )


def build_container(*, db_config: Mapping[str, Any], settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire(
        conn=conn,
        templates_repo=MySQLShiftTemplateRepository(conn),
        policies_repo=MySQLPolicySettingsRepository(conn),
        calendars_repo=MySQLCalendarRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        run_states_repo=MySQLRunStateRepository(conn),
        max_workers=int(getattr(settings, "CLASSIFICATION_WORKERS", DEFAULT_CLASSIFICATION_WORKERS)),
        default_late_buffer=int(getattr(settings, "DEFAULT_LATE_BUFFER_MINUTES", DEFAULT_LATE_BUFFER_MINUTES)),
    )

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .allowances.mysql_allowance_repository import MySQLAllowanceRepository
from .allowances.service import AllowanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .database.unit_of_work import MySQLUnitOfWork
from .deductions.mysql_deduction_repository import MySQLDeductionRepository
from .deductions.service import DeductionIssuer
from .lateness.factory import LatenessStrategyFactory
from .lateness.mysql_lateness_repository import MySQLLatenessRecordRepository
from .lateness.service import LatenessService
from .reports.mysql_summary_repository import MySQLMonthlySummaryRepository
from .reports.service import ReportAggregator
from .rules.mysql_rules_repository import MySQLRulesRepository
from .rules.service import RulesService
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    uow: MySQLUnitOfWork

    users_repo: MySQLUserRepository
    attendance_repo: MySQLAttendanceRepository
    rules_repo: MySQLRulesRepository
    allowances_repo: MySQLAllowanceRepository
    records_repo: MySQLLatenessRecordRepository
    deductions_repo: MySQLDeductionRepository
    summaries_repo: MySQLMonthlySummaryRepository

    rules_service: RulesService
    allowance_ledger: AllowanceLedger
    deduction_issuer: DeductionIssuer
    lateness_service: LatenessService
    report_aggregator: ReportAggregator


def build_container(
    *,
    db_config: dict,
    lateness_defaults: Optional[Mapping[str, Any]] = None,
    default_timezone: str = DEFAULT_TIMEZONE,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection(config)
    uow = MySQLUnitOfWork(conn)

    users_repo = MySQLUserRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    rules_repo = MySQLRulesRepository(conn)
    allowances_repo = MySQLAllowanceRepository(conn)
    records_repo = MySQLLatenessRecordRepository(conn)
    deductions_repo = MySQLDeductionRepository(conn)
    summaries_repo = MySQLMonthlySummaryRepository(conn)

    # New companies get DEFAULT_TIMEZONE unless LATENESS_DEFAULTS names a zone.
    rules_service = RulesService(rules_repo, defaults={"timezone": default_timezone, **(lateness_defaults or {})})
    allowance_ledger = AllowanceLedger(allowances_repo, rules_service, users_repo, uow)
    deduction_issuer = DeductionIssuer(deductions_repo, records_repo, rules_service, users_repo, attendance_repo, uow)
    lateness_service = LatenessService(
        records_repo,
        rules_service,
        allowance_ledger,
        deduction_issuer,
        uow,
        strategy_factory=LatenessStrategyFactory(),
    )
    report_aggregator = ReportAggregator(
        records_repo,
        deductions_repo,
        allowances_repo,
        attendance_repo,
        summaries_repo,
        uow,
    )

    return Container(
        conn=conn,
        uow=uow,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        rules_repo=rules_repo,
        allowances_repo=allowances_repo,
        records_repo=records_repo,
        deductions_repo=deductions_repo,
        summaries_repo=summaries_repo,
        rules_service=rules_service,
        allowance_ledger=allowance_ledger,
        deduction_issuer=deduction_issuer,
        lateness_service=lateness_service,
        report_aggregator=report_aggregator,
    )

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from . import crud
from .calculations import (
    ContractTerms,
    EntryFacts,
    PayrollReport,
    check_hours,
    compute_daily_wage,
    payroll_report,
    recompute_monthly_summary,
    round_cents,
)
from .models import MonthlySummary, WorkContract, WorkEntry

logger = logging.getLogger(__name__)


def contract_terms(contract: WorkContract) -> ContractTerms:
    return ContractTerms(
        contract_type=contract.contract_type,
        base_amount=contract.base_amount,
        overtime_rate=contract.overtime_rate,
        night_rate=contract.night_rate,
        christmas_bonus=contract.christmas_bonus,
        easter_bonus=contract.easter_bonus,
        vacation_bonus=contract.vacation_bonus,
    )


def entry_facts(entry: WorkEntry) -> EntryFacts:
    return EntryFacts(
        contract_id=entry.contract_id,
        day=entry.entry_date,
        regular_hours=entry.regular_hours,
        overtime_hours=entry.overtime_hours,
        night_hours=entry.night_hours,
        holiday_hours=entry.holiday_hours,
        user_id=entry.user_id,
    )


def _checked_hours(regular_hours, overtime_hours, night_hours, holiday_hours) -> dict[str, Decimal]:
    return {
        "regular_hours": check_hours("regular_hours", regular_hours),
        "overtime_hours": check_hours("overtime_hours", overtime_hours),
        "night_hours": check_hours("night_hours", night_hours),
        "holiday_hours": check_hours("holiday_hours", holiday_hours),
    }


def preview_daily_wage(
    db: Session,
    *,
    user_id: str,
    contract_id: int,
    regular_hours,
    overtime_hours,
    night_hours=None,
    holiday_hours=None,
) -> Decimal:
    hours = _checked_hours(regular_hours, overtime_hours, night_hours, holiday_hours)
    contract = crud.require_active_contract(db, user_id, contract_id)
    return round_cents(compute_daily_wage(contract_terms(contract), **hours))


def refresh_monthly_summary(
    db: Session, *, user_id: str, contract_id: int, month: int, year: int
) -> MonthlySummary:
    """
    Recompute a month from every stored entry and upsert the summary row.
    Raises ContractNotFound before anything is written.
    """
    contract = crud.require_contract(db, user_id, contract_id)
    entries = crud.list_entries_for_month(db, user_id, contract_id, month, year)

    facts = recompute_monthly_summary(
        user_id,
        contract_id,
        month,
        year,
        [entry_facts(e) for e in entries],
        contract_terms(contract),
    )
    summary = crud.upsert_monthly_summary(db, facts)
    logger.info(
        f"Monthly summary {year}-{month:02d} for contract {contract_id}: "
        f"{len(entries)} entries, total {facts.total_salary}"
    )
    return summary


def save_entry(
    db: Session,
    *,
    user_id: str,
    contract_id: int,
    day: date,
    regular_hours,
    overtime_hours,
    night_hours=None,
    holiday_hours=None,
    notes: str | None = None,
) -> tuple[WorkEntry, MonthlySummary]:
    """
    Store one day of work and refresh its month.

    Hours and contract are validated before any write. Saving a day that
    already has an entry overwrites it. Deactivated contracts take no new
    work, their history stays readable and deletable.
    """
    hours = _checked_hours(regular_hours, overtime_hours, night_hours, holiday_hours)
    contract = crud.require_active_contract(db, user_id, contract_id)
    daily_wage = round_cents(compute_daily_wage(contract_terms(contract), **hours))

    try:
        entry = crud.upsert_entry(
            db,
            user_id=user_id,
            contract_id=contract_id,
            day=day,
            daily_wage=daily_wage,
            notes=notes,
            **hours,
        )
    except crud.ConflictError:
        logger.warning(
            f"Concurrent save for contract {contract_id} on {day.isoformat()}, overwriting"
        )
        entry = crud.upsert_entry(
            db,
            user_id=user_id,
            contract_id=contract_id,
            day=day,
            daily_wage=daily_wage,
            notes=notes,
            **hours,
        )

    logger.info(f"Saved entry for contract {contract_id} on {day.isoformat()}: {daily_wage}")
    summary = refresh_monthly_summary(
        db, user_id=user_id, contract_id=contract_id, month=day.month, year=day.year
    )
    return entry, summary


def remove_entry(
    db: Session, *, user_id: str, contract_id: int, day: date
) -> tuple[bool, MonthlySummary]:
    crud.require_contract(db, user_id, contract_id)
    deleted = crud.delete_entry(db, user_id=user_id, contract_id=contract_id, day=day)
    if deleted:
        logger.info(f"Deleted entry for contract {contract_id} on {day.isoformat()}")
    summary = refresh_monthly_summary(
        db, user_id=user_id, contract_id=contract_id, month=day.month, year=day.year
    )
    return deleted, summary


def build_payroll_report(
    db: Session, *, user_id: str, contract_id: int, month: int, year: int
) -> PayrollReport:
    """
    Payroll view of a month with the unhealthy environment allowance.
    Computed from the stored entries, nothing is written.
    """
    contract = crud.require_contract(db, user_id, contract_id)
    entries = crud.list_entries_for_month(db, user_id, contract_id, month, year)
    facts = recompute_monthly_summary(
        user_id,
        contract_id,
        month,
        year,
        [entry_facts(e) for e in entries],
        contract_terms(contract),
    )
    return payroll_report(facts)

from __future__ import annotations

import calendar
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .calculations import ContractType, MonthlySummaryFacts, round_cents
from .models import Employer, MonthlySummary, WorkContract, WorkEntry


class ContractNotFound(LookupError):
    pass


class ContractInactive(ContractNotFound):
    """The contract exists but has been deactivated."""


class ConflictError(Exception):
    """Another writer inserted the same (user, contract, date) entry first."""


def month_bounds(month: int, year: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


# ---------------------------------------------------------------------------
# Employers and contracts
# ---------------------------------------------------------------------------

def create_employer(db: Session, *, user_id: str, employer_name: str, **details) -> Employer:
    employer = Employer(user_id=user_id, employer_name=employer_name, **details)
    db.add(employer)
    db.flush()
    return employer


def list_employers(db: Session, user_id: str) -> list[Employer]:
    stmt = (
        select(Employer)
        .where(Employer.user_id == user_id)
        .order_by(Employer.employer_name.asc())
    )
    return list(db.scalars(stmt).all())


def get_employer(db: Session, user_id: str, employer_id: int) -> Employer | None:
    employer = db.get(Employer, employer_id)
    if employer is None or employer.user_id != user_id:
        return None
    return employer


def create_contract(
    db: Session,
    *,
    user_id: str,
    employer_id: int,
    contract_type: ContractType,
    base_amount: Decimal,
    start_date: date,
    **terms,
) -> WorkContract:
    contract = WorkContract(
        user_id=user_id,
        employer_id=employer_id,
        contract_type=contract_type,
        base_amount=base_amount,
        start_date=start_date,
        **terms,
    )
    db.add(contract)
    db.flush()
    return contract


def get_contract(db: Session, contract_id: int) -> WorkContract | None:
    return db.get(WorkContract, contract_id)


def require_contract(db: Session, user_id: str, contract_id: int) -> WorkContract:
    contract = get_contract(db, contract_id)
    if contract is None or contract.user_id != user_id:
        raise ContractNotFound(f"Contract {contract_id} not found")
    return contract


def require_active_contract(db: Session, user_id: str, contract_id: int) -> WorkContract:
    contract = require_contract(db, user_id, contract_id)
    if not contract.is_active:
        raise ContractInactive(f"Contract {contract_id} is no longer active")
    return contract


def list_contracts(db: Session, user_id: str, *, active_only: bool = True) -> list[WorkContract]:
    stmt = select(WorkContract).where(WorkContract.user_id == user_id)
    if active_only:
        stmt = stmt.where(WorkContract.is_active.is_(True))
    return list(db.scalars(stmt.order_by(WorkContract.start_date.asc())).all())


def deactivate_contract(db: Session, *, user_id: str, contract_id: int) -> WorkContract:
    contract = require_contract(db, user_id, contract_id)
    contract.is_active = False
    return contract


# ---------------------------------------------------------------------------
# Work entries
# ---------------------------------------------------------------------------

def list_entries_for_month(
    db: Session, user_id: str, contract_id: int, month: int, year: int
) -> list[WorkEntry]:
    start, end = month_bounds(month, year)
    stmt = (
        select(WorkEntry)
        .where(WorkEntry.user_id == user_id)
        .where(WorkEntry.contract_id == contract_id)
        .where(WorkEntry.entry_date >= start)
        .where(WorkEntry.entry_date <= end)
        .order_by(WorkEntry.entry_date.asc())
    )
    return list(db.scalars(stmt).all())


def get_entry(db: Session, *, user_id: str, contract_id: int, day: date) -> WorkEntry | None:
    stmt = select(WorkEntry).where(
        WorkEntry.user_id == user_id,
        WorkEntry.contract_id == contract_id,
        WorkEntry.entry_date == day,
    )
    return db.scalar(stmt)


def upsert_entry(
    db: Session,
    *,
    user_id: str,
    contract_id: int,
    day: date,
    regular_hours: Decimal,
    overtime_hours: Decimal,
    night_hours: Decimal,
    holiday_hours: Decimal,
    daily_wage: Decimal,
    notes: str | None = None,
) -> WorkEntry:
    values = dict(
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        night_hours=night_hours,
        holiday_hours=holiday_hours,
        daily_wage=daily_wage,
        notes=notes,
    )
    existing = get_entry(db, user_id=user_id, contract_id=contract_id, day=day)

    if existing:
        for key, value in values.items():
            setattr(existing, key, value)
        db.flush()
        return existing

    entry = WorkEntry(user_id=user_id, contract_id=contract_id, entry_date=day, **values)
    try:
        with db.begin_nested():
            db.add(entry)
    except IntegrityError as exc:
        raise ConflictError(
            f"Entry for contract {contract_id} on {day.isoformat()} already exists"
        ) from exc
    return entry


def delete_entry(db: Session, *, user_id: str, contract_id: int, day: date) -> bool:
    existing = get_entry(db, user_id=user_id, contract_id=contract_id, day=day)
    if not existing:
        return False

    db.delete(existing)
    db.flush()
    return True


# ---------------------------------------------------------------------------
# Monthly summaries
# ---------------------------------------------------------------------------

def get_monthly_summary(
    db: Session, *, user_id: str, contract_id: int, month: int, year: int
) -> MonthlySummary | None:
    stmt = select(MonthlySummary).where(
        MonthlySummary.user_id == user_id,
        MonthlySummary.contract_id == contract_id,
        MonthlySummary.month == month,
        MonthlySummary.year == year,
    )
    return db.scalar(stmt)


def upsert_monthly_summary(db: Session, facts: MonthlySummaryFacts) -> MonthlySummary:
    values = dict(
        total_regular_hours=facts.total_regular_hours,
        total_overtime_hours=facts.total_overtime_hours,
        total_night_hours=facts.total_night_hours,
        total_holiday_hours=facts.total_holiday_hours,
        base_salary=facts.base_salary,
        overtime_pay=facts.overtime_pay,
        night_pay=facts.night_pay,
        holiday_pay=facts.holiday_pay,
        total_salary=facts.total_salary,
    )
    existing = get_monthly_summary(
        db,
        user_id=facts.user_id,
        contract_id=facts.contract_id,
        month=facts.month,
        year=facts.year,
    )

    if existing:
        for key, value in values.items():
            setattr(existing, key, value)
        db.flush()
        return existing

    summary = MonthlySummary(
        user_id=facts.user_id,
        contract_id=facts.contract_id,
        month=facts.month,
        year=facts.year,
        **values,
    )
    try:
        with db.begin_nested():
            db.add(summary)
    except IntegrityError:
        # another writer created the row first, overwrite it
        existing = get_monthly_summary(
            db,
            user_id=facts.user_id,
            contract_id=facts.contract_id,
            month=facts.month,
            year=facts.year,
        )
        if existing is None:
            raise
        for key, value in values.items():
            setattr(existing, key, value)
        db.flush()
        return existing
    return summary


def list_monthly_summaries(
    db: Session, user_id: str, *, year: int | None = None
) -> list[MonthlySummary]:
    stmt = select(MonthlySummary).where(MonthlySummary.user_id == user_id)
    if year is not None:
        stmt = stmt.where(MonthlySummary.year == year)
    stmt = stmt.order_by(
        MonthlySummary.year.asc(),
        MonthlySummary.month.asc(),
        MonthlySummary.contract_id.asc(),
    )
    return list(db.scalars(stmt).all())


def monthly_balance(db: Session, user_id: str, month: int, year: int) -> Decimal:
    stmt = select(func.coalesce(func.sum(MonthlySummary.total_salary), 0)).where(
        MonthlySummary.user_id == user_id,
        MonthlySummary.month == month,
        MonthlySummary.year == year,
    )
    return round_cents(Decimal(str(db.scalar(stmt))))

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Iterable

# ---------------------------------------------------------------------------
# Greek payroll constants
# ---------------------------------------------------------------------------

WORKING_DAYS_PER_MONTH = 22
HOURS_PER_DAY = 8
HOLIDAY_RATE = Decimal("1.75")
UNHEALTHY_BONUS_RATE = Decimal("0.10")

# (fraction of a monthly salary, number of daily wages)
CHRISTMAS_BONUS = (Decimal("1"), 25)
EASTER_BONUS = (Decimal("0.5"), 15)
VACATION_BONUS = (Decimal("0.5"), 13)

CENT = Decimal("0.01")
ZERO = Decimal("0")

# hours are stored as Numeric(6, 2)
HOURS_SCALE = Decimal("0.01")
MAX_DAILY_HOURS = Decimal("24")


class ContractType(str, Enum):
    HOURLY = "hourly"      # ωρομίσθιος
    DAILY = "daily"        # ημερομίσθιος
    MONTHLY = "monthly"    # μισθωτός


class InvalidContractType(ValueError):
    pass


class InvalidHours(ValueError):
    pass


@dataclass(frozen=True)
class ContractTerms:
    contract_type: ContractType | str
    base_amount: Decimal
    overtime_rate: Decimal = Decimal("1.5")
    night_rate: Decimal = Decimal("1.25")
    christmas_bonus: bool = False
    easter_bonus: bool = False
    vacation_bonus: bool = False


@dataclass(frozen=True)
class EntryFacts:
    contract_id: int
    day: date
    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    night_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    user_id: str | None = None


@dataclass(frozen=True)
class HourTotals:
    regular: Decimal = ZERO
    overtime: Decimal = ZERO
    night: Decimal = ZERO
    holiday: Decimal = ZERO


@dataclass(frozen=True)
class PayBreakdown:
    base_salary: Decimal
    overtime_pay: Decimal
    night_pay: Decimal
    holiday_pay: Decimal

    @property
    def total_salary(self) -> Decimal:
        return self.base_salary + self.overtime_pay + self.night_pay + self.holiday_pay


@dataclass(frozen=True)
class MonthlySummaryFacts:
    user_id: str
    contract_id: int
    month: int
    year: int
    total_regular_hours: Decimal
    total_overtime_hours: Decimal
    total_night_hours: Decimal
    total_holiday_hours: Decimal
    base_salary: Decimal
    overtime_pay: Decimal
    night_pay: Decimal
    holiday_pay: Decimal
    total_salary: Decimal


@dataclass(frozen=True)
class PayrollReport:
    base_salary: Decimal
    overtime_pay: Decimal
    night_pay: Decimal
    holiday_pay: Decimal
    total_salary: Decimal
    unhealthy_bonus: Decimal
    total_gross: Decimal


@dataclass(frozen=True)
class StatutoryBonuses:
    christmas: Decimal
    easter: Decimal
    vacation: Decimal

    @property
    def total(self) -> Decimal:
        return self.christmas + self.easter + self.vacation


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def to_decimal(value: Decimal | float | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a number: {value!r}") from exc


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def check_hours(name: str, value: Decimal | float | int | str | None) -> Decimal:
    if value is None:
        return ZERO
    try:
        hours = to_decimal(value)
    except ValueError as exc:
        raise InvalidHours(f"{name} must be a number (got {value!r})") from exc
    if not hours.is_finite():
        raise InvalidHours(f"{name} must be finite (got {value})")
    if hours < 0:
        raise InvalidHours(f"{name} must be >= 0 (got {value})")
    if hours > MAX_DAILY_HOURS:
        raise InvalidHours(f"{name} must be <= {MAX_DAILY_HOURS} (got {value})")
    if hours != hours.quantize(HOURS_SCALE):
        raise InvalidHours(f"{name} allows at most 2 decimals (got {value})")
    return hours


def resolve_contract_type(value: ContractType | str) -> ContractType:
    try:
        return ContractType(value)
    except ValueError as exc:
        raise InvalidContractType(f"Unknown contract type: {value!r}") from exc


def _check_terms(contract: ContractTerms) -> tuple[Decimal, Decimal, Decimal]:
    base = to_decimal(contract.base_amount)
    overtime_rate = to_decimal(contract.overtime_rate)
    night_rate = to_decimal(contract.night_rate)
    if not base.is_finite() or base < 0:
        raise ValueError(f"base_amount must be >= 0 (got {contract.base_amount})")
    if not overtime_rate.is_finite() or overtime_rate < 1:
        raise ValueError(f"overtime_rate must be >= 1 (got {contract.overtime_rate})")
    if not night_rate.is_finite() or night_rate < 1:
        raise ValueError(f"night_rate must be >= 1 (got {contract.night_rate})")
    return base, overtime_rate, night_rate


def hours_between_times(start: time, end: time) -> Decimal:
    """
    Hours between a clock-in and a clock-out.
    A shift ending at or before its start is taken to end the next day.
    Rounded to the hundredth of an hour that entries store.
    """
    start_minutes = start.hour * 60 + start.minute
    end_minutes = end.hour * 60 + end.minute
    if end_minutes <= start_minutes:
        end_minutes += 24 * 60
    hours = Decimal(end_minutes - start_minutes) / Decimal(60)
    return hours.quantize(HOURS_SCALE, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Wage calculation
# ---------------------------------------------------------------------------

def monthly_hourly_rate(base_amount: Decimal) -> Decimal:
    """
    Hourly equivalent of a monthly salary:
        base_amount / (22 working days * 8 hours)
    """
    return base_amount / (WORKING_DAYS_PER_MONTH * HOURS_PER_DAY)


def pay_for_hours(contract: ContractTerms, hours: HourTotals) -> PayBreakdown:
    """
    Premium components (overtime, night, holiday) for a set of hours.

    Premiums are always hourly multipliers; what differs per contract type is
    the hourly rate they multiply. The base component is left at zero here
    because its derivation differs between a single day and a whole month.
    """
    contract_type = resolve_contract_type(contract.contract_type)
    base, overtime_rate, night_rate = _check_terms(contract)

    if contract_type == ContractType.HOURLY:
        hourly_rate = base
    elif contract_type == ContractType.DAILY:
        hourly_rate = base / HOURS_PER_DAY
    elif contract_type == ContractType.MONTHLY:
        hourly_rate = monthly_hourly_rate(base)
    else:
        raise InvalidContractType(f"Unknown contract type: {contract_type!r}")

    return PayBreakdown(
        base_salary=ZERO,
        overtime_pay=hours.overtime * hourly_rate * overtime_rate,
        night_pay=hours.night * hourly_rate * night_rate,
        holiday_pay=hours.holiday * hourly_rate * HOLIDAY_RATE,
    )


def daily_pay_breakdown(
    contract: ContractTerms,
    regular_hours,
    overtime_hours,
    night_hours=None,
    holiday_hours=None,
) -> PayBreakdown:
    hours = HourTotals(
        regular=check_hours("regular_hours", regular_hours),
        overtime=check_hours("overtime_hours", overtime_hours),
        night=check_hours("night_hours", night_hours),
        holiday=check_hours("holiday_hours", holiday_hours),
    )
    premiums = pay_for_hours(contract, hours)
    contract_type = resolve_contract_type(contract.contract_type)
    base = to_decimal(contract.base_amount)

    if contract_type == ContractType.HOURLY:
        base_salary = hours.regular * base
    elif contract_type == ContractType.DAILY:
        # a worked day is paid in full whatever its regular hours
        base_salary = base
    else:
        base_salary = base / WORKING_DAYS_PER_MONTH

    return PayBreakdown(
        base_salary=base_salary,
        overtime_pay=premiums.overtime_pay,
        night_pay=premiums.night_pay,
        holiday_pay=premiums.holiday_pay,
    )


def compute_daily_wage(
    contract: ContractTerms,
    regular_hours,
    overtime_hours,
    night_hours=None,
    holiday_hours=None,
) -> Decimal:
    """
    Gross wage for one day of work, unrounded.

    - hourly:  every category is charged at its multiplier of base_amount
    - daily:   base_amount flat, extra categories pro-rated on an 8 hour day
    - monthly: base_amount / 22 for the day, extras at base_amount / 176

    Raises InvalidContractType for an unknown contract type and InvalidHours
    for negative or non-finite hours.
    """
    breakdown = daily_pay_breakdown(
        contract, regular_hours, overtime_hours, night_hours, holiday_hours
    )
    return breakdown.total_salary


# ---------------------------------------------------------------------------
# Monthly aggregation
# ---------------------------------------------------------------------------

def entries_for_month(
    entries: Iterable[EntryFacts],
    *,
    contract_id: int,
    month: int,
    year: int,
    user_id: str | None = None,
) -> list[EntryFacts]:
    return [
        e
        for e in entries
        if e.contract_id == contract_id
        and e.day.month == month
        and e.day.year == year
        and (user_id is None or e.user_id is None or e.user_id == user_id)
    ]


def sum_hours(entries: Iterable[EntryFacts]) -> HourTotals:
    regular = overtime = night = holiday = ZERO
    for e in entries:
        regular += check_hours("regular_hours", e.regular_hours)
        overtime += check_hours("overtime_hours", e.overtime_hours)
        night += check_hours("night_hours", e.night_hours)
        holiday += check_hours("holiday_hours", e.holiday_hours)
    return HourTotals(regular=regular, overtime=overtime, night=night, holiday=holiday)


def monthly_pay_breakdown(contract: ContractTerms, hours: HourTotals) -> PayBreakdown:
    """
    Month pay from aggregate hours, never from summed daily wages: a monthly
    salary is owed in full whatever the number of days logged.
    """
    premiums = pay_for_hours(contract, hours)
    contract_type = resolve_contract_type(contract.contract_type)
    base = to_decimal(contract.base_amount)

    if contract_type == ContractType.HOURLY:
        base_salary = hours.regular * base
    elif contract_type == ContractType.DAILY:
        base_salary = (hours.regular / HOURS_PER_DAY) * base
    else:
        base_salary = base

    return PayBreakdown(
        base_salary=base_salary,
        overtime_pay=premiums.overtime_pay,
        night_pay=premiums.night_pay,
        holiday_pay=premiums.holiday_pay,
    )


def recompute_monthly_summary(
    user_id: str,
    contract_id: int,
    month: int,
    year: int,
    entries: Iterable[EntryFacts],
    contract: ContractTerms,
) -> MonthlySummaryFacts:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be within 1..12 (got {month})")

    scoped = entries_for_month(
        entries, contract_id=contract_id, month=month, year=year, user_id=user_id
    )
    hours = sum_hours(scoped)
    pay = monthly_pay_breakdown(contract, hours)
    # the stored total always equals the sum of the stored components
    rounded = PayBreakdown(
        base_salary=round_cents(pay.base_salary),
        overtime_pay=round_cents(pay.overtime_pay),
        night_pay=round_cents(pay.night_pay),
        holiday_pay=round_cents(pay.holiday_pay),
    )

    return MonthlySummaryFacts(
        user_id=user_id,
        contract_id=contract_id,
        month=month,
        year=year,
        total_regular_hours=hours.regular,
        total_overtime_hours=hours.overtime,
        total_night_hours=hours.night,
        total_holiday_hours=hours.holiday,
        base_salary=rounded.base_salary,
        overtime_pay=rounded.overtime_pay,
        night_pay=rounded.night_pay,
        holiday_pay=rounded.holiday_pay,
        total_salary=rounded.total_salary,
    )


# ---------------------------------------------------------------------------
# Payroll report and statutory bonuses
# ---------------------------------------------------------------------------

def payroll_report(
    summary: MonthlySummaryFacts,
    *,
    unhealthy_bonus_rate: Decimal = UNHEALTHY_BONUS_RATE,
) -> PayrollReport:
    """
    Standalone payroll view: the persisted summary plus the unhealthy
    environment allowance paid to cooks. The allowance is never written
    back to the summary.
    """
    rate = to_decimal(unhealthy_bonus_rate)
    if rate < 0:
        raise ValueError("unhealthy_bonus_rate must be >= 0")

    unhealthy = round_cents(summary.base_salary * rate)
    return PayrollReport(
        base_salary=summary.base_salary,
        overtime_pay=summary.overtime_pay,
        night_pay=summary.night_pay,
        holiday_pay=summary.holiday_pay,
        total_salary=summary.total_salary,
        unhealthy_bonus=unhealthy,
        total_gross=summary.total_salary + unhealthy,
    )


def statutory_bonuses(contract: ContractTerms) -> StatutoryBonuses:
    """
    Yearly Christmas, Easter and vacation bonus entitlements.

    Salaried contracts get a fraction of the monthly salary, wage earners a
    number of daily wages (8 hours for hourly contracts).
    """
    contract_type = resolve_contract_type(contract.contract_type)
    base, _, _ = _check_terms(contract)

    def amount(enabled: bool, rule: tuple[Decimal, int]) -> Decimal:
        if not enabled:
            return ZERO
        month_fraction, daily_wages = rule
        if contract_type == ContractType.MONTHLY:
            return round_cents(base * month_fraction)
        if contract_type == ContractType.DAILY:
            return round_cents(base * daily_wages)
        return round_cents(base * HOURS_PER_DAY * daily_wages)

    return StatutoryBonuses(
        christmas=amount(contract.christmas_bonus, CHRISTMAS_BONUS),
        easter=amount(contract.easter_bonus, EASTER_BONUS),
        vacation=amount(contract.vacation_bonus, VACATION_BONUS),
    )

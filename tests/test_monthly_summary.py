from datetime import date
from decimal import Decimal

import pytest
from misthos.calculations import (ContractTerms, ContractType, EntryFacts,
                                  recompute_monthly_summary)


def entry(day, regular="0", overtime="0", night="0", holiday="0", contract_id=1):
    return EntryFacts(
        contract_id=contract_id,
        day=day,
        regular_hours=Decimal(regular),
        overtime_hours=Decimal(overtime),
        night_hours=Decimal(night),
        holiday_hours=Decimal(holiday),
    )


MONTHLY = ContractTerms(
    contract_type=ContractType.MONTHLY,
    base_amount=Decimal("880"),
    overtime_rate=Decimal("1.5"),
    night_rate=Decimal("1.25"),
)
HOURLY = ContractTerms(
    contract_type=ContractType.HOURLY,
    base_amount=Decimal("10"),
    overtime_rate=Decimal("1.5"),
    night_rate=Decimal("1.25"),
)


def test_monthly_salary_owed_with_no_entries():
    summary = recompute_monthly_summary("u", 1, 3, 2025, [], MONTHLY)
    assert summary.total_regular_hours == 0
    assert summary.base_salary == Decimal("880.00")
    assert summary.total_salary == Decimal("880.00")


def test_hourly_with_no_entries_is_zero():
    summary = recompute_monthly_summary("u", 1, 3, 2025, [], HOURLY)
    assert summary.total_salary == Decimal("0.00")


def test_regular_hours_are_summed_exactly():
    entries = [
        entry(date(2025, 3, 3), regular="8"),
        entry(date(2025, 3, 4), regular="6"),
        entry(date(2025, 3, 5), regular="4"),
    ]
    summary = recompute_monthly_summary("u", 1, 3, 2025, entries, HOURLY)
    assert summary.total_regular_hours == Decimal("18")
    assert summary.base_salary == Decimal("180.00")


def test_entries_outside_scope_are_ignored():
    entries = [
        entry(date(2025, 3, 3), regular="8"),
        entry(date(2025, 4, 1), regular="8"),
        entry(date(2024, 3, 3), regular="8"),
        entry(date(2025, 3, 4), regular="8", contract_id=2),
    ]
    summary = recompute_monthly_summary("u", 1, 3, 2025, entries, HOURLY)
    assert summary.total_regular_hours == Decimal("8")


def test_other_users_entries_are_ignored():
    mine = EntryFacts(contract_id=1, day=date(2025, 3, 3), regular_hours=Decimal("8"), user_id="u")
    theirs = EntryFacts(contract_id=1, day=date(2025, 3, 4), regular_hours=Decimal("8"), user_id="x")
    summary = recompute_monthly_summary("u", 1, 3, 2025, [mine, theirs], HOURLY)
    assert summary.total_regular_hours == Decimal("8")


def test_monthly_base_is_flat_whatever_the_days_logged():
    entries = [
        entry(date(2025, 3, d), regular="8", overtime="1", night="2", holiday="1")
        for d in (3, 4, 5)
    ]
    summary = recompute_monthly_summary("u", 1, 3, 2025, entries, MONTHLY)
    # hourly equivalent 880 / 176 = 5
    assert summary.base_salary == Decimal("880.00")
    assert summary.overtime_pay == Decimal("22.50")
    assert summary.night_pay == Decimal("37.50")
    assert summary.holiday_pay == Decimal("26.25")
    assert summary.total_salary == Decimal("966.25")


def test_daily_contract_prorates_aggregate_hours():
    contract = ContractTerms(
        contract_type=ContractType.DAILY,
        base_amount=Decimal("40"),
        overtime_rate=Decimal("1.2"),
    )
    entries = [
        entry(date(2025, 3, 3), regular="8", overtime="4"),
        entry(date(2025, 3, 4), regular="4"),
    ]
    summary = recompute_monthly_summary("u", 1, 3, 2025, entries, contract)
    assert summary.base_salary == Decimal("60.00")
    assert summary.overtime_pay == Decimal("24.00")
    assert summary.total_salary == Decimal("84.00")


def test_rounding_happens_once_at_the_end():
    contract = ContractTerms(contract_type=ContractType.HOURLY, base_amount=Decimal("10.333"))
    entries = [entry(date(2025, 3, d), regular="1") for d in (3, 4, 5)]
    summary = recompute_monthly_summary("u", 1, 3, 2025, entries, contract)
    # 3 * 10.333 = 30.999, not 3 * 10.33
    assert summary.base_salary == Decimal("31.00")


def test_recompute_is_idempotent():
    entries = [
        entry(date(2025, 3, 3), regular="7.5", overtime="1.5", night="0.5"),
        entry(date(2025, 3, 10), regular="8", holiday="8"),
    ]
    first = recompute_monthly_summary("u", 1, 3, 2025, entries, MONTHLY)
    second = recompute_monthly_summary("u", 1, 3, 2025, entries, MONTHLY)
    assert first == second
    assert str(first.total_salary) == str(second.total_salary)


def test_invalid_month_rejected():
    with pytest.raises(ValueError):
        recompute_monthly_summary("u", 1, 13, 2025, [], HOURLY)


def test_total_is_the_sum_of_rounded_components():
    contract = ContractTerms(contract_type=ContractType.MONTHLY, base_amount=Decimal("1000"))
    entries = [entry(date(2025, 3, 3), overtime="1", night="1", holiday="1")]
    summary = recompute_monthly_summary("u", 1, 3, 2025, entries, contract)
    # hourly equivalent 1000 / 176 = 5.6818...
    assert summary.overtime_pay == Decimal("8.52")
    assert summary.night_pay == Decimal("7.10")
    assert summary.holiday_pay == Decimal("9.94")
    assert summary.total_salary == Decimal("1025.56")
    assert summary.total_salary == (
        summary.base_salary + summary.overtime_pay + summary.night_pay + summary.holiday_pay
    )

from datetime import time
from decimal import Decimal

import pytest
from misthos.calculations import (ContractTerms, ContractType,
                                  InvalidContractType, InvalidHours,
                                  MonthlySummaryFacts, compute_daily_wage,
                                  hours_between_times, payroll_report,
                                  statutory_bonuses)


def hourly(base="10", overtime_rate="1.5", night_rate="1.25", **flags):
    return ContractTerms(
        contract_type=ContractType.HOURLY,
        base_amount=Decimal(base),
        overtime_rate=Decimal(overtime_rate),
        night_rate=Decimal(night_rate),
        **flags,
    )


def test_hourly_regular_and_overtime():
    assert compute_daily_wage(hourly(), 8, 2) == Decimal("110.00")


def test_hourly_every_category():
    wage = compute_daily_wage(hourly(), 4, 1, 2, 2)
    # 4*10 + 1*10*1.5 + 2*10*1.25 + 2*10*1.75
    assert wage == Decimal("115")


def test_daily_overtime_is_prorated_on_eight_hours():
    contract = ContractTerms(
        contract_type=ContractType.DAILY,
        base_amount=Decimal("40"),
        overtime_rate=Decimal("1.2"),
    )
    assert compute_daily_wage(contract, 8, 4) == Decimal("64.00")


def test_daily_base_ignores_regular_hours():
    contract = ContractTerms(contract_type="daily", base_amount=Decimal("40"))
    assert compute_daily_wage(contract, 3, 0) == compute_daily_wage(contract, 10, 0)


def test_daily_holiday_and_night():
    contract = ContractTerms(
        contract_type=ContractType.DAILY,
        base_amount=Decimal("40"),
        night_rate=Decimal("1.25"),
    )
    # 40 + (2/8)*40*1.25 + (4/8)*40*1.75
    assert compute_daily_wage(contract, 8, 0, 2, 4) == Decimal("87.5")


def test_monthly_day_share_and_premiums():
    contract = ContractTerms(
        contract_type=ContractType.MONTHLY,
        base_amount=Decimal("880"),
        overtime_rate=Decimal("1.5"),
    )
    # 880/22 + 2 * (880/176) * 1.5
    assert compute_daily_wage(contract, 8, 2) == Decimal("55")


def test_zero_base_amount_pays_nothing():
    for contract_type in ContractType:
        contract = ContractTerms(contract_type=contract_type, base_amount=Decimal("0"))
        assert compute_daily_wage(contract, 8, 2, 1, 1) == 0


def test_unknown_contract_type_fails_closed():
    contract = ContractTerms(contract_type="weekly", base_amount=Decimal("100"))
    with pytest.raises(InvalidContractType):
        compute_daily_wage(contract, 8, 0)


@pytest.mark.parametrize(
    "hours",
    [(-1, 0, 0, 0), (8, -0.5, 0, 0), (8, 0, -2, 0), (8, 0, 0, -1)],
)
def test_negative_hours_rejected(hours):
    with pytest.raises(InvalidHours):
        compute_daily_wage(hourly(), *hours)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), "Infinity", "abc"])
def test_non_finite_hours_rejected(value):
    with pytest.raises(InvalidHours):
        compute_daily_wage(hourly(), value, 0)


@pytest.mark.parametrize("contract_type", list(ContractType))
@pytest.mark.parametrize("hours", [(0, 0, 0, 0), (0.5, 0, 0, 0), (8, 2.5, 1, 3)])
def test_wage_is_never_negative(contract_type, hours):
    contract = ContractTerms(contract_type=contract_type, base_amount=Decimal("55.5"))
    assert compute_daily_wage(contract, *hours) >= 0


def test_invalid_rates_rejected():
    with pytest.raises(ValueError):
        compute_daily_wage(hourly(overtime_rate="0.9"), 8, 1)
    with pytest.raises(ValueError):
        compute_daily_wage(hourly(base="-1"), 8, 0)


def test_hours_between_times_crosses_midnight():
    assert hours_between_times(time(9, 0), time(17, 30)) == Decimal("8.5")
    assert hours_between_times(time(20, 0), time(4, 0)) == Decimal("8")


def _summary(base_salary, total_salary):
    return MonthlySummaryFacts(
        user_id="u",
        contract_id=1,
        month=3,
        year=2025,
        total_regular_hours=Decimal("0"),
        total_overtime_hours=Decimal("0"),
        total_night_hours=Decimal("0"),
        total_holiday_hours=Decimal("0"),
        base_salary=Decimal(base_salary),
        overtime_pay=Decimal("0"),
        night_pay=Decimal("0"),
        holiday_pay=Decimal(total_salary) - Decimal(base_salary),
        total_salary=Decimal(total_salary),
    )


def test_payroll_report_adds_unhealthy_bonus_on_base():
    report = payroll_report(_summary("880.00", "950.00"))
    assert report.unhealthy_bonus == Decimal("88.00")
    assert report.total_salary == Decimal("950.00")
    assert report.total_gross == Decimal("1038.00")


def test_statutory_bonuses_monthly():
    contract = ContractTerms(
        contract_type=ContractType.MONTHLY,
        base_amount=Decimal("880"),
        christmas_bonus=True,
        easter_bonus=True,
    )
    bonuses = statutory_bonuses(contract)
    assert bonuses.christmas == Decimal("880.00")
    assert bonuses.easter == Decimal("440.00")
    assert bonuses.vacation == 0
    assert bonuses.total == Decimal("1320.00")


def test_statutory_bonuses_wage_earners():
    daily = ContractTerms(
        contract_type=ContractType.DAILY,
        base_amount=Decimal("40"),
        christmas_bonus=True,
        vacation_bonus=True,
    )
    assert statutory_bonuses(daily).christmas == Decimal("1000.00")
    assert statutory_bonuses(daily).vacation == Decimal("520.00")

    hourly_bonuses = statutory_bonuses(hourly(easter_bonus=True))
    assert hourly_bonuses.easter == Decimal("1200.00")


def test_hours_above_a_full_day_rejected():
    assert compute_daily_wage(hourly(), 24, 0) == Decimal("240")
    with pytest.raises(InvalidHours):
        compute_daily_wage(hourly(), 25, 0)
    with pytest.raises(InvalidHours):
        compute_daily_wage(hourly(), 8, 100000)


def test_hours_finer_than_hundredths_rejected():
    assert compute_daily_wage(hourly(), "7.25", 0) == Decimal("72.5")
    with pytest.raises(InvalidHours):
        compute_daily_wage(hourly(), "0.125", 0)


def test_clock_times_round_to_hundredths():
    assert hours_between_times(time(9, 0), time(9, 20)) == Decimal("0.33")
    assert hours_between_times(time(9, 0), time(9, 40)) == Decimal("0.67")

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .calculations import ContractType


class EmployerIn(BaseModel):
    employer_name: str = Field(min_length=1, max_length=120)
    company_name: str | None = None
    tax_id: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class EmployerOut(EmployerIn):
    model_config = ConfigDict(from_attributes=True)

    id: int


class ContractIn(BaseModel):
    employer_id: int
    contract_type: ContractType
    base_amount: Decimal = Field(ge=0)
    overtime_rate: Decimal = Field(default=Decimal("1.5"), ge=1)
    night_rate: Decimal = Field(default=Decimal("1.25"), ge=1)
    start_date: date
    end_date: date | None = None
    holiday_bonus: bool = False
    christmas_bonus: bool = False
    easter_bonus: bool = False
    vacation_bonus: bool = False


class ContractOut(ContractIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_active: bool


class EntryHoursIn(BaseModel):
    """
    Hours for one day. Negative values are rejected by the payroll engine,
    not here, so the error message is the same for every caller.
    """

    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    night_hours: Decimal = Decimal("0")
    holiday_hours: Decimal = Decimal("0")
    clock_in: time | None = None
    clock_out: time | None = None

    @model_validator(mode="after")
    def check_clock_pair(self):
        if (self.clock_in is None) != (self.clock_out is None):
            raise ValueError("clock_in and clock_out must be given together")
        return self


class EntryIn(EntryHoursIn):
    date: date
    notes: str | None = None


class EntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entry_date: date
    regular_hours: Decimal
    overtime_hours: Decimal
    night_hours: Decimal
    holiday_hours: Decimal
    daily_wage: Decimal
    notes: str | None = None


class WagePreviewOut(BaseModel):
    daily_wage: Decimal


class MonthlySummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class SavedEntryOut(BaseModel):
    entry: EntryOut
    summary: MonthlySummaryOut


class DeletedEntryOut(BaseModel):
    deleted: bool
    summary: MonthlySummaryOut


class PayrollReportOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    base_salary: Decimal
    overtime_pay: Decimal
    night_pay: Decimal
    holiday_pay: Decimal
    total_salary: Decimal
    unhealthy_bonus: Decimal
    total_gross: Decimal


class StatutoryBonusesOut(BaseModel):
    christmas: Decimal
    easter: Decimal
    vacation: Decimal
    total: Decimal


class BalanceOut(BaseModel):
    month: int
    year: int
    total_salary: Decimal

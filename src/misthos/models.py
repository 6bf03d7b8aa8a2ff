from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .calculations import ContractType

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class Base(DeclarativeBase):
    pass


Money = Numeric(12, 2)
Hours = Numeric(6, 2)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Employer(Base):
    __tablename__ = "employer"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    employer_name: Mapped[str] = mapped_column(String(120), nullable=False)
    company_name: Mapped[str | None] = mapped_column(String(120))
    tax_id: Mapped[str | None] = mapped_column(String(20))
    address: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(40))
    email: Mapped[str | None] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )

    contracts: Mapped[list["WorkContract"]] = relationship(
        back_populates="employer",
        cascade="all, delete-orphan",
    )


class WorkContract(Base):
    __tablename__ = "work_contract"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    employer_id: Mapped[int] = mapped_column(ForeignKey("employer.id"), nullable=False)

    contract_type: Mapped[ContractType] = mapped_column(
        SQLEnum(ContractType), nullable=False
    )
    base_amount: Mapped[Decimal] = mapped_column(Money, nullable=False)
    overtime_rate: Mapped[Decimal] = mapped_column(
        Numeric(4, 2), default=Decimal("1.5"), nullable=False
    )
    night_rate: Mapped[Decimal] = mapped_column(
        Numeric(4, 2), default=Decimal("1.25"), nullable=False
    )

    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # informational, holiday pay is always HOLIDAY_RATE whatever this says
    holiday_bonus: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    christmas_bonus: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    easter_bonus: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    vacation_bonus: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )

    employer: Mapped["Employer"] = relationship(back_populates="contracts")

    entries: Mapped[list["WorkEntry"]] = relationship(
        back_populates="contract",
        cascade="all, delete-orphan",
    )

    summaries: Mapped[list["MonthlySummary"]] = relationship(
        back_populates="contract",
        cascade="all, delete-orphan",
    )


class WorkEntry(Base):
    __tablename__ = "work_entry"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "contract_id",
            "entry_date",
            name="uq_work_entry_user_contract_date",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("work_contract.id"), nullable=False
    )

    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    regular_hours: Mapped[Decimal] = mapped_column(Hours, default=Decimal("0"), nullable=False)
    overtime_hours: Mapped[Decimal] = mapped_column(Hours, default=Decimal("0"), nullable=False)
    night_hours: Mapped[Decimal] = mapped_column(Hours, default=Decimal("0"), nullable=False)
    holiday_hours: Mapped[Decimal] = mapped_column(Hours, default=Decimal("0"), nullable=False)

    daily_wage: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    contract: Mapped["WorkContract"] = relationship(back_populates="entries")


class MonthlySummary(Base):
    __tablename__ = "monthly_summary"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "contract_id",
            "month",
            "year",
            name="uq_monthly_summary_period",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("work_contract.id"), nullable=False
    )

    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    total_regular_hours: Mapped[Decimal] = mapped_column(Hours, nullable=False)
    total_overtime_hours: Mapped[Decimal] = mapped_column(Hours, nullable=False)
    total_night_hours: Mapped[Decimal] = mapped_column(Hours, nullable=False)
    total_holiday_hours: Mapped[Decimal] = mapped_column(Hours, nullable=False)

    base_salary: Mapped[Decimal] = mapped_column(Money, nullable=False)
    overtime_pay: Mapped[Decimal] = mapped_column(Money, nullable=False)
    night_pay: Mapped[Decimal] = mapped_column(Money, nullable=False)
    holiday_pay: Mapped[Decimal] = mapped_column(Money, nullable=False)
    total_salary: Mapped[Decimal] = mapped_column(Money, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    contract: Mapped["WorkContract"] = relationship(back_populates="summaries")

"""Create payroll tables

Revision ID: 3f1a8c2d7e5b
Revises:
Create Date: 2025-03-01 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f1a8c2d7e5b"
down_revision = None
branch_labels = None
depends_on = None


contract_type = sa.Enum("HOURLY", "DAILY", "MONTHLY", name="contracttype")


def upgrade() -> None:
    op.create_table(
        "employer",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("employer_name", sa.String(length=120), nullable=False),
        sa.Column("company_name", sa.String(length=120), nullable=True),
        sa.Column("tax_id", sa.String(length=20), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=40), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_employer_user_id", "employer", ["user_id"])

    op.create_table(
        "work_contract",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("employer_id", sa.Integer(), nullable=False),
        sa.Column("contract_type", contract_type, nullable=False),
        sa.Column("base_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("overtime_rate", sa.Numeric(4, 2), nullable=False),
        sa.Column("night_rate", sa.Numeric(4, 2), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("holiday_bonus", sa.Boolean(), nullable=False),
        sa.Column("christmas_bonus", sa.Boolean(), nullable=False),
        sa.Column("easter_bonus", sa.Boolean(), nullable=False),
        sa.Column("vacation_bonus", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["employer_id"], ["employer.id"]),
    )
    op.create_index("ix_work_contract_user_id", "work_contract", ["user_id"])

    op.create_table(
        "work_entry",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("contract_id", sa.Integer(), nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("regular_hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("overtime_hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("night_hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("holiday_hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("daily_wage", sa.Numeric(12, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["contract_id"], ["work_contract.id"]),
        sa.UniqueConstraint(
            "user_id",
            "contract_id",
            "entry_date",
            name="uq_work_entry_user_contract_date",
        ),
    )

    op.create_table(
        "monthly_summary",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("contract_id", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("total_regular_hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("total_overtime_hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("total_night_hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("total_holiday_hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("base_salary", sa.Numeric(12, 2), nullable=False),
        sa.Column("overtime_pay", sa.Numeric(12, 2), nullable=False),
        sa.Column("night_pay", sa.Numeric(12, 2), nullable=False),
        sa.Column("holiday_pay", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_salary", sa.Numeric(12, 2), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["contract_id"], ["work_contract.id"]),
        sa.UniqueConstraint(
            "user_id",
            "contract_id",
            "month",
            "year",
            name="uq_monthly_summary_period",
        ),
    )


def downgrade() -> None:
    op.drop_table("monthly_summary")
    op.drop_table("work_entry")
    op.drop_index("ix_work_contract_user_id", table_name="work_contract")
    op.drop_table("work_contract")
    op.drop_index("ix_employer_user_id", table_name="employer")
    op.drop_table("employer")
    contract_type.drop(op.get_bind(), checkfirst=True)

from datetime import date
from decimal import Decimal

from misthos import crud
from misthos.calculations import ContractType
from misthos.db import init_db, session_scope

USER_ID = "demo-cook"

init_db()

with session_scope() as db:
    employer = crud.create_employer(
        db,
        user_id=USER_ID,
        employer_name="Taverna Test",
        company_name="Test IKE",
    )

    contract = crud.create_contract(
        db,
        user_id=USER_ID,
        employer_id=employer.id,
        contract_type=ContractType.MONTHLY,
        base_amount=Decimal("880.00"),
        start_date=date(2025, 1, 1),
        overtime_rate=Decimal("1.5"),
        night_rate=Decimal("1.25"),
        christmas_bonus=True,
        easter_bonus=True,
        vacation_bonus=True,
    )

    print("user_id=", USER_ID, "employer_id=", employer.id, "contract_id=", contract.id)

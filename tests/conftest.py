import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from misthos import crud
from misthos.calculations import ContractType
from misthos.db import enable_sqlite_savepoints
from misthos.models import Base

USER = "cook-1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_contract(db):
    def _make(contract_type=ContractType.HOURLY, base_amount="10", **terms):
        employer = crud.create_employer(db, user_id=USER, employer_name="Taverna")
        contract = crud.create_contract(
            db,
            user_id=USER,
            employer_id=employer.id,
            contract_type=contract_type,
            base_amount=Decimal(base_amount),
            start_date=date(2025, 1, 1),
            **terms,
        )
        db.commit()
        return contract

    return _make

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import crud, payroll
from .calculations import (
    hours_between_times,
    statutory_bonuses,
)
from .config import settings
from .db import get_db
from .logging_config import setup_logging
from .schemas import (
    BalanceOut,
    ContractIn,
    ContractOut,
    DeletedEntryOut,
    EmployerIn,
    EmployerOut,
    EntryHoursIn,
    EntryIn,
    EntryOut,
    MonthlySummaryOut,
    PayrollReportOut,
    SavedEntryOut,
    StatutoryBonusesOut,
    WagePreviewOut,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_dir)
    logger.info(f"Starting {settings.app_name}")
    yield
    logger.info(f"Stopping {settings.app_name}")


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)


# covers InvalidHours and InvalidContractType
@app.exception_handler(ValueError)
async def invalid_input_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(crud.ContractNotFound)
async def contract_not_found_handler(request: Request, exc: crud.ContractNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(crud.ContractInactive)
async def contract_inactive_handler(request: Request, exc: crud.ContractInactive):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


def resolve_month(month: int | None, year: int | None) -> tuple[int, int]:
    today = date.today()
    month = today.month if month is None else month
    year = today.year if year is None else year
    if not 1 <= month <= 12:
        raise HTTPException(status_code=422, detail="month must be within 1..12")
    if not 1 <= year <= 9999:
        raise HTTPException(status_code=422, detail="year must be within 1..9999")
    return month, year


def entry_hours(payload: EntryHoursIn) -> dict:
    regular_hours = payload.regular_hours
    if payload.clock_in is not None and payload.clock_out is not None:
        regular_hours = hours_between_times(payload.clock_in, payload.clock_out)
    return {
        "regular_hours": regular_hours,
        "overtime_hours": payload.overtime_hours,
        "night_hours": payload.night_hours,
        "holiday_hours": payload.holiday_hours,
    }


@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Employers and contracts
# ---------------------------------------------------------------------------

@app.post("/api/users/{user_id}/employers", response_model=EmployerOut, status_code=201)
def create_employer(user_id: str, payload: EmployerIn, db: Session = Depends(get_db)):
    employer = crud.create_employer(db, user_id=user_id, **payload.model_dump())
    db.commit()
    return employer


@app.get("/api/users/{user_id}/employers", response_model=list[EmployerOut])
def list_employers(user_id: str, db: Session = Depends(get_db)):
    return crud.list_employers(db, user_id)


@app.post("/api/users/{user_id}/contracts", response_model=ContractOut, status_code=201)
def create_contract(user_id: str, payload: ContractIn, db: Session = Depends(get_db)):
    if crud.get_employer(db, user_id, payload.employer_id) is None:
        raise HTTPException(status_code=404, detail="Employer not found")
    contract = crud.create_contract(db, user_id=user_id, **payload.model_dump())
    db.commit()
    return contract


@app.get("/api/users/{user_id}/contracts", response_model=list[ContractOut])
def list_contracts(user_id: str, include_inactive: bool = False, db: Session = Depends(get_db)):
    return crud.list_contracts(db, user_id, active_only=not include_inactive)


@app.delete("/api/users/{user_id}/contracts/{contract_id}", response_model=ContractOut)
def deactivate_contract(user_id: str, contract_id: int, db: Session = Depends(get_db)):
    contract = crud.deactivate_contract(db, user_id=user_id, contract_id=contract_id)
    db.commit()
    return contract


@app.get(
    "/api/users/{user_id}/contracts/{contract_id}/bonuses",
    response_model=StatutoryBonusesOut,
)
def contract_bonuses(user_id: str, contract_id: int, db: Session = Depends(get_db)):
    contract = crud.require_contract(db, user_id, contract_id)
    bonuses = statutory_bonuses(payroll.contract_terms(contract))
    return StatutoryBonusesOut(
        christmas=bonuses.christmas,
        easter=bonuses.easter,
        vacation=bonuses.vacation,
        total=bonuses.total,
    )


# ---------------------------------------------------------------------------
# Daily entries
# ---------------------------------------------------------------------------

@app.post(
    "/api/users/{user_id}/contracts/{contract_id}/entries/preview",
    response_model=WagePreviewOut,
)
def preview_entry(
    user_id: str, contract_id: int, payload: EntryHoursIn, db: Session = Depends(get_db)
):
    wage = payroll.preview_daily_wage(
        db, user_id=user_id, contract_id=contract_id, **entry_hours(payload)
    )
    return WagePreviewOut(daily_wage=wage)


@app.post(
    "/api/users/{user_id}/contracts/{contract_id}/entries",
    response_model=SavedEntryOut,
)
def save_entry(user_id: str, contract_id: int, payload: EntryIn, db: Session = Depends(get_db)):
    entry, summary = payroll.save_entry(
        db,
        user_id=user_id,
        contract_id=contract_id,
        day=payload.date,
        notes=payload.notes,
        **entry_hours(payload),
    )
    db.commit()
    return SavedEntryOut(
        entry=EntryOut.model_validate(entry),
        summary=MonthlySummaryOut.model_validate(summary),
    )


@app.get(
    "/api/users/{user_id}/contracts/{contract_id}/entries",
    response_model=list[EntryOut],
)
def list_entries(
    user_id: str,
    contract_id: int,
    month: int | None = None,
    year: int | None = None,
    db: Session = Depends(get_db),
):
    month, year = resolve_month(month, year)
    crud.require_contract(db, user_id, contract_id)
    return crud.list_entries_for_month(db, user_id, contract_id, month, year)


@app.delete(
    "/api/users/{user_id}/contracts/{contract_id}/entries/{day}",
    response_model=DeletedEntryOut,
)
def delete_entry(user_id: str, contract_id: int, day: date, db: Session = Depends(get_db)):
    deleted, summary = payroll.remove_entry(
        db, user_id=user_id, contract_id=contract_id, day=day
    )
    db.commit()
    return DeletedEntryOut(
        deleted=deleted, summary=MonthlySummaryOut.model_validate(summary)
    )


# ---------------------------------------------------------------------------
# Summaries and reports
# ---------------------------------------------------------------------------

@app.get(
    "/api/users/{user_id}/contracts/{contract_id}/summary",
    response_model=MonthlySummaryOut,
)
def monthly_summary(
    user_id: str,
    contract_id: int,
    month: int | None = None,
    year: int | None = None,
    db: Session = Depends(get_db),
):
    month, year = resolve_month(month, year)
    crud.require_contract(db, user_id, contract_id)
    summary = crud.get_monthly_summary(
        db, user_id=user_id, contract_id=contract_id, month=month, year=year
    )
    if summary is None:
        summary = payroll.refresh_monthly_summary(
            db, user_id=user_id, contract_id=contract_id, month=month, year=year
        )
        db.commit()
    return summary


@app.get(
    "/api/users/{user_id}/contracts/{contract_id}/report",
    response_model=PayrollReportOut,
)
def payroll_report(
    user_id: str,
    contract_id: int,
    month: int | None = None,
    year: int | None = None,
    db: Session = Depends(get_db),
):
    month, year = resolve_month(month, year)
    report = payroll.build_payroll_report(
        db, user_id=user_id, contract_id=contract_id, month=month, year=year
    )
    return PayrollReportOut.model_validate(report)


@app.get("/api/users/{user_id}/balance", response_model=BalanceOut)
def monthly_balance(
    user_id: str,
    month: int | None = None,
    year: int | None = None,
    db: Session = Depends(get_db),
):
    month, year = resolve_month(month, year)
    total = crud.monthly_balance(db, user_id, month, year)
    return BalanceOut(month=month, year=year, total_salary=total)


@app.get("/api/users/{user_id}/trend", response_model=list[MonthlySummaryOut])
def salary_trend(user_id: str, year: int | None = None, db: Session = Depends(get_db)):
    return crud.list_monthly_summaries(db, user_id, year=year)

from datetime import date
from decimal import Decimal
from typing import List, Optional, Union

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from db import get_db
from models.logged_transaction import LoggedTransaction
from repositories.recurring_rules_repository import list_recurring_rules
from routes.rules import RecurringRuleIn
from services.annual_projection_service import project_year
from services.forecast_dto import AnnualProjectionDTO, CashFlowResponseDTO, ForecastResponseDTO
from services.forecast_service import forecast
from services.projection_service import calculate_projection
from utils.config import FORECAST_HORIZON_DAYS
from utils.money import parse_money

router = APIRouter()


class ForecastRequest(BaseModel):
    rules: List[RecurringRuleIn] = []
    horizon_days: int = Field(FORECAST_HORIZON_DAYS, ge=0, le=366)
    today: Optional[date] = None


class LoggedTransactionIn(BaseModel):
    posted_date: date
    amount: Decimal = Field(..., ge=0)
    kind: str = "expense"
    recurring_rule_id: Optional[Union[str, int]] = None

    def to_transaction(self):
        return LoggedTransaction(
            date=self.posted_date,
            amount=self.amount,
            kind=self.kind,
            recurring_rule_id=str(self.recurring_rule_id) if self.recurring_rule_id is not None else None,
        )


class AnnualProjectionRequest(BaseModel):
    rules: List[RecurringRuleIn] = []
    transactions: List[LoggedTransactionIn] = []
    year: int = Field(..., ge=1, le=9998)
    starting_balance: Optional[Decimal] = None


@router.post("/forecast")
def post_forecast(request: ForecastRequest):
    """
    Stateless relative cash-flow forecast for the supplied rules.

    Returns one point for ``today`` and each of the next ``horizon_days``;
    rules that fail validation are listed under ``skipped``.
    """
    rules = [rule.to_rule() for rule in request.rules]
    cash_flow = forecast(rules, horizon_days=request.horizon_days, today=request.today)
    return CashFlowResponseDTO.from_forecast(cash_flow)


@router.get("/forecast")
def get_forecast(
    as_of_date: Optional[str] = Query(None),
    horizon_days: int = Query(FORECAST_HORIZON_DAYS, ge=0, le=366),
    starting_balance: Optional[str] = Query(None),
):
    """
    Return a deterministic balance projection from the stored recurring rules.

    Query Parameters:
        as_of_date (optional): Reference date in ISO format (YYYY-MM-DD).
                              Defaults to today if not provided.
        starting_balance (optional): Balance to overlay the forecast on.

    Returns:
        ForecastResponseDTO: daily projected balances with event annotations.
    """
    try:
        as_of = date.fromisoformat(as_of_date) if as_of_date else None
    except ValueError:
        return {"error": "Invalid date format. Use YYYY-MM-DD."}

    try:
        balance = parse_money(starting_balance) if starting_balance else Decimal("0.00")
    except ValueError as e:
        return {"error": str(e)}

    conn = get_db()
    try:
        rules = list_recurring_rules(conn)
    finally:
        conn.close()

    projection = calculate_projection(
        rules, starting_balance=balance, today=as_of, horizon_days=horizon_days
    )
    return ForecastResponseDTO.from_projection(projection)


@router.post("/forecast/annual")
def post_annual_projection(request: AnnualProjectionRequest):
    """
    Month-by-month projection of one calendar year.

    Logged transactions are counted as recorded; recurring occurrences
    already materialized into the ledger are not counted twice.
    """
    rules = [rule.to_rule() for rule in request.rules]
    logged = [t.to_transaction() for t in request.transactions]
    annual = project_year(rules, logged, request.year, starting_balance=request.starting_balance)
    return AnnualProjectionDTO.from_annual(annual)

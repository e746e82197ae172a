from datetime import date
from decimal import Decimal

from models.projection_dto import DailyProjection, ProjectionResult
from services.forecast_service import forecast
from utils.config import FORECAST_HORIZON_DAYS


def calculate_projection(rules, starting_balance=Decimal("0.00"), today=None,
                         horizon_days=FORECAST_HORIZON_DAYS) -> ProjectionResult:
    """Deterministic balance projection over the forecast horizon.

    Pure function of the starting balance, the recurring rules and ``today``.
    No writes, no side effects; overlays the relative cash-flow forecast on
    ``starting_balance``.
    """
    if today is None:
        today = date.today()

    cash_flow = forecast(rules, horizon_days=horizon_days, today=today)

    timeline = [
        DailyProjection(
            date=point.date,
            projected_balance=starting_balance + point.balance,
            events=point.events,
        )
        for point in cash_flow.points
    ]

    balances = [day.projected_balance for day in timeline]
    return ProjectionResult(
        start_date=cash_flow.start_date,
        end_date=cash_flow.end_date,
        starting_balance=starting_balance,
        timeline=timeline,
        ending_balance=balances[-1],
        lowest_balance=min(balances),
        skipped=cash_flow.skipped,
    )

"""
Annual Projection Service: month-by-month income, expenses and balance for
one calendar year.

Logged transactions count as recorded; recurring occurrences fill in the
rest of the year unless the ledger already holds a transaction materialized
from the same rule on the same day.
"""
import logging
from datetime import date
from decimal import Decimal

from models.projection_dto import AnnualProjection, MonthlyProjection
from models.skipped_rule import SkippedRule
from services.forecast_service import get_financial_rules
from services.occurrence_service import validate_rule
from services.schedule_errors import ScheduleError
from services.window_expander import occurrences_between

logger = logging.getLogger(__name__)


def opening_balance(logged, year_start: date) -> Decimal:
    """Signed sum of every logged transaction before ``year_start``."""
    return sum(
        (t.signed_amount for t in logged if t.date < year_start),
        Decimal("0.00"),
    )


def project_year(rules, logged, year: int, starting_balance=None) -> AnnualProjection:
    """Cumulative monthly projection for ``year``.

    ``starting_balance`` defaults to the balance of the logged transactions
    dated before January 1st.
    """
    year_start = date(year, 1, 1)
    year_end = date(year + 1, 1, 1)
    if starting_balance is None:
        starting_balance = opening_balance(logged, year_start)

    income = [Decimal("0.00")] * 12
    expenses = [Decimal("0.00")] * 12

    year_logged = [t for t in logged if year_start <= t.date < year_end]
    materialized = {
        (str(t.recurring_rule_id), t.date)
        for t in year_logged
        if t.recurring_rule_id is not None
    }
    for t in year_logged:
        if t.kind == "earning":
            income[t.date.month - 1] += t.amount
        else:
            expenses[t.date.month - 1] += t.amount

    skipped = []
    for rule in get_financial_rules(rules):
        try:
            validate_rule(rule)
            occurrences = occurrences_between(rule, year_start, year_end)
        except ScheduleError as e:
            logger.warning("Skipping recurring rule %s: %s", rule.id, e)
            skipped.append(SkippedRule.from_error(rule.id, e))
            continue

        for occ_date in occurrences:
            if (rule.id, occ_date) in materialized:
                continue
            if rule.is_earning:
                income[occ_date.month - 1] += rule.amount
            else:
                expenses[occ_date.month - 1] += rule.amount

    months = []
    balance = starting_balance
    for index in range(12):
        net_change = income[index] - expenses[index]
        balance += net_change
        months.append(MonthlyProjection(
            month=index + 1,
            label=date(year, index + 1, 1).strftime("%b"),
            income=income[index],
            expenses=expenses[index],
            net_change=net_change,
            balance=balance,
        ))

    return AnnualProjection(
        year=year,
        starting_balance=starting_balance,
        months=months,
        skipped=skipped,
    )

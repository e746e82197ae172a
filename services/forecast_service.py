### Forecast service looks ahead in recurring rules and predicts future cash flow based on known patterns.
import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal

from models.projection_dto import CashFlowForecast, CashFlowPoint
from models.skipped_rule import SkippedRule
from services.occurrence_service import validate_rule
from services.schedule_errors import ScheduleError
from services.window_expander import occurrences_between
from utils.config import FORECAST_HORIZON_DAYS
from utils.dates import day_range
from utils.money import format_delta

logger = logging.getLogger(__name__)


def get_financial_rules(rules):
    return [rule for rule in rules if rule.is_financial and rule.active]


def collect_daily_changes(rules, today, window_end):
    """Bucket every financial occurrence in ``[today, window_end)`` by day.

    Returns ``(changes, skipped)`` where ``changes`` maps a date to
    ``{"change": Decimal, "events": [str, ...]}``.
    """
    changes = defaultdict(lambda: {"change": Decimal("0.00"), "events": []})
    skipped = []

    for rule in get_financial_rules(rules):
        try:
            validate_rule(rule)
            occurrences = occurrences_between(rule, today, window_end)
        except ScheduleError as e:
            logger.warning("Skipping recurring rule %s: %s", rule.id, e)
            skipped.append(SkippedRule.from_error(rule.id, e))
            continue

        for occ_date in occurrences:
            bucket = changes[occ_date]
            bucket["change"] += rule.signed_amount
            bucket["events"].append(
                format_delta(rule.amount, rule.is_earning, rule.description)
            )

    return changes, skipped


def forecast(rules, horizon_days=FORECAST_HORIZON_DAYS, today=None) -> CashFlowForecast:
    """Relative running balance for today and each of the next ``horizon_days``.

    Day 0 is ``today``; the balance starts at zero and each point includes
    every delta landing on or before its date.
    """
    if horizon_days < 0:
        raise ValueError("horizon_days must be non-negative")
    if today is None:
        today = date.today()

    window_end = today + timedelta(days=horizon_days)
    changes, skipped = collect_daily_changes(rules, today, window_end)

    points = []
    cumulative_balance = Decimal("0.00")
    for day in day_range(today, horizon_days):
        bucket = changes.get(day)
        if bucket:
            cumulative_balance += bucket["change"]
        points.append(CashFlowPoint(
            date=day,
            balance=cumulative_balance,
            events=list(bucket["events"]) if bucket else [],
        ))

    logger.debug(
        "Forecast %s..%s over %d rules, %d skipped",
        today, window_end, len(rules), len(skipped),
    )
    return CashFlowForecast(
        start_date=today,
        end_date=window_end,
        points=points,
        skipped=skipped,
    )

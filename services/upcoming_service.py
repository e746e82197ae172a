"""
Upcoming Service: pending occurrences awaiting materialization.

Lists what a materialization job would still have to record for each rule:
everything strictly after the rule's cursor, including overdue dates.
"""
import logging
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from models.projection_dto import UpcomingOccurrence, UpcomingResult
from models.skipped_rule import SkippedRule
from services.occurrence_service import schedule_for, validate_rule
from services.schedule_errors import InvariantViolation, ScheduleError
from services.window_expander import resume_cursor
from utils.config import (
    UPCOMING_LOOKAHEAD_DAYS,
    UPCOMING_LOOKBEHIND_MONTHS,
    UPCOMING_MAX_PER_RULE,
)

logger = logging.getLogger(__name__)

OVERDUE = "overdue"
DUE = "due"
UPCOMING = "upcoming"


def occurrence_status(occurrence: date, today: date) -> str:
    if occurrence < today:
        return OVERDUE
    if occurrence == today:
        return DUE
    return UPCOMING


def pending_occurrences(rule, lookbehind: date, lookahead: date, max_items: int):
    schedule = schedule_for(rule)
    candidate = schedule.next_after(resume_cursor(rule))
    found = []
    while candidate < lookahead and len(found) < max_items:
        if rule.end_date is not None and candidate > rule.end_date:
            break
        if candidate > lookbehind:
            found.append(candidate)
            following = schedule.next_after(candidate)
        else:
            following = schedule.next_after(lookbehind)
        if following <= candidate:
            raise InvariantViolation(
                rule.id, f"occurrence {following} does not advance past {candidate}"
            )
        candidate = following
    return found


def list_upcoming(rules, today=None, lookahead_days=UPCOMING_LOOKAHEAD_DAYS,
                  lookbehind_months=UPCOMING_LOOKBEHIND_MONTHS,
                  max_per_rule=UPCOMING_MAX_PER_RULE, limit=None) -> UpcomingResult:
    if today is None:
        today = date.today()
    lookahead = today + timedelta(days=lookahead_days)
    lookbehind = today - relativedelta(months=lookbehind_months)

    items = []
    skipped = []
    for rule in rules:
        if not rule.active:
            continue
        try:
            validate_rule(rule)
            dates = pending_occurrences(rule, lookbehind, lookahead, max_per_rule)
        except ScheduleError as e:
            logger.warning("Skipping recurring rule %s: %s", rule.id, e)
            skipped.append(SkippedRule.from_error(rule.id, e))
            continue
        items.extend(
            UpcomingOccurrence(rule=rule, date=d, status=occurrence_status(d, today))
            for d in dates
        )

    items.sort(key=lambda item: (item.date, str(item.rule.id)))
    if limit is not None:
        items = items[:limit]
    return UpcomingResult(items=items, skipped=skipped, as_of=today)

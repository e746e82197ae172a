"""
Window Expander: bounded, resumable expansion of one rule into dates.

Pure function of the rule and the window; the rule's ``last_processed_date``
is read but never advanced here.
"""
from datetime import date, timedelta
from typing import Iterator

from models.recurrence_rule import RecurrenceRule
from services.occurrence_service import schedule_for
from services.schedule_errors import InvariantViolation


def resume_cursor(rule: RecurrenceRule) -> date:
    """Materialization cursor, never earlier than the rule's start date."""
    cursor = rule.last_processed_date or rule.start_date
    if cursor < rule.start_date:
        cursor = rule.start_date
    return cursor


def expand(rule: RecurrenceRule, window_start: date, window_end: date) -> Iterator[date]:
    """Yield the rule's occurrences in ``[window_start, window_end)``.

    Dates are strictly increasing and never fall before ``start_date`` or
    after ``end_date``. A stored ``last_processed_date`` on or after
    ``window_start`` is itself the first candidate, so the very next due
    occurrence is not skipped. A stored cursor earlier than ``start_date``
    is clamped and treated as absent.

    Raises ``ScheduleError`` subclasses lazily, on first iteration.
    """
    schedule = schedule_for(rule)
    cursor = resume_cursor(rule)

    stored = rule.last_processed_date
    if stored is not None and stored >= rule.start_date and stored >= window_start:
        candidate = stored
    else:
        candidate = schedule.next_after(cursor)

    while candidate < window_end:
        if rule.end_date is not None and candidate > rule.end_date:
            return
        if candidate >= window_start:
            yield candidate
            following = schedule.next_after(candidate)
        else:
            # jump straight to the first occurrence on or after window_start
            following = schedule.next_after(max(candidate, window_start - timedelta(days=1)))
        if following <= candidate:
            raise InvariantViolation(
                rule.id, f"occurrence {following} does not advance past {candidate}"
            )
        candidate = following


def occurrences_between(rule: RecurrenceRule, window_start: date, window_end: date) -> list:
    """Eager form of ``expand``; errors surface immediately."""
    return list(expand(rule, window_start, window_end))

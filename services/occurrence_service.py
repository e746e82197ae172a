"""
Occurrence Service: single-step recurrence arithmetic.

Each frequency is modelled by its own schedule object so every branch can be
exercised in isolation. ``next_occurrence(cursor, rule)`` always returns a
date strictly after ``cursor`` in a constant number of steps.
"""
from dataclasses import dataclass
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from models.recurrence_rule import (
    BI_WEEKLY,
    DAILY,
    FREQUENCY_ALIASES,
    KINDS,
    MONTHLY,
    WEEKLY,
    YEARLY,
    RecurrenceRule,
)
from services.schedule_errors import ConfigurationError, MissingStartDateError
from utils.dates import sunday_weekday


def clamp_to_month(year: int, month: int, day: int) -> date:
    """``day`` of the given month, clamped to the month's last day."""
    return date(year, month, 1) + relativedelta(day=day)


@dataclass(frozen=True)
class DailySchedule:
    def next_after(self, cursor: date) -> date:
        return cursor + timedelta(days=1)


@dataclass(frozen=True)
class WeeklySchedule:
    weekday: int  # 0=Sunday..6=Saturday

    def next_after(self, cursor: date) -> date:
        delta = (self.weekday - sunday_weekday(cursor)) % 7
        return cursor + timedelta(days=delta or 7)


@dataclass(frozen=True)
class BiWeeklySchedule:
    weekday: int
    anchor: date  # first matching weekday on or after the rule's start date

    def next_after(self, cursor: date) -> date:
        if cursor < self.anchor:
            return self.anchor
        cycles = (cursor - self.anchor).days // 14 + 1
        return self.anchor + timedelta(days=cycles * 14)


@dataclass(frozen=True)
class MonthlySchedule:
    day: int  # 1-31, clamped in shorter months

    def next_after(self, cursor: date) -> date:
        candidate = clamp_to_month(cursor.year, cursor.month, self.day)
        if candidate > cursor:
            return candidate
        following = cursor + relativedelta(months=1)
        return clamp_to_month(following.year, following.month, self.day)


@dataclass(frozen=True)
class YearlySchedule:
    month: int
    day: int

    def next_after(self, cursor: date) -> date:
        candidate = clamp_to_month(cursor.year, self.month, self.day)
        if candidate > cursor:
            return candidate
        return clamp_to_month(cursor.year + 1, self.month, self.day)


def normalize_frequency(frequency) -> str:
    value = (frequency or "").strip().lower()
    return FREQUENCY_ALIASES.get(value, value)


def validate_rule(rule: RecurrenceRule) -> None:
    """Raise a ``ScheduleError`` subclass if the rule cannot be expanded."""
    if rule.start_date is None:
        raise MissingStartDateError(rule.id, "missing start_date")
    if rule.end_date is not None and rule.end_date < rule.start_date:
        raise ConfigurationError(
            rule.id, f"end_date {rule.end_date} is before start_date {rule.start_date}"
        )
    if rule.kind is not None and rule.kind not in KINDS:
        raise ConfigurationError(rule.id, f"unknown kind {rule.kind!r}")
    if rule.amount is not None and rule.amount < 0:
        raise ConfigurationError(rule.id, "amount must be non-negative")
    # building the schedule checks frequency and occurrence_day
    schedule_for(rule)


def schedule_for(rule: RecurrenceRule):
    """Build the schedule object for a rule's frequency."""
    if rule.start_date is None:
        raise MissingStartDateError(rule.id, "missing start_date")

    start = rule.start_date
    frequency = normalize_frequency(rule.frequency)
    day = rule.occurrence_day

    if frequency == DAILY:
        return DailySchedule()

    if frequency in (WEEKLY, BI_WEEKLY):
        if day is None:
            day = sunday_weekday(start)
        elif not 0 <= day <= 6:
            raise ConfigurationError(
                rule.id, f"occurrence_day {day} out of range 0-6 for {frequency}"
            )
        if frequency == WEEKLY:
            return WeeklySchedule(weekday=day)
        anchor = start + timedelta(days=(day - sunday_weekday(start)) % 7)
        return BiWeeklySchedule(weekday=day, anchor=anchor)

    if frequency == MONTHLY:
        if day is None:
            day = start.day
        elif not 1 <= day <= 31:
            raise ConfigurationError(
                rule.id, f"occurrence_day {day} out of range 1-31 for monthly"
            )
        return MonthlySchedule(day=day)

    if frequency == YEARLY:
        return YearlySchedule(month=start.month, day=start.day)

    raise ConfigurationError(rule.id, f"unrecognized frequency {rule.frequency!r}")


def next_occurrence(cursor: date, rule: RecurrenceRule) -> date:
    """Next date strictly after ``cursor`` on which ``rule`` fires."""
    return schedule_for(rule).next_after(cursor)

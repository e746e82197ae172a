from datetime import date, timedelta

import pytest

from conftest import make_rule
from services.occurrence_service import (
    BiWeeklySchedule,
    MonthlySchedule,
    WeeklySchedule,
    next_occurrence,
    schedule_for,
    validate_rule,
)
from services.schedule_errors import (
    ConfigurationError,
    MissingStartDateError,
    ScheduleError,
)

FRIDAY = 5


def test_weekly_moves_to_next_matching_weekday():
    rule = make_rule(occurrence_day=FRIDAY)

    assert next_occurrence(date(2024, 2, 29), rule) == date(2024, 3, 1)
    assert next_occurrence(date(2024, 3, 2), rule) == date(2024, 3, 8)


def test_weekly_never_returns_the_cursor():
    rule = make_rule(occurrence_day=FRIDAY)

    assert next_occurrence(date(2024, 3, 1), rule) == date(2024, 3, 8)


def test_weekly_sunday_is_day_zero():
    rule = make_rule(occurrence_day=0)

    assert next_occurrence(date(2024, 3, 1), rule) == date(2024, 3, 3)


def test_weekly_defaults_to_start_date_weekday():
    # 2024-01-01 is a Monday
    rule = make_rule(occurrence_day=None)

    assert schedule_for(rule) == WeeklySchedule(weekday=1)
    assert next_occurrence(date(2024, 1, 1), rule) == date(2024, 1, 8)


def test_bi_weekly_anchors_on_first_matching_day_after_start():
    rule = make_rule(frequency="bi-weekly", occurrence_day=FRIDAY)

    assert schedule_for(rule) == BiWeeklySchedule(weekday=FRIDAY, anchor=date(2024, 1, 5))
    assert next_occurrence(date(2023, 12, 1), rule) == date(2024, 1, 5)
    assert next_occurrence(date(2024, 1, 1), rule) == date(2024, 1, 5)


def test_bi_weekly_skips_off_cadence_weeks():
    rule = make_rule(frequency="bi-weekly", occurrence_day=FRIDAY)

    assert next_occurrence(date(2024, 1, 5), rule) == date(2024, 1, 19)
    # 2024-01-12 is a Friday but not on the two-week cadence
    assert next_occurrence(date(2024, 1, 11), rule) == date(2024, 1, 19)
    assert next_occurrence(date(2024, 1, 12), rule) == date(2024, 1, 19)


def test_biweekly_alias_is_accepted():
    rule = make_rule(frequency="biweekly", occurrence_day=FRIDAY)

    assert next_occurrence(date(2024, 1, 5), rule) == date(2024, 1, 19)


def test_monthly_uses_start_day_when_unset():
    rule = make_rule(frequency="monthly", start_date=date(2024, 1, 15))

    assert schedule_for(rule) == MonthlySchedule(day=15)
    assert next_occurrence(date(2024, 1, 10), rule) == date(2024, 1, 15)
    assert next_occurrence(date(2024, 1, 15), rule) == date(2024, 2, 15)


def test_monthly_day_31_clamps_to_end_of_short_months():
    rule = make_rule(frequency="monthly", occurrence_day=31)

    assert next_occurrence(date(2024, 1, 31), rule) == date(2024, 2, 29)
    assert next_occurrence(date(2023, 1, 31), rule) == date(2023, 2, 28)
    assert next_occurrence(date(2024, 4, 15), rule) == date(2024, 4, 30)


def test_monthly_clamp_does_not_drift():
    rule = make_rule(frequency="monthly", occurrence_day=31)

    assert next_occurrence(date(2024, 2, 29), rule) == date(2024, 3, 31)


def test_monthly_year_rollover():
    rule = make_rule(frequency="monthly", occurrence_day=5)

    assert next_occurrence(date(2024, 12, 5), rule) == date(2025, 1, 5)


def test_daily_advances_one_day():
    rule = make_rule(frequency="daily")

    assert next_occurrence(date(2024, 2, 28), rule) == date(2024, 2, 29)


def test_yearly_uses_start_month_and_day():
    rule = make_rule(frequency="yearly", start_date=date(2023, 6, 10))

    assert next_occurrence(date(2024, 1, 1), rule) == date(2024, 6, 10)
    assert next_occurrence(date(2024, 6, 10), rule) == date(2025, 6, 10)


def test_yearly_leap_day_clamps_in_common_years():
    rule = make_rule(frequency="yearly", start_date=date(2024, 2, 29))

    assert next_occurrence(date(2024, 2, 29), rule) == date(2025, 2, 28)
    assert next_occurrence(date(2025, 2, 28), rule) == date(2026, 2, 28)


def test_unknown_frequency_names_the_rule():
    rule = make_rule(id="rent-7", frequency="fortnightly-ish")

    with pytest.raises(ConfigurationError) as excinfo:
        next_occurrence(date(2024, 1, 1), rule)

    assert excinfo.value.rule_id == "rent-7"
    assert "rent-7" in str(excinfo.value)


@pytest.mark.parametrize("frequency,day", [
    ("weekly", 7),
    ("weekly", -1),
    ("bi-weekly", 8),
    ("monthly", 0),
    ("monthly", 32),
])
def test_out_of_range_occurrence_day(frequency, day):
    rule = make_rule(frequency=frequency, occurrence_day=day)

    with pytest.raises(ConfigurationError):
        schedule_for(rule)


def test_missing_start_date():
    rule = make_rule(start_date=None)

    with pytest.raises(MissingStartDateError):
        next_occurrence(date(2024, 1, 1), rule)


def test_validate_rule_checks_fields():
    validate_rule(make_rule())

    with pytest.raises(ConfigurationError):
        validate_rule(make_rule(end_date=date(2023, 12, 31)))
    with pytest.raises(ConfigurationError):
        validate_rule(make_rule(kind="refund"))
    with pytest.raises(ConfigurationError):
        validate_rule(make_rule(amount=-1))
    with pytest.raises(ScheduleError):
        validate_rule(make_rule(start_date=None))


@pytest.mark.parametrize("rule", [
    make_rule(frequency="daily"),
    make_rule(frequency="weekly", occurrence_day=3),
    make_rule(frequency="bi-weekly", occurrence_day=0),
    make_rule(frequency="monthly", occurrence_day=31),
    make_rule(frequency="monthly", occurrence_day=1),
    make_rule(frequency="yearly", start_date=date(2024, 2, 29)),
])
def test_next_occurrence_is_strictly_after_cursor(rule):
    cursor = date(2023, 11, 1)
    for offset in range(0, 500, 3):
        day = cursor + timedelta(days=offset)
        assert next_occurrence(day, rule) > day

from datetime import date, datetime
from decimal import Decimal

from conftest import make_rule
from models.calendar_item import CalendarItem
from services.calendar_service import aggregate, forecast_event_id

FRIDAY = 5
TODAY = date(2024, 3, 1)

ITEMS = [
    CalendarItem(item_id="e1", title="Dentist", start_time=datetime(2024, 3, 4, 9),
                 item_type="event", data={"location": "Main St"}),
    CalendarItem(item_id="t1", title="File taxes", start_time=datetime(2024, 3, 5),
                 item_type="task", data=None),
    CalendarItem(item_id="h1", title="Habits", start_time=datetime(2024, 3, 5),
                 item_type="habit_summary", data=3),
]


def test_forecast_ids_are_derived_from_rule_and_date():
    assert forecast_event_id("r1", date(2024, 3, 1)) == "forecast-r1-2024-03-01"


def test_merges_base_items_and_forecasts():
    rule = make_rule(occurrence_day=FRIDAY)

    timeline = aggregate(ITEMS, [rule], active_types={"event", "task", "forecast"},
                         today=TODAY, horizon_days=14)

    ids = [event.id for event in timeline.events]
    assert ids == ["e1", "t1", "forecast-r1-2024-03-01", "forecast-r1-2024-03-08"]
    forecast_event = timeline.events[2]
    assert forecast_event.type == "forecast"
    assert forecast_event.all_day is True
    assert forecast_event.title == "Rent"
    assert forecast_event.data == {"amount": Decimal("50.00"), "kind": "expense", "rule_id": "r1"}


def test_filters_drop_unselected_types():
    rule = make_rule(occurrence_day=FRIDAY)

    timeline = aggregate(ITEMS, [rule], active_types={"task"}, today=TODAY)

    assert [event.id for event in timeline.events] == ["t1"]


def test_default_filters():
    timeline = aggregate(ITEMS, [], today=TODAY)

    assert [event.type for event in timeline.events] == ["event", "task"]


def test_base_item_payloads_become_dicts():
    timeline = aggregate(ITEMS, [], active_types={"habit_summary", "task"}, today=TODAY)

    assert timeline.events[0].data == {}
    assert timeline.events[1].data == {"value": 3}


def test_visible_window_clips_forecasts():
    rule = make_rule(occurrence_day=FRIDAY)

    narrow = aggregate([], [rule], active_types={"forecast"}, today=TODAY,
                       window=(date(2024, 3, 1), date(2024, 3, 7)))
    inclusive = aggregate([], [rule], active_types={"forecast"}, today=TODAY,
                          window=(date(2024, 3, 1), date(2024, 3, 8)))
    past = aggregate([], [rule], active_types={"forecast"}, today=TODAY,
                     window=(date(2024, 2, 1), date(2024, 2, 28)))

    assert [e.start for e in narrow.events] == [date(2024, 3, 1)]
    assert [e.start for e in inclusive.events] == [date(2024, 3, 1), date(2024, 3, 8)]
    assert past.events == []


def test_calendar_only_rules_are_forecast_too():
    rule = make_rule(id="yoga", description="Yoga", kind=None, amount=Decimal("0"),
                     occurrence_day=FRIDAY)

    timeline = aggregate([], [rule], active_types={"forecast"}, today=TODAY, horizon_days=7)

    assert [e.id for e in timeline.events] == ["forecast-yoga-2024-03-01"]


def test_bad_rule_reported_without_blanking_timeline():
    good = make_rule(occurrence_day=FRIDAY)
    bad = make_rule(id="bad", occurrence_day=9)

    timeline = aggregate(ITEMS[:1], [bad, good], active_types={"event", "forecast"},
                         today=TODAY, horizon_days=7)

    assert [e.id for e in timeline.events] == ["e1", "forecast-r1-2024-03-01"]
    assert timeline.skipped[0].rule_id == "bad"
    assert timeline.skipped[0].error == "ConfigurationError"


def test_rule_ending_before_it_starts_is_reported():
    rule = make_rule(occurrence_day=FRIDAY, end_date=date(2023, 12, 1))

    timeline = aggregate([], [rule], active_types={"forecast"}, today=TODAY)

    assert timeline.events == []
    assert [(s.rule_id, s.error) for s in timeline.skipped] == [("r1", "ConfigurationError")]

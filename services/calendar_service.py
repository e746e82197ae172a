"""
Calendar Service: unified timeline of one-off items and forecast occurrences.

No deduplication: forecast occurrences are future-only and never persisted,
so they cannot collide with stored items.
"""
import logging
from datetime import date, timedelta

from models.calendar_item import FORECAST_TYPE, CalendarItem, TimelineEvent
from models.projection_dto import Timeline
from models.skipped_rule import SkippedRule
from services.occurrence_service import validate_rule
from services.schedule_errors import ScheduleError
from services.window_expander import occurrences_between
from utils.config import DEFAULT_ACTIVE_TYPES, FORECAST_HORIZON_DAYS

logger = logging.getLogger(__name__)


def forecast_event_id(rule_id, occurrence: date) -> str:
    return f"forecast-{rule_id}-{occurrence.isoformat()}"


def map_item_to_event(item: CalendarItem) -> TimelineEvent:
    data = item.data
    if data is None:
        data = {}
    elif not isinstance(data, dict):
        data = {"value": data}
    return TimelineEvent(
        id=item.item_id,
        title=item.title,
        start=item.start_time,
        end=item.end_time,
        type=item.item_type,
        data=data,
    )


def synthesize_forecast_events(rule, window_start, window_end):
    return [
        TimelineEvent(
            id=forecast_event_id(rule.id, occurrence),
            title=rule.description,
            start=occurrence,
            type=FORECAST_TYPE,
            all_day=True,
            data={"amount": rule.amount, "kind": rule.kind, "rule_id": rule.id},
        )
        for occurrence in occurrences_between(rule, window_start, window_end)
    ]


def aggregate(base_items, rules, active_types=None, window=None, today=None,
              horizon_days=FORECAST_HORIZON_DAYS) -> Timeline:
    """Merge base items with forecast occurrences and filter by type.

    Forecasts cover ``[today, today + horizon_days)``; when ``window`` is a
    ``(start, end)`` date pair they are further clipped to it (``end``
    inclusive). Base items are passed through as supplied.
    """
    if today is None:
        today = date.today()
    if active_types is None:
        active_types = DEFAULT_ACTIVE_TYPES
    active_types = set(active_types)

    window_start = today
    window_end = today + timedelta(days=horizon_days)
    if window is not None:
        visible_start, visible_end = window
        window_start = max(window_start, visible_start)
        window_end = min(window_end, visible_end + timedelta(days=1))

    events = [map_item_to_event(item) for item in base_items]
    skipped = []

    if FORECAST_TYPE in active_types and window_start < window_end:
        for rule in rules:
            if not rule.active:
                continue
            try:
                validate_rule(rule)
                events.extend(synthesize_forecast_events(rule, window_start, window_end))
            except ScheduleError as e:
                logger.warning("Skipping recurring rule %s: %s", rule.id, e)
                skipped.append(SkippedRule.from_error(rule.id, e))

    filtered = [event for event in events if event.type in active_types]
    return Timeline(events=filtered, skipped=skipped)

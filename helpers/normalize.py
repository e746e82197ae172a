# helpers/normalize.py
import json
from datetime import datetime

from models.calendar_item import CalendarItem
from models.recurrence_rule import RecurrenceRule
from utils.dates import parse_iso_date
from utils.money import parse_money


def normalize_rule_row(row: dict) -> RecurrenceRule:
    """
    Convert a recurring_rules row (or request payload) into a RecurrenceRule.

    Dates may arrive as ``date`` objects (DuckDB) or ISO strings (JSON).
    A missing start date is kept as ``None`` so the engine can report it.
    """
    kind = row.get("kind") or row.get("type") or None
    occurrence_day = row.get("occurrence_day")
    amount = row.get("amount")
    return RecurrenceRule(
        id=str(row["id"]),
        description=row.get("description") or "",
        frequency=row.get("frequency") or "",
        start_date=parse_iso_date(row.get("start_date")),
        amount=parse_money(amount) if amount is not None else parse_money(0),
        kind=kind.strip().lower() if isinstance(kind, str) else kind,
        occurrence_day=int(occurrence_day) if occurrence_day is not None else None,
        end_date=parse_iso_date(row.get("end_date")),
        last_processed_date=parse_iso_date(row.get("last_processed_date")),
        active=bool(row.get("active", True)),
    )


def parse_timestamp(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def normalize_item_row(row: dict) -> CalendarItem:
    """
    Convert a calendar_items row into a CalendarItem; ``data`` is decoded
    from JSON text when stored that way.
    """
    data = row.get("data")
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError:
            data = {"value": data}
    return CalendarItem(
        item_id=str(row["item_id"]),
        title=row.get("title") or "",
        start_time=parse_timestamp(row["start_time"]),
        end_time=parse_timestamp(row.get("end_time")),
        item_type=row.get("item_type") or "event",
        data=data if data is not None else {},
    )

from datetime import date, datetime, timedelta
from typing import Any, List, Optional, Union

from fastapi import APIRouter, Query
from pydantic import BaseModel

from db import get_db
from helpers.normalize import normalize_item_row
from repositories.calendar_items_repository import list_calendar_items
from repositories.recurring_rules_repository import list_recurring_rules
from routes.rules import RecurringRuleIn
from services.calendar_service import aggregate
from services.forecast_dto import TimelineResponseDTO
from utils.config import FORECAST_HORIZON_DAYS

router = APIRouter()


class CalendarItemIn(BaseModel):
    item_id: Union[str, int]
    title: str
    start_time: datetime
    end_time: Optional[datetime] = None
    item_type: str
    data: Any = None


class TimelineRequest(BaseModel):
    rules: List[RecurringRuleIn] = []
    items: List[CalendarItemIn] = []
    window_start: Optional[date] = None
    window_end: Optional[date] = None
    filters: Optional[List[str]] = None
    today: Optional[date] = None


def parse_filters(raw: Optional[str]):
    if raw is None:
        return None
    return [value.strip() for value in raw.split(",") if value.strip()]


@router.post("/timeline")
def post_timeline(request: TimelineRequest):
    if (request.window_start is None) != (request.window_end is None):
        return {"error": "window_start and window_end must be given together."}

    window = None
    if request.window_start is not None:
        window = (request.window_start, request.window_end)

    timeline = aggregate(
        base_items=[normalize_item_row(item.model_dump()) for item in request.items],
        rules=[rule.to_rule() for rule in request.rules],
        active_types=request.filters,
        window=window,
        today=request.today,
    )
    return TimelineResponseDTO.from_timeline(timeline)


@router.get("/timeline")
def get_timeline(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    filters: Optional[str] = Query(None),
):
    """
    Timeline of stored calendar items plus forecast occurrences.

    ``start``/``end`` default to today and the end of the forecast horizon;
    ``filters`` is a comma-separated list of item types.
    """
    today = date.today()
    try:
        window_start = date.fromisoformat(start) if start else today
        window_end = (
            date.fromisoformat(end) if end
            else today + timedelta(days=FORECAST_HORIZON_DAYS)
        )
    except ValueError:
        return {"error": "Invalid date format. Use YYYY-MM-DD."}

    conn = get_db()
    try:
        items = list_calendar_items(conn, window_start, window_end)
        rules = list_recurring_rules(conn)
    finally:
        conn.close()

    timeline = aggregate(
        base_items=items,
        rules=rules,
        active_types=parse_filters(filters),
        window=(window_start, window_end),
        today=today,
    )
    return TimelineResponseDTO.from_timeline(timeline)

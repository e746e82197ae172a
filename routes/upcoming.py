from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from db import get_db
from repositories.recurring_rules_repository import list_recurring_rules
from services.forecast_dto import UpcomingResponseDTO
from services.upcoming_service import list_upcoming

router = APIRouter()


@router.get("/recurring/upcoming")
def get_upcoming(
    as_of_date: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
):
    """
    Pending recurring occurrences tagged overdue / due / upcoming.
    """
    try:
        as_of = date.fromisoformat(as_of_date) if as_of_date else None
    except ValueError:
        return {"error": "Invalid date format. Use YYYY-MM-DD."}

    conn = get_db()
    try:
        rules = list_recurring_rules(conn)
    finally:
        conn.close()

    return UpcomingResponseDTO.from_upcoming(list_upcoming(rules, today=as_of, limit=limit))

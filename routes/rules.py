from datetime import date
from decimal import Decimal
from typing import Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel

from db import get_db
from helpers.normalize import normalize_rule_row
from repositories.recurring_rules_repository import (
    add_recurring_rule,
    list_recurring_rules,
    update_last_processed,
)
from services.occurrence_service import validate_rule
from services.schedule_errors import ScheduleError

router = APIRouter()


class RecurringRuleIn(BaseModel):
    id: Union[str, int]
    description: str = ""
    amount: Decimal = Decimal("0")
    kind: Optional[str] = None
    frequency: str
    occurrence_day: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    last_processed_date: Optional[date] = None
    active: bool = True

    def to_rule(self):
        return normalize_rule_row(self.model_dump())


class ProcessedUpdate(BaseModel):
    processed_date: date


def rule_to_dict(rule):
    return {
        "id": rule.id,
        "description": rule.description,
        "amount": float(rule.amount),
        "kind": rule.kind,
        "frequency": rule.frequency,
        "occurrence_day": rule.occurrence_day,
        "start_date": rule.start_date.isoformat() if rule.start_date else None,
        "end_date": rule.end_date.isoformat() if rule.end_date else None,
        "last_processed_date": (
            rule.last_processed_date.isoformat() if rule.last_processed_date else None
        ),
        "active": rule.active,
    }


@router.post("/rules/add")
def add_rule(payload: RecurringRuleIn):
    rule = payload.to_rule()
    try:
        validate_rule(rule)
    except ScheduleError as e:
        return {"error": str(e)}

    conn = get_db()
    try:
        add_recurring_rule(conn, rule)
    except ValueError as e:
        return {"error": str(e)}
    finally:
        conn.close()
    return {
        "status": "rule added",
        "rule": rule_to_dict(rule)
    }


@router.get("/rules/list")
def list_rules(include_inactive: bool = False):
    conn = get_db()
    try:
        rules = list_recurring_rules(conn, active_only=not include_inactive)
    finally:
        conn.close()

    return {
        "count": len(rules),
        "rules": [rule_to_dict(rule) for rule in rules]
    }


@router.post("/rules/{rule_id}/processed")
def mark_processed(rule_id: str, payload: ProcessedUpdate):
    """
    Advance a rule's materialization cursor. Regressing writes are ignored.
    """
    conn = get_db()
    try:
        moved = update_last_processed(conn, rule_id, payload.processed_date)
    except ValueError as e:
        return {"error": str(e)}
    finally:
        conn.close()
    return {"success": True, "advanced": moved}

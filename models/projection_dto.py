from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from models.calendar_item import TimelineEvent
from models.recurrence_rule import RecurrenceRule
from models.skipped_rule import SkippedRule


@dataclass
class CashFlowPoint:
    """Relative balance change from day 0, inclusive of ``date``."""
    date: date
    balance: Decimal
    events: List[str] = field(default_factory=list)


@dataclass
class CashFlowForecast:
    start_date: date
    end_date: date
    points: List[CashFlowPoint]
    skipped: List[SkippedRule] = field(default_factory=list)


@dataclass
class DailyProjection:
    date: date
    projected_balance: Decimal
    events: List[str] = field(default_factory=list)


@dataclass
class ProjectionResult:
    start_date: date
    end_date: date
    starting_balance: Decimal
    timeline: List[DailyProjection]
    ending_balance: Decimal
    lowest_balance: Decimal
    skipped: List[SkippedRule] = field(default_factory=list)


@dataclass
class Timeline:
    events: List[TimelineEvent]
    skipped: List[SkippedRule] = field(default_factory=list)


@dataclass
class UpcomingOccurrence:
    rule: RecurrenceRule
    date: date
    status: str  # 'overdue' | 'due' | 'upcoming'


@dataclass
class UpcomingResult:
    items: List[UpcomingOccurrence]
    skipped: List[SkippedRule] = field(default_factory=list)
    as_of: Optional[date] = None


@dataclass
class MonthlyProjection:
    month: int  # 1-12
    label: str  # 'Jan'
    income: Decimal
    expenses: Decimal
    net_change: Decimal
    balance: Decimal


@dataclass
class AnnualProjection:
    year: int
    starting_balance: Decimal
    months: List[MonthlyProjection]
    skipped: List[SkippedRule] = field(default_factory=list)

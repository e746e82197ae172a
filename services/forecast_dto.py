from dataclasses import asdict, dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional


def _iso(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _json_value(value):
    if isinstance(value, Decimal):
        return float(value)
    return _iso(value)


@dataclass
class SkippedRuleDTO:
    rule_id: str
    error: str
    message: str


@dataclass
class CashFlowPointDTO:
    """Single day in the relative cash-flow forecast."""
    date: str  # ISO format YYYY-MM-DD
    balance: float
    events: List[str]


@dataclass
class CashFlowResponseDTO:
    start_date: str
    end_date: str
    points: List[CashFlowPointDTO]
    skipped: List[SkippedRuleDTO]

    @classmethod
    def from_forecast(cls, cash_flow):
        return cls(
            start_date=cash_flow.start_date.isoformat(),
            end_date=cash_flow.end_date.isoformat(),
            points=[
                CashFlowPointDTO(
                    date=point.date.isoformat(),
                    balance=float(point.balance),
                    events=list(point.events),
                )
                for point in cash_flow.points
            ],
            skipped=[SkippedRuleDTO(**asdict(s)) for s in cash_flow.skipped],
        )


@dataclass
class ForecastDayDTO:
    """Single day in the forecast timeline."""
    date: str  # ISO format YYYY-MM-DD
    projected_balance: float
    events: List[str]


@dataclass
class ForecastResponseDTO:
    """Complete balance projection response."""
    start_date: str  # ISO format
    end_date: str  # ISO format
    starting_balance: float
    ending_balance: float
    lowest_balance: float
    timeline: List[ForecastDayDTO]
    skipped: List[SkippedRuleDTO]

    @classmethod
    def from_projection(cls, projection):
        """Convert ProjectionResult to JSON-serializable DTO."""
        return cls(
            start_date=projection.start_date.isoformat(),
            end_date=projection.end_date.isoformat(),
            starting_balance=float(projection.starting_balance),
            ending_balance=float(projection.ending_balance),
            lowest_balance=float(projection.lowest_balance),
            timeline=[
                ForecastDayDTO(
                    date=day.date.isoformat(),
                    projected_balance=float(day.projected_balance),
                    events=list(day.events),
                )
                for day in projection.timeline
            ],
            skipped=[SkippedRuleDTO(**asdict(s)) for s in projection.skipped],
        )


@dataclass
class TimelineEventDTO:
    id: str
    title: str
    start: str
    end: Optional[str]
    type: str
    all_day: bool
    data: dict


@dataclass
class TimelineResponseDTO:
    events: List[TimelineEventDTO]
    skipped: List[SkippedRuleDTO]

    @classmethod
    def from_timeline(cls, timeline):
        return cls(
            events=[
                TimelineEventDTO(
                    id=event.id,
                    title=event.title,
                    start=_iso(event.start),
                    end=_iso(event.end),
                    type=event.type,
                    all_day=event.all_day,
                    data={k: _json_value(v) for k, v in event.data.items()},
                )
                for event in timeline.events
            ],
            skipped=[SkippedRuleDTO(**asdict(s)) for s in timeline.skipped],
        )


@dataclass
class UpcomingItemDTO:
    rule_id: str
    description: str
    date: str
    amount: float
    kind: Optional[str]
    status: str


@dataclass
class UpcomingResponseDTO:
    as_of: str
    items: List[UpcomingItemDTO]
    skipped: List[SkippedRuleDTO]

    @classmethod
    def from_upcoming(cls, upcoming):
        return cls(
            as_of=upcoming.as_of.isoformat(),
            items=[
                UpcomingItemDTO(
                    rule_id=item.rule.id,
                    description=item.rule.description,
                    date=item.date.isoformat(),
                    amount=float(item.rule.amount),
                    kind=item.rule.kind,
                    status=item.status,
                )
                for item in upcoming.items
            ],
            skipped=[SkippedRuleDTO(**asdict(s)) for s in upcoming.skipped],
        )


@dataclass
class MonthlyProjectionDTO:
    month: int
    label: str
    income: float
    expenses: float
    net_change: float
    balance: float


@dataclass
class AnnualProjectionDTO:
    year: int
    starting_balance: float
    months: List[MonthlyProjectionDTO]
    skipped: List[SkippedRuleDTO]

    @classmethod
    def from_annual(cls, annual):
        return cls(
            year=annual.year,
            starting_balance=float(annual.starting_balance),
            months=[
                MonthlyProjectionDTO(**{k: _json_value(v) for k, v in asdict(m).items()})
                for m in annual.months
            ],
            skipped=[SkippedRuleDTO(**asdict(s)) for s in annual.skipped],
        )

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional, Union

FORECAST_TYPE = "forecast"


@dataclass(frozen=True)
class CalendarItem:
    """One-off item supplied by the calendar query; never modified here."""
    item_id: str
    title: str
    start_time: datetime
    item_type: str
    end_time: Optional[datetime] = None
    data: Any = None


@dataclass
class TimelineEvent:
    """Common shape for base items and synthesized forecast occurrences."""
    id: str
    title: str
    start: Union[date, datetime]
    type: str
    end: Optional[Union[date, datetime]] = None
    all_day: bool = False
    data: dict = field(default_factory=dict)

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

DAILY = "daily"
WEEKLY = "weekly"
BI_WEEKLY = "bi-weekly"
MONTHLY = "monthly"
YEARLY = "yearly"

FREQUENCIES = (DAILY, WEEKLY, BI_WEEKLY, MONTHLY, YEARLY)
FREQUENCY_ALIASES = {"biweekly": BI_WEEKLY}

EARNING = "earning"
EXPENSE = "expense"
KINDS = (EARNING, EXPENSE)


@dataclass(frozen=True)
class RecurrenceRule:
    """A recurring schedule as stored by the persistence layer.

    ``occurrence_day`` is a weekday (0=Sunday..6=Saturday) for weekly and
    bi-weekly rules and a day of month (1-31) for monthly rules.
    ``last_processed_date`` is the materialization cursor; it is read-only
    input here.
    """
    id: str
    description: str
    frequency: str
    start_date: Optional[date]
    amount: Decimal = Decimal("0.00")
    kind: Optional[str] = None          # 'earning' | 'expense' | None (calendar-only)
    occurrence_day: Optional[int] = None
    end_date: Optional[date] = None
    last_processed_date: Optional[date] = None
    active: bool = True

    @property
    def is_financial(self) -> bool:
        return self.kind is not None

    @property
    def is_earning(self) -> bool:
        return self.kind == EARNING

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.is_earning else -self.amount

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class LoggedTransaction:
    """A transaction already recorded in the ledger.

    ``recurring_rule_id`` is set when the transaction was materialized from
    a recurring rule.
    """
    date: date
    amount: Decimal
    kind: str  # 'earning' | 'expense'
    recurring_rule_id: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.kind == "earning" else -self.amount

"""Account entity: where money lives (bank, cash, card, investment)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class AccountType(str, Enum):
    BANK = "bank"
    CASH = "cash"
    CARD = "card"
    INVESTMENT = "investment"


@dataclass
class Account:
    """
    A financial account.

    Card accounts carry a closing day, a due day and a credit limit
    instead of relying on a running balance; every other type starts
    from `initial_balance_cents`.
    """

    name: str
    type: AccountType
    initial_balance_cents: int = 0
    card_closing_day: int | None = None
    card_due_day: int | None = None
    card_limit_cents: int | None = None
    active: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_card(self) -> bool:
        return self.type == AccountType.CARD

    @property
    def can_pay_invoices(self) -> bool:
        """Only bank and cash accounts may be the source of an invoice payment."""
        return self.type in (AccountType.BANK, AccountType.CASH)

    @property
    def best_purchase_day(self) -> int | None:
        """First day of a new card cycle, i.e. the day after closing."""
        if not self.is_card or self.card_closing_day is None:
            return None
        return (self.card_closing_day % 31) + 1

"""Ledger entry entity: the persisted unit of cash movement."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from src.domain.exceptions import InvalidInputException


class EntryKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class EntryStatus(str, Enum):
    OPEN = "open"
    SETTLED = "settled"
    CANCELLED = "cancelled"


class DisplayStatus(str, Enum):
    """Status as shown to users; OVERDUE is derived, never stored."""

    OPEN = "open"
    SETTLED = "settled"
    CANCELLED = "cancelled"
    OVERDUE = "overdue"


class OriginType(str, Enum):
    MANUAL = "manual"
    SALE = "sale"
    PURCHASE = "purchase"
    CARD_INVOICE_PAYMENT = "card_invoice_payment"


@dataclass(frozen=True)
class EntryOrigin:
    """
    Where an entry came from.

    Resolved once when the entry is created. `reference_id` points at the
    sale, the stock purchase or the card account depending on `type`.
    """

    type: OriginType = OriginType.MANUAL
    reference_id: UUID | None = None

    def __post_init__(self):
        if self.type != OriginType.MANUAL and self.reference_id is None:
            raise InvalidInputException(
                f"Origin {self.type.value} requires a reference id"
            )

    @classmethod
    def manual(cls) -> "EntryOrigin":
        return cls()

    @classmethod
    def sale(cls, sale_id: UUID) -> "EntryOrigin":
        return cls(OriginType.SALE, sale_id)

    @classmethod
    def purchase(cls, purchase_id: UUID) -> "EntryOrigin":
        return cls(OriginType.PURCHASE, purchase_id)

    @classmethod
    def card_invoice_payment(cls, card_account_id: UUID) -> "EntryOrigin":
        return cls(OriginType.CARD_INVOICE_PAYMENT, card_account_id)

    @property
    def is_sale(self) -> bool:
        return self.type == OriginType.SALE

    @property
    def is_card_invoice_payment(self) -> bool:
        return self.type == OriginType.CARD_INVOICE_PAYMENT


@dataclass(frozen=True)
class LedgerEntry:
    """
    Immutable representation of a receivable, payable or transfer.

    Amounts are non-negative integers in cents; the sign of an entry
    relative to an account comes from `kind` (see `value_for`).

    `group_id` links siblings created together (installments or a
    recurrence). `settlement_group_id` links entries settled together by
    a card invoice payment and is cleared again when that payment is
    reverted.
    """

    description: str
    kind: EntryKind
    account_id: UUID
    due_date: date
    gross_cents: int
    fees_cents: int = 0
    interest_cents: int = 0
    status: EntryStatus = EntryStatus.OPEN
    destination_account_id: UUID | None = None
    category_id: UUID | None = None
    contact_id: UUID | None = None
    paid_date: date | None = None
    transaction_date: date | None = None
    installment_number: int | None = None
    installment_count: int | None = None
    group_id: UUID | None = None
    settlement_group_id: UUID | None = None
    origin: EntryOrigin = field(default_factory=EntryOrigin)
    notes: str = ""
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None
    version: int = 1

    def __post_init__(self):
        for name in ("gross_cents", "fees_cents", "interest_cents"):
            if getattr(self, name) < 0:
                raise InvalidInputException(f"{name} must not be negative")

        if self.kind == EntryKind.TRANSFER:
            if self.destination_account_id is None:
                raise InvalidInputException("A transfer requires a destination account")
            if self.destination_account_id == self.account_id:
                raise InvalidInputException(
                    "Transfer source and destination must be different accounts"
                )
        elif self.destination_account_id is not None:
            raise InvalidInputException("Only transfers may have a destination account")

    @property
    def net_cents(self) -> int:
        return self.gross_cents - self.fees_cents + self.interest_cents

    @property
    def is_settled(self) -> bool:
        return self.status == EntryStatus.SETTLED

    @property
    def is_open(self) -> bool:
        return self.status == EntryStatus.OPEN

    @property
    def effective_date(self) -> date:
        """Settlement date if settled, due date otherwise."""
        if self.is_settled:
            return self.paid_date or self.due_date
        return self.due_date

    def is_overdue(self, today: date) -> bool:
        return self.is_open and self.due_date < today

    def display_status(self, today: date) -> DisplayStatus:
        if self.is_overdue(today):
            return DisplayStatus.OVERDUE
        return DisplayStatus(self.status.value)

    def touches(self, account_id: UUID) -> bool:
        return account_id in (self.account_id, self.destination_account_id)

    def value_for(self, account_id: UUID) -> int:
        """
        Signed contribution of this entry to an account's balance.

        Transfers are dual-sided: negative at the source and positive at
        the destination. Entries that do not touch the account give 0.
        """
        net = self.net_cents
        if self.kind == EntryKind.TRANSFER:
            if account_id == self.account_id:
                return -net
            if account_id == self.destination_account_id:
                return net
            return 0

        if account_id != self.account_id:
            return 0
        return net if self.kind == EntryKind.INCOME else -net

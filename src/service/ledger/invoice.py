"""
Card invoices.

A card cycle closes on the card's closing day. The invoice for month M
covers expenses whose purchase date (transaction date, due date as
fallback) falls after the previous closing and up to the closing day of
M. It is due on the due day of M, or of M + 1 when the due day comes
before the closing day.
"""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Tuple
from uuid import UUID

from src.domain.entities import Account, EntryKind, EntryStatus, LedgerEntry
from src.domain.exceptions import InvalidInputException

from .schedule import add_months


def _day_in_month(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, monthrange(year, month)[1]))


def purchase_date(entry: LedgerEntry) -> date:
    return entry.transaction_date or entry.due_date


@dataclass(frozen=True)
class CardInvoice:
    card_id: UUID
    year: int
    month: int
    cycle_start: date
    closing_date: date
    due_date: date
    expenses: Tuple[LedgerEntry, ...]
    total_cents: int
    open_total_cents: int

    @property
    def paid_total_cents(self) -> int:
        return self.total_cents - self.open_total_cents

    @property
    def is_paid(self) -> bool:
        return bool(self.expenses) and self.open_total_cents == 0


@dataclass(frozen=True)
class CardSummary:
    card_id: UUID
    limit_cents: int
    open_balance_cents: int
    available_cents: int
    best_purchase_day: int | None
    current_invoice: CardInvoice


def _require_card(card: Account) -> None:
    if not card.is_card or card.card_closing_day is None or card.card_due_day is None:
        raise InvalidInputException(
            f"Account {card.id} is not a card account with closing and due days"
        )


def _card_expenses(card: Account, entries: Iterable[LedgerEntry]) -> list:
    return [
        e for e in entries
        if e.account_id == card.id
        and e.kind == EntryKind.EXPENSE
        and e.status != EntryStatus.CANCELLED
    ]


def invoice_for(card: Account, entries: Iterable[LedgerEntry], year: int, month: int) -> CardInvoice:
    """
    Build the invoice of `card` that closes in (year, month).

    Raises:
        InvalidInputException: If the account is not a configured card
    """
    _require_card(card)
    if not 1 <= month <= 12:
        raise InvalidInputException(f"Invalid month: {month}")

    closing = _day_in_month(year, month, card.card_closing_day)
    previous = add_months(date(year, month, 1), -1)
    cycle_start = _day_in_month(previous.year, previous.month, card.card_closing_day) + timedelta(days=1)

    due = _day_in_month(year, month, card.card_due_day)
    if card.card_due_day < card.card_closing_day:
        next_month = add_months(date(year, month, 1), 1)
        due = _day_in_month(next_month.year, next_month.month, card.card_due_day)

    expenses = tuple(
        sorted(
            (e for e in _card_expenses(card, entries) if cycle_start <= purchase_date(e) <= closing),
            key=lambda e: (purchase_date(e), e.description),
        )
    )

    return CardInvoice(
        card_id=card.id,
        year=year,
        month=month,
        cycle_start=cycle_start,
        closing_date=closing,
        due_date=due,
        expenses=expenses,
        total_cents=sum(e.gross_cents for e in expenses),
        open_total_cents=sum(e.gross_cents for e in expenses if e.is_open),
    )


def current_invoice_month(card: Account, today: date) -> Tuple[int, int]:
    """(year, month) of the invoice that today's purchases land on."""
    _require_card(card)
    if today <= _day_in_month(today.year, today.month, card.card_closing_day):
        return today.year, today.month
    following = add_months(date(today.year, today.month, 1), 1)
    return following.year, following.month


def card_summary(card: Account, entries: Iterable[LedgerEntry], today: date) -> CardSummary:
    """
    Limit usage of a card: available = limit - every open expense.

    Usage counts the net of each expense, so fees and interest charged on
    a purchase consume limit too. Invoice totals stay on gross.
    """
    entries = list(entries)
    year, month = current_invoice_month(card, today)
    open_balance = sum(e.net_cents for e in _card_expenses(card, entries) if e.is_open)
    limit = card.card_limit_cents or 0

    return CardSummary(
        card_id=card.id,
        limit_cents=limit,
        open_balance_cents=open_balance,
        available_cents=limit - open_balance,
        best_purchase_day=card.best_purchase_day,
        current_invoice=invoice_for(card, entries, year, month),
    )

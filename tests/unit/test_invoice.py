"""
Unit Tests for card invoices.

These tests verify:
1. Cycle boundaries and due dates
2. Which expenses land on an invoice
3. Card limit usage
"""

import pytest
from datetime import date

from src.domain.entities import Account, AccountType, EntryKind, EntryStatus, LedgerEntry
from src.domain.exceptions import InvalidInputException
from src.service.ledger.invoice import card_summary, current_invoice_month, invoice_for
from src.service.ledger.transitions import settle


@pytest.fixture
def card() -> Account:
    return Account(
        name="Visa",
        type=AccountType.CARD,
        card_closing_day=25,
        card_due_day=5,
        card_limit_cents=100000,
    )


def purchase(card: Account, when: date, gross_cents: int, description: str = "Purchase") -> LedgerEntry:
    return LedgerEntry(
        description=description,
        kind=EntryKind.EXPENSE,
        account_id=card.id,
        due_date=date(2099, 1, 1),
        transaction_date=when,
        gross_cents=gross_cents,
    )


class TestInvoiceFor:
    """Tests for invoice_for."""

    def test_cycle_boundaries(self, card: Account):
        invoice = invoice_for(card, [], 2024, 3)

        assert invoice.cycle_start == date(2024, 2, 26)
        assert invoice.closing_date == date(2024, 3, 25)

    def test_due_day_before_closing_moves_to_next_month(self, card: Account):
        assert invoice_for(card, [], 2024, 3).due_date == date(2024, 4, 5)

    def test_due_day_after_closing_stays(self):
        card = Account(name="Master", type=AccountType.CARD, card_closing_day=3, card_due_day=10)

        assert invoice_for(card, [], 2024, 3).due_date == date(2024, 3, 10)

    def test_closing_day_clamps_in_short_month(self):
        card = Account(name="Amex", type=AccountType.CARD, card_closing_day=31, card_due_day=10)

        invoice = invoice_for(card, [], 2024, 2)

        assert invoice.closing_date == date(2024, 2, 29)
        assert invoice.cycle_start == date(2024, 2, 1)

    def test_expenses_in_cycle_by_purchase_date(self, card: Account):
        entries = [
            purchase(card, date(2024, 2, 25), 100, "previous cycle"),
            purchase(card, date(2024, 2, 26), 200, "first day"),
            purchase(card, date(2024, 3, 25), 300, "closing day"),
            purchase(card, date(2024, 3, 26), 400, "next cycle"),
        ]

        invoice = invoice_for(card, entries, 2024, 3)

        assert [e.description for e in invoice.expenses] == ["first day", "closing day"]
        assert invoice.total_cents == 500
        assert invoice.open_total_cents == 500
        assert not invoice.is_paid

    def test_paid_and_cancelled_expenses(self, card: Account):
        paid = settle(purchase(card, date(2024, 3, 1), 200), date(2024, 4, 5))
        cancelled = LedgerEntry(
            description="refund",
            kind=EntryKind.EXPENSE,
            account_id=card.id,
            due_date=date(2024, 3, 2),
            gross_cents=999,
            status=EntryStatus.CANCELLED,
        )

        invoice = invoice_for(card, [paid, cancelled], 2024, 3)

        assert invoice.total_cents == 200
        assert invoice.open_total_cents == 0
        assert invoice.paid_total_cents == 200
        assert invoice.is_paid

    def test_non_card_account_is_rejected(self):
        bank = Account(name="Bank", type=AccountType.BANK)

        with pytest.raises(InvalidInputException):
            invoice_for(bank, [], 2024, 3)


class TestCardSummary:
    """Tests for card_summary."""

    def test_current_invoice_month_after_closing(self, card: Account):
        assert current_invoice_month(card, date(2024, 3, 26)) == (2024, 4)
        assert current_invoice_month(card, date(2024, 12, 26)) == (2025, 1)
        assert current_invoice_month(card, date(2024, 3, 25)) == (2024, 3)

    def test_available_limit(self, card: Account):
        entries = [
            purchase(card, date(2024, 1, 10), 10000),
            purchase(card, date(2024, 3, 10), 25000),
            settle(purchase(card, date(2024, 2, 10), 5000), date(2024, 3, 5)),
        ]

        summary = card_summary(card, entries, date(2024, 3, 15))

        assert summary.open_balance_cents == 35000
        assert summary.available_cents == 65000
        assert summary.best_purchase_day == 26
        assert summary.current_invoice.month == 3
        assert summary.current_invoice.total_cents == 25000

    def test_interest_consumes_limit(self, card: Account):
        financed = LedgerEntry(
            description="Phone",
            kind=EntryKind.EXPENSE,
            account_id=card.id,
            due_date=date(2024, 3, 10),
            transaction_date=date(2024, 3, 10),
            gross_cents=10000,
            interest_cents=2000,
        )

        summary = card_summary(card, [financed], date(2024, 3, 15))

        assert summary.open_balance_cents == 12000
        assert summary.available_cents == 88000
        assert summary.current_invoice.total_cents == 10000

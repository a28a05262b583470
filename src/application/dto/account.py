"""Data transfer objects for accounts, statements and card invoices."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Account, AccountType
from src.service.ledger import CardInvoice, CardSummary, Statement, format_money

from .entry import EntryResponse


@dataclass(frozen=True)
class AccountInput:
    name: str
    type: AccountType
    initial_balance_cents: int = 0
    card_closing_day: Optional[int] = None
    card_due_day: Optional[int] = None
    card_limit_cents: Optional[int] = None
    active: bool = True

    def validate(self) -> List[str]:
        errors = []

        if not self.name or not self.name.strip():
            errors.append("name is required")

        if self.type == AccountType.CARD:
            if self.card_closing_day is None or self.card_due_day is None:
                errors.append("card accounts require closing and due days")
            if self.card_limit_cents is None or self.card_limit_cents < 0:
                errors.append("card accounts require a non-negative limit")
        elif any(
            v is not None
            for v in (self.card_closing_day, self.card_due_day, self.card_limit_cents)
        ):
            errors.append("card settings are only valid for card accounts")

        return errors


@dataclass(frozen=True)
class AccountResponse:
    account_id: str
    name: str
    type: str
    initial_balance_cents: int
    current_balance_cents: int
    card_closing_day: Optional[int]
    card_due_day: Optional[int]
    card_limit_cents: Optional[int]
    best_purchase_day: Optional[int]
    active: bool
    current_balance_display: str = ""

    @classmethod
    def from_entity(cls, account: Account, current_balance_cents: int) -> "AccountResponse":
        return cls(
            account_id=str(account.id),
            name=account.name,
            type=account.type.value,
            initial_balance_cents=account.initial_balance_cents,
            current_balance_cents=current_balance_cents,
            card_closing_day=account.card_closing_day,
            card_due_day=account.card_due_day,
            card_limit_cents=account.card_limit_cents,
            best_purchase_day=account.best_purchase_day,
            active=account.active,
            current_balance_display=format_money(current_balance_cents),
        )


@dataclass(frozen=True)
class StatementRowDTO:
    entry: EntryResponse
    effective_date: date
    value_cents: int
    display_status: str
    running_balance_cents: int


@dataclass(frozen=True)
class StatementResponse:
    """Statement of one account; rows are most recent first."""

    account_id: str
    range_from: date
    range_to: date
    opening_balance_cents: int
    current_balance_cents: int
    inflow_cents: int
    outflow_cents: int
    net_cents: int
    projected_balance_cents: int
    rows: List[StatementRowDTO]

    @classmethod
    def from_statement(cls, statement: Statement) -> "StatementResponse":
        return cls(
            account_id=str(statement.account_id),
            range_from=statement.range_from,
            range_to=statement.range_to,
            opening_balance_cents=statement.opening_balance_cents,
            current_balance_cents=statement.current_balance_cents,
            inflow_cents=statement.inflow_cents,
            outflow_cents=statement.outflow_cents,
            net_cents=statement.net_cents,
            projected_balance_cents=statement.projected_balance_cents,
            rows=[
                StatementRowDTO(
                    entry=EntryResponse.from_entity(row.entry, statement.today),
                    effective_date=row.effective_date,
                    value_cents=row.value_cents,
                    display_status=row.display_status.value,
                    running_balance_cents=row.running_balance_cents,
                )
                for row in statement.rows_latest_first
            ],
        )


@dataclass(frozen=True)
class PayInvoiceInput:
    source_account_id: UUID
    year: int
    month: int
    payment_date: date
    amount_cents: Optional[int] = None


@dataclass(frozen=True)
class InvoiceResponse:
    card_id: str
    year: int
    month: int
    cycle_start: date
    closing_date: date
    due_date: date
    total_cents: int
    open_total_cents: int
    paid_total_cents: int
    is_paid: bool
    expenses: List[EntryResponse]

    @classmethod
    def from_invoice(cls, invoice: CardInvoice, today: date) -> "InvoiceResponse":
        return cls(
            card_id=str(invoice.card_id),
            year=invoice.year,
            month=invoice.month,
            cycle_start=invoice.cycle_start,
            closing_date=invoice.closing_date,
            due_date=invoice.due_date,
            total_cents=invoice.total_cents,
            open_total_cents=invoice.open_total_cents,
            paid_total_cents=invoice.paid_total_cents,
            is_paid=invoice.is_paid,
            expenses=[EntryResponse.from_entity(e, today) for e in invoice.expenses],
        )


@dataclass(frozen=True)
class CardSummaryResponse:
    card_id: str
    limit_cents: int
    open_balance_cents: int
    available_cents: int
    best_purchase_day: Optional[int]
    current_invoice: InvoiceResponse

    @classmethod
    def from_summary(cls, summary: CardSummary, today: date) -> "CardSummaryResponse":
        return cls(
            card_id=str(summary.card_id),
            limit_cents=summary.limit_cents,
            open_balance_cents=summary.open_balance_cents,
            available_cents=summary.available_cents,
            best_purchase_day=summary.best_purchase_day,
            current_invoice=InvoiceResponse.from_invoice(summary.current_invoice, today),
        )


@dataclass(frozen=True)
class InvoicePaymentResponse:
    payment: EntryResponse
    settled_entry_ids: List[str]
    settlement_group_id: str

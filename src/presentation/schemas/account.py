"""Account, statement and card invoice Pydantic schemas."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import AccountType
from .movement import EntryResponseSchema


class AccountRequestSchema(BaseModel):
    """Schema for POST/PUT /api/accounts request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"name": "Main bank", "type": "bank", "initial_balance_cents": 100000},
                {
                    "name": "Corporate card",
                    "type": "card",
                    "card_closing_day": 25,
                    "card_due_day": 5,
                    "card_limit_cents": 500000,
                },
            ]
        }
    )

    name: str = Field(..., min_length=1, max_length=255)
    type: AccountType
    initial_balance_cents: int = 0
    card_closing_day: Optional[int] = Field(None, ge=1, le=31)
    card_due_day: Optional[int] = Field(None, ge=1, le=31)
    card_limit_cents: Optional[int] = Field(None, ge=0)
    active: bool = True


class AccountResponseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    account_id: str
    name: str
    type: str
    initial_balance_cents: int
    current_balance_cents: int = Field(
        ...,
        description="Initial balance plus settled entries up to today",
    )
    card_closing_day: Optional[int]
    card_due_day: Optional[int]
    card_limit_cents: Optional[int]
    best_purchase_day: Optional[int] = Field(
        None,
        description="Cards only: first day after closing",
    )
    active: bool
    current_balance_display: str = Field(
        "",
        description="Current balance formatted for display, e.g. R$ 1.234,56",
    )


class StatementRowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entry: EntryResponseSchema
    effective_date: date
    value_cents: int = Field(..., description="Signed value relative to the account")
    display_status: str
    running_balance_cents: int


class StatementResponseSchema(BaseModel):
    """Schema for GET /api/accounts/{id}/statement response."""

    model_config = ConfigDict(from_attributes=True)

    account_id: str
    range_from: date
    range_to: date
    opening_balance_cents: int
    current_balance_cents: int
    inflow_cents: int
    outflow_cents: int
    net_cents: int
    projected_balance_cents: int
    rows: list[StatementRowSchema] = Field(..., description="Most recent first")


class InvoiceResponseSchema(BaseModel):
    """Schema for GET /api/accounts/{id}/invoice response."""

    model_config = ConfigDict(from_attributes=True)

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
    expenses: list[EntryResponseSchema]


class CardSummaryResponseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    card_id: str
    limit_cents: int
    open_balance_cents: int
    available_cents: int
    best_purchase_day: Optional[int]
    current_invoice: InvoiceResponseSchema


class PayInvoiceRequestSchema(BaseModel):
    """Schema for POST /api/accounts/{id}/invoice/pay request body."""

    source_account_id: UUID = Field(..., description="Bank or cash account paying the invoice")
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", examples=["2025-10"])
    payment_date: date
    amount_cents: Optional[int] = Field(
        None,
        ge=0,
        description="Defaults to the open invoice total",
    )


class InvoicePaymentResponseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payment: EntryResponseSchema
    settled_entry_ids: list[str]
    settlement_group_id: str

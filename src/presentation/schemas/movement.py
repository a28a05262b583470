"""Movement (ledger entry) Pydantic schemas."""

from datetime import date
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.entities import EntryKind


class EntryRequestSchema(BaseModel):
    """Schema for POST/PUT /api/movements request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "description": "Office rent",
                    "kind": "expense",
                    "account_id": "550e8400-e29b-41d4-a716-446655440000",
                    "due_date": "2025-10-05",
                    "gross_cents": 250000,
                }
            ]
        }
    )

    description: str = Field(..., min_length=1, max_length=255, examples=["Office rent"])
    kind: EntryKind = Field(..., description="income, expense or transfer")
    account_id: UUID = Field(..., description="Source account")
    due_date: date
    gross_cents: int = Field(..., ge=0, examples=[250000])
    fees_cents: int = Field(0, ge=0)
    interest_cents: int = Field(0, ge=0)
    destination_account_id: Optional[UUID] = Field(
        None,
        description="Destination account, transfers only",
    )
    category_id: Optional[UUID] = None
    contact_id: Optional[UUID] = None
    transaction_date: Optional[date] = Field(
        None,
        description="Purchase date for card expenses",
    )
    notes: str = Field("", max_length=2000)
    settled: bool = Field(False, description="Create the entry already settled")
    paid_date: Optional[date] = None
    version: Optional[int] = Field(
        None,
        ge=1,
        description="Version the caller last read; updates fail with 409 when stale",
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Ensure description is not just whitespace."""
        if not v.strip():
            raise ValueError("description cannot be empty or whitespace")
        return v.strip()


class SettleRequestSchema(BaseModel):
    """Schema for POST /api/movements/{id}/settle request body."""

    paid_date: date
    fees_cents: Optional[int] = Field(None, ge=0)
    interest_cents: Optional[int] = Field(None, ge=0)
    product_value_cents: Optional[int] = Field(
        None,
        ge=0,
        description="Final product value, sale entries only",
    )
    freight_cents: Optional[int] = Field(
        None,
        ge=0,
        description="Final freight, sale entries only",
    )


class BulkActionRequestSchema(BaseModel):
    """Schema for POST /api/movements/bulk request body."""

    action: Literal["settle", "revert", "delete"]
    ids: list[UUID] = Field(..., min_length=1)
    paid_date: Optional[date] = Field(None, description="Settlement date, defaults to today")


class BulkActionResponseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    action: str
    affected: list[str]
    skipped: list[str]


class EntryResponseSchema(BaseModel):
    """A ledger entry as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    entry_id: str
    description: str
    kind: str
    status: str = Field(..., description="Stored status: open, settled or cancelled")
    display_status: str = Field(..., description="Status shown to users; adds overdue")
    account_id: str
    destination_account_id: Optional[str]
    category_id: Optional[str]
    contact_id: Optional[str]
    due_date: date
    paid_date: Optional[date]
    transaction_date: Optional[date]
    effective_date: date
    gross_cents: int
    fees_cents: int
    interest_cents: int
    net_cents: int = Field(..., description="gross - fees + interest")
    installment_number: Optional[int]
    installment_count: Optional[int]
    group_id: Optional[str]
    settlement_group_id: Optional[str]
    origin: str
    origin_reference_id: Optional[str]
    notes: str
    version: int


class MovementTotalsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    inflow_cents: int
    outflow_cents: int
    net_cents: int
    pending_today_cents: int
    projected_balance_cents: int


class MovementPageSchema(BaseModel):
    """Schema for GET /api/movements response."""

    model_config = ConfigDict(from_attributes=True)

    items: list[EntryResponseSchema]
    page: int
    page_size: int
    total: int = Field(..., description="Number of entries matching the filters")
    totals: Optional[MovementTotalsSchema] = None


class RevertResponseSchema(BaseModel):
    """Every entry reverted by one request, the requested entry first."""

    reverted: list[EntryResponseSchema]

"""Plan-related Pydantic schemas."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import EntryKind, PlanKind
from .movement import EntryResponseSchema


class PlanRequestSchema(BaseModel):
    """Schema for POST /api/plans/preview request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "kind": "installment",
                    "total_gross_cents": 100000,
                    "total_fees_cents": 3000,
                    "count": 3,
                    "frequency": "monthly",
                    "first_due_date": "2024-01-31",
                }
            ]
        }
    )

    kind: PlanKind = Field(
        PlanKind.INSTALLMENT,
        description="installment splits the total; recurrence repeats it",
    )
    total_gross_cents: int = Field(
        ...,
        description="Total to split, or the per-occurrence amount for recurrences",
        examples=[100000],
    )
    total_fees_cents: int = 0
    interest_cents: int = Field(0, description="Recurrences only")
    count: int = Field(..., examples=[3])
    frequency: str = Field(
        "monthly",
        description="monthly, weekly, biweekly or every_n_days",
    )
    n_days: Optional[int] = Field(None, description="Required for every_n_days")
    first_due_date: date


class PlanConfirmRequestSchema(PlanRequestSchema):
    """Schema for POST /api/plans request body."""

    description: str = Field(..., min_length=1, max_length=255, examples=["Laptop"])
    entry_kind: EntryKind
    account_id: UUID
    destination_account_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    contact_id: Optional[UUID] = None
    transaction_date: Optional[date] = None
    notes: str = ""


class PlanItemSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    index: int = Field(..., description="1-based position in the plan")
    due_date: date
    gross_cents: int
    fees_cents: int
    net_cents: int


class PlanPreviewSchema(BaseModel):
    """Schema for POST /api/plans/preview response; nothing is persisted."""

    model_config = ConfigDict(from_attributes=True)

    kind: str
    frequency: str
    n_days: Optional[int]
    count: int
    items: list[PlanItemSchema]
    total_gross_cents: int
    total_fees_cents: int
    total_net_cents: int


class PlanGroupSchema(BaseModel):
    """Entries materialized from one plan."""

    model_config = ConfigDict(from_attributes=True)

    group_id: str
    entries: list[EntryResponseSchema]
    total_gross_cents: int
    total_net_cents: int

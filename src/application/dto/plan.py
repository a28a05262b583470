"""Data transfer objects for installment and recurrence plans."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from uuid import UUID

from src.domain.entities import EntryKind, InstallmentPlan, PlanKind

from .entry import EntryResponse


@dataclass(frozen=True)
class PlanInput:
    """Raw plan parameters as collected by the entry form."""

    kind: PlanKind
    total_gross_cents: int
    count: int
    frequency: str
    first_due_date: date
    total_fees_cents: int = 0
    interest_cents: int = 0
    n_days: Optional[int] = None


@dataclass(frozen=True)
class PlanConfirmInput:
    plan: PlanInput
    description: str
    entry_kind: EntryKind
    account_id: UUID
    destination_account_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    contact_id: Optional[UUID] = None
    transaction_date: Optional[date] = None
    notes: str = ""


@dataclass(frozen=True)
class PlanItemDTO:
    index: int
    due_date: date
    gross_cents: int
    fees_cents: int
    net_cents: int


@dataclass(frozen=True)
class PlanPreviewResponse:
    """Response data for a plan preview; nothing is persisted."""

    kind: str
    frequency: str
    n_days: Optional[int]
    count: int
    items: List[PlanItemDTO]
    total_gross_cents: int
    total_fees_cents: int
    total_net_cents: int

    @classmethod
    def from_entity(cls, plan: InstallmentPlan) -> "PlanPreviewResponse":
        return cls(
            kind=plan.kind.value,
            frequency=plan.frequency.rule.value,
            n_days=plan.frequency.n_days,
            count=plan.count,
            items=[
                PlanItemDTO(
                    index=item.index,
                    due_date=item.due_date,
                    gross_cents=item.gross_cents,
                    fees_cents=item.fees_cents,
                    net_cents=item.net_cents,
                )
                for item in plan.items
            ],
            total_gross_cents=plan.total_gross_cents,
            total_fees_cents=plan.total_fees_cents,
            total_net_cents=plan.total_net_cents,
        )


@dataclass(frozen=True)
class PlanGroupResponse:
    """Entries materialized from one plan."""

    group_id: str
    entries: List[EntryResponse]
    total_gross_cents: int
    total_net_cents: int

"""Data transfer objects for ledger entry (movement) operations."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from uuid import UUID

from src.domain.entities import EntryKind, LedgerEntry


@dataclass(frozen=True)
class EntryInput:
    """Fields a caller supplies to create or edit a single entry."""

    description: str
    kind: EntryKind
    account_id: UUID
    due_date: date
    gross_cents: int
    fees_cents: int = 0
    interest_cents: int = 0
    destination_account_id: Optional[UUID] = None
    category_id: Optional[UUID] = None
    contact_id: Optional[UUID] = None
    transaction_date: Optional[date] = None
    notes: str = ""
    settled: bool = False
    paid_date: Optional[date] = None

    def validate(self) -> List[str]:
        errors = []

        if not self.description or not self.description.strip():
            errors.append("description is required")

        if self.paid_date is not None and not self.settled:
            errors.append("paid_date is only accepted for settled entries")

        return errors


@dataclass(frozen=True)
class SettleInput:
    """
    Settlement data.

    `product_value_cents` and `freight_cents` only apply to sale-linked
    entries; gross then becomes product value plus freight minus the
    sale discount.
    """

    paid_date: date
    fees_cents: Optional[int] = None
    interest_cents: Optional[int] = None
    product_value_cents: Optional[int] = None
    freight_cents: Optional[int] = None


@dataclass(frozen=True)
class BulkActionInput:
    action: str  # "settle", "revert" or "delete"
    ids: List[UUID]
    paid_date: Optional[date] = None


@dataclass(frozen=True)
class BulkActionResult:
    action: str
    affected: List[str]
    skipped: List[str]


@dataclass(frozen=True)
class EntryResponse:
    """Response data for a single ledger entry."""

    entry_id: str
    description: str
    kind: str
    status: str
    display_status: str
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
    net_cents: int
    installment_number: Optional[int]
    installment_count: Optional[int]
    group_id: Optional[str]
    settlement_group_id: Optional[str]
    origin: str
    origin_reference_id: Optional[str]
    notes: str
    version: int

    @classmethod
    def from_entity(cls, entry: LedgerEntry, today: date) -> "EntryResponse":
        def _s(value):
            return str(value) if value is not None else None

        return cls(
            entry_id=str(entry.id),
            description=entry.description,
            kind=entry.kind.value,
            status=entry.status.value,
            display_status=entry.display_status(today).value,
            account_id=str(entry.account_id),
            destination_account_id=_s(entry.destination_account_id),
            category_id=_s(entry.category_id),
            contact_id=_s(entry.contact_id),
            due_date=entry.due_date,
            paid_date=entry.paid_date,
            transaction_date=entry.transaction_date,
            effective_date=entry.effective_date,
            gross_cents=entry.gross_cents,
            fees_cents=entry.fees_cents,
            interest_cents=entry.interest_cents,
            net_cents=entry.net_cents,
            installment_number=entry.installment_number,
            installment_count=entry.installment_count,
            group_id=_s(entry.group_id),
            settlement_group_id=_s(entry.settlement_group_id),
            origin=entry.origin.type.value,
            origin_reference_id=_s(entry.origin.reference_id),
            notes=entry.notes,
            version=entry.version,
        )


@dataclass(frozen=True)
class MovementTotalsDTO:
    inflow_cents: int
    outflow_cents: int
    net_cents: int
    pending_today_cents: int
    projected_balance_cents: int


@dataclass(frozen=True)
class MovementPageResponse:
    items: List[EntryResponse]
    page: int
    page_size: int
    total: int
    totals: Optional[MovementTotalsDTO] = field(default=None)

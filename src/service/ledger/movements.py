"""
Movement listing.

Server-side filtering, sorting, pagination and totals for the movements
screen. Totals follow the same conventions as the projector so a list
filtered to one account agrees with that account's statement.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Iterable, List, Tuple
from uuid import UUID

from src.domain.entities import (
    DisplayStatus,
    EntryKind,
    EntryStatus,
    LedgerEntry,
)
from src.domain.exceptions import InvalidInputException, InvalidRangeException

from .projector import effective_value
from .settings import LedgerSettings, ledger_settings


@dataclass(frozen=True)
class MovementQuery:
    q: str | None = None
    kinds: FrozenSet[EntryKind] = frozenset()
    statuses: FrozenSet[DisplayStatus] = frozenset()
    account_ids: FrozenSet[UUID] = frozenset()
    category_ids: FrozenSet[UUID] = frozenset()
    group_id: UUID | None = None
    date_from: date | None = None
    date_to: date | None = None
    page: int = 1
    page_size: int | None = None
    with_totals: bool = False


@dataclass(frozen=True)
class MovementTotals:
    inflow_cents: int = 0
    outflow_cents: int = 0
    pending_today_cents: int = 0
    projected_balance_cents: int = 0

    @property
    def net_cents(self) -> int:
        return self.inflow_cents + self.outflow_cents


@dataclass(frozen=True)
class MovementPage:
    items: Tuple[LedgerEntry, ...]
    page: int
    page_size: int
    total: int
    totals: MovementTotals | None = field(default=None)


def company_value(entry: LedgerEntry) -> int:
    """Value for the company as a whole: transfers move money internally."""
    if entry.status == EntryStatus.CANCELLED or entry.kind == EntryKind.TRANSFER:
        return 0
    return entry.net_cents if entry.kind == EntryKind.INCOME else -entry.net_cents


def _matches(entry: LedgerEntry, query: MovementQuery, today: date) -> bool:
    if query.q and query.q.strip().lower() not in entry.description.lower():
        return False
    if query.kinds and entry.kind not in query.kinds:
        return False
    if query.statuses and entry.display_status(today) not in query.statuses:
        return False
    if query.account_ids and not any(entry.touches(a) for a in query.account_ids):
        return False
    if query.category_ids and entry.category_id not in query.category_ids:
        return False
    if query.group_id and query.group_id not in (entry.group_id, entry.settlement_group_id):
        return False
    if query.date_from and entry.effective_date < query.date_from:
        return False
    if query.date_to and entry.effective_date > query.date_to:
        return False
    return True


def movement_totals(
    entries: Iterable[LedgerEntry],
    today: date,
    account_id: UUID | None = None,
) -> MovementTotals:
    """
    Settled inflow/outflow, open values due today and the sum of all values.

    With `account_id` the account-relative value is used, otherwise the
    company-wide one.
    """
    inflow = outflow = pending_today = projected = 0
    for entry in entries:
        value = effective_value(entry, account_id) if account_id else company_value(entry)
        projected += value
        if entry.is_settled:
            if value > 0:
                inflow += value
            else:
                outflow += value
        elif entry.is_open and entry.due_date == today:
            pending_today += value

    return MovementTotals(
        inflow_cents=inflow,
        outflow_cents=outflow,
        pending_today_cents=pending_today,
        projected_balance_cents=projected,
    )


def query_movements(
    entries: Iterable[LedgerEntry],
    query: MovementQuery,
    today: date,
    settings: LedgerSettings | None = None,
) -> MovementPage:
    """
    Filter, sort by effective date (newest first) and paginate entries.

    Raises:
        InvalidInputException: On a page < 1 or an out-of-bounds page size
        InvalidRangeException: If date_from > date_to
    """
    settings = settings or ledger_settings
    page_size = query.page_size or settings.default_page_size
    if query.page < 1:
        raise InvalidInputException("page must be >= 1")
    if not 1 <= page_size <= settings.max_page_size:
        raise InvalidInputException(f"page_size must be between 1 and {settings.max_page_size}")
    if query.date_from and query.date_to and query.date_from > query.date_to:
        raise InvalidRangeException(query.date_from, query.date_to)

    matching: List[LedgerEntry] = sorted(
        (e for e in entries if _matches(e, query, today)),
        key=lambda e: (e.effective_date, e.description, str(e.id)),
        reverse=True,
    )

    totals = None
    if query.with_totals:
        account_id = next(iter(query.account_ids)) if len(query.account_ids) == 1 else None
        totals = movement_totals(matching, today, account_id)

    start = (query.page - 1) * page_size
    return MovementPage(
        items=tuple(matching[start:start + page_size]),
        page=query.page,
        page_size=page_size,
        total=len(matching),
        totals=totals,
    )

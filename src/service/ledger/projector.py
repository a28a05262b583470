"""
Ledger Projector.

Computes an account statement for a date range: opening, current and
projected balances, settled inflow/outflow for the period, and the
period rows with a running balance.

Conventions used everywhere a balance is computed:
- Value relative to the account: income +net, expense -net, transfer
  -net at the source and +net at the destination.
- Effective date: paid date for settled entries (due date as fallback),
  due date otherwise.
- Cancelled entries never contribute and are never listed.
- Outflow is a non-positive accumulator so net = inflow + outflow.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Iterable, Tuple
from uuid import UUID

from src.domain.entities import (
    Account,
    DisplayStatus,
    EntryKind,
    EntryStatus,
    LedgerEntry,
)
from src.domain.exceptions import AccountNotFoundException, InvalidRangeException


@dataclass(frozen=True)
class StatementFilters:
    """
    Display filters for statement rows.

    They only decide which rows are returned; balances always use the
    full period set.
    """

    statuses: FrozenSet[DisplayStatus] = frozenset()
    kinds: FrozenSet[EntryKind] = frozenset()
    category_ids: FrozenSet[UUID] = frozenset()
    query: str | None = None

    def matches(self, row: "StatementRow") -> bool:
        entry = row.entry
        if self.statuses and row.display_status not in self.statuses:
            return False
        if self.kinds and entry.kind not in self.kinds:
            return False
        if self.category_ids and entry.category_id not in self.category_ids:
            return False
        if self.query and self.query.strip().lower() not in entry.description.lower():
            return False
        return True


@dataclass(frozen=True)
class StatementRow:
    entry: LedgerEntry
    effective_date: date
    value_cents: int
    display_status: DisplayStatus
    running_balance_cents: int


@dataclass(frozen=True)
class Statement:
    """Read-only projection of one account over [range_from, range_to]."""

    account_id: UUID
    range_from: date
    range_to: date
    today: date
    opening_balance_cents: int
    current_balance_cents: int
    inflow_cents: int
    outflow_cents: int
    projected_balance_cents: int
    rows: Tuple[StatementRow, ...] = field(default_factory=tuple)

    @property
    def net_cents(self) -> int:
        return self.inflow_cents + self.outflow_cents

    @property
    def rows_latest_first(self) -> Tuple[StatementRow, ...]:
        return tuple(reversed(self.rows))


def effective_value(entry: LedgerEntry, account_id: UUID) -> int:
    """Signed contribution of an entry to the account; 0 when cancelled."""
    if entry.status == EntryStatus.CANCELLED:
        return 0
    return entry.value_for(account_id)


def settled_balance(
    account: Account,
    entries: Iterable[LedgerEntry],
    *,
    before: date | None = None,
    up_to: date | None = None,
) -> int:
    """
    Initial balance plus settled values dated strictly before `before`
    or on/before `up_to`.
    """
    total = account.initial_balance_cents
    for entry in entries:
        if not entry.is_settled or not entry.touches(account.id):
            continue
        when = entry.effective_date
        if before is not None and when >= before:
            continue
        if up_to is not None and when > up_to:
            continue
        total += effective_value(entry, account.id)
    return total


def _row_order(entry: LedgerEntry) -> tuple:
    return (entry.effective_date, entry.description, str(entry.id))


def project(
    account: Account | None,
    entries: Iterable[LedgerEntry],
    range_from: date,
    range_to: date,
    today: date,
    filters: StatementFilters | None = None,
) -> Statement:
    """
    Project an account statement.

    Algorithm:
        1. Keep entries touching the account that are not cancelled.
        2. opening = initial + settled values dated before range_from.
        3. current = initial + settled values dated on or before today,
           regardless of the range.
        4. Period set = entries with effective date in the range.
        5. inflow/outflow = positive/negative settled period values.
        6. projected = opening + every period value, settled or pending.
        7. Rows sorted ascending by (effective date, description, id)
           with running = opening + cumulative value. Display filters are
           applied last so visible rows keep their true running value.

    Args:
        account: The account being projected
        entries: Every entry referencing the account (others are ignored)
        range_from: First day of the period, inclusive
        range_to: Last day of the period, inclusive
        today: Reference date for current balance and overdue status
        filters: Optional row filters

    Returns:
        Statement with balances and chronological rows

    Raises:
        AccountNotFoundException: If no account was given
        InvalidRangeException: If range_from > range_to
    """
    if account is None:
        raise AccountNotFoundException("unknown")
    if range_from > range_to:
        raise InvalidRangeException(range_from, range_to)

    relevant = [
        e for e in entries
        if e.touches(account.id) and e.status != EntryStatus.CANCELLED
    ]

    opening = settled_balance(account, relevant, before=range_from)
    current = settled_balance(account, relevant, up_to=today)

    period = sorted(
        (e for e in relevant if range_from <= e.effective_date <= range_to),
        key=_row_order,
    )

    inflow = 0
    outflow = 0
    running = opening
    rows = []
    for entry in period:
        value = effective_value(entry, account.id)
        if entry.is_settled:
            if value > 0:
                inflow += value
            else:
                outflow += value
        running += value
        rows.append(
            StatementRow(
                entry=entry,
                effective_date=entry.effective_date,
                value_cents=value,
                display_status=entry.display_status(today),
                running_balance_cents=running,
            )
        )

    if filters is not None:
        rows = [row for row in rows if filters.matches(row)]

    return Statement(
        account_id=account.id,
        range_from=range_from,
        range_to=range_to,
        today=today,
        opening_balance_cents=opening,
        current_balance_cents=current,
        inflow_cents=inflow,
        outflow_cents=outflow,
        # running ends at opening + every period value
        projected_balance_cents=running,
        rows=tuple(rows),
    )

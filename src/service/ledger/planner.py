"""
Installment Planner.

Builds deterministic installment and recurrence plans for preview and
turns a confirmed plan into independent ledger entries that share one
group id.

Two plan kinds exist:
- Installment: a total is split across `count` items with the
  largest-remainder rule (see `money.split_rounded`).
- Recurrence: the full amount repeats on every item.

Both step due dates from the first due date using the plan frequency.
"""

from dataclasses import replace
from datetime import date
from typing import List
from uuid import UUID, uuid4

from src.domain.entities import (
    EntryKind,
    EntryOrigin,
    EntryStatus,
    Frequency,
    InstallmentPlan,
    LedgerEntry,
    PlanItem,
    PlanKind,
)
from src.domain.exceptions import InvalidInputException

from .money import split_rounded
from .schedule import step_date
from .settings import LedgerSettings, ledger_settings

MIN_PLAN_ITEMS = 2


def _validate(count: int, amounts: dict, frequency: Frequency, settings: LedgerSettings) -> None:
    if count < MIN_PLAN_ITEMS:
        raise InvalidInputException(
            f"A plan needs at least {MIN_PLAN_ITEMS} items; use a single entry instead"
        )
    if count > settings.max_installments:
        raise InvalidInputException(
            f"A plan cannot have more than {settings.max_installments} items"
        )
    for name, value in amounts.items():
        if value < 0:
            raise InvalidInputException(f"{name} must not be negative")
    if not isinstance(frequency, Frequency):
        raise InvalidInputException(f"Unrecognized frequency: {frequency!r}")


def _build(kind: PlanKind, frequency: Frequency, items: List[PlanItem]) -> InstallmentPlan:
    return InstallmentPlan(
        kind=kind,
        frequency=frequency,
        items=tuple(items),
        total_gross_cents=sum(item.gross_cents for item in items),
        total_fees_cents=sum(item.fees_cents for item in items),
        total_net_cents=sum(item.net_cents for item in items),
    )


def generate_plan(
    total_gross_cents: int,
    total_fees_cents: int,
    count: int,
    frequency: Frequency,
    first_due_date: date,
    settings: LedgerSettings | None = None,
) -> InstallmentPlan:
    """
    Split a total into `count` installments with stepped due dates.

    Algorithm:
        1. Split gross and fees independently with the largest-remainder
           rule; index 1 receives the first extra cent.
        2. Item i is due `(i - 1)` frequency units after `first_due_date`.
        3. net = gross - fees. Interest only exists on settled entries.

    Args:
        total_gross_cents: Amount to split, in cents
        total_fees_cents: Fees to split, in cents
        count: Number of installments (>= 2)
        frequency: Stepping rule between installments
        first_due_date: Due date of installment 1

    Returns:
        The plan with items ordered by index and recomputed totals

    Raises:
        InvalidInputException: On count < 2, negative totals or an
            unrecognized frequency. No partial plan is ever returned.
    """
    settings = settings or ledger_settings
    _validate(
        count,
        {"total_gross_cents": total_gross_cents, "total_fees_cents": total_fees_cents},
        frequency,
        settings,
    )

    gross_parts = split_rounded(total_gross_cents, count)
    fee_parts = split_rounded(total_fees_cents, count)

    items = [
        PlanItem(
            index=i + 1,
            due_date=step_date(first_due_date, frequency, i),
            gross_cents=gross,
            fees_cents=fees,
            net_cents=gross - fees,
        )
        for i, (gross, fees) in enumerate(zip(gross_parts, fee_parts))
    ]
    return _build(PlanKind.INSTALLMENT, frequency, items)


def generate_recurrence(
    gross_cents: int,
    fees_cents: int,
    count: int,
    first_due_date: date,
    frequency: Frequency | None = None,
    interest_cents: int = 0,
    settings: LedgerSettings | None = None,
) -> InstallmentPlan:
    """
    Repeat the same amount `count` times, monthly unless told otherwise.

    Each item carries the full gross and fees; net includes interest
    because a recurring bill is entered with its final amount.
    """
    settings = settings or ledger_settings
    frequency = frequency or Frequency.monthly()
    _validate(
        count,
        {
            "gross_cents": gross_cents,
            "fees_cents": fees_cents,
            "interest_cents": interest_cents,
        },
        frequency,
        settings,
    )

    net = gross_cents - fees_cents + interest_cents
    items = [
        PlanItem(
            index=i + 1,
            due_date=step_date(first_due_date, frequency, i),
            gross_cents=gross_cents,
            fees_cents=fees_cents,
            net_cents=net,
        )
        for i in range(count)
    ]
    return _build(PlanKind.RECURRENCE, frequency, items)


def materialize_plan(
    plan: InstallmentPlan,
    template: LedgerEntry,
    group_id: UUID | None = None,
) -> List[LedgerEntry]:
    """
    Turn a confirmed plan into open ledger entries.

    Every entry copies the template (kind, accounts, category, contact,
    origin), is labelled "{description} (i/count)" and shares one group
    id. Recurrence items keep the template interest; installment items
    carry none.
    """
    group_id = group_id or uuid4()
    interest = template.interest_cents if plan.kind == PlanKind.RECURRENCE else 0
    count = plan.count

    return [
        replace(
            template,
            id=uuid4(),
            description=f"{template.description} ({item.index}/{count})",
            due_date=item.due_date,
            gross_cents=item.gross_cents,
            fees_cents=item.fees_cents,
            interest_cents=interest,
            installment_number=item.index,
            installment_count=count,
            group_id=group_id,
            settlement_group_id=None,
            paid_date=None,
            status=EntryStatus.OPEN,
            version=1,
        )
        for item in plan.items
    ]


def entry_template(
    description: str,
    kind: EntryKind,
    account_id: UUID,
    first_due_date: date,
    destination_account_id: UUID | None = None,
    category_id: UUID | None = None,
    contact_id: UUID | None = None,
    interest_cents: int = 0,
    origin: EntryOrigin | None = None,
    transaction_date: date | None = None,
    notes: str = "",
) -> LedgerEntry:
    """Zero-amount entry carrying the fields shared by every plan item."""
    return LedgerEntry(
        description=description,
        kind=kind,
        account_id=account_id,
        due_date=first_due_date,
        gross_cents=0,
        interest_cents=interest_cents,
        destination_account_id=destination_account_id,
        category_id=category_id,
        contact_id=contact_id,
        origin=origin or EntryOrigin.manual(),
        transaction_date=transaction_date,
        notes=notes,
    )

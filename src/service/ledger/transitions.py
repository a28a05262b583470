"""
Settlement state machine.

    OPEN --settle--> SETTLED --revert--> OPEN
    OPEN --cancel--> CANCELLED

Every transition returns new entry instances; inputs are never mutated.
Multi-entry operations validate every entry before producing any
result, so callers can persist the whole batch in one transaction or
nothing at all.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, Iterable, List, Sequence, Tuple
from uuid import UUID, uuid4

from src.domain.entities import (
    Account,
    EntryKind,
    EntryOrigin,
    EntryStatus,
    LedgerEntry,
)
from src.domain.exceptions import (
    InvalidInputException,
    InvalidTransitionException,
    SettlementConflictException,
)


def settle(
    entry: LedgerEntry,
    paid_date: date,
    *,
    fees_cents: int | None = None,
    interest_cents: int | None = None,
    gross_cents: int | None = None,
    settlement_group_id: UUID | None = None,
) -> LedgerEntry:
    """
    Mark an open entry as paid on `paid_date`.

    Fees and interest may be corrected at settlement. Gross may only be
    overwritten for entries whose source record (a sale) is finalized at
    settlement time. Net is always derived, never stored.

    Raises:
        InvalidTransitionException: If the entry is not open
        InvalidInputException: If gross is overwritten on a non-sale entry
    """
    if not entry.is_open:
        raise InvalidTransitionException(str(entry.id), entry.status.value, "settle")
    if gross_cents is not None and not entry.origin.is_sale:
        raise InvalidInputException("Only sale-linked entries accept a new gross amount")

    return replace(
        entry,
        status=EntryStatus.SETTLED,
        paid_date=paid_date,
        gross_cents=entry.gross_cents if gross_cents is None else gross_cents,
        fees_cents=entry.fees_cents if fees_cents is None else fees_cents,
        interest_cents=entry.interest_cents if interest_cents is None else interest_cents,
        settlement_group_id=settlement_group_id,
    )


def cancel(entry: LedgerEntry) -> LedgerEntry:
    if not entry.is_open:
        raise InvalidTransitionException(str(entry.id), entry.status.value, "cancel")
    return replace(entry, status=EntryStatus.CANCELLED)


def revert(entry: LedgerEntry) -> LedgerEntry:
    """Undo a settlement: back to OPEN without paid date or settlement group."""
    if not entry.is_settled:
        raise InvalidTransitionException(str(entry.id), entry.status.value, "revert")
    return replace(
        entry,
        status=EntryStatus.OPEN,
        paid_date=None,
        settlement_group_id=None,
    )


def invoice_siblings(payment: LedgerEntry, entries: Iterable[LedgerEntry]) -> List[LedgerEntry]:
    """Card expenses settled by `payment`, excluding the payment itself."""
    if not payment.origin.is_card_invoice_payment or payment.settlement_group_id is None:
        return []
    card_id = payment.origin.reference_id
    return [
        e for e in entries
        if e.id != payment.id
        and e.settlement_group_id == payment.settlement_group_id
        and e.account_id == card_id
    ]


def revert_cascade(payment: LedgerEntry, entries: Iterable[LedgerEntry]) -> List[LedgerEntry]:
    """
    Revert an entry and, for a card invoice payment, every expense it settled.

    All-or-nothing: every entry of the cascade is checked first. If one of
    them is not settled anymore the whole operation is refused.

    Args:
        payment: The entry the user asked to revert
        entries: Candidate siblings (usually everything in its group)

    Returns:
        Reverted entries, the requested one first

    Raises:
        InvalidTransitionException: If `payment` itself is not settled
        SettlementConflictException: If any sibling cannot be reverted
    """
    if not payment.is_settled:
        raise InvalidTransitionException(str(payment.id), payment.status.value, "revert")

    siblings = invoice_siblings(payment, entries)
    blocked = [str(e.id) for e in siblings if not e.is_settled]
    if blocked:
        raise SettlementConflictException(
            f"Invoice payment {payment.id} cannot be reverted: "
            f"{len(blocked)} linked entr{'y is' if len(blocked) == 1 else 'ies are'} not settled",
            entry_ids=blocked,
        )

    return [revert(payment)] + [revert(e) for e in siblings]


def revert_many(
    selected: Iterable[LedgerEntry],
    related: Iterable[LedgerEntry],
) -> Tuple[List[LedgerEntry], List[LedgerEntry]]:
    """
    Revert a selection of entries, cascading for card invoice payments.

    Invoice payments are handled first so an expense selected together
    with its payment is reverted once, as part of the cascade. Entries
    that are not settled are returned as skipped. A single blocked
    cascade refuses the whole selection.

    Args:
        selected: The entries the user picked
        related: Candidate cascade siblings (the groups of the selected payments)

    Returns:
        (reverted entries, skipped entries)

    Raises:
        SettlementConflictException: If any cascade cannot be reverted
    """
    related = list(related)
    ordered = sorted(selected, key=lambda e: not e.origin.is_card_invoice_payment)

    reverted: Dict[UUID, LedgerEntry] = {}
    skipped: List[LedgerEntry] = []
    for entry in ordered:
        if entry.id in reverted:
            continue
        if not entry.is_settled:
            skipped.append(entry)
            continue
        for result in revert_cascade(entry, related):
            reverted.setdefault(result.id, result)

    return list(reverted.values()), skipped


@dataclass(frozen=True)
class InvoicePayment:
    payment: LedgerEntry
    settled_expenses: tuple
    settlement_group_id: UUID


def pay_card_invoice(
    card: Account,
    source: Account,
    expenses: Sequence[LedgerEntry],
    payment_date: date,
    invoice_due_date: date,
    amount_cents: int | None = None,
    category_id: UUID | None = None,
) -> InvoicePayment:
    """
    Settle the open expenses of a card invoice from a bank or cash account.

    Builds one settled expense on the source account (origin
    CARD_INVOICE_PAYMENT pointing at the card) and settles every open
    card expense on `payment_date`, all under a fresh settlement group.

    Raises:
        InvalidInputException: If the accounts have the wrong types, the
            amount is not positive or the invoice has nothing open
        SettlementConflictException: If an expense is not open anymore
    """
    if not card.is_card:
        raise InvalidInputException(f"Account {card.id} is not a card account")
    if not source.can_pay_invoices:
        raise InvalidInputException("Invoices can only be paid from bank or cash accounts")

    open_expenses = [e for e in expenses if e.is_open]
    if not open_expenses:
        raise InvalidInputException("The invoice has no open expenses")

    foreign = [
        str(e.id) for e in open_expenses
        if e.account_id != card.id or e.kind != EntryKind.EXPENSE
    ]
    if foreign:
        raise SettlementConflictException(
            "Only expenses of the card can be paid with its invoice",
            entry_ids=foreign,
        )

    amount = sum(e.gross_cents for e in open_expenses) if amount_cents is None else amount_cents
    if amount <= 0:
        raise InvalidInputException("Invoice payment amount must be positive")

    group_id = uuid4()
    payment = LedgerEntry(
        description=f"Card invoice payment {card.name} - due {invoice_due_date.isoformat()}",
        kind=EntryKind.EXPENSE,
        account_id=source.id,
        due_date=payment_date,
        gross_cents=amount,
        status=EntryStatus.SETTLED,
        paid_date=payment_date,
        category_id=category_id,
        settlement_group_id=group_id,
        origin=EntryOrigin.card_invoice_payment(card.id),
    )
    settled = tuple(
        settle(e, payment_date, settlement_group_id=group_id) for e in open_expenses
    )
    return InvoicePayment(payment=payment, settled_expenses=settled, settlement_group_id=group_id)

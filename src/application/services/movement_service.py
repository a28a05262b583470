"""Movement service - single entries, listing, settlement and reversal use cases."""

from dataclasses import replace
from datetime import date, datetime, timezone
from typing import List
from uuid import UUID

import structlog

from src.domain.entities import LedgerEntry, SaleStatus, WarehouseStock
from src.domain.exceptions import (
    AccountNotFoundException,
    ConcurrentModificationException,
    EntryNotFoundException,
    InvalidInputException,
    InvalidTransitionException,
    ResourceNotFoundException,
)
from src.domain.interfaces import AccountRepository, EntryRepository, StockRepository
from src.application.dto import (
    BulkActionInput,
    BulkActionResult,
    EntryInput,
    EntryResponse,
    MovementPageResponse,
    MovementTotalsDTO,
    SettleInput,
)
from src.core.metrics import record_cascade_revert, record_entry_transition
from src.service.ledger import (
    MovementQuery,
    cancel,
    query_movements,
    revert_cascade,
    revert_many,
    settle,
)
from src.service.ledger.stock import add_units, unit_price_from_total

logger = structlog.get_logger(__name__)

BULK_SETTLE = "settle"
BULK_REVERT = "revert"
BULK_DELETE = "delete"


class MovementService:
    """
    Application service for cash-flow movements.

    Every multi-entry write goes through a single `update_many` call so
    the request transaction either applies all of it or none of it.
    """

    def __init__(
        self,
        entry_repository: EntryRepository,
        account_repository: AccountRepository,
        stock_repository: StockRepository,
    ):
        self._entry_repo = entry_repository
        self._account_repo = account_repository
        self._stock_repo = stock_repository

    async def create_entry(self, data: EntryInput, today: date) -> EntryResponse:
        """
        Create a single entry, optionally already settled.

        Raises:
            InvalidInputException: If the input is inconsistent
            AccountNotFoundException: If an account does not exist
        """
        errors = data.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))

        await self._require_accounts(data.account_id, data.destination_account_id)

        entry = LedgerEntry(
            description=data.description.strip(),
            kind=data.kind,
            account_id=data.account_id,
            destination_account_id=data.destination_account_id,
            due_date=data.due_date,
            gross_cents=data.gross_cents,
            fees_cents=data.fees_cents,
            interest_cents=data.interest_cents,
            category_id=data.category_id,
            contact_id=data.contact_id,
            transaction_date=data.transaction_date,
            notes=data.notes,
        )
        if data.settled:
            entry = settle(entry, data.paid_date or data.due_date)

        [saved] = await self._entry_repo.add_many([entry])

        logger.info(
            "entry_created",
            entry_id=str(saved.id),
            kind=saved.kind.value,
            status=saved.status.value,
            net_cents=saved.net_cents,
        )

        return EntryResponse.from_entity(saved, today)

    async def get_entry(self, entry_id: UUID, today: date) -> EntryResponse:
        entry = await self._get(entry_id)
        return EntryResponse.from_entity(entry, today)

    async def update_entry(
        self,
        entry_id: UUID,
        data: EntryInput,
        expected_version: int | None,
        today: date,
    ) -> EntryResponse:
        """
        Edit an open entry.

        Raises:
            InvalidTransitionException: If the entry is not open
            ConcurrentModificationException: If `expected_version` is stale
        """
        errors = data.validate()
        if errors:
            raise InvalidInputException("; ".join(errors))
        if data.settled:
            raise InvalidInputException("Use the settle operation to settle an entry")

        entry = await self._get(entry_id)
        if not entry.is_open:
            raise InvalidTransitionException(str(entry.id), entry.status.value, "edit")
        if expected_version is not None and expected_version != entry.version:
            raise ConcurrentModificationException(str(entry.id))

        await self._require_accounts(data.account_id, data.destination_account_id)

        updated = replace(
            entry,
            description=data.description.strip(),
            kind=data.kind,
            account_id=data.account_id,
            destination_account_id=data.destination_account_id,
            due_date=data.due_date,
            gross_cents=data.gross_cents,
            fees_cents=data.fees_cents,
            interest_cents=data.interest_cents,
            category_id=data.category_id,
            contact_id=data.contact_id,
            transaction_date=data.transaction_date,
            notes=data.notes,
        )
        [saved] = await self._entry_repo.update_many([updated])

        logger.info("entry_updated", entry_id=str(saved.id), version=saved.version)

        return EntryResponse.from_entity(saved, today)

    async def delete_entry(self, entry_id: UUID) -> None:
        """
        Delete an entry.

        Deleting the receivable of a sale that is still "sold" undoes the
        sale: its units go back to the warehouse and the sale is removed.

        Raises:
            InvalidTransitionException: If the entry belongs to a sale that
                already progressed past "sold"
        """
        entry = await self._get(entry_id)
        locked = await self._locked_by_sale([entry])
        if locked:
            raise InvalidTransitionException(str(entry.id), "sale in progress", "delete")

        await self._release_sales([entry])
        await self._entry_repo.delete_many([entry.id])
        logger.info("entry_deleted", entry_id=str(entry.id))

    async def list_movements(self, query: MovementQuery, today: date) -> MovementPageResponse:
        """Filter, paginate and total movements server-side."""
        entries = await self._entry_repo.list()
        page = query_movements(entries, query, today)

        totals = None
        if page.totals is not None:
            totals = MovementTotalsDTO(
                inflow_cents=page.totals.inflow_cents,
                outflow_cents=page.totals.outflow_cents,
                net_cents=page.totals.net_cents,
                pending_today_cents=page.totals.pending_today_cents,
                projected_balance_cents=page.totals.projected_balance_cents,
            )

        return MovementPageResponse(
            items=[EntryResponse.from_entity(e, today) for e in page.items],
            page=page.page,
            page_size=page.page_size,
            total=page.total,
            totals=totals,
        )

    async def settle_entry(self, entry_id: UUID, data: SettleInput, today: date) -> EntryResponse:
        """
        Settle an open entry.

        For sale-linked entries the sale is finalized too: its unit price,
        freight and tax follow the settled values and it moves to
        "payment received".
        """
        entry = await self._get(entry_id)
        log = logger.bind(entry_id=str(entry.id), paid_date=data.paid_date.isoformat())

        gross = None
        if entry.origin.is_sale:
            gross = await self._finalize_sale(entry, data)
        elif data.product_value_cents is not None or data.freight_cents is not None:
            raise InvalidInputException("Product value and freight only apply to sale entries")

        settled = settle(
            entry,
            data.paid_date,
            fees_cents=data.fees_cents,
            interest_cents=data.interest_cents,
            gross_cents=gross,
        )
        [saved] = await self._entry_repo.update_many([settled])
        record_entry_transition("settle")

        log.info("entry_settled", net_cents=saved.net_cents)

        return EntryResponse.from_entity(saved, today)

    async def revert_entry(self, entry_id: UUID, today: date) -> List[EntryResponse]:
        """
        Revert a settled entry.

        Reverting a card invoice payment also reverts every card expense
        it settled. The whole cascade is validated before anything is
        written and persisted in one batch.

        Returns:
            Every reverted entry, the requested one first

        Raises:
            InvalidTransitionException: If the entry is not settled
            SettlementConflictException: If a linked expense cannot be reverted
            ConcurrentModificationException: If a linked entry changed meanwhile
        """
        entry = await self._get(entry_id)

        siblings: List[LedgerEntry] = []
        if entry.origin.is_card_invoice_payment and entry.settlement_group_id is not None:
            siblings = await self._entry_repo.list_by_group(entry.settlement_group_id)

        reverted = revert_cascade(entry, siblings)
        saved = await self._entry_repo.update_many(reverted)

        record_entry_transition("revert")
        if len(saved) > 1:
            record_cascade_revert(len(saved))
            logger.info(
                "invoice_payment_reverted",
                entry_id=str(entry.id),
                card_id=str(entry.origin.reference_id),
                cascade_size=len(saved),
            )
        else:
            logger.info("entry_reverted", entry_id=str(entry.id))

        return [EntryResponse.from_entity(e, today) for e in saved]

    async def cancel_entry(self, entry_id: UUID, today: date) -> EntryResponse:
        entry = await self._get(entry_id)
        [saved] = await self._entry_repo.update_many([cancel(entry)])
        record_entry_transition("cancel")
        logger.info("entry_cancelled", entry_id=str(saved.id))
        return EntryResponse.from_entity(saved, today)

    async def bulk_action(self, data: BulkActionInput, today: date) -> BulkActionResult:
        """
        Apply settle, revert or delete to many entries.

        Entries that do not qualify (missing, in the wrong status, or
        locked by a progressed sale) are skipped and reported, not failed.
        Revert is the exception: a card invoice payment whose cascade is
        blocked refuses the whole selection.
        """
        if data.action not in (BULK_SETTLE, BULK_REVERT, BULK_DELETE):
            raise InvalidInputException(f"Unknown bulk action: {data.action!r}")
        if not data.ids:
            raise InvalidInputException("No entries selected")

        entries = await self._entry_repo.get_many(data.ids)
        found = {e.id for e in entries}
        skipped = [str(entry_id) for entry_id in data.ids if entry_id not in found]

        if data.action == BULK_SETTLE:
            paid_date = data.paid_date or today
            targets = [e for e in entries if e.is_open]
            skipped += [str(e.id) for e in entries if not e.is_open]
            settled = []
            for entry in targets:
                gross = None
                if entry.origin.is_sale:
                    gross = await self._finalize_sale(entry, SettleInput(paid_date=paid_date))
                settled.append(settle(entry, paid_date, gross_cents=gross))
            saved = await self._entry_repo.update_many(settled)
            for _ in saved:
                record_entry_transition("settle")
            affected = [str(e.id) for e in saved]
        elif data.action == BULK_REVERT:
            related: List[LedgerEntry] = []
            for entry in entries:
                if entry.origin.is_card_invoice_payment and entry.settlement_group_id is not None:
                    related += await self._entry_repo.list_by_group(entry.settlement_group_id)
            reverted, not_settled = revert_many(entries, related)
            skipped += [str(e.id) for e in not_settled]
            saved = await self._entry_repo.update_many(reverted)
            for _ in saved:
                record_entry_transition("revert")
            affected = [str(e.id) for e in saved]
        else:
            locked = await self._locked_by_sale(entries)
            targets = [e for e in entries if e.id not in locked]
            skipped += [str(entry_id) for entry_id in locked]
            await self._release_sales(targets)
            await self._entry_repo.delete_many([e.id for e in targets])
            affected = [str(e.id) for e in targets]

        logger.info(
            "bulk_action_applied",
            action=data.action,
            affected=len(affected),
            skipped=len(skipped),
        )

        return BulkActionResult(action=data.action, affected=affected, skipped=skipped)

    async def _get(self, entry_id: UUID) -> LedgerEntry:
        entry = await self._entry_repo.get_by_id(entry_id)
        if entry is None:
            logger.warning("entry_not_found", entry_id=str(entry_id))
            raise EntryNotFoundException(str(entry_id))
        return entry

    async def _require_accounts(self, *account_ids: UUID | None) -> None:
        for account_id in account_ids:
            if account_id is None:
                continue
            if await self._account_repo.get_by_id(account_id) is None:
                raise AccountNotFoundException(str(account_id))

    async def _locked_by_sale(self, entries: List[LedgerEntry]) -> set:
        sale_entries = {e.origin.reference_id: e.id for e in entries if e.origin.is_sale}
        if not sale_entries:
            return set()
        sales = await self._stock_repo.get_sales(sale_entries.keys())
        return {sale_entries[s.id] for s in sales if s.progressed}

    async def _finalize_sale(self, entry: LedgerEntry, data: SettleInput) -> int | None:
        """Sync the linked sale; returns the new gross when the product value changed."""
        if not entry.is_open:
            raise InvalidTransitionException(str(entry.id), entry.status.value, "settle")

        sale = await self._stock_repo.get_sale(entry.origin.reference_id)
        if sale is None:
            raise ResourceNotFoundException("sale", str(entry.origin.reference_id))

        gross = None
        if data.freight_cents is not None:
            sale.freight_cents = data.freight_cents
        if data.product_value_cents is not None:
            sale.unit_price_cents = unit_price_from_total(data.product_value_cents, sale.quantity)
            gross = data.product_value_cents + sale.freight_cents - sale.discount_cents
        elif data.freight_cents is not None:
            gross = sale.gross_cents
        if data.fees_cents is not None:
            sale.tax_cents = data.fees_cents

        sale.status = SaleStatus.PAYMENT_RECEIVED
        sale.status_changed_at = datetime.now(timezone.utc)
        await self._stock_repo.update_sale(sale)

        logger.info("sale_payment_received", sale_id=str(sale.id), entry_id=str(entry.id))
        return gross

    async def _release_sales(self, entries: List[LedgerEntry]) -> None:
        """Give the units of the entries' sales back to stock and drop the sales."""
        sale_ids = [e.origin.reference_id for e in entries if e.origin.is_sale]
        if not sale_ids:
            return

        sales = await self._stock_repo.get_sales(sale_ids)
        for sale in sales:
            stock = await self._stock_repo.get_stock(sale.product_id, sale.warehouse_id)
            if stock is None:
                stock = WarehouseStock(product_id=sale.product_id, warehouse_id=sale.warehouse_id)
            stock = add_units(stock, sale.quantity)
            await self._stock_repo.save_stock(stock)
            logger.info(
                "sale_released",
                sale_id=str(sale.id),
                product_id=str(sale.product_id),
                quantity=sale.quantity,
                stock_quantity=stock.quantity,
            )

        await self._stock_repo.delete_sales([s.id for s in sales])

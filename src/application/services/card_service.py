"""Card service - invoices, limit usage and invoice payment."""

from datetime import date
from uuid import UUID

import structlog

from src.domain.entities import Account, Category, CategoryType
from src.domain.exceptions import AccountNotFoundException
from src.domain.interfaces import AccountRepository, CategoryRepository, EntryRepository
from src.application.dto import (
    CardSummaryResponse,
    EntryResponse,
    InvoicePaymentResponse,
    InvoiceResponse,
    PayInvoiceInput,
)
from src.service.ledger import card_summary, invoice_for, pay_card_invoice
from src.service.ledger.settings import ledger_settings

logger = structlog.get_logger(__name__)


class CardService:
    """Application service for credit card accounts."""

    def __init__(
        self,
        account_repository: AccountRepository,
        entry_repository: EntryRepository,
        category_repository: CategoryRepository,
    ):
        self._account_repo = account_repository
        self._entry_repo = entry_repository
        self._category_repo = category_repository

    async def get_invoice(self, card_id: UUID, year: int, month: int, today: date) -> InvoiceResponse:
        card = await self._get(card_id)
        entries = await self._entry_repo.list_for_account(card.id)
        return InvoiceResponse.from_invoice(invoice_for(card, entries, year, month), today)

    async def get_summary(self, card_id: UUID, today: date) -> CardSummaryResponse:
        card = await self._get(card_id)
        entries = await self._entry_repo.list_for_account(card.id)
        return CardSummaryResponse.from_summary(card_summary(card, entries, today), today)

    async def pay_invoice(
        self,
        card_id: UUID,
        data: PayInvoiceInput,
        today: date,
    ) -> InvoicePaymentResponse:
        """
        Pay a card invoice from a bank or cash account.

        The payment entry and every settled expense are written in the
        same transaction under one settlement group.

        Raises:
            AccountNotFoundException: If either account does not exist
            InvalidInputException: If the accounts or invoice do not qualify
        """
        card = await self._get(card_id)
        source = await self._get(data.source_account_id)

        entries = await self._entry_repo.list_for_account(card.id)
        invoice = invoice_for(card, entries, data.year, data.month)
        category = await self._payment_category()

        result = pay_card_invoice(
            card=card,
            source=source,
            expenses=invoice.expenses,
            payment_date=data.payment_date,
            invoice_due_date=invoice.due_date,
            amount_cents=data.amount_cents,
            category_id=category.id,
        )

        [payment] = await self._entry_repo.add_many([result.payment])
        settled = await self._entry_repo.update_many(list(result.settled_expenses))

        logger.info(
            "invoice_paid",
            card_id=str(card.id),
            source_account_id=str(source.id),
            amount_cents=payment.gross_cents,
            expenses=len(settled),
            settlement_group_id=str(result.settlement_group_id),
        )

        return InvoicePaymentResponse(
            payment=EntryResponse.from_entity(payment, today),
            settled_entry_ids=[str(e.id) for e in settled],
            settlement_group_id=str(result.settlement_group_id),
        )

    async def _payment_category(self) -> Category:
        name = ledger_settings.invoice_payment_category
        category = await self._category_repo.get_by_name(name)
        if category is None:
            category = await self._category_repo.add(Category(name=name, type=CategoryType.EXPENSE))
        return category

    async def _get(self, account_id: UUID) -> Account:
        account = await self._account_repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundException(str(account_id))
        return account

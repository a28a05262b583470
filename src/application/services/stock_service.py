"""Stock service - warehouse stock, purchases, sales and history."""

from datetime import date
from typing import List
from uuid import UUID

import structlog

from src.domain.entities import (
    EntryKind,
    EntryOrigin,
    LedgerEntry,
    Product,
    Sale,
    StockPurchase,
    WarehouseStock,
)
from src.domain.exceptions import (
    AccountNotFoundException,
    InvalidInputException,
    ResourceNotFoundException,
)
from src.domain.interfaces import (
    AccountRepository,
    ContactRepository,
    EntryRepository,
    ProductRepository,
    StockRepository,
)
from src.application.dto import (
    PurchaseInput,
    SaleInput,
    SaleResponse,
    StockEventResponse,
    StockHistoryResponse,
    StockMovementDTO,
    StockResponse,
)
from src.service.ledger import stock_history
from src.service.ledger.stock import add_units, adjust_units, needs_reorder, remove_units

logger = structlog.get_logger(__name__)


class StockService:
    """
    Application service for warehouse stock.

    Purchases and sales move stock and create their ledger entry in the
    same transaction.
    """

    def __init__(
        self,
        stock_repository: StockRepository,
        product_repository: ProductRepository,
        contact_repository: ContactRepository,
        account_repository: AccountRepository,
        entry_repository: EntryRepository,
    ):
        self._stock_repo = stock_repository
        self._product_repo = product_repository
        self._contact_repo = contact_repository
        self._account_repo = account_repository
        self._entry_repo = entry_repository

    async def list_stock(
        self,
        warehouse_id: UUID | None = None,
        reorder_only: bool = False,
    ) -> List[StockResponse]:
        rows = await self._stock_repo.list_stock(warehouse_id)
        products = {p.id: p for p in await self._product_repo.list()}

        result = []
        for stock in rows:
            product = products.get(stock.product_id)
            if reorder_only and (product is None or not needs_reorder(stock, product)):
                continue
            result.append(StockResponse.from_entity(stock, product))
        return result

    async def record_purchase(self, data: PurchaseInput) -> StockEventResponse:
        """
        Receive units into a warehouse and book the matching expense.

        The expense is due on `due_date` (purchase date by default) on the
        paying account and points back at the purchase.
        """
        if data.unit_cost_cents < 0:
            raise InvalidInputException("unit_cost_cents must not be negative")

        product = await self._product(data.product_id)
        await self._warehouse(data.warehouse_id)
        await self._account(data.payment_account_id)

        stock = await self._stock_for(data.product_id, data.warehouse_id)
        stock = add_units(stock, data.quantity)

        purchase = StockPurchase(
            product_id=data.product_id,
            warehouse_id=data.warehouse_id,
            quantity=data.quantity,
            unit_cost_cents=data.unit_cost_cents,
            purchase_date=data.purchase_date,
            supplier_id=data.supplier_id,
        )
        entry = LedgerEntry(
            description=f"Purchase {product.name} x{data.quantity}",
            kind=EntryKind.EXPENSE,
            account_id=data.payment_account_id,
            due_date=data.due_date or data.purchase_date,
            gross_cents=purchase.total_cents,
            category_id=data.category_id,
            contact_id=data.supplier_id,
            transaction_date=data.purchase_date,
            origin=EntryOrigin.purchase(purchase.id),
        )
        purchase.entry_id = entry.id

        await self._stock_repo.save_stock(stock)
        await self._stock_repo.add_purchase(purchase)
        await self._entry_repo.add_many([entry])

        logger.info(
            "stock_purchase_recorded",
            purchase_id=str(purchase.id),
            product_id=str(product.id),
            quantity=data.quantity,
            stock_quantity=stock.quantity,
        )

        return StockEventResponse(
            event_id=str(purchase.id),
            entry_id=str(entry.id),
            stock=StockResponse.from_entity(stock, product),
        )

    async def record_sale(self, data: SaleInput) -> StockEventResponse:
        """
        Ship units out of a warehouse and book the receivable.

        Raises:
            InsufficientStockException: If the warehouse holds too few units
        """
        product = await self._product(data.product_id)
        await self._warehouse(data.warehouse_id)
        await self._account(data.credit_account_id)

        stock = await self._stock_for(data.product_id, data.warehouse_id)
        stock = remove_units(stock, data.quantity)

        sale = Sale(
            product_id=data.product_id,
            warehouse_id=data.warehouse_id,
            customer_id=data.customer_id,
            quantity=data.quantity,
            unit_price_cents=data.unit_price_cents,
            freight_cents=data.freight_cents,
            tax_cents=data.tax_cents,
            discount_cents=data.discount_cents,
            sale_date=data.sale_date,
            credit_account_id=data.credit_account_id,
            expected_payment_date=data.expected_payment_date,
        )
        if sale.gross_cents < 0:
            raise InvalidInputException("Discount exceeds the sale value")

        entry = LedgerEntry(
            description=f"Sale {product.name} x{data.quantity}",
            kind=EntryKind.INCOME,
            account_id=data.credit_account_id,
            due_date=data.expected_payment_date,
            gross_cents=sale.gross_cents,
            fees_cents=data.tax_cents,
            category_id=data.category_id,
            contact_id=data.customer_id,
            transaction_date=data.sale_date,
            origin=EntryOrigin.sale(sale.id),
        )
        sale.entry_id = entry.id

        await self._stock_repo.save_stock(stock)
        await self._stock_repo.add_sale(sale)
        await self._entry_repo.add_many([entry])

        logger.info(
            "sale_recorded",
            sale_id=str(sale.id),
            product_id=str(product.id),
            quantity=data.quantity,
            stock_quantity=stock.quantity,
        )

        return StockEventResponse(
            event_id=str(sale.id),
            entry_id=str(entry.id),
            stock=StockResponse.from_entity(stock, product),
        )

    async def get_sale(self, sale_id: UUID) -> SaleResponse:
        sale = await self._stock_repo.get_sale(sale_id)
        if sale is None:
            raise ResourceNotFoundException("sale", str(sale_id))
        return SaleResponse.from_entity(sale)

    async def adjust_stock(self, stock_id: UUID, quantity: int, reason: str | None) -> StockResponse:
        stock = await self._stock_repo.get_stock_by_id(stock_id)
        if stock is None:
            raise ResourceNotFoundException("stock", str(stock_id))

        previous = stock.quantity
        stock = adjust_units(stock, quantity, reason)
        await self._stock_repo.save_stock(stock)

        logger.info(
            "stock_adjusted",
            stock_id=str(stock.id),
            previous_quantity=previous,
            quantity=quantity,
            reason=reason,
        )

        product = await self._product_repo.get_by_id(stock.product_id)
        return StockResponse.from_entity(stock, product)

    async def get_history(self, product_id: UUID, warehouse_id: UUID) -> StockHistoryResponse:
        await self._product(product_id)
        purchases = await self._stock_repo.list_purchases(product_id, warehouse_id)
        sales = await self._stock_repo.list_sales(product_id, warehouse_id)
        stock = await self._stock_repo.get_stock(product_id, warehouse_id)

        movements = stock_history(purchases, sales)
        return StockHistoryResponse(
            product_id=str(product_id),
            warehouse_id=str(warehouse_id),
            current_quantity=stock.quantity if stock is not None else 0,
            movements=[StockMovementDTO.from_movement(m) for m in movements],
        )

    async def _stock_for(self, product_id: UUID, warehouse_id: UUID) -> WarehouseStock:
        stock = await self._stock_repo.get_stock(product_id, warehouse_id)
        if stock is None:
            stock = WarehouseStock(product_id=product_id, warehouse_id=warehouse_id)
        return stock

    async def _product(self, product_id: UUID) -> Product:
        product = await self._product_repo.get_by_id(product_id)
        if product is None:
            raise ResourceNotFoundException("product", str(product_id))
        return product

    async def _warehouse(self, warehouse_id: UUID) -> None:
        contact = await self._contact_repo.get_by_id(warehouse_id)
        if contact is None:
            raise ResourceNotFoundException("warehouse", str(warehouse_id))
        if not contact.is_warehouse:
            raise InvalidInputException(f"Contact {warehouse_id} is not a warehouse partner")

    async def _account(self, account_id: UUID) -> None:
        if await self._account_repo.get_by_id(account_id) is None:
            raise AccountNotFoundException(str(account_id))

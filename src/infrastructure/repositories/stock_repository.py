"""PostgreSQL repository implementation for warehouse stock, purchases and sales."""

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Sale, SaleStatus, StockPurchase, WarehouseStock
from src.domain.exceptions import ResourceNotFoundException
from src.domain.interfaces import StockRepository
from src.infrastructure.database.models import (
    SaleModel,
    StockPurchaseModel,
    WarehouseStockModel,
)


def _str(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


def _uuid(value: str | None) -> UUID | None:
    return UUID(str(value)) if value is not None else None


class PostgresStockRepository(StockRepository):
    """PostgreSQL-backed stock repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_stock(
        self,
        product_id: UUID,
        warehouse_id: UUID,
    ) -> Optional[WarehouseStock]:
        stmt = select(WarehouseStockModel).where(
            WarehouseStockModel.product_id == str(product_id),
            WarehouseStockModel.warehouse_id == str(warehouse_id),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._stock_to_entity(model) if model is not None else None

    async def get_stock_by_id(self, stock_id: UUID) -> Optional[WarehouseStock]:
        model = await self._session.get(WarehouseStockModel, str(stock_id))
        return self._stock_to_entity(model) if model is not None else None

    async def list_stock(self, warehouse_id: UUID | None = None) -> List[WarehouseStock]:
        stmt = select(WarehouseStockModel).order_by(WarehouseStockModel.updated_at.desc())
        if warehouse_id is not None:
            stmt = stmt.where(WarehouseStockModel.warehouse_id == str(warehouse_id))
        result = await self._session.execute(stmt)
        return [self._stock_to_entity(model) for model in result.scalars().all()]

    async def save_stock(self, stock: WarehouseStock) -> WarehouseStock:
        model = await self._session.get(WarehouseStockModel, str(stock.id))
        if model is None:
            model = WarehouseStockModel(
                id=str(stock.id),
                product_id=str(stock.product_id),
                warehouse_id=str(stock.warehouse_id),
            )
            self._session.add(model)

        model.quantity = stock.quantity
        model.adjustment_reason = stock.adjustment_reason
        model.updated_at = stock.updated_at
        await self._session.flush()

        return stock

    async def add_purchase(self, purchase: StockPurchase) -> StockPurchase:
        self._session.add(
            StockPurchaseModel(
                id=str(purchase.id),
                product_id=str(purchase.product_id),
                warehouse_id=str(purchase.warehouse_id),
                supplier_id=_str(purchase.supplier_id),
                quantity=purchase.quantity,
                unit_cost_cents=purchase.unit_cost_cents,
                purchase_date=purchase.purchase_date,
                entry_id=_str(purchase.entry_id),
                created_at=purchase.created_at,
            )
        )
        await self._session.flush()
        return purchase

    async def add_sale(self, sale: Sale) -> Sale:
        model = SaleModel(id=str(sale.id), created_at=sale.created_at)
        self._apply_sale(model, sale)
        self._session.add(model)
        await self._session.flush()
        return sale

    async def update_sale(self, sale: Sale) -> Sale:
        model = await self._session.get(SaleModel, str(sale.id))
        if model is None:
            raise ResourceNotFoundException("sale", str(sale.id))
        self._apply_sale(model, sale)
        await self._session.flush()
        return sale

    async def get_sale(self, sale_id: UUID) -> Optional[Sale]:
        model = await self._session.get(SaleModel, str(sale_id))
        return self._sale_to_entity(model) if model is not None else None

    async def get_sales(self, sale_ids: Iterable[UUID]) -> List[Sale]:
        ids = [str(sale_id) for sale_id in sale_ids]
        if not ids:
            return []
        result = await self._session.execute(select(SaleModel).where(SaleModel.id.in_(ids)))
        return [self._sale_to_entity(model) for model in result.scalars().all()]

    async def delete_sales(self, sale_ids: Iterable[UUID]) -> int:
        ids = [str(sale_id) for sale_id in sale_ids]
        if not ids:
            return 0
        result = await self._session.execute(delete(SaleModel).where(SaleModel.id.in_(ids)))
        return result.rowcount

    async def list_purchases(
        self,
        product_id: UUID,
        warehouse_id: UUID,
    ) -> List[StockPurchase]:
        stmt = (
            select(StockPurchaseModel)
            .where(
                StockPurchaseModel.product_id == str(product_id),
                StockPurchaseModel.warehouse_id == str(warehouse_id),
            )
            .order_by(StockPurchaseModel.purchase_date, StockPurchaseModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [
            StockPurchase(
                id=UUID(str(model.id)),
                product_id=UUID(str(model.product_id)),
                warehouse_id=UUID(str(model.warehouse_id)),
                supplier_id=_uuid(model.supplier_id),
                quantity=model.quantity,
                unit_cost_cents=model.unit_cost_cents,
                purchase_date=model.purchase_date,
                entry_id=_uuid(model.entry_id),
                created_at=model.created_at,
            )
            for model in result.scalars().all()
        ]

    async def list_sales(self, product_id: UUID, warehouse_id: UUID) -> List[Sale]:
        stmt = (
            select(SaleModel)
            .where(
                SaleModel.product_id == str(product_id),
                SaleModel.warehouse_id == str(warehouse_id),
            )
            .order_by(SaleModel.sale_date, SaleModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._sale_to_entity(model) for model in result.scalars().all()]

    def _apply_sale(self, model: SaleModel, sale: Sale) -> None:
        model.product_id = str(sale.product_id)
        model.warehouse_id = str(sale.warehouse_id)
        model.customer_id = _str(sale.customer_id)
        model.credit_account_id = str(sale.credit_account_id)
        model.quantity = sale.quantity
        model.unit_price_cents = sale.unit_price_cents
        model.freight_cents = sale.freight_cents
        model.tax_cents = sale.tax_cents
        model.discount_cents = sale.discount_cents
        model.sale_date = sale.sale_date
        model.expected_payment_date = sale.expected_payment_date
        model.status = sale.status.value
        model.status_changed_at = sale.status_changed_at
        model.entry_id = _str(sale.entry_id)

    def _stock_to_entity(self, model: WarehouseStockModel) -> WarehouseStock:
        return WarehouseStock(
            id=UUID(str(model.id)),
            product_id=UUID(str(model.product_id)),
            warehouse_id=UUID(str(model.warehouse_id)),
            quantity=model.quantity,
            adjustment_reason=model.adjustment_reason,
            updated_at=model.updated_at,
        )

    def _sale_to_entity(self, model: SaleModel) -> Sale:
        return Sale(
            id=UUID(str(model.id)),
            product_id=UUID(str(model.product_id)),
            warehouse_id=UUID(str(model.warehouse_id)),
            customer_id=_uuid(model.customer_id),
            credit_account_id=UUID(str(model.credit_account_id)),
            quantity=model.quantity,
            unit_price_cents=model.unit_price_cents,
            freight_cents=model.freight_cents,
            tax_cents=model.tax_cents,
            discount_cents=model.discount_cents,
            sale_date=model.sale_date,
            expected_payment_date=model.expected_payment_date,
            status=SaleStatus(model.status),
            status_changed_at=model.status_changed_at,
            entry_id=_uuid(model.entry_id),
            created_at=model.created_at,
        )

"""Data transfer objects for warehouse stock operations."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Sale, WarehouseStock
from src.service.ledger import StockMovement


@dataclass(frozen=True)
class PurchaseInput:
    product_id: UUID
    warehouse_id: UUID
    quantity: int
    unit_cost_cents: int
    purchase_date: date
    payment_account_id: UUID
    due_date: Optional[date] = None
    supplier_id: Optional[UUID] = None
    category_id: Optional[UUID] = None


@dataclass(frozen=True)
class SaleInput:
    product_id: UUID
    warehouse_id: UUID
    quantity: int
    unit_price_cents: int
    sale_date: date
    credit_account_id: UUID
    expected_payment_date: date
    customer_id: Optional[UUID] = None
    freight_cents: int = 0
    tax_cents: int = 0
    discount_cents: int = 0
    category_id: Optional[UUID] = None


@dataclass(frozen=True)
class StockResponse:
    stock_id: str
    product_id: str
    product_name: Optional[str]
    warehouse_id: str
    quantity: int
    min_stock: int
    needs_reorder: bool
    adjustment_reason: Optional[str]

    @classmethod
    def from_entity(cls, stock: WarehouseStock, product=None) -> "StockResponse":
        min_stock = product.min_stock if product is not None else 0
        return cls(
            stock_id=str(stock.id),
            product_id=str(stock.product_id),
            product_name=product.name if product is not None else None,
            warehouse_id=str(stock.warehouse_id),
            quantity=stock.quantity,
            min_stock=min_stock,
            needs_reorder=stock.quantity <= min_stock,
            adjustment_reason=stock.adjustment_reason,
        )


@dataclass(frozen=True)
class StockEventResponse:
    """Result of recording a purchase or sale: the event, its entry and new stock."""

    event_id: str
    entry_id: str
    stock: StockResponse


@dataclass(frozen=True)
class SaleResponse:
    sale_id: str
    status: str
    quantity: int
    unit_price_cents: int
    freight_cents: int
    tax_cents: int
    gross_cents: int
    entry_id: Optional[str]

    @classmethod
    def from_entity(cls, sale: Sale) -> "SaleResponse":
        return cls(
            sale_id=str(sale.id),
            status=sale.status.value,
            quantity=sale.quantity,
            unit_price_cents=sale.unit_price_cents,
            freight_cents=sale.freight_cents,
            tax_cents=sale.tax_cents,
            gross_cents=sale.gross_cents,
            entry_id=str(sale.entry_id) if sale.entry_id else None,
        )


@dataclass(frozen=True)
class StockMovementDTO:
    date: date
    type: str
    quantity: int
    balance: int
    unit_value_cents: int
    reference_id: str
    counterparty_id: Optional[str]

    @classmethod
    def from_movement(cls, movement: StockMovement) -> "StockMovementDTO":
        return cls(
            date=movement.date,
            type=movement.type.value,
            quantity=movement.quantity,
            balance=movement.balance,
            unit_value_cents=movement.unit_value_cents,
            reference_id=str(movement.reference_id),
            counterparty_id=str(movement.counterparty_id) if movement.counterparty_id else None,
        )


@dataclass(frozen=True)
class StockHistoryResponse:
    product_id: str
    warehouse_id: str
    current_quantity: int
    movements: List[StockMovementDTO]

"""
Warehouse stock arithmetic and per-product history.

History for one product at one warehouse merges purchases (entries) and
sales (exits) chronologically, purchases first on the same day, and
carries a running quantity starting from zero.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Sequence
from uuid import UUID

from src.domain.entities import Product, Sale, StockPurchase, WarehouseStock
from src.domain.exceptions import InsufficientStockException, InvalidInputException


class StockMovementType(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"


@dataclass(frozen=True)
class StockMovement:
    date: date
    type: StockMovementType
    quantity: int
    balance: int
    unit_value_cents: int
    reference_id: UUID
    counterparty_id: UUID | None = None


def _positive(quantity: int) -> None:
    if quantity <= 0:
        raise InvalidInputException("Quantity must be positive")


def add_units(stock: WarehouseStock, quantity: int) -> WarehouseStock:
    _positive(quantity)
    return replace(
        stock,
        quantity=stock.quantity + quantity,
        updated_at=datetime.now(timezone.utc),
    )


def remove_units(stock: WarehouseStock, quantity: int) -> WarehouseStock:
    """
    Take units out of a warehouse.

    Raises:
        InsufficientStockException: If fewer than `quantity` units are held
    """
    _positive(quantity)
    if stock.quantity < quantity:
        raise InsufficientStockException(str(stock.product_id), stock.quantity, quantity)
    return replace(
        stock,
        quantity=stock.quantity - quantity,
        updated_at=datetime.now(timezone.utc),
    )


def adjust_units(stock: WarehouseStock, quantity: int, reason: str | None = None) -> WarehouseStock:
    """Set the counted quantity, e.g. after an inventory check."""
    if quantity < 0:
        raise InvalidInputException("Stock quantity cannot be negative")
    return replace(
        stock,
        quantity=quantity,
        adjustment_reason=reason,
        updated_at=datetime.now(timezone.utc),
    )


def needs_reorder(stock: WarehouseStock, product: Product) -> bool:
    return stock.quantity <= product.min_stock


def unit_price_from_total(product_value_cents: int, quantity: int) -> int:
    """Unit price in cents for a product total, rounded half up."""
    _positive(quantity)
    return int(
        (Decimal(product_value_cents) / quantity).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    )


def stock_history(
    purchases: Sequence[StockPurchase],
    sales: Sequence[Sale],
) -> List[StockMovement]:
    """
    Chronological stock movements with a running quantity.

    Returns:
        Movements ordered most recent first, each carrying the quantity
        held right after it
    """
    events = [
        (p.purchase_date, StockMovementType.ENTRY, p.quantity, p.unit_cost_cents, p.id, p.supplier_id)
        for p in purchases
    ] + [
        (s.sale_date, StockMovementType.EXIT, s.quantity, s.unit_price_cents, s.id, s.customer_id)
        for s in sales
    ]
    # sort is stable, so purchases stay ahead of same-day sales
    events.sort(key=lambda event: event[0])

    balance = 0
    history = []
    for when, kind, quantity, unit_value, reference_id, counterparty_id in events:
        balance += quantity if kind == StockMovementType.ENTRY else -quantity
        history.append(
            StockMovement(
                date=when,
                type=kind,
                quantity=quantity,
                balance=balance,
                unit_value_cents=unit_value,
                reference_id=reference_id,
                counterparty_id=counterparty_id,
            )
        )

    history.reverse()
    return history

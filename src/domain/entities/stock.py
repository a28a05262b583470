"""Warehouse stock entities and the purchase/sale events that move it."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class SaleStatus(str, Enum):
    """Tracking status of a sale, in the order it normally progresses."""

    SOLD = "sold"
    BUYING_ITEM = "buying_item"
    AWAITING_SHIPMENT = "awaiting_shipment"
    AWAITING_DELIVERY = "awaiting_delivery"
    DELIVERED = "delivered"
    PAYMENT_RECEIVED = "payment_received"


@dataclass
class WarehouseStock:
    """Quantity of one product held at one warehouse."""

    product_id: UUID
    warehouse_id: UUID
    quantity: int = 0
    id: UUID = field(default_factory=uuid4)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    adjustment_reason: str | None = None


@dataclass
class StockPurchase:
    product_id: UUID
    warehouse_id: UUID
    quantity: int
    unit_cost_cents: int
    purchase_date: date
    supplier_id: UUID | None = None
    entry_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_cents(self) -> int:
        return self.quantity * self.unit_cost_cents


@dataclass
class Sale:
    product_id: UUID
    warehouse_id: UUID
    quantity: int
    unit_price_cents: int
    sale_date: date
    credit_account_id: UUID
    expected_payment_date: date
    customer_id: UUID | None = None
    freight_cents: int = 0
    tax_cents: int = 0
    discount_cents: int = 0
    status: SaleStatus = SaleStatus.SOLD
    status_changed_at: datetime | None = None
    entry_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def product_value_cents(self) -> int:
        return self.quantity * self.unit_price_cents

    @property
    def gross_cents(self) -> int:
        """Amount the customer owes: products plus freight minus discount."""
        return self.product_value_cents + self.freight_cents - self.discount_cents

    @property
    def progressed(self) -> bool:
        """True once the sale moved past SOLD; its entry is then locked."""
        return self.status != SaleStatus.SOLD

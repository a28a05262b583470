"""Catalog entities: contacts, categories and products."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class ContactType(str, Enum):
    CUSTOMER = "customer"
    SUPPLIER = "supplier"
    WAREHOUSE_PARTNER = "warehouse_partner"
    PARTNER = "partner"


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class Contact:
    name: str
    type: ContactType
    email: str | None = None
    phone: str | None = None
    document: str | None = None
    notes: str = ""
    active: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_warehouse(self) -> bool:
        return self.type == ContactType.WAREHOUSE_PARTNER


@dataclass
class Category:
    name: str
    type: CategoryType
    color: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Product:
    """A sellable item. Prices are in cents."""

    name: str
    sku: str | None = None
    sale_price_cents: int = 0
    cost_cents: int = 0
    min_stock: int = 0
    default_warehouse_id: UUID | None = None
    active: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

"""Domain Entities - Core business objects."""

from .account import Account, AccountType
from .catalog import Category, CategoryType, Contact, ContactType, Product
from .entry import (
    DisplayStatus,
    EntryKind,
    EntryOrigin,
    EntryStatus,
    LedgerEntry,
    OriginType,
)
from .plan import Frequency, FrequencyRule, InstallmentPlan, PlanItem, PlanKind
from .stock import Sale, SaleStatus, StockPurchase, WarehouseStock

__all__ = [
    "Account",
    "AccountType",
    "Category",
    "CategoryType",
    "Contact",
    "ContactType",
    "Product",
    "DisplayStatus",
    "EntryKind",
    "EntryOrigin",
    "EntryStatus",
    "LedgerEntry",
    "OriginType",
    "Frequency",
    "FrequencyRule",
    "InstallmentPlan",
    "PlanItem",
    "PlanKind",
    "Sale",
    "SaleStatus",
    "StockPurchase",
    "WarehouseStock",
]

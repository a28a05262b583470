"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import (
    AccountModel,
    Base,
    CategoryModel,
    ContactModel,
    EntryModel,
    ProductModel,
    SaleModel,
    StockPurchaseModel,
    WarehouseStockModel,
)

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "AccountModel",
    "CategoryModel",
    "ContactModel",
    "EntryModel",
    "ProductModel",
    "SaleModel",
    "StockPurchaseModel",
    "WarehouseStockModel",
]

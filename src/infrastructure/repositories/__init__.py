"""Repository implementations."""

from .account_repository import PostgresAccountRepository
from .catalog_repository import (
    PostgresCategoryRepository,
    PostgresContactRepository,
    PostgresProductRepository,
)
from .entry_repository import PostgresEntryRepository
from .stock_repository import PostgresStockRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresCategoryRepository",
    "PostgresContactRepository",
    "PostgresProductRepository",
    "PostgresEntryRepository",
    "PostgresStockRepository",
]

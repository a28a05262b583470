"""
Domain Interfaces (Ports)
"""

from .repositories import (
    AccountRepository,
    CategoryRepository,
    ContactRepository,
    EntryRepository,
    ProductRepository,
    StockRepository,
)

__all__ = [
    "AccountRepository",
    "CategoryRepository",
    "ContactRepository",
    "EntryRepository",
    "ProductRepository",
    "StockRepository",
]

"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional, Sequence
from uuid import UUID

from src.domain.entities import (
    Account,
    Category,
    Contact,
    LedgerEntry,
    Product,
    Sale,
    StockPurchase,
    WarehouseStock,
)


class AccountRepository(ABC):
    """
    Abstract repository for Account persistence.

    Implementations may use PostgreSQL, SQLite, in-memory storage, etc.
    """

    @abstractmethod
    async def add(self, account: Account) -> Account:
        ...

    @abstractmethod
    async def update(self, account: Account) -> Account:
        ...

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """
        Retrieve an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        ...

    @abstractmethod
    async def list(self, include_inactive: bool = False) -> List[Account]:
        """List accounts ordered by name."""
        ...

    @abstractmethod
    async def delete(self, account_id: UUID) -> None:
        ...

    @abstractmethod
    async def count_references(self, account_id: UUID) -> int:
        """
        Count records that point at an account.

        Entries referencing it as source or destination and sales crediting
        it both count.

        Args:
            account_id: The account's unique identifier

        Returns:
            Number of referencing records (0 means the account may be deleted)
        """
        ...


class EntryRepository(ABC):
    """
    Abstract repository for LedgerEntry persistence.

    Updates are optimistic: an update whose `version` no longer matches
    the stored row raises ConcurrentModificationException.
    """

    @abstractmethod
    async def add_many(self, entries: Sequence[LedgerEntry]) -> List[LedgerEntry]:
        """
        Persist new entries.

        Args:
            entries: Entries to insert, in display order

        Returns:
            The saved entries with version and timestamps populated
        """
        ...

    @abstractmethod
    async def update_many(self, entries: Sequence[LedgerEntry]) -> List[LedgerEntry]:
        """
        Persist new states of existing entries in one unit of work.

        Args:
            entries: Updated entries carrying the version they were read at

        Returns:
            The entries with bumped versions

        Raises:
            EntryNotFoundException: If an entry no longer exists
            ConcurrentModificationException: If an entry changed since read
        """
        ...

    @abstractmethod
    async def get_by_id(self, entry_id: UUID) -> Optional[LedgerEntry]:
        ...

    @abstractmethod
    async def get_many(self, entry_ids: Iterable[UUID]) -> List[LedgerEntry]:
        """Retrieve the entries that exist among `entry_ids`."""
        ...

    @abstractmethod
    async def list(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> List[LedgerEntry]:
        """
        List entries whose due or paid date may fall in the window.

        The window is a coarse pre-filter; callers apply effective-date
        semantics themselves.
        """
        ...

    @abstractmethod
    async def list_for_account(self, account_id: UUID) -> List[LedgerEntry]:
        """Every entry with the account as source or destination."""
        ...

    @abstractmethod
    async def list_by_group(self, group_id: UUID) -> List[LedgerEntry]:
        """Entries created together or settled together under `group_id`."""
        ...

    @abstractmethod
    async def delete_many(self, entry_ids: Iterable[UUID]) -> int:
        ...


class ContactRepository(ABC):
    """Abstract repository for Contact persistence."""

    @abstractmethod
    async def add(self, contact: Contact) -> Contact:
        ...

    @abstractmethod
    async def update(self, contact: Contact) -> Contact:
        ...

    @abstractmethod
    async def get_by_id(self, contact_id: UUID) -> Optional[Contact]:
        ...

    @abstractmethod
    async def list(self) -> List[Contact]:
        ...

    @abstractmethod
    async def delete(self, contact_id: UUID) -> None:
        ...


class CategoryRepository(ABC):
    """Abstract repository for Category persistence."""

    @abstractmethod
    async def add(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def update(self, category: Category) -> Category:
        ...

    @abstractmethod
    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Category]:
        ...

    @abstractmethod
    async def list(self) -> List[Category]:
        ...

    @abstractmethod
    async def delete(self, category_id: UUID) -> None:
        ...


class ProductRepository(ABC):
    """Abstract repository for Product persistence."""

    @abstractmethod
    async def add(self, product: Product) -> Product:
        ...

    @abstractmethod
    async def update(self, product: Product) -> Product:
        ...

    @abstractmethod
    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        ...

    @abstractmethod
    async def list(self) -> List[Product]:
        ...

    @abstractmethod
    async def delete(self, product_id: UUID) -> None:
        ...


class StockRepository(ABC):
    """
    Abstract repository for warehouse stock and the events moving it.

    Purchases and sales are append-only history; stock rows hold the
    current quantity per (product, warehouse).
    """

    @abstractmethod
    async def get_stock(
        self,
        product_id: UUID,
        warehouse_id: UUID,
    ) -> Optional[WarehouseStock]:
        ...

    @abstractmethod
    async def get_stock_by_id(self, stock_id: UUID) -> Optional[WarehouseStock]:
        ...

    @abstractmethod
    async def list_stock(self, warehouse_id: UUID | None = None) -> List[WarehouseStock]:
        ...

    @abstractmethod
    async def save_stock(self, stock: WarehouseStock) -> WarehouseStock:
        """Insert or update a stock row."""
        ...

    @abstractmethod
    async def add_purchase(self, purchase: StockPurchase) -> StockPurchase:
        ...

    @abstractmethod
    async def add_sale(self, sale: Sale) -> Sale:
        ...

    @abstractmethod
    async def update_sale(self, sale: Sale) -> Sale:
        ...

    @abstractmethod
    async def get_sale(self, sale_id: UUID) -> Optional[Sale]:
        ...

    @abstractmethod
    async def get_sales(self, sale_ids: Iterable[UUID]) -> List[Sale]:
        ...

    @abstractmethod
    async def delete_sales(self, sale_ids: Iterable[UUID]) -> int:
        """Remove sales whose receivable was deleted; stock is restored by the caller."""
        ...

    @abstractmethod
    async def list_purchases(
        self,
        product_id: UUID,
        warehouse_id: UUID,
    ) -> List[StockPurchase]:
        ...

    @abstractmethod
    async def list_sales(self, product_id: UUID, warehouse_id: UUID) -> List[Sale]:
        ...

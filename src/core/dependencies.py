"""Dependency injection for FastAPI."""

from datetime import date
from typing import Annotated, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_db_session
from src.infrastructure.repositories import (
    PostgresAccountRepository,
    PostgresCategoryRepository,
    PostgresContactRepository,
    PostgresEntryRepository,
    PostgresProductRepository,
    PostgresStockRepository,
)
from src.application.services import (
    AccountService,
    CardService,
    CatalogService,
    MovementService,
    PlanService,
    StatementService,
    StockService,
)

Session = Annotated[AsyncSession, Depends(get_db_session)]


# Repository dependencies
async def get_account_repository(session: Session) -> PostgresAccountRepository:
    """Get an AccountRepository instance."""
    return PostgresAccountRepository(session)


async def get_entry_repository(session: Session) -> PostgresEntryRepository:
    """Get an EntryRepository instance."""
    return PostgresEntryRepository(session)


async def get_contact_repository(session: Session) -> PostgresContactRepository:
    return PostgresContactRepository(session)


async def get_category_repository(session: Session) -> PostgresCategoryRepository:
    return PostgresCategoryRepository(session)


async def get_product_repository(session: Session) -> PostgresProductRepository:
    return PostgresProductRepository(session)


async def get_stock_repository(session: Session) -> PostgresStockRepository:
    return PostgresStockRepository(session)


AccountRepo = Annotated[PostgresAccountRepository, Depends(get_account_repository)]
EntryRepo = Annotated[PostgresEntryRepository, Depends(get_entry_repository)]
ContactRepo = Annotated[PostgresContactRepository, Depends(get_contact_repository)]
CategoryRepo = Annotated[PostgresCategoryRepository, Depends(get_category_repository)]
ProductRepo = Annotated[PostgresProductRepository, Depends(get_product_repository)]
StockRepo = Annotated[PostgresStockRepository, Depends(get_stock_repository)]


# Service dependencies
async def get_account_service(accounts: AccountRepo, entries: EntryRepo) -> AccountService:
    """Get an AccountService instance."""
    return AccountService(account_repository=accounts, entry_repository=entries)


async def get_statement_service(accounts: AccountRepo, entries: EntryRepo) -> StatementService:
    """Get a StatementService instance."""
    return StatementService(account_repository=accounts, entry_repository=entries)


async def get_card_service(
    accounts: AccountRepo,
    entries: EntryRepo,
    categories: CategoryRepo,
) -> CardService:
    """Get a CardService instance."""
    return CardService(
        account_repository=accounts,
        entry_repository=entries,
        category_repository=categories,
    )


async def get_movement_service(
    entries: EntryRepo,
    accounts: AccountRepo,
    stock: StockRepo,
) -> MovementService:
    """Get a MovementService instance with all dependencies."""
    return MovementService(
        entry_repository=entries,
        account_repository=accounts,
        stock_repository=stock,
    )


async def get_plan_service(entries: EntryRepo, accounts: AccountRepo) -> PlanService:
    """Get a PlanService instance."""
    return PlanService(entry_repository=entries, account_repository=accounts)


async def get_catalog_service(
    contacts: ContactRepo,
    categories: CategoryRepo,
    products: ProductRepo,
) -> CatalogService:
    """Get a CatalogService instance."""
    return CatalogService(
        contact_repository=contacts,
        category_repository=categories,
        product_repository=products,
    )


async def get_stock_service(
    stock: StockRepo,
    products: ProductRepo,
    contacts: ContactRepo,
    accounts: AccountRepo,
    entries: EntryRepo,
) -> StockService:
    """Get a StockService instance."""
    return StockService(
        stock_repository=stock,
        product_repository=products,
        contact_repository=contacts,
        account_repository=accounts,
        entry_repository=entries,
    )


async def get_today(
    as_of: Annotated[
        Optional[date],
        Query(description="Reference date for balances and overdue status; defaults to today"),
    ] = None,
) -> date:
    """Resolve the date that counts as "today" for the request."""
    return as_of or date.today()


Today = Annotated[date, Depends(get_today)]

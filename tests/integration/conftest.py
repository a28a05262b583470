"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database shared by every request of a test
- Test client for the FastAPI app
- Helpers that create accounts, warehouses and products through the API
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.infrastructure.database import Base, get_db_session


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(test_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the in-memory database.

    Each request commits on success and rolls back on error, like the
    production session dependency.
    """
    async def override_get_db_session():
        try:
            yield test_session
            await test_session.commit()
        except Exception:
            await test_session.rollback()
            raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def bank_account(client: AsyncClient) -> dict:
    """Bank account starting at 1,000.00."""
    response = await client.post("/api/accounts", json={
        "name": "Main bank",
        "type": "bank",
        "initial_balance_cents": 100000,
    })
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def cash_account(client: AsyncClient) -> dict:
    response = await client.post("/api/accounts", json={"name": "Cash", "type": "cash"})
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def card_account(client: AsyncClient) -> dict:
    """Card closing on the 25th, due on the 5th, limit 1,000.00."""
    response = await client.post("/api/accounts", json={
        "name": "Visa",
        "type": "card",
        "card_closing_day": 25,
        "card_due_day": 5,
        "card_limit_cents": 100000,
    })
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def warehouse(client: AsyncClient) -> dict:
    response = await client.post("/api/contacts", json={
        "name": "North warehouse",
        "type": "warehouse_partner",
    })
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def product(client: AsyncClient) -> dict:
    response = await client.post("/api/products", json={
        "name": "Mug",
        "sku": "MUG-01",
        "sale_price_cents": 2500,
        "cost_cents": 1000,
        "min_stock": 5,
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def expense_body(bank_account: dict) -> dict:
    """Request body for an open expense on the bank account."""
    return {
        "description": "Office rent",
        "kind": "expense",
        "account_id": bank_account["account_id"],
        "due_date": "2024-03-10",
        "gross_cents": 25000,
    }

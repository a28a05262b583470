"""
Integration tests for the Accounts API.

These tests verify:
1. Account CRUD and card settings validation
2. Current balance from settled entries
3. Deletion refused while entries reference the account
"""

import pytest
from httpx import AsyncClient
from uuid import uuid4

TODAY = "2024-03-15"


# =============================================================================
# Account CRUD
# =============================================================================

class TestAccountCrud:
    """Tests for /api/accounts endpoints."""

    @pytest.mark.asyncio
    async def test_create_bank_account(self, client: AsyncClient):
        response = await client.post("/api/accounts", json={
            "name": "  Savings  ",
            "type": "bank",
            "initial_balance_cents": 5000,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Savings"
        assert data["type"] == "bank"
        assert data["current_balance_cents"] == 5000
        assert data["best_purchase_day"] is None

    @pytest.mark.asyncio
    async def test_create_card_account(self, card_account: dict):
        assert card_account["card_closing_day"] == 25
        assert card_account["card_due_day"] == 5
        assert card_account["best_purchase_day"] == 26

    @pytest.mark.asyncio
    async def test_card_requires_closing_and_due_days(self, client: AsyncClient):
        response = await client.post("/api/accounts", json={
            "name": "Broken card",
            "type": "card",
            "card_limit_cents": 1000,
        })

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    @pytest.mark.asyncio
    async def test_card_settings_rejected_on_bank(self, client: AsyncClient):
        response = await client.post("/api/accounts", json={
            "name": "Bank",
            "type": "bank",
            "card_closing_day": 10,
        })

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_unknown_account(self, client: AsyncClient):
        response = await client.get(f"/api/accounts/{uuid4()}")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "ACCOUNT_NOT_FOUND"
        assert "request_id" in data

    @pytest.mark.asyncio
    async def test_update_account(self, client: AsyncClient, bank_account: dict):
        account_id = bank_account["account_id"]

        response = await client.put(f"/api/accounts/{account_id}", json={
            "name": "Renamed bank",
            "type": "bank",
            "initial_balance_cents": 200000,
        })

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed bank"
        assert response.json()["current_balance_cents"] == 200000

    @pytest.mark.asyncio
    async def test_list_hides_inactive_accounts(self, client: AsyncClient, bank_account: dict):
        await client.post("/api/accounts", json={"name": "Old", "type": "cash", "active": False})

        active = await client.get("/api/accounts")
        everything = await client.get("/api/accounts", params={"include_inactive": True})

        assert [a["name"] for a in active.json()] == ["Main bank"]
        assert len(everything.json()) == 2


# =============================================================================
# Balances
# =============================================================================

class TestAccountBalance:
    """Current balance counts settled entries up to the reference date."""

    @pytest.mark.asyncio
    async def test_balance_uses_settled_entries_only(
        self,
        client: AsyncClient,
        bank_account: dict,
        expense_body: dict,
    ):
        account_id = bank_account["account_id"]
        await client.post("/api/movements", json=expense_body)
        await client.post("/api/movements", json={
            "description": "Customer payment",
            "kind": "income",
            "account_id": account_id,
            "due_date": "2024-03-01",
            "gross_cents": 30000,
            "fees_cents": 1000,
            "settled": True,
            "paid_date": "2024-03-02",
        })

        response = await client.get(f"/api/accounts/{account_id}", params={"as_of": TODAY})

        assert response.json()["current_balance_cents"] == 100000 + 29000
        assert response.json()["current_balance_display"] == "R$ 1.290,00"

    @pytest.mark.asyncio
    async def test_future_settlement_not_in_current_balance(
        self,
        client: AsyncClient,
        bank_account: dict,
    ):
        account_id = bank_account["account_id"]
        await client.post("/api/movements", json={
            "description": "Prepaid",
            "kind": "income",
            "account_id": account_id,
            "due_date": "2024-04-01",
            "gross_cents": 1000,
            "settled": True,
        })

        response = await client.get(f"/api/accounts/{account_id}", params={"as_of": TODAY})

        assert response.json()["current_balance_cents"] == 100000


# =============================================================================
# Deletion
# =============================================================================

class TestAccountDeletion:
    """Tests for DELETE /api/accounts/{id}."""

    @pytest.mark.asyncio
    async def test_delete_unreferenced_account(self, client: AsyncClient, cash_account: dict):
        account_id = cash_account["account_id"]

        response = await client.delete(f"/api/accounts/{account_id}")

        assert response.status_code == 204
        assert (await client.get(f"/api/accounts/{account_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_referenced_account_refused(
        self,
        client: AsyncClient,
        bank_account: dict,
        expense_body: dict,
    ):
        await client.post("/api/movements", json=expense_body)

        response = await client.delete(f"/api/accounts/{bank_account['account_id']}")

        assert response.status_code == 409
        assert response.json()["error"] == "ACCOUNT_IN_USE"

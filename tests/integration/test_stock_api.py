"""
Integration tests for the Stock API.

These tests verify:
1. Purchases and sales move stock and create their ledger entries
2. Sales beyond the available quantity are refused
3. History, reorder listing and manual adjustment
4. Settling a sale entry, alone or in bulk, finalizes the sale
5. Deleting an unsettled sale receivable returns its units to stock
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient
from uuid import uuid4


@pytest_asyncio.fixture
async def stocked(client: AsyncClient, bank_account: dict, warehouse: dict, product: dict) -> dict:
    """10 mugs bought on 2024-03-01 at 10.00 each."""
    response = await client.post("/api/stock/purchases", json={
        "product_id": product["id"],
        "warehouse_id": warehouse["id"],
        "quantity": 10,
        "unit_cost_cents": 1000,
        "purchase_date": "2024-03-01",
        "payment_account_id": bank_account["account_id"],
    })
    assert response.status_code == 201
    return {
        "product_id": product["id"],
        "warehouse_id": warehouse["id"],
        "account_id": bank_account["account_id"],
        "purchase": response.json(),
    }


async def stock_quantity(client: AsyncClient, stocked: dict) -> int:
    rows = (await client.get("/api/stock", params={"warehouse_id": stocked["warehouse_id"]})).json()
    [row] = [r for r in rows if r["product_id"] == stocked["product_id"]]
    return row["quantity"]


def sale_body(stocked: dict, quantity: int = 4, **extra) -> dict:
    return {
        "product_id": stocked["product_id"],
        "warehouse_id": stocked["warehouse_id"],
        "quantity": quantity,
        "unit_price_cents": 2500,
        "sale_date": "2024-03-05",
        "credit_account_id": stocked["account_id"],
        "expected_payment_date": "2024-03-20",
        **extra,
    }


# =============================================================================
# Purchases and Sales
# =============================================================================

class TestPurchasesAndSales:
    """Tests for POST /api/stock/purchases and /api/stock/sales."""

    @pytest.mark.asyncio
    async def test_purchase_adds_stock_and_expense(self, client: AsyncClient, stocked: dict):
        purchase = stocked["purchase"]

        assert purchase["stock"]["quantity"] == 10
        entry = (await client.get(f"/api/movements/{purchase['entry_id']}")).json()
        assert entry["kind"] == "expense"
        assert entry["gross_cents"] == 10000
        assert entry["origin"] == "purchase"
        assert entry["description"] == "Purchase Mug x10"

    @pytest.mark.asyncio
    async def test_sale_removes_stock_and_books_receivable(self, client: AsyncClient, stocked: dict):
        response = await client.post(
            "/api/stock/sales",
            json=sale_body(stocked, freight_cents=500, tax_cents=300),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["stock"]["quantity"] == 6

        entry = (await client.get(f"/api/movements/{data['entry_id']}")).json()
        assert entry["kind"] == "income"
        assert entry["gross_cents"] == 10500
        assert entry["fees_cents"] == 300
        assert entry["net_cents"] == 10200
        assert entry["due_date"] == "2024-03-20"
        assert entry["origin"] == "sale"

    @pytest.mark.asyncio
    async def test_insufficient_stock(self, client: AsyncClient, stocked: dict):
        response = await client.post("/api/stock/sales", json=sale_body(stocked, quantity=11))

        assert response.status_code == 409
        assert response.json()["error"] == "INSUFFICIENT_STOCK"

        rows = (await client.get("/api/stock")).json()
        assert rows[0]["quantity"] == 10
        assert (await client.get("/api/movements")).json()["total"] == 1

    @pytest.mark.asyncio
    async def test_payment_date_before_sale_date(self, client: AsyncClient, stocked: dict):
        response = await client.post(
            "/api/stock/sales",
            json=sale_body(stocked, expected_payment_date="2024-03-01"),
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_warehouse_must_be_partner(
        self,
        client: AsyncClient,
        bank_account: dict,
        product: dict,
    ):
        customer = (
            await client.post("/api/contacts", json={"name": "Alex", "type": "customer"})
        ).json()

        response = await client.post("/api/stock/purchases", json={
            "product_id": product["id"],
            "warehouse_id": customer["id"],
            "quantity": 1,
            "unit_cost_cents": 100,
            "purchase_date": "2024-03-01",
            "payment_account_id": bank_account["account_id"],
        })

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_product(self, client: AsyncClient, bank_account: dict, warehouse: dict):
        response = await client.post("/api/stock/purchases", json={
            "product_id": str(uuid4()),
            "warehouse_id": warehouse["id"],
            "quantity": 1,
            "unit_cost_cents": 100,
            "purchase_date": "2024-03-01",
            "payment_account_id": bank_account["account_id"],
        })

        assert response.status_code == 404
        assert response.json()["error"] == "PRODUCT_NOT_FOUND"


# =============================================================================
# History, Reorder and Adjustment
# =============================================================================

class TestStockQueries:
    """Tests for stock listing, history and adjustment."""

    @pytest.mark.asyncio
    async def test_history_most_recent_first(self, client: AsyncClient, stocked: dict):
        await client.post("/api/stock/sales", json=sale_body(stocked))

        response = await client.get("/api/stock/history", params={
            "product_id": stocked["product_id"],
            "warehouse_id": stocked["warehouse_id"],
        })

        data = response.json()
        assert data["current_quantity"] == 6
        assert [(m["type"], m["balance"]) for m in data["movements"]] == [("exit", 6), ("entry", 10)]

    @pytest.mark.asyncio
    async def test_reorder_listing(self, client: AsyncClient, stocked: dict):
        await client.post("/api/stock/sales", json=sale_body(stocked, quantity=4))
        assert (await client.get("/api/stock", params={"reorder_only": True})).json() == []

        await client.post("/api/stock/sales", json=sale_body(stocked, quantity=2))
        rows = (await client.get("/api/stock", params={"reorder_only": True})).json()

        assert len(rows) == 1
        assert rows[0]["quantity"] == 4
        assert rows[0]["needs_reorder"] is True

    @pytest.mark.asyncio
    async def test_adjust_stock(self, client: AsyncClient, stocked: dict):
        stock_id = stocked["purchase"]["stock"]["stock_id"]

        response = await client.put(
            f"/api/stock/{stock_id}",
            json={"quantity": 12, "reason": "inventory count"},
        )

        assert response.status_code == 200
        assert response.json()["quantity"] == 12
        assert response.json()["adjustment_reason"] == "inventory count"

    @pytest.mark.asyncio
    async def test_adjust_unknown_stock(self, client: AsyncClient):
        response = await client.put(f"/api/stock/{uuid4()}", json={"quantity": 1})

        assert response.status_code == 404
        assert response.json()["error"] == "STOCK_NOT_FOUND"


# =============================================================================
# Sale Settlement
# =============================================================================

class TestSaleSettlement:
    """Settling a sale entry finalizes the sale."""

    @pytest.mark.asyncio
    async def test_settle_with_final_values(self, client: AsyncClient, stocked: dict):
        sale = (await client.post("/api/stock/sales", json=sale_body(stocked))).json()

        response = await client.post(f"/api/movements/{sale['entry_id']}/settle", json={
            "paid_date": "2024-03-21",
            "product_value_cents": 9000,
            "freight_cents": 500,
            "fees_cents": 300,
        })

        assert response.status_code == 200
        entry = response.json()
        assert entry["gross_cents"] == 9500
        assert entry["net_cents"] == 9200

        sale_data = (await client.get(f"/api/stock/sales/{sale['event_id']}")).json()
        assert sale_data["status"] == "payment_received"
        assert sale_data["unit_price_cents"] == 2250
        assert sale_data["tax_cents"] == 300
        assert sale_data["gross_cents"] == 9500

    @pytest.mark.asyncio
    async def test_progressed_sale_entry_cannot_be_deleted(self, client: AsyncClient, stocked: dict):
        sale = (await client.post("/api/stock/sales", json=sale_body(stocked))).json()
        await client.post(f"/api/movements/{sale['entry_id']}/settle", json={"paid_date": "2024-03-21"})

        response = await client.delete(f"/api/movements/{sale['entry_id']}")
        bulk = await client.post("/api/movements/bulk", json={
            "action": "delete",
            "ids": [sale["entry_id"]],
        })

        assert response.status_code == 409
        assert bulk.json()["skipped"] == [sale["entry_id"]]

    @pytest.mark.asyncio
    async def test_unprogressed_sale_entry_delete_restores_stock(self, client: AsyncClient, stocked: dict):
        sale = (await client.post("/api/stock/sales", json=sale_body(stocked))).json()

        response = await client.delete(f"/api/movements/{sale['entry_id']}")

        assert response.status_code == 204
        assert await stock_quantity(client, stocked) == 10
        sale_response = await client.get(f"/api/stock/sales/{sale['event_id']}")
        assert sale_response.status_code == 404
        assert sale_response.json()["error"] == "SALE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_bulk_delete_releases_sale_units(self, client: AsyncClient, stocked: dict):
        first = (await client.post("/api/stock/sales", json=sale_body(stocked, quantity=3))).json()
        second = (await client.post("/api/stock/sales", json=sale_body(stocked, quantity=2))).json()

        response = await client.post("/api/movements/bulk", json={
            "action": "delete",
            "ids": [first["entry_id"], second["entry_id"]],
        })

        assert response.status_code == 200
        assert sorted(response.json()["affected"]) == sorted([first["entry_id"], second["entry_id"]])
        assert await stock_quantity(client, stocked) == 10

    @pytest.mark.asyncio
    async def test_bulk_settle_finalizes_sale(self, client: AsyncClient, stocked: dict):
        sale = (await client.post("/api/stock/sales", json=sale_body(stocked))).json()

        response = await client.post("/api/movements/bulk", json={
            "action": "settle",
            "ids": [sale["entry_id"]],
            "paid_date": "2024-03-21",
        })

        assert response.status_code == 200
        assert response.json()["affected"] == [sale["entry_id"]]
        sale_data = (await client.get(f"/api/stock/sales/{sale['event_id']}")).json()
        assert sale_data["status"] == "payment_received"

        delete = await client.delete(f"/api/movements/{sale['entry_id']}")
        assert delete.status_code == 409
        assert await stock_quantity(client, stocked) == 6

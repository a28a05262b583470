"""
Integration tests for the Movements API.

These tests verify:
1. Creating single entries, settled or open
2. Settle / revert / cancel transitions and their conflicts
3. Optimistic locking on edits
4. Bulk actions and server-side listing
"""

import pytest
from httpx import AsyncClient
from uuid import uuid4

TODAY = "2024-03-15"


async def create(client: AsyncClient, body: dict) -> dict:
    response = await client.post("/api/movements", json=body, params={"as_of": TODAY})
    assert response.status_code == 201
    return response.json()


# =============================================================================
# POST /api/movements
# =============================================================================

class TestCreateMovement:
    """Tests for POST /api/movements."""

    @pytest.mark.asyncio
    async def test_create_open_expense(self, client: AsyncClient, expense_body: dict):
        data = await create(client, expense_body)

        assert data["status"] == "open"
        assert data["display_status"] == "overdue"
        assert data["net_cents"] == 25000
        assert data["effective_date"] == "2024-03-10"
        assert data["origin"] == "manual"
        assert data["version"] == 1

    @pytest.mark.asyncio
    async def test_create_settled_defaults_paid_date_to_due_date(
        self,
        client: AsyncClient,
        expense_body: dict,
    ):
        data = await create(client, {**expense_body, "settled": True})

        assert data["status"] == "settled"
        assert data["paid_date"] == "2024-03-10"

    @pytest.mark.asyncio
    async def test_net_includes_fees_and_interest(self, client: AsyncClient, expense_body: dict):
        data = await create(client, {**expense_body, "fees_cents": 500, "interest_cents": 200})

        assert data["net_cents"] == 25000 - 500 + 200

    @pytest.mark.asyncio
    async def test_paid_date_requires_settled(self, client: AsyncClient, expense_body: dict):
        response = await client.post("/api/movements", json={**expense_body, "paid_date": "2024-03-11"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    @pytest.mark.asyncio
    async def test_transfer_requires_destination(self, client: AsyncClient, expense_body: dict):
        response = await client.post("/api/movements", json={**expense_body, "kind": "transfer"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_transfer_to_same_account_rejected(self, client: AsyncClient, expense_body: dict):
        body = {
            **expense_body,
            "kind": "transfer",
            "destination_account_id": expense_body["account_id"],
        }

        response = await client.post("/api/movements", json=body)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_account(self, client: AsyncClient, expense_body: dict):
        response = await client.post("/api/movements", json={**expense_body, "account_id": str(uuid4())})

        assert response.status_code == 404
        assert response.json()["error"] == "ACCOUNT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_negative_amount_is_a_validation_error(self, client: AsyncClient, expense_body: dict):
        response = await client.post("/api/movements", json={**expense_body, "gross_cents": -1})

        assert response.status_code == 422


# =============================================================================
# Transitions
# =============================================================================

class TestTransitions:
    """Tests for settle, revert and cancel."""

    @pytest.mark.asyncio
    async def test_settle_then_revert(self, client: AsyncClient, expense_body: dict):
        entry = await create(client, expense_body)
        entry_id = entry["entry_id"]

        settled = await client.post(
            f"/api/movements/{entry_id}/settle",
            json={"paid_date": "2024-03-12", "fees_cents": 100},
        )
        assert settled.status_code == 200
        assert settled.json()["status"] == "settled"
        assert settled.json()["paid_date"] == "2024-03-12"
        assert settled.json()["net_cents"] == 24900

        reverted = await client.post(f"/api/movements/{entry_id}/revert")
        assert reverted.status_code == 200
        [data] = reverted.json()["reverted"]
        assert data["status"] == "open"
        assert data["paid_date"] is None

    @pytest.mark.asyncio
    async def test_settle_twice_conflicts(self, client: AsyncClient, expense_body: dict):
        entry = await create(client, expense_body)
        url = f"/api/movements/{entry['entry_id']}/settle"

        await client.post(url, json={"paid_date": "2024-03-12"})
        response = await client.post(url, json={"paid_date": "2024-03-13"})

        assert response.status_code == 409
        assert response.json()["error"] == "INVALID_TRANSITION"

    @pytest.mark.asyncio
    async def test_revert_open_entry_conflicts(self, client: AsyncClient, expense_body: dict):
        entry = await create(client, expense_body)

        response = await client.post(f"/api/movements/{entry['entry_id']}/revert")

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_cancelled_entry_cannot_be_settled(self, client: AsyncClient, expense_body: dict):
        entry = await create(client, expense_body)
        entry_id = entry["entry_id"]

        cancelled = await client.post(f"/api/movements/{entry_id}/cancel")
        response = await client.post(f"/api/movements/{entry_id}/settle", json={"paid_date": TODAY})

        assert cancelled.json()["status"] == "cancelled"
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_product_value_rejected_on_manual_entry(
        self,
        client: AsyncClient,
        expense_body: dict,
    ):
        entry = await create(client, expense_body)

        response = await client.post(
            f"/api/movements/{entry['entry_id']}/settle",
            json={"paid_date": TODAY, "product_value_cents": 100},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_entry(self, client: AsyncClient):
        response = await client.post(f"/api/movements/{uuid4()}/settle", json={"paid_date": TODAY})

        assert response.status_code == 404
        assert response.json()["error"] == "ENTRY_NOT_FOUND"


# =============================================================================
# Edit / Delete
# =============================================================================

class TestEditAndDelete:
    """Tests for PUT and DELETE /api/movements/{id}."""

    @pytest.mark.asyncio
    async def test_update_bumps_version(self, client: AsyncClient, expense_body: dict):
        entry = await create(client, expense_body)

        response = await client.put(
            f"/api/movements/{entry['entry_id']}",
            json={**expense_body, "gross_cents": 26000, "version": 1},
        )

        assert response.status_code == 200
        assert response.json()["gross_cents"] == 26000
        assert response.json()["version"] == 2

    @pytest.mark.asyncio
    async def test_stale_version_conflicts(self, client: AsyncClient, expense_body: dict):
        entry = await create(client, expense_body)
        url = f"/api/movements/{entry['entry_id']}"

        await client.put(url, json={**expense_body, "gross_cents": 26000, "version": 1})
        response = await client.put(url, json={**expense_body, "gross_cents": 27000, "version": 1})

        assert response.status_code == 409
        assert response.json()["error"] == "CONCURRENT_MODIFICATION"
        assert (await client.get(url)).json()["gross_cents"] == 26000

    @pytest.mark.asyncio
    async def test_settled_entry_cannot_be_edited(self, client: AsyncClient, expense_body: dict):
        entry = await create(client, {**expense_body, "settled": True})

        response = await client.put(f"/api/movements/{entry['entry_id']}", json=expense_body)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, expense_body: dict):
        entry = await create(client, expense_body)
        url = f"/api/movements/{entry['entry_id']}"

        response = await client.delete(url)

        assert response.status_code == 204
        assert (await client.get(url)).status_code == 404


# =============================================================================
# Bulk Actions
# =============================================================================

class TestBulkActions:
    """Tests for POST /api/movements/bulk."""

    @pytest.mark.asyncio
    async def test_bulk_settle_skips_non_open(self, client: AsyncClient, expense_body: dict):
        first = await create(client, expense_body)
        second = await create(client, {**expense_body, "description": "Power bill"})
        done = await create(client, {**expense_body, "settled": True})
        missing = str(uuid4())

        response = await client.post("/api/movements/bulk", json={
            "action": "settle",
            "ids": [first["entry_id"], second["entry_id"], done["entry_id"], missing],
            "paid_date": "2024-03-14",
        })

        assert response.status_code == 200
        data = response.json()
        assert set(data["affected"]) == {first["entry_id"], second["entry_id"]}
        assert set(data["skipped"]) == {done["entry_id"], missing}

        settled = (await client.get(f"/api/movements/{first['entry_id']}")).json()
        assert settled["paid_date"] == "2024-03-14"

    @pytest.mark.asyncio
    async def test_bulk_delete(self, client: AsyncClient, expense_body: dict):
        first = await create(client, expense_body)
        second = await create(client, expense_body)

        response = await client.post("/api/movements/bulk", json={
            "action": "delete",
            "ids": [first["entry_id"], second["entry_id"]],
        })

        assert len(response.json()["affected"]) == 2
        assert (await client.get("/api/movements")).json()["total"] == 0

    @pytest.mark.asyncio
    async def test_bulk_requires_ids(self, client: AsyncClient):
        response = await client.post("/api/movements/bulk", json={"action": "settle", "ids": []})

        assert response.status_code == 422


# =============================================================================
# GET /api/movements
# =============================================================================

class TestListMovements:
    """Tests for filtering, pagination and totals."""

    @pytest.mark.asyncio
    async def test_filters_and_totals(
        self,
        client: AsyncClient,
        bank_account: dict,
        expense_body: dict,
    ):
        await create(client, expense_body)
        await create(client, {
            **expense_body,
            "description": "Customer payment",
            "kind": "income",
            "gross_cents": 40000,
            "settled": True,
            "paid_date": "2024-03-05",
        })
        await create(client, {**expense_body, "description": "Internet", "due_date": TODAY, "gross_cents": 3000})

        response = await client.get("/api/movements", params={"as_of": TODAY, "with_totals": True})

        data = response.json()
        assert data["total"] == 3
        assert [e["description"] for e in data["items"]] == ["Internet", "Office rent", "Customer payment"]
        assert data["totals"]["inflow_cents"] == 40000
        assert data["totals"]["pending_today_cents"] == -3000
        assert data["totals"]["projected_balance_cents"] == 40000 - 25000 - 3000

        overdue = await client.get("/api/movements", params={"as_of": TODAY, "status": "overdue"})
        assert [e["description"] for e in overdue.json()["items"]] == ["Office rent"]

        search = await client.get("/api/movements", params={"q": "internet"})
        assert search.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_pagination(self, client: AsyncClient, expense_body: dict):
        for day in range(1, 6):
            await create(client, {**expense_body, "due_date": f"2024-03-0{day}"})

        response = await client.get("/api/movements", params={"page": 2, "page_size": 2})

        data = response.json()
        assert data["total"] == 5
        assert data["page"] == 2
        assert [e["due_date"] for e in data["items"]] == ["2024-03-03", "2024-03-02"]

    @pytest.mark.asyncio
    async def test_page_size_limit(self, client: AsyncClient):
        response = await client.get("/api/movements", params={"page_size": 501})

        assert response.status_code == 422

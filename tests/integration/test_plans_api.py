"""
Integration tests for the Plans API.

These tests verify:
1. POST /api/plans/preview - rounded split and due dates, nothing persisted
2. POST /api/plans - materialized entries with shared group and labels
3. GET /api/plans/{group_id}
"""

import pytest
from httpx import AsyncClient
from uuid import uuid4


@pytest.fixture
def plan_body() -> dict:
    return {
        "kind": "installment",
        "total_gross_cents": 100000,
        "total_fees_cents": 3000,
        "count": 3,
        "frequency": "monthly",
        "first_due_date": "2024-01-31",
    }


# =============================================================================
# POST /api/plans/preview
# =============================================================================

class TestPlanPreview:
    """Tests for the plan preview."""

    @pytest.mark.asyncio
    async def test_installment_split(self, client: AsyncClient, plan_body: dict):
        response = await client.post("/api/plans/preview", json=plan_body)

        assert response.status_code == 200
        data = response.json()
        assert [i["gross_cents"] for i in data["items"]] == [33334, 33333, 33333]
        assert [i["fees_cents"] for i in data["items"]] == [1000, 1000, 1000]
        assert [i["due_date"] for i in data["items"]] == ["2024-01-31", "2024-02-29", "2024-03-31"]
        assert data["total_gross_cents"] == 100000
        assert data["total_net_cents"] == 97000

    @pytest.mark.asyncio
    async def test_preview_persists_nothing(self, client: AsyncClient, plan_body: dict):
        await client.post("/api/plans/preview", json=plan_body)

        assert (await client.get("/api/movements")).json()["total"] == 0

    @pytest.mark.asyncio
    async def test_recurrence_repeats_amount(self, client: AsyncClient):
        response = await client.post("/api/plans/preview", json={
            "kind": "recurrence",
            "total_gross_cents": 5000,
            "count": 3,
            "frequency": "weekly",
            "first_due_date": "2024-01-01",
        })

        items = response.json()["items"]
        assert [i["gross_cents"] for i in items] == [5000, 5000, 5000]
        assert [i["due_date"] for i in items] == ["2024-01-01", "2024-01-08", "2024-01-15"]

    @pytest.mark.asyncio
    async def test_every_n_days(self, client: AsyncClient, plan_body: dict):
        body = {**plan_body, "frequency": "every_n_days", "n_days": 10, "first_due_date": "2024-01-01"}

        response = await client.post("/api/plans/preview", json=body)

        assert [i["due_date"] for i in response.json()["items"]] == [
            "2024-01-01",
            "2024-01-11",
            "2024-01-21",
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "override",
        [
            {"count": 1},
            {"total_fees_cents": -1},
            {"frequency": "yearly"},
            {"frequency": "every_n_days"},
        ],
    )
    async def test_invalid_parameters(self, client: AsyncClient, plan_body: dict, override: dict):
        response = await client.post("/api/plans/preview", json={**plan_body, **override})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"


# =============================================================================
# POST /api/plans and GET /api/plans/{group_id}
# =============================================================================

class TestPlanConfirm:
    """Tests for plan confirmation."""

    @pytest.mark.asyncio
    async def test_confirm_materializes_entries(
        self,
        client: AsyncClient,
        bank_account: dict,
        plan_body: dict,
    ):
        response = await client.post("/api/plans", json={
            **plan_body,
            "description": "Laptop",
            "entry_kind": "expense",
            "account_id": bank_account["account_id"],
        })

        assert response.status_code == 201
        data = response.json()
        entries = data["entries"]
        assert [e["description"] for e in entries] == ["Laptop (1/3)", "Laptop (2/3)", "Laptop (3/3)"]
        assert {e["group_id"] for e in entries} == {data["group_id"]}
        assert [e["installment_number"] for e in entries] == [1, 2, 3]
        assert all(e["installment_count"] == 3 for e in entries)
        assert all(e["status"] == "open" for e in entries)
        assert data["total_gross_cents"] == 100000

        group = await client.get(f"/api/plans/{data['group_id']}")
        assert group.status_code == 200
        assert len(group.json()["entries"]) == 3

        listed = await client.get("/api/movements", params={"group_id": data["group_id"]})
        assert listed.json()["total"] == 3

    @pytest.mark.asyncio
    async def test_confirm_unknown_account(self, client: AsyncClient, plan_body: dict):
        response = await client.post("/api/plans", json={
            **plan_body,
            "description": "Laptop",
            "entry_kind": "expense",
            "account_id": str(uuid4()),
        })

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_plan_writes_nothing(
        self,
        client: AsyncClient,
        bank_account: dict,
        plan_body: dict,
    ):
        response = await client.post("/api/plans", json={
            **plan_body,
            "count": 0,
            "description": "Laptop",
            "entry_kind": "expense",
            "account_id": bank_account["account_id"],
        })

        assert response.status_code == 400
        assert (await client.get("/api/movements")).json()["total"] == 0

    @pytest.mark.asyncio
    async def test_unknown_group(self, client: AsyncClient):
        response = await client.get(f"/api/plans/{uuid4()}")

        assert response.status_code == 404

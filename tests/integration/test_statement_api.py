"""
Integration tests for account statements and their CSV export.

Fixture ledger on the bank account (initial 1,000.00), as of 2024-03-15:
- 2024-02-20 settled expense 100.00 (before the period)
- 2024-03-02 settled income 500.00
- 2024-03-10 open expense 250.00 (overdue)
- 2024-03-20 open transfer 50.00 to cash
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

TODAY = "2024-03-15"

MARCH = {"date_from": "2024-03-01", "date_to": "2024-03-31", "as_of": TODAY}


@pytest_asyncio.fixture
async def ledger(client: AsyncClient, bank_account: dict, cash_account: dict, expense_body: dict):
    bank_id = bank_account["account_id"]
    bodies = [
        {
            "description": "February supplies",
            "kind": "expense",
            "account_id": bank_id,
            "due_date": "2024-02-20",
            "gross_cents": 10000,
            "settled": True,
        },
        {
            "description": "Customer payment",
            "kind": "income",
            "account_id": bank_id,
            "due_date": "2024-03-01",
            "gross_cents": 50000,
            "settled": True,
            "paid_date": "2024-03-02",
        },
        expense_body,
        {
            "description": "Move to cash",
            "kind": "transfer",
            "account_id": bank_id,
            "destination_account_id": cash_account["account_id"],
            "due_date": "2024-03-20",
            "gross_cents": 5000,
        },
    ]
    for body in bodies:
        response = await client.post("/api/movements", json=body)
        assert response.status_code == 201
    return {"bank_id": bank_id, "cash_id": cash_account["account_id"]}


# =============================================================================
# GET /api/accounts/{id}/statement
# =============================================================================

class TestStatement:
    """Tests for the statement endpoint."""

    @pytest.mark.asyncio
    async def test_statement_balances(self, client: AsyncClient, ledger: dict):
        response = await client.get(f"/api/accounts/{ledger['bank_id']}/statement", params=MARCH)

        assert response.status_code == 200
        data = response.json()
        assert data["opening_balance_cents"] == 90000
        assert data["current_balance_cents"] == 140000
        assert data["inflow_cents"] == 50000
        assert data["outflow_cents"] == 0
        assert data["net_cents"] == 50000
        assert data["projected_balance_cents"] == 110000

    @pytest.mark.asyncio
    async def test_rows_most_recent_first_with_running_balance(
        self,
        client: AsyncClient,
        ledger: dict,
    ):
        response = await client.get(f"/api/accounts/{ledger['bank_id']}/statement", params=MARCH)

        rows = response.json()["rows"]
        assert [r["entry"]["description"] for r in rows] == [
            "Move to cash",
            "Office rent",
            "Customer payment",
        ]
        assert [r["running_balance_cents"] for r in rows] == [110000, 115000, 140000]
        assert [r["value_cents"] for r in rows] == [-5000, -25000, 50000]
        assert rows[1]["display_status"] == "overdue"

    @pytest.mark.asyncio
    async def test_default_range_is_reference_month(self, client: AsyncClient, ledger: dict):
        response = await client.get(
            f"/api/accounts/{ledger['bank_id']}/statement",
            params={"as_of": TODAY},
        )

        data = response.json()
        assert data["range_from"] == "2024-03-01"
        assert data["range_to"] == "2024-03-31"

    @pytest.mark.asyncio
    async def test_filters_do_not_change_balances(self, client: AsyncClient, ledger: dict):
        params = {**MARCH, "status": "overdue"}

        response = await client.get(f"/api/accounts/{ledger['bank_id']}/statement", params=params)

        data = response.json()
        assert [r["entry"]["description"] for r in data["rows"]] == ["Office rent"]
        assert data["rows"][0]["running_balance_cents"] == 115000
        assert data["projected_balance_cents"] == 110000

    @pytest.mark.asyncio
    async def test_transfer_is_inflow_at_destination(self, client: AsyncClient, ledger: dict):
        response = await client.get(f"/api/accounts/{ledger['cash_id']}/statement", params=MARCH)

        data = response.json()
        assert data["opening_balance_cents"] == 0
        assert data["projected_balance_cents"] == 5000
        assert data["rows"][0]["value_cents"] == 5000

    @pytest.mark.asyncio
    async def test_cancelled_entries_are_not_listed(self, client: AsyncClient, ledger: dict):
        rows = (
            await client.get(f"/api/accounts/{ledger['bank_id']}/statement", params=MARCH)
        ).json()["rows"]
        rent_id = rows[1]["entry"]["entry_id"]

        await client.post(f"/api/movements/{rent_id}/cancel")
        data = (
            await client.get(f"/api/accounts/{ledger['bank_id']}/statement", params=MARCH)
        ).json()

        assert "Office rent" not in [r["entry"]["description"] for r in data["rows"]]
        assert data["projected_balance_cents"] == 135000

    @pytest.mark.asyncio
    async def test_inverted_range(self, client: AsyncClient, bank_account: dict):
        response = await client.get(
            f"/api/accounts/{bank_account['account_id']}/statement",
            params={"date_from": "2024-03-31", "date_to": "2024-03-01"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_RANGE"


# =============================================================================
# GET /api/accounts/{id}/statement.csv
# =============================================================================

class TestStatementExport:
    """Tests for the CSV export."""

    @pytest.mark.asyncio
    async def test_csv_export(self, client: AsyncClient, ledger: dict):
        response = await client.get(
            f"/api/accounts/{ledger['bank_id']}/statement.csv",
            params=MARCH,
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]

        lines = response.text.split("\n")
        assert lines[0] == '"date","description","kind","status","value","running_balance"'
        assert lines[1] == '"2024-03-20","Move to cash","transfer","open","-50.00","1100.00"'
        assert len([line for line in lines if line]) == 4

    @pytest.mark.asyncio
    async def test_empty_period_exports_nothing(self, client: AsyncClient, bank_account: dict):
        response = await client.get(
            f"/api/accounts/{bank_account['account_id']}/statement.csv",
            params=MARCH,
        )

        assert response.status_code == 200
        assert response.text == ""

"""
Expense endpoints: CRUD, period filters, overview and CSV export.
"""

from datetime import datetime, timedelta, timezone

import pytest


async def _expense(client, **overrides):
    body = {
        "item": "Salary",
        "amount_spent": 200,
        "department": "Sales",
        "mode_of_payment": "Cash",
        "account": "",
    }
    body.update(overrides)
    return await client.post("/api/v1/expenses", json=body)


async def _deposit(client, amount, mode="Cash", **extra):
    body = {"amount_paid": amount, "mode_of_payment": mode, "purpose": "Sales"}
    body.update(extra)
    return await client.post("/api/v1/finance", json=body)


@pytest.mark.asyncio
async def test_create_expense_recomputes_balance_forward(client):
    await _deposit(client, 1000)
    await _deposit(client, 500, "Bank", bank_name="Stanbic")

    response = await _expense(client)

    payload = response.json()
    assert payload["success"] is True
    assert payload["data"]["item"] == "Salary"
    assert payload["data"]["account"] is None
    summary = payload["meta"]["summary"]
    assert summary["expenses"]["cash"] == 200
    assert summary["balance_forward"]["cash"] == 800
    assert summary["balance_forward"]["bank"] == 500
    assert payload["meta"]["overview"] == {
        "total_income": 1500,
        "total_expenses": 200,
        "balance_forward": 1300,
    }


@pytest.mark.asyncio
async def test_other_category_uses_custom_item(client):
    response = await _expense(client, item="Other", custom_item="Generator fuel")

    assert response.json()["data"]["item"] == "Generator fuel"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"item": ""},
        {"item": "Other", "custom_item": ""},
        {"amount_spent": 0},
        {"department": " "},
        {"mode_of_payment": "Cheque"},
    ],
)
async def test_invalid_expense_is_rejected(client, overrides):
    response = await _expense(client, **overrides)

    assert response.status_code == 422
    assert response.json()["success"] is False
    listing = await client.get("/api/v1/expenses")
    assert listing.json()["data"] == []


@pytest.mark.asyncio
async def test_expense_without_mode_is_outside_every_channel(client):
    await _deposit(client, 1000)

    response = await _expense(client, mode_of_payment="", amount_spent=400)

    summary = response.json()["meta"]["summary"]
    assert response.json()["data"]["mode_of_payment"] is None
    assert summary["expenses"] == {"cash": 0, "bank": 0, "mobile_money": 0}
    assert summary["balance_forward"]["cash"] == 1000
    assert response.json()["meta"]["overview"]["total_expenses"] == 400


@pytest.mark.asyncio
async def test_update_expense_moves_channel(client):
    await _deposit(client, 1000)
    await _deposit(client, 300, "Mobile Money", mode_of_mobilemoney="MTN")
    created = await _expense(client, amount_spent=250)
    expense_id = created.json()["data"]["id"]

    response = await client.put(
        f"/api/v1/expenses/{expense_id}",
        json={
            "item": "Salary",
            "amount_spent": 100,
            "department": "Sales",
            "mode_of_payment": "Mobile Money",
            "account": "MTN",
        },
    )

    payload = response.json()
    assert payload["data"]["id"] == expense_id
    assert payload["data"]["account"] == "MTN"
    assert payload["meta"]["summary"]["balance_forward"]["cash"] == 1000
    assert payload["meta"]["summary"]["balance_forward"]["mobile_money"] == 200


@pytest.mark.asyncio
async def test_update_missing_expense(client):
    response = await client.put(
        "/api/v1/expenses/42",
        json={"item": "Wage", "amount_spent": 5, "department": "Plant"},
    )

    assert response.json()["success"] is False
    assert "not found" in response.json()["error"]


@pytest.mark.asyncio
async def test_delete_expense_restores_balance(client):
    await _deposit(client, 1000)
    created = await _expense(client, amount_spent=300)

    response = await client.delete(f"/api/v1/expenses/{created.json()['data']['id']}")

    assert response.json()["success"] is True
    assert response.json()["meta"]["summary"]["balance_forward"]["cash"] == 1000
    assert response.json()["meta"]["overview"]["total_expenses"] == 0


@pytest.mark.asyncio
async def test_delete_missing_expense(client):
    response = await client.delete("/api/v1/expenses/7")

    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_period_filter(client):
    now = datetime.now(timezone.utc)
    await _expense(client, item="Wage", date=now.isoformat())
    await _expense(client, item="Stock", date=(now - timedelta(days=800)).isoformat())

    yearly = await client.get("/api/v1/expenses", params={"period": "yearly"})
    everything = await client.get("/api/v1/expenses")

    assert [e["item"] for e in yearly.json()["data"]] == ["Wage"]
    assert [e["item"] for e in everything.json()["data"]] == ["Wage", "Stock"]
    assert everything.json()["meta"] == {"period": "all", "total": 2}


@pytest.mark.asyncio
async def test_invalid_period(client):
    response = await client.get("/api/v1/expenses", params={"period": "weekly"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_overview(client):
    await _deposit(client, 700)
    await _deposit(client, 300, "Bank", bank_name="Absa")
    await _expense(client, amount_spent=150)

    response = await client.get("/api/v1/expenses/overview")

    assert response.json()["data"] == {
        "total_income": 1000,
        "total_expenses": 150,
        "balance_forward": 850,
    }


@pytest.mark.asyncio
async def test_export_csv(client):
    await _expense(
        client,
        item="Repairs",
        amount_spent=1200,
        department="Fleet",
        mode_of_payment="Bank",
        account="Stanbic",
        date="2024-03-05T10:00:00+00:00",
    )

    response = await client.get("/api/v1/expenses/export.csv")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "expenses.csv" in response.headers["content-disposition"]
    assert response.text == (
        "Item,Amount Spent,Department,Mode of Payment,Account,Date\n"
        "Repairs,1200,Fleet,Bank,Stanbic,3/5/2024"
    )

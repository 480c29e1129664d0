"""
Tests for the general costs router.
"""
from datetime import date
from decimal import Decimal

from fastapi.testclient import TestClient


def _add_cost(client, headers, description, amount, category, cost_date=None):
    payload = {"description": description, "amount": amount, "category": category}
    if cost_date:
        payload["date"] = cost_date
    return client.post("/api/general-costs", json=payload, headers=headers)


class TestGeneralCosts:

    def test_create_defaults_to_today(self, client: TestClient, auth_headers: dict):
        response = _add_cost(client, auth_headers, "Conta de luz", "120.40", "Utilidades")

        assert response.status_code == 201
        assert response.json()["date"] == date.today().isoformat()
        assert Decimal(response.json()["amount"]) == Decimal("120.40")

    def test_list_with_totals(self, client: TestClient, auth_headers: dict):
        _add_cost(client, auth_headers, "Aluguel do salão", "100", "Aluguel", "2026-05-01")
        _add_cost(client, auth_headers, "Detergente", "30", "Limpeza", "2026-05-10")
        _add_cost(client, auth_headers, "Vassoura", "20", "Limpeza", "2026-05-03")

        data = client.get("/api/general-costs", headers=auth_headers).json()

        assert [item["description"] for item in data["items"]] == ["Detergente", "Vassoura", "Aluguel do salão"]
        assert Decimal(data["total"]) == Decimal("150")
        by_category = {group["category"]: group for group in data["by_category"]}
        assert Decimal(by_category["Limpeza"]["total"]) == Decimal("50")
        assert by_category["Limpeza"]["count"] == 2

    def test_negative_amount_rejected(self, client: TestClient, auth_headers: dict):
        response = _add_cost(client, auth_headers, "Refund", "-5", "Outros")

        assert response.status_code == 422

    def test_delete(self, client: TestClient, auth_headers: dict):
        cost = _add_cost(client, auth_headers, "Aluguel", "100", "Aluguel").json()

        response = client.delete(f"/api/general-costs/{cost['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get("/api/general-costs", headers=auth_headers).json()["items"] == []

    def test_other_user_cannot_delete(self, client: TestClient, auth_headers: dict, other_auth_headers: dict):
        cost = _add_cost(client, auth_headers, "Aluguel", "100", "Aluguel").json()

        response = client.delete(f"/api/general-costs/{cost['id']}", headers=other_auth_headers)

        assert response.status_code == 404

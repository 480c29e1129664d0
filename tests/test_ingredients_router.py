"""
Tests for the ingredient catalog router.
"""
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from clubledger.models.ingredient import Ingredient
from clubledger.models.recipe import RecipeIngredient


class TestIngredientCrud:

    def test_create_and_list(self, client: TestClient, auth_headers: dict, make_ingredient):
        make_ingredient("Sugar", "3.50")
        make_ingredient("Flour", "2")

        response = client.get("/api/ingredients", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert [item["name"] for item in data["items"]] == ["Flour", "Sugar"]
        assert Decimal(data["items"][1]["unit_cost"]) == Decimal("3.50")

    def test_negative_cost_rejected(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/api/ingredients",
            json={"name": "Salt", "unit_of_measure": "kg", "unit_cost": "-1"},
            headers=auth_headers,
        )

        assert response.status_code == 422

    def test_update(self, client: TestClient, auth_headers: dict, make_ingredient):
        flour = make_ingredient("Flour", "2")

        response = client.put(
            f"/api/ingredients/{flour['id']}",
            json={"unit_cost": "2.75"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert Decimal(response.json()["unit_cost"]) == Decimal("2.75")
        assert response.json()["name"] == "Flour"

    def test_delete_unused(self, client: TestClient, auth_headers: dict, make_ingredient, db: Session):
        flour = make_ingredient("Flour", "2")

        response = client.delete(f"/api/ingredients/{flour['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert db.execute(select(func.count()).select_from(Ingredient)).scalar() == 0

    def test_missing_ingredient(self, client: TestClient, auth_headers: dict):
        response = client.delete(
            "/api/ingredients/00000000-0000-0000-0000-000000000000",
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["title"] == "Not found"

    def test_requires_auth(self, client: TestClient):
        assert client.get("/api/ingredients").status_code == 401


class TestIngredientInUse:

    def test_delete_referenced_ingredient_is_blocked(
        self, client: TestClient, auth_headers: dict, make_ingredient, db: Session
    ):
        flour = make_ingredient("Flour", "2")
        client.post(
            "/api/recipes",
            json={
                "name": "Bolo de Cenoura",
                "yield_quantity": 40,
                "ingredients": [{"ingredient_id": flour["id"], "total_quantity": "80"}],
            },
            headers=auth_headers,
        )

        response = client.delete(f"/api/ingredients/{flour['id']}", headers=auth_headers)

        assert response.status_code == 409
        assert "Bolo de Cenoura" in response.json()["detail"]
        assert db.execute(select(func.count()).select_from(RecipeIngredient)).scalar() == 1

    def test_cost_change_refreshes_recipe_cost(
        self, client: TestClient, auth_headers: dict, make_ingredient
    ):
        flour = make_ingredient("Flour", "2")
        client.post(
            "/api/recipes",
            json={
                "name": "Bolo de Cenoura",
                "yield_quantity": 40,
                "ingredients": [{"ingredient_id": flour["id"], "total_quantity": "80"}],
            },
            headers=auth_headers,
        )

        client.put(f"/api/ingredients/{flour['id']}", json={"unit_cost": "3"}, headers=auth_headers)

        recipes = client.get("/api/recipes", headers=auth_headers).json()
        assert Decimal(recipes[0]["calculated_cost"]) == Decimal("240")

"""
Tests for the recipe router: create, load for editing, update, preview and delete.
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubledger.models.ingredient import Ingredient
from clubledger.models.recipe import Recipe, RecipeIngredient


@pytest.fixture
def flour(make_ingredient) -> dict:
    return make_ingredient("Flour", "2")


@pytest.fixture
def sugar(make_ingredient) -> dict:
    return make_ingredient("Sugar", "3.50")


@pytest.fixture
def carrot_cake(client: TestClient, auth_headers: dict, flour: dict) -> dict:
    response = client.post(
        "/api/recipes",
        json={
            "name": "Bolo de Cenoura",
            "description": "40 slices",
            "yield_quantity": 40,
            "ingredients": [{"ingredient_id": flour["id"], "total_quantity": "80"}],
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


def _lines_by_ingredient(recipe: dict) -> dict:
    return {line["ingredient_id"]: line for line in recipe["ingredients"]}


def _link_count(db: Session) -> int:
    return db.execute(select(func.count()).select_from(RecipeIngredient)).scalar()


class TestCreateRecipe:

    def test_quantities_stored_per_unit(self, carrot_cake: dict, flour: dict, db: Session):
        assert Decimal(carrot_cake["batch_cost"]) == Decimal("160")
        assert Decimal(carrot_cake["unit_cost"]) == Decimal("4")
        assert Decimal(carrot_cake["calculated_cost"]) == Decimal("160")

        line = carrot_cake["ingredients"][0]
        assert Decimal(line["total_quantity"]) == Decimal("80")
        assert Decimal(line["unit_quantity"]) == Decimal("2")
        assert Decimal(line["line_cost"]) == Decimal("160")

        stored = db.execute(select(RecipeIngredient)).scalar_one()
        assert Decimal(stored.quantity_used) == Decimal("2")

    def test_load_returns_totals(self, client: TestClient, auth_headers: dict, carrot_cake: dict):
        response = client.get(f"/api/recipes/{carrot_cake['id']}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Bolo de Cenoura"
        assert data["yield_quantity"] == 40
        assert Decimal(data["ingredients"][0]["total_quantity"]) == Decimal("80")
        assert data["ingredients"][0]["id"] is not None

    def test_unparseable_quantity_counts_as_zero(
        self, client: TestClient, auth_headers: dict, flour: dict
    ):
        response = client.post(
            "/api/recipes",
            json={
                "name": "Empty",
                "yield_quantity": 3,
                "ingredients": [{"ingredient_id": flour["id"], "total_quantity": "lots"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert Decimal(response.json()["batch_cost"]) == Decimal(0)

    def test_zero_yield_rejected(self, client: TestClient, auth_headers: dict, flour: dict, db: Session):
        response = client.post(
            "/api/recipes",
            json={"name": "Bad", "yield_quantity": 0, "ingredients": []},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert db.execute(select(func.count()).select_from(Recipe)).scalar() == 0

    def test_duplicate_ingredient_rejected(
        self, client: TestClient, auth_headers: dict, flour: dict, db: Session
    ):
        response = client.post(
            "/api/recipes",
            json={
                "name": "Twice",
                "yield_quantity": 2,
                "ingredients": [
                    {"ingredient_id": flour["id"], "total_quantity": "1"},
                    {"ingredient_id": flour["id"], "total_quantity": "2"},
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["title"] == "Duplicate ingredient"
        assert db.execute(select(func.count()).select_from(Recipe)).scalar() == 0

    def test_list_recipes(self, client: TestClient, auth_headers: dict, carrot_cake: dict):
        response = client.get("/api/recipes", headers=auth_headers)

        assert response.status_code == 200
        assert [recipe["name"] for recipe in response.json()] == ["Bolo de Cenoura"]


class TestUpdateRecipe:

    def test_update_applies_diff(
        self, client: TestClient, auth_headers: dict, carrot_cake: dict, flour: dict, sugar: dict, db: Session
    ):
        flour_line_id = carrot_cake["ingredients"][0]["id"]

        response = client.put(
            f"/api/recipes/{carrot_cake['id']}",
            json={
                "name": "Bolo de Cenoura",
                "yield_quantity": 20,
                "ingredients": [
                    {"ingredient_id": flour["id"], "total_quantity": "40"},
                    {"ingredient_id": sugar["id"], "total_quantity": "4"},
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        lines = _lines_by_ingredient(response.json())
        assert lines[flour["id"]]["id"] == flour_line_id
        assert Decimal(lines[flour["id"]]["total_quantity"]) == Decimal("40")
        assert Decimal(lines[sugar["id"]]["unit_quantity"]) == Decimal("0.2")
        assert Decimal(response.json()["batch_cost"]) == Decimal("94")
        assert _link_count(db) == 2

    def test_update_removes_missing_ingredients(
        self, client: TestClient, auth_headers: dict, carrot_cake: dict, sugar: dict, db: Session
    ):
        response = client.put(
            f"/api/recipes/{carrot_cake['id']}",
            json={
                "name": "Sugar Cake",
                "yield_quantity": 40,
                "ingredients": [{"ingredient_id": sugar["id"], "total_quantity": "8"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert list(_lines_by_ingredient(response.json())) == [sugar["id"]]
        assert _link_count(db) == 1
        # The catalog entry itself is untouched
        assert db.execute(select(func.count()).select_from(Ingredient)).scalar() == 2

    def test_unknown_ingredient_leaves_recipe_intact(
        self, client: TestClient, auth_headers: dict, carrot_cake: dict
    ):
        response = client.put(
            f"/api/recipes/{carrot_cake['id']}",
            json={
                "name": "Renamed",
                "yield_quantity": 10,
                "ingredients": [
                    {"ingredient_id": "00000000-0000-0000-0000-000000000000", "total_quantity": "1"},
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 404
        reloaded = client.get(f"/api/recipes/{carrot_cake['id']}", headers=auth_headers).json()
        assert reloaded["name"] == "Bolo de Cenoura"
        assert reloaded["yield_quantity"] == 40
        assert Decimal(reloaded["ingredients"][0]["total_quantity"]) == Decimal("80")

    def test_failed_commit_rolls_back_whole_save(
        self, client: TestClient, auth_headers: dict, carrot_cake: dict, sugar: dict, db: Session, monkeypatch
    ):
        def failing_commit():
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(db, "commit", failing_commit)
        response = client.put(
            f"/api/recipes/{carrot_cake['id']}",
            json={
                "name": "Renamed",
                "yield_quantity": 10,
                "ingredients": [{"ingredient_id": sugar["id"], "total_quantity": "5"}],
            },
            headers=auth_headers,
        )
        monkeypatch.undo()

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "store_error"
        assert "connection lost" in body["message"]

        reloaded = client.get(f"/api/recipes/{carrot_cake['id']}", headers=auth_headers).json()
        assert reloaded["name"] == "Bolo de Cenoura"
        assert reloaded["yield_quantity"] == 40
        assert list(_lines_by_ingredient(reloaded)) == [carrot_cake["ingredients"][0]["ingredient_id"]]
        assert _link_count(db) == 1


class TestPreview:

    def test_preview_computes_without_saving(
        self, client: TestClient, auth_headers: dict, flour: dict, sugar: dict, db: Session
    ):
        response = client.post(
            "/api/recipes/preview",
            json={
                "yield_quantity": 4,
                "ingredients": [
                    {"ingredient_id": flour["id"], "total_quantity": "1,5"},
                    {"ingredient_id": sugar["id"], "total_quantity": "-3"},
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["batch_cost"]) == Decimal("3")
        assert Decimal(data["unit_cost"]) == Decimal("0.75")
        assert db.execute(select(func.count()).select_from(Recipe)).scalar() == 0


class TestDeleteRecipe:

    def test_delete_cascades_to_ingredient_links(
        self, client: TestClient, auth_headers: dict, carrot_cake: dict, db: Session
    ):
        response = client.delete(f"/api/recipes/{carrot_cake['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert _link_count(db) == 0
        assert db.execute(select(func.count()).select_from(Ingredient)).scalar() == 1
        assert client.get(f"/api/recipes/{carrot_cake['id']}", headers=auth_headers).status_code == 404


class TestScoping:

    def test_other_user_cannot_see_recipe(
        self, client: TestClient, carrot_cake: dict, other_auth_headers: dict
    ):
        assert client.get(f"/api/recipes/{carrot_cake['id']}", headers=other_auth_headers).status_code == 404
        assert client.get("/api/recipes", headers=other_auth_headers).json() == []

    def test_other_users_ingredient_is_unknown(
        self, client: TestClient, flour: dict, other_auth_headers: dict
    ):
        response = client.post(
            "/api/recipes",
            json={
                "name": "Borrowed",
                "yield_quantity": 1,
                "ingredients": [{"ingredient_id": flour["id"], "total_quantity": "1"}],
            },
            headers=other_auth_headers,
        )

        assert response.status_code == 404


class TestRoundTrip:
    """Saved totals come back unchanged whatever the yield."""

    @pytest.mark.parametrize("yield_quantity", [3, 7, 300, 1000])
    @pytest.mark.parametrize("total", ["1", "0.333333", "2.5"])
    def test_totals_survive_storage(
        self, client: TestClient, auth_headers: dict, flour: dict, yield_quantity: int, total: str
    ):
        created = client.post(
            "/api/recipes",
            json={
                "name": "Round trip",
                "yield_quantity": yield_quantity,
                "ingredients": [{"ingredient_id": flour["id"], "total_quantity": total}],
            },
            headers=auth_headers,
        ).json()

        loaded = client.get(f"/api/recipes/{created['id']}", headers=auth_headers).json()

        assert Decimal(loaded["ingredients"][0]["total_quantity"]) == Decimal(total)
        assert Decimal(loaded["batch_cost"]) == Decimal(total) * 2
        assert Decimal(loaded["calculated_cost"]) == Decimal(loaded["batch_cost"])


class TestLineOrder:

    def test_lines_keep_submitted_order(
        self, client: TestClient, auth_headers: dict, make_ingredient
    ):
        ids = [make_ingredient(name, "1")["id"] for name in ("Egg", "Butter", "Milk", "Apple")]

        created = client.post(
            "/api/recipes",
            json={
                "name": "Ordered",
                "yield_quantity": 1,
                "ingredients": [{"ingredient_id": i, "total_quantity": "1"} for i in ids],
            },
            headers=auth_headers,
        ).json()
        assert [line["ingredient_id"] for line in created["ingredients"]] == ids

        reordered = list(reversed(ids))
        updated = client.put(
            f"/api/recipes/{created['id']}",
            json={
                "name": "Ordered",
                "yield_quantity": 1,
                "ingredients": [{"ingredient_id": i, "total_quantity": "1"} for i in reordered],
            },
            headers=auth_headers,
        ).json()
        assert [line["ingredient_id"] for line in updated["ingredients"]] == reordered

        loaded = client.get(f"/api/recipes/{created['id']}", headers=auth_headers).json()
        assert [line["ingredient_id"] for line in loaded["ingredients"]] == reordered

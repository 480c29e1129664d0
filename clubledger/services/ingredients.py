"""
Ingredient catalog service.
"""
import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubledger.core.errors import IngredientInUseError, NotFoundError
from clubledger.models.ingredient import Ingredient
from clubledger.models.recipe import Recipe, RecipeIngredient
from clubledger.models.user import User

logger = logging.getLogger(__name__)


class IngredientService:
    """Row-level access to a user's ingredient catalog."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    def list_ingredients(self) -> list[Ingredient]:
        query = (
            select(Ingredient)
            .where(Ingredient.user_id == self.user.id)
            .order_by(Ingredient.name.asc())
        )
        return list(self.db.execute(query).scalars().all())

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient:
        ingredient = self.db.execute(
            select(Ingredient).where(Ingredient.id == ingredient_id, Ingredient.user_id == self.user.id)
        ).scalar_one_or_none()
        if ingredient is None:
            raise NotFoundError("Ingredient not found")
        return ingredient

    def create_ingredient(self, name: str, unit_of_measure: str, unit_cost: Decimal) -> Ingredient:
        ingredient = Ingredient(
            user_id=self.user.id,
            name=name,
            unit_of_measure=unit_of_measure,
            unit_cost=unit_cost,
        )
        self.db.add(ingredient)
        self._commit("add ingredient")
        self.db.refresh(ingredient)
        return ingredient

    def update_ingredient(
        self,
        ingredient_id: UUID,
        name: Optional[str] = None,
        unit_of_measure: Optional[str] = None,
        unit_cost: Optional[Decimal] = None,
    ) -> Ingredient:
        """Update catalog fields; a cost change refreshes dependent recipe costs in the same commit."""
        # Imported here to avoid a services import cycle
        from clubledger.services.recipes import RecipeService

        ingredient = self.get_ingredient(ingredient_id)
        if name is not None:
            ingredient.name = name
        if unit_of_measure is not None:
            ingredient.unit_of_measure = unit_of_measure
        cost_changed = unit_cost is not None and Decimal(unit_cost) != Decimal(ingredient.unit_cost)
        if unit_cost is not None:
            ingredient.unit_cost = unit_cost

        if cost_changed:
            self.db.flush()
            RecipeService(self.db, self.user).refresh_costs_for_ingredient(ingredient)

        self._commit(f"update ingredient {ingredient_id}")
        self.db.refresh(ingredient)
        return ingredient

    def recipes_using(self, ingredient: Ingredient) -> list[Recipe]:
        query = (
            select(Recipe)
            .join(RecipeIngredient, RecipeIngredient.recipe_id == Recipe.id)
            .where(RecipeIngredient.ingredient_id == ingredient.id)
            .order_by(Recipe.name.asc())
        )
        return list(self.db.execute(query).scalars().unique().all())

    def delete_ingredient(self, ingredient_id: UUID) -> None:
        """
        Delete an ingredient from the catalog.

        Refused while any recipe still uses it; remove it from those recipes first.
        """
        ingredient = self.get_ingredient(ingredient_id)
        recipes = self.recipes_using(ingredient)
        if recipes:
            names = ", ".join(recipe.name for recipe in recipes)
            raise IngredientInUseError(
                f"Ingredient '{ingredient.name}' is used by: {names}. Remove it from these recipes first."
            )
        self.db.delete(ingredient)
        self._commit(f"delete ingredient {ingredient_id}")

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Failed to {action}", exc_info=True)
            raise

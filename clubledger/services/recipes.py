"""
Recipe persistence service.

Sits at the storage boundary of the costing engine: quantities arrive on
the TOTAL basis, are normalized to PER-UNIT before being written, and are
denormalized back to TOTAL when a recipe is loaded for editing.

A save writes the recipe row and the full recipe-ingredient diff (update
kept, insert new, delete stale) in one transaction. Any failure rolls the
whole save back.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubledger.core.errors import DuplicateIngredientError, NotFoundError
from clubledger.models.ingredient import Ingredient
from clubledger.models.recipe import Recipe, RecipeIngredient
from clubledger.models.user import User
from clubledger.services.recipe_costing import RecipeEditor, StoredLine

logger = logging.getLogger(__name__)


class IngredientInput(Protocol):
    ingredient_id: UUID
    total_quantity: object  # raw user input, coerced by the engine


@dataclass
class RecipeDetail:
    recipe: Recipe
    editor: RecipeEditor


def stored_lines(recipe: Recipe) -> list[StoredLine]:
    return [
        StoredLine(ingredient_id=link.ingredient_id, quantity_used=link.quantity_used, id=link.id)
        for link in recipe.ingredients
    ]


def editor_for(recipe: Recipe) -> RecipeEditor:
    """Load a stored recipe into an editor (PER-UNIT → TOTAL)."""
    catalog = {link.ingredient_id: link.ingredient for link in recipe.ingredients}
    return RecipeEditor.from_storage(stored_lines(recipe), recipe.yield_quantity, catalog)


class RecipeService:
    """Row-level access to a user's recipes and their ingredients."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    def list_recipes(self) -> list[Recipe]:
        query = (
            select(Recipe)
            .where(Recipe.user_id == self.user.id)
            .order_by(Recipe.name.asc())
        )
        return list(self.db.execute(query).scalars().all())

    def get_recipe(self, recipe_id: UUID) -> Recipe:
        recipe = self.db.execute(
            select(Recipe).where(Recipe.id == recipe_id, Recipe.user_id == self.user.id)
        ).scalar_one_or_none()
        if recipe is None:
            raise NotFoundError("Recipe not found")
        return recipe

    def get_recipe_for_editing(self, recipe_id: UUID) -> RecipeDetail:
        recipe = self.get_recipe(recipe_id)
        return RecipeDetail(recipe=recipe, editor=editor_for(recipe))

    def build_editor(self, yield_quantity: int, inputs: Iterable[IngredientInput]) -> RecipeEditor:
        """
        Run the submitted ingredient rows through the costing engine.

        Raises DuplicateIngredientError if an ingredient appears twice and
        NotFoundError if one is not in the user's catalog. Nothing is written.
        """
        inputs = list(inputs)
        wanted = {row.ingredient_id for row in inputs}
        available = []
        if wanted:
            available = self.db.execute(
                select(Ingredient).where(Ingredient.id.in_(wanted), Ingredient.user_id == self.user.id)
            ).scalars().all()

        editor = RecipeEditor(yield_quantity=yield_quantity)
        for row in inputs:
            if editor.index_of(row.ingredient_id) is not None:
                raise DuplicateIngredientError(
                    f"Ingredient {row.ingredient_id} is listed more than once in this recipe"
                )
            index = editor.add_ingredient(row.ingredient_id, available)
            if index is None:
                raise NotFoundError(f"Ingredient {row.ingredient_id} not found")
            editor.set_quantity(index, row.total_quantity)
        return editor

    def preview_recipe(self, yield_quantity: int, inputs: Iterable[IngredientInput]) -> RecipeEditor:
        return self.build_editor(yield_quantity, inputs)

    def create_recipe(
        self,
        name: str,
        yield_quantity: int,
        inputs: Iterable[IngredientInput],
        description: Optional[str] = None,
    ) -> RecipeDetail:
        editor = self.build_editor(yield_quantity, inputs)
        recipe = Recipe(user_id=self.user.id, name=name, description=description)
        self.db.add(recipe)
        self._apply(recipe, editor)
        logger.info(f"Created recipe {recipe.id} with {len(editor.lines)} ingredients")
        return RecipeDetail(recipe=recipe, editor=editor_for(recipe))

    def update_recipe(
        self,
        recipe_id: UUID,
        name: str,
        yield_quantity: int,
        inputs: Iterable[IngredientInput],
        description: Optional[str] = None,
    ) -> RecipeDetail:
        recipe = self.get_recipe(recipe_id)
        editor = self.build_editor(yield_quantity, inputs)
        recipe.name = name
        recipe.description = description
        self._apply(recipe, editor)
        logger.info(f"Updated recipe {recipe.id} with {len(editor.lines)} ingredients")
        return RecipeDetail(recipe=recipe, editor=editor_for(recipe))

    def _apply(self, recipe: Recipe, editor: RecipeEditor) -> None:
        """Write the editor state onto the recipe and commit it as one unit."""
        name = recipe.name
        try:
            recipe.yield_quantity = editor.yield_quantity
            recipe.calculated_cost = editor.batch_cost

            existing = {link.ingredient_id: link for link in recipe.ingredients}
            keep = set()
            for position, line in enumerate(editor.to_persistence()):
                keep.add(line.ingredient_id)
                link = existing.get(line.ingredient_id)
                if link is None:
                    recipe.ingredients.append(RecipeIngredient(
                        ingredient_id=line.ingredient_id,
                        quantity_used=line.quantity_used,
                        position=position,
                    ))
                else:
                    link.quantity_used = line.quantity_used
                    link.position = position

            for ingredient_id, link in existing.items():
                if ingredient_id not in keep:
                    recipe.ingredients.remove(link)

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Failed to save recipe {name!r}; no changes applied", exc_info=True)
            raise
        self.db.refresh(recipe)

    def delete_recipe(self, recipe_id: UUID) -> None:
        recipe = self.get_recipe(recipe_id)
        try:
            self.db.delete(recipe)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Failed to delete recipe {recipe_id}", exc_info=True)
            raise

    def refresh_costs_for_ingredient(self, ingredient: Ingredient) -> list[Recipe]:
        """
        Recompute the cached batch cost of every recipe using `ingredient`.

        Does not commit; the caller's transaction carries the change.
        """
        query = (
            select(Recipe)
            .join(RecipeIngredient, RecipeIngredient.recipe_id == Recipe.id)
            .where(RecipeIngredient.ingredient_id == ingredient.id, Recipe.user_id == self.user.id)
        )
        recipes = list(self.db.execute(query).scalars().unique().all())
        for recipe in recipes:
            recipe.calculated_cost = editor_for(recipe).batch_cost
        return recipes

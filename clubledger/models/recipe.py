"""
Recipe models for kitchen costing.

Recipe: a batch preparation producing `yield_quantity` sellable units
RecipeIngredient: join table storing the PER-UNIT quantity of an ingredient
"""
import uuid
from sqlalchemy import (
    Column, String, Text, Integer, Numeric, DateTime, ForeignKey, Uuid, func,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from clubledger.db.base import Base


class Recipe(Base):
    """
    A recipe owned by a club member.

    `calculated_cost` caches the batch cost (all yield units) as of the
    last save or ingredient price change.
    """
    __tablename__ = "recipes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    yield_quantity = Column(Integer, nullable=False, default=1)
    calculated_cost = Column(Numeric(20, 10), nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="[RecipeIngredient.position, RecipeIngredient.id]",
    )
    menu_items = relationship("MenuItem", back_populates="recipe")

    __table_args__ = (
        CheckConstraint("yield_quantity >= 1", name="ck_recipes_yield_positive"),
    )


class RecipeIngredient(Base):
    """
    Quantity of one ingredient needed for ONE yield unit of a recipe.

    quantity_used keeps 16 places: rounding error times yield stays far
    below the 6-place resolution of entered totals for any Integer yield.
    `position` is the line order in the recipe editor.
    """
    __tablename__ = "recipe_ingredients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipe_id = Column(Uuid, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    ingredient_id = Column(Uuid, ForeignKey("ingredients.id"), nullable=False)
    quantity_used = Column(Numeric(28, 16), nullable=False, default=0)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient", back_populates="recipe_links")

    __table_args__ = (
        UniqueConstraint("recipe_id", "ingredient_id", name="uq_recipe_ingredients_recipe_ingredient"),
    )

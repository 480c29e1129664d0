"""
Recipe schemas.

Ingredient quantities in every request and response are TOTAL (whole
batch) quantities; the per-unit figure is reported alongside for display.
"""
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RecipeIngredientInput(BaseModel):
    ingredient_id: UUID
    # Raw form value; anything that is not a non-negative number counts as 0
    total_quantity: Union[Decimal, str, None] = None


class RecipeSave(BaseModel):
    """Request body for creating or replacing a recipe."""
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    yield_quantity: int = Field(ge=1)
    ingredients: List[RecipeIngredientInput] = Field(default_factory=list)


class RecipePreviewRequest(BaseModel):
    yield_quantity: int = Field(ge=1)
    ingredients: List[RecipeIngredientInput] = Field(default_factory=list)


class RecipeLineResponse(BaseModel):
    id: Optional[UUID] = None
    ingredient_id: UUID
    name: str
    unit_of_measure: str
    unit_cost: Decimal
    total_quantity: Decimal
    unit_quantity: Decimal
    line_cost: Decimal


class RecipeCostResponse(BaseModel):
    yield_quantity: int
    batch_cost: Decimal
    unit_cost: Decimal
    ingredients: List[RecipeLineResponse]


class RecipeSummaryResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    yield_quantity: int
    calculated_cost: Decimal

    model_config = ConfigDict(from_attributes=True)


class RecipeDetailResponse(RecipeCostResponse):
    id: UUID
    name: str
    description: Optional[str] = None
    calculated_cost: Decimal

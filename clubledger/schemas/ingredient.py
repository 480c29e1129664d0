"""
Ingredient catalog schemas.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class IngredientCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    unit_of_measure: str = Field(min_length=1, max_length=50)
    unit_cost: Decimal = Field(ge=0)


class IngredientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    unit_of_measure: Optional[str] = Field(default=None, min_length=1, max_length=50)
    unit_cost: Optional[Decimal] = Field(default=None, ge=0)


class IngredientResponse(BaseModel):
    id: UUID
    name: str
    unit_of_measure: str
    unit_cost: Decimal
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class IngredientListResponse(BaseModel):
    items: List[IngredientResponse]
    total: int

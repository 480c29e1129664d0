"""
Menu item Pydantic schemas for API request/response models.
"""
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MenuItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = None
    recipe_id: Optional[UUID] = None
    # Defaults to the linked recipe's unit cost when omitted
    base_cost: Optional[Decimal] = Field(default=None, ge=0)
    suggested_price: Decimal = Field(default=Decimal(0), ge=0)


class MenuItemResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    recipe_id: Optional[UUID] = None
    base_cost: Decimal
    suggested_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class MenuItemListResponse(BaseModel):
    items: List[MenuItemResponse]
    total: int

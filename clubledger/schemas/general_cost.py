"""
General cost schemas.
"""
from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class GeneralCostCreate(BaseModel):
    description: str = Field(min_length=1, max_length=255)
    amount: Decimal = Field(ge=0)
    category: str = Field(min_length=1, max_length=100)
    date: Optional[date_type] = None


class GeneralCostResponse(BaseModel):
    id: UUID
    description: str
    amount: Decimal
    category: str
    date: date_type

    model_config = ConfigDict(from_attributes=True)


class CategoryTotalResponse(BaseModel):
    category: str
    total: Decimal
    count: int

    model_config = ConfigDict(from_attributes=True)


class GeneralCostListResponse(BaseModel):
    items: List[GeneralCostResponse]
    total: Decimal
    by_category: List[CategoryTotalResponse]

"""
Event and event item schemas.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clubledger.models.event import EventStatus


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    event_date: date
    status: EventStatus = EventStatus.PLANNING


class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    event_date: Optional[date] = None
    status: Optional[EventStatus] = None

    @field_validator("title", "event_date", "status")
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; null would clear a required column
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class EventItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    unit_cost: Decimal = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    unit_price: Decimal = Field(ge=0)


class EventItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    unit_cost: Optional[Decimal] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=1)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)


class EventItemResponse(BaseModel):
    id: UUID
    name: str
    category: str
    unit_cost: Decimal
    quantity: int
    unit_price: Decimal
    total_cost: Decimal
    total_revenue: Decimal
    profit: Decimal

    model_config = ConfigDict(from_attributes=True)


class EventSummaryResponse(BaseModel):
    total_cost: Decimal
    total_revenue: Decimal
    net_profit: Decimal
    profit_margin: str
    favorable: bool
    item_count: int

    model_config = ConfigDict(from_attributes=True)


class EventResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    event_date: date
    status: EventStatus
    status_label: str
    total_cost: Decimal
    total_revenue: Decimal


class EventDetailResponse(EventResponse):
    items: List[EventItemResponse]
    summary: EventSummaryResponse

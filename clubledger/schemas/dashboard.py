"""
Dashboard schemas.
"""
from decimal import Decimal
from typing import List

from pydantic import BaseModel

from clubledger.schemas.event import EventResponse
from clubledger.schemas.general_cost import GeneralCostResponse


class DashboardResponse(BaseModel):
    recent_events: List[EventResponse]
    recent_general_costs: List[GeneralCostResponse]
    event_revenue: Decimal
    event_cost: Decimal
    general_costs_total: Decimal
    net_result: Decimal
    favorable: bool
    currency: str

"""
Dashboard rollup: recent events and general costs combined into a net result.

    net_result = Σ event.total_revenue - Σ event.total_cost - Σ general_cost.amount

over the most recent events (by event date) and general costs (by date).
Event figures come from the cached totals on each event row.
"""
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from clubledger.models.event import Event
from clubledger.models.general_cost import GeneralCost
from clubledger.models.user import User
from clubledger.services import event_rollup
from clubledger.services.events import EventService
from clubledger.services.general_costs import GeneralCostService, ledger_total


@dataclass
class DashboardSummary:
    events: list[Event]
    general_costs: list[GeneralCost]
    event_revenue: Decimal
    event_cost: Decimal
    general_costs_total: Decimal
    net_result: Decimal

    @property
    def favorable(self) -> bool:
        return event_rollup.is_favorable(self.net_result)


def net_result(event_revenue: Decimal, event_cost: Decimal, general_costs_total: Decimal) -> Decimal:
    return event_revenue - event_cost - general_costs_total


def build_dashboard(db: Session, user: User, recent_limit: int) -> DashboardSummary:
    events = EventService(db, user).list_events(limit=recent_limit)
    costs = GeneralCostService(db, user).list_costs(limit=recent_limit)

    revenue = event_rollup.total_revenue(events)
    cost = event_rollup.total_cost(events)
    general = ledger_total(costs)

    return DashboardSummary(
        events=events,
        general_costs=costs,
        event_revenue=revenue,
        event_cost=cost,
        general_costs_total=general,
        net_result=net_result(revenue, cost, general),
    )

"""
Event Financial Rollup.

Sums event item costs and revenues into event-level figures:
    total_cost    = Σ item.total_cost
    total_revenue = Σ item.total_revenue
    net_profit    = total_revenue - total_cost
    margin %      = net_profit / total_revenue × 100, "0.0" when there is no revenue
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol

ZERO = Decimal(0)
CENT = Decimal("0.01")
TENTH = Decimal("0.1")


class HasTotals(Protocol):
    total_cost: Decimal
    total_revenue: Decimal


def _money(value) -> Decimal:
    return Decimal(value or 0)


def item_totals(unit_cost: Decimal, quantity: int, unit_price: Decimal) -> tuple[Decimal, Decimal]:
    """Return (total_cost, total_revenue) for one event item."""
    total_cost = (Decimal(unit_cost) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)
    total_revenue = (Decimal(unit_price) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)
    return total_cost, total_revenue


def total_cost(items: Iterable[HasTotals]) -> Decimal:
    return sum((_money(item.total_cost) for item in items), ZERO)


def total_revenue(items: Iterable[HasTotals]) -> Decimal:
    return sum((_money(item.total_revenue) for item in items), ZERO)


def net_profit(items: Iterable[HasTotals]) -> Decimal:
    items = list(items)
    return total_revenue(items) - total_cost(items)


def margin_from(net: Decimal, revenue: Decimal) -> str:
    if revenue > 0:
        return str((net / revenue * 100).quantize(TENTH, rounding=ROUND_HALF_UP))
    return "0.0"


def profit_margin_pct(items: Iterable[HasTotals]) -> str:
    """Profit margin as a percentage with one decimal place."""
    items = list(items)
    return margin_from(net_profit(items), total_revenue(items))


def is_favorable(net: Decimal) -> bool:
    """Break-even counts as favorable."""
    return net >= 0


@dataclass
class EventSummary:
    total_cost: Decimal
    total_revenue: Decimal
    net_profit: Decimal
    profit_margin: str
    favorable: bool
    item_count: int


def summarize(items: Iterable[HasTotals]) -> EventSummary:
    items = list(items)
    cost = total_cost(items)
    revenue = total_revenue(items)
    net = revenue - cost
    return EventSummary(
        total_cost=cost,
        total_revenue=revenue,
        net_profit=net,
        profit_margin=margin_from(net, revenue),
        favorable=is_favorable(net),
        item_count=len(items),
    )

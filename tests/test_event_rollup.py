"""
Unit tests for event financial rollup.
"""
from decimal import Decimal
from types import SimpleNamespace

from clubledger.services.event_rollup import (
    item_totals,
    is_favorable,
    net_profit,
    profit_margin_pct,
    summarize,
    total_cost,
    total_revenue,
)


def _item(cost: str, revenue: str) -> SimpleNamespace:
    return SimpleNamespace(total_cost=Decimal(cost), total_revenue=Decimal(revenue))


class TestItemTotals:

    def test_multiplies_by_quantity(self):
        assert item_totals(Decimal("5"), 10, Decimal("8")) == (Decimal("50.00"), Decimal("80.00"))

    def test_rounds_to_cents(self):
        cost, revenue = item_totals(Decimal("0.333"), 3, Decimal("1.005"))
        assert cost == Decimal("1.00")
        assert revenue == Decimal("3.02")


class TestRollup:

    def test_empty_event(self):
        summary = summarize([])

        assert summary.total_cost == Decimal(0)
        assert summary.total_revenue == Decimal(0)
        assert summary.net_profit == Decimal(0)
        assert summary.profit_margin == "0.0"
        assert summary.favorable is True
        assert summary.item_count == 0

    def test_fair_scenario(self):
        """Hot dogs (50 cost, 80 revenue) and sodas (15 cost, 30 revenue)."""
        items = [_item("50", "80"), _item("15", "30")]

        assert total_cost(items) == Decimal("65")
        assert total_revenue(items) == Decimal("110")
        assert net_profit(items) == Decimal("45")
        assert profit_margin_pct(items) == "40.9"

    def test_loss_is_unfavorable(self):
        summary = summarize([_item("100", "60")])

        assert summary.net_profit == Decimal("-40")
        assert summary.profit_margin == "-66.7"
        assert summary.favorable is False

    def test_zero_revenue_margin(self):
        assert profit_margin_pct([_item("20", "0")]) == "0.0"

    def test_break_even_is_favorable(self):
        assert is_favorable(Decimal(0)) is True
        assert is_favorable(Decimal("-0.01")) is False

"""
General Cost Ledger: club expenses not tied to an event.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubledger.core.errors import NotFoundError
from clubledger.models.general_cost import GeneralCost
from clubledger.models.user import User

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


class HasAmount(Protocol):
    amount: Decimal
    category: str


@dataclass
class CategoryTotal:
    category: str
    total: Decimal
    count: int


def ledger_total(costs: Iterable[HasAmount]) -> Decimal:
    """Σ amount over the given costs."""
    return sum((Decimal(cost.amount or 0) for cost in costs), ZERO)


def group_by_category(costs: Iterable[HasAmount]) -> list[CategoryTotal]:
    """Total per free-text category, sorted by category name."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[str, int] = defaultdict(int)
    for cost in costs:
        totals[cost.category] += Decimal(cost.amount or 0)
        counts[cost.category] += 1
    return [
        CategoryTotal(category=category, total=totals[category], count=counts[category])
        for category in sorted(totals)
    ]


class GeneralCostService:
    """Row-level access to a user's general costs."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    def list_costs(self, limit: Optional[int] = None) -> list[GeneralCost]:
        query = (
            select(GeneralCost)
            .where(GeneralCost.user_id == self.user.id)
            .order_by(GeneralCost.date.desc(), GeneralCost.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return list(self.db.execute(query).scalars().all())

    def create_cost(
        self,
        description: str,
        amount: Decimal,
        category: str,
        cost_date: Optional[date] = None,
    ) -> GeneralCost:
        cost = GeneralCost(
            user_id=self.user.id,
            description=description,
            amount=amount,
            category=category,
            date=cost_date or date.today(),
        )
        try:
            self.db.add(cost)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("Failed to add general cost", exc_info=True)
            raise
        self.db.refresh(cost)
        return cost

    def delete_cost(self, cost_id: UUID) -> None:
        cost = self.db.execute(
            select(GeneralCost).where(GeneralCost.id == cost_id, GeneralCost.user_id == self.user.id)
        ).scalar_one_or_none()
        if cost is None:
            raise NotFoundError("General cost not found")
        try:
            self.db.delete(cost)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Failed to delete general cost {cost_id}", exc_info=True)
            raise

"""
Event service: events, their sale items and the cached event totals.

Every item mutation rewrites Event.total_cost / total_revenue from the item
rows in the same transaction, so the cache cannot drift from the items.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubledger.core.errors import NotFoundError
from clubledger.models.event import Event, EventItem, EventStatus
from clubledger.models.user import User
from clubledger.services import event_rollup

logger = logging.getLogger(__name__)


def persist_totals(event: Event, items: list[EventItem]) -> event_rollup.EventSummary:
    """Write the item sums onto the event as its cached totals."""
    summary = event_rollup.summarize(items)
    event.total_cost = summary.total_cost
    event.total_revenue = summary.total_revenue
    return summary


class EventService:
    """Row-level access to a user's events and event items."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    # ============ Events ============

    def list_events(self, limit: Optional[int] = None) -> list[Event]:
        query = (
            select(Event)
            .where(Event.user_id == self.user.id)
            .order_by(Event.event_date.desc(), Event.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return list(self.db.execute(query).scalars().all())

    def get_event(self, event_id: UUID) -> Event:
        event = self.db.execute(
            select(Event).where(Event.id == event_id, Event.user_id == self.user.id)
        ).scalar_one_or_none()
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def create_event(
        self,
        title: str,
        event_date: date,
        description: Optional[str] = None,
        status: EventStatus = EventStatus.PLANNING,
    ) -> Event:
        event = Event(
            user_id=self.user.id,
            title=title,
            description=description,
            event_date=event_date,
            status=EventStatus(status).value,
            total_cost=Decimal(0),
            total_revenue=Decimal(0),
        )
        self.db.add(event)
        self._commit("create event")
        self.db.refresh(event)
        return event

    def update_event(self, event_id: UUID, **changes) -> Event:
        event = self.get_event(event_id)
        for field_name in ("title", "description", "event_date"):
            if field_name in changes:
                setattr(event, field_name, changes[field_name])
        if changes.get("status") is not None:
            event.status = EventStatus(changes["status"]).value
        self._commit(f"update event {event_id}")
        self.db.refresh(event)
        return event

    def delete_event(self, event_id: UUID) -> None:
        event = self.get_event(event_id)
        self.db.delete(event)
        self._commit(f"delete event {event_id}")

    def summarize_event(self, event: Event) -> event_rollup.EventSummary:
        """Totals computed from the item rows, not from the cached columns."""
        return event_rollup.summarize(event.items)

    # ============ Items ============

    def _get_item(self, event: Event, item_id: UUID) -> EventItem:
        item = self.db.execute(
            select(EventItem).where(EventItem.id == item_id, EventItem.event_id == event.id)
        ).scalar_one_or_none()
        if item is None:
            raise NotFoundError("Event item not found")
        return item

    def add_item(
        self,
        event_id: UUID,
        name: str,
        category: str,
        unit_cost: Decimal,
        quantity: int,
        unit_price: Decimal,
    ) -> EventItem:
        event = self.get_event(event_id)
        total_cost, total_revenue = event_rollup.item_totals(unit_cost, quantity, unit_price)
        item = EventItem(
            name=name,
            category=category,
            unit_cost=unit_cost,
            quantity=quantity,
            unit_price=unit_price,
            total_cost=total_cost,
            total_revenue=total_revenue,
            position=max((existing.position for existing in event.items), default=-1) + 1,
        )
        event.items.append(item)
        self._refresh_totals(event)
        self._commit(f"add item to event {event_id}")
        self.db.refresh(item)
        return item

    def update_item(self, event_id: UUID, item_id: UUID, **changes) -> EventItem:
        event = self.get_event(event_id)
        item = self._get_item(event, item_id)
        for field_name in ("name", "category", "unit_cost", "quantity", "unit_price"):
            if changes.get(field_name) is not None:
                setattr(item, field_name, changes[field_name])
        item.total_cost, item.total_revenue = event_rollup.item_totals(
            item.unit_cost, item.quantity, item.unit_price
        )
        self._refresh_totals(event)
        self._commit(f"update item {item_id}")
        self.db.refresh(item)
        return item

    def delete_item(self, event_id: UUID, item_id: UUID) -> None:
        event = self.get_event(event_id)
        item = self._get_item(event, item_id)
        event.items.remove(item)
        self._refresh_totals(event)
        self._commit(f"delete item {item_id}")

    def _refresh_totals(self, event: Event) -> None:
        summary = persist_totals(event, event.items)
        logger.info(
            f"Event {event.id} totals: cost={summary.total_cost} revenue={summary.total_revenue}"
        )

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Failed to {action}", exc_info=True)
            raise

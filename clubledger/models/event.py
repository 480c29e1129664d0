"""
Event and EventItem models.

Event.total_cost / total_revenue are caches of the item sums, rewritten
whenever an item changes. Item rows are the source of truth.
"""
import enum
import uuid
from sqlalchemy import Column, String, Text, Integer, Numeric, Date, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from clubledger.db.base import Base


class EventStatus(str, enum.Enum):
    PLANNING = "planning"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    EventStatus.PLANNING: "Planejamento",
    EventStatus.CONFIRMED: "Confirmado",
    EventStatus.COMPLETED: "Concluído",
    EventStatus.CANCELLED: "Cancelado",
}


class Event(Base):
    """A club event (fair, dinner, bazaar) with its own sale items."""
    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    event_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=EventStatus.PLANNING.value)
    total_cost = Column(Numeric(12, 2), nullable=False, default=0)
    total_revenue = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="events")
    items = relationship(
        "EventItem",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="[EventItem.position, EventItem.id]",
    )


class EventItem(Base):
    """A product or service sold at an event."""
    __tablename__ = "event_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    unit_cost = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_cost = Column(Numeric(12, 2), nullable=False, default=0)  # unit_cost * quantity
    total_revenue = Column(Numeric(12, 2), nullable=False, default=0)  # unit_price * quantity
    position = Column(Integer, nullable=False, default=0)  # insertion order within the event
    created_at = Column(DateTime, server_default=func.now())

    event = relationship("Event", back_populates="items")

"""
General (non-event) club expenses.
"""
import uuid
from datetime import date
from sqlalchemy import Column, String, Numeric, Date, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from clubledger.db.base import Base


class GeneralCost(Base):
    """A dated expense not tied to any event (rent, utilities, supplies)."""
    __tablename__ = "general_costs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(100), nullable=False)
    date = Column(Date, nullable=False, default=date.today)
    created_at = Column(DateTime, server_default=func.now())

    owner = relationship("User", back_populates="general_costs")

"""
Menu items, optionally backed by a recipe.
"""
import uuid
from sqlalchemy import Column, String, Text, Numeric, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from clubledger.db.base import Base


class MenuItem(Base):
    """A dish offered for sale, priced from its recipe's unit cost."""
    __tablename__ = "menu_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipe_id = Column(Uuid, ForeignKey("recipes.id", ondelete="SET NULL"))
    name = Column(String(255), nullable=False)
    description = Column(Text)
    category = Column(String(100))
    base_cost = Column(Numeric(10, 2), nullable=False, default=0)
    suggested_price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    owner = relationship("User", back_populates="menu_items")
    recipe = relationship("Recipe", back_populates="menu_items")

"""
Ingredient catalog model.
"""
import uuid
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from clubledger.db.base import Base


class Ingredient(Base):
    """A purchasable ingredient with the cost of one unit of measure."""
    __tablename__ = "ingredients"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    unit_of_measure = Column(String(50), nullable=False)  # kg, liter, unit
    unit_cost = Column(Numeric(10, 4), nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    owner = relationship("User", back_populates="ingredients")
    recipe_links = relationship("RecipeIngredient", back_populates="ingredient")

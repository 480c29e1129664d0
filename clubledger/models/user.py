"""
User accounts and their profile fields.
"""
import uuid
from sqlalchemy import Column, String, DateTime, Uuid, func
from sqlalchemy.orm import relationship

from clubledger.db.base import Base


class User(Base):
    """An authenticated club member. Owns every other row in the system."""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)

    # Profile
    full_name = Column(String(255), nullable=False, default="")
    role = Column(String(50), default="member")

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    events = relationship("Event", back_populates="owner", cascade="all, delete-orphan")
    ingredients = relationship("Ingredient", back_populates="owner", cascade="all, delete-orphan")
    recipes = relationship("Recipe", back_populates="owner", cascade="all, delete-orphan")
    general_costs = relationship("GeneralCost", back_populates="owner", cascade="all, delete-orphan")
    menu_items = relationship("MenuItem", back_populates="owner", cascade="all, delete-orphan")

"""
SQLAlchemy models for Club Ledger.
"""
# Core entities
from clubledger.models.user import User
from clubledger.models.token_blacklist import TokenBlacklist

# Kitchen
from clubledger.models.ingredient import Ingredient
from clubledger.models.recipe import Recipe, RecipeIngredient
from clubledger.models.menu import MenuItem

# Events
from clubledger.models.event import Event, EventItem, EventStatus

# Expenses
from clubledger.models.general_cost import GeneralCost


__all__ = [
    # Core
    "User",
    "TokenBlacklist",
    # Kitchen
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "MenuItem",
    # Events
    "Event",
    "EventItem",
    "EventStatus",
    # Expenses
    "GeneralCost",
]

"""
Menu item service.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubledger.core.errors import NotFoundError
from clubledger.models.menu import MenuItem
from clubledger.models.user import User
from clubledger.services.recipes import RecipeService, editor_for

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class MenuService:
    """Row-level access to a user's menu items."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    def list_items(self) -> list[MenuItem]:
        query = (
            select(MenuItem)
            .where(MenuItem.user_id == self.user.id)
            .order_by(MenuItem.name.asc())
        )
        return list(self.db.execute(query).scalars().all())

    def create_item(
        self,
        name: str,
        suggested_price: Decimal,
        description: Optional[str] = None,
        category: Optional[str] = None,
        recipe_id: Optional[UUID] = None,
        base_cost: Optional[Decimal] = None,
    ) -> MenuItem:
        """A linked recipe without an explicit base_cost supplies its current unit cost."""
        if recipe_id is not None:
            recipe = RecipeService(self.db, self.user).get_recipe(recipe_id)
            if base_cost is None:
                base_cost = editor_for(recipe).unit_cost.quantize(CENT, rounding=ROUND_HALF_UP)

        item = MenuItem(
            user_id=self.user.id,
            recipe_id=recipe_id,
            name=name,
            description=description,
            category=category,
            base_cost=base_cost or Decimal(0),
            suggested_price=suggested_price,
        )
        self.db.add(item)
        self._commit("add menu item")
        self.db.refresh(item)
        return item

    def delete_item(self, menu_item_id: UUID) -> None:
        item = self.db.execute(
            select(MenuItem).where(MenuItem.id == menu_item_id, MenuItem.user_id == self.user.id)
        ).scalar_one_or_none()
        if item is None:
            raise NotFoundError("Menu item not found")
        self.db.delete(item)
        self._commit(f"delete menu item {menu_item_id}")

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Failed to {action}", exc_info=True)
            raise

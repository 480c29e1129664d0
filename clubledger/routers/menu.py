"""
Menu items router.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from clubledger.core.deps import get_current_user
from clubledger.db.session import get_db
from clubledger.models.user import User
from clubledger.schemas.menu import MenuItemCreate, MenuItemListResponse, MenuItemResponse
from clubledger.services.menu import MenuService

router = APIRouter(prefix="/menu-items", tags=["menu-items"])


@router.get("", response_model=MenuItemListResponse)
def list_menu_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    items = MenuService(db, current_user).list_items()
    return MenuItemListResponse(
        items=[MenuItemResponse.model_validate(item) for item in items],
        total=len(items),
    )


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    data: MenuItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a menu item.

    When linked to a recipe and no base_cost is given, the recipe's current
    unit cost is used.
    """
    return MenuService(db, current_user).create_item(
        name=data.name,
        description=data.description,
        category=data.category,
        recipe_id=data.recipe_id,
        base_cost=data.base_cost,
        suggested_price=data.suggested_price,
    )


@router.delete("/{menu_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    menu_item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    MenuService(db, current_user).delete_item(menu_item_id)

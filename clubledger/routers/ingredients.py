"""
Ingredient catalog router.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from clubledger.core.deps import get_current_user
from clubledger.db.session import get_db
from clubledger.models.user import User
from clubledger.schemas.ingredient import (
    IngredientCreate,
    IngredientListResponse,
    IngredientResponse,
    IngredientUpdate,
)
from clubledger.services.ingredients import IngredientService

router = APIRouter(prefix="/ingredients", tags=["ingredients"])


@router.get("", response_model=IngredientListResponse)
def list_ingredients(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the catalog ordered by name."""
    ingredients = IngredientService(db, current_user).list_ingredients()
    return IngredientListResponse(
        items=[IngredientResponse.model_validate(ing) for ing in ingredients],
        total=len(ingredients),
    )


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    data: IngredientCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return IngredientService(db, current_user).create_ingredient(
        name=data.name,
        unit_of_measure=data.unit_of_measure,
        unit_cost=data.unit_cost,
    )


@router.put("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: UUID,
    data: IngredientUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an ingredient.

    Changing the unit cost also refreshes the stored cost of every recipe using it.
    """
    return IngredientService(db, current_user).update_ingredient(
        ingredient_id,
        name=data.name,
        unit_of_measure=data.unit_of_measure,
        unit_cost=data.unit_cost,
    )


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete an ingredient.

    Returns 409 while any recipe still uses the ingredient.
    """
    IngredientService(db, current_user).delete_ingredient(ingredient_id)

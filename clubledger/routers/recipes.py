"""
Recipe router.

Provides API endpoints for:
- Recipe CRUD with ingredient quantities entered per batch
- Cost preview while a recipe is being edited
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from clubledger.core.deps import get_current_user
from clubledger.db.session import get_db
from clubledger.models.user import User
from clubledger.schemas.recipe import (
    RecipeCostResponse,
    RecipeDetailResponse,
    RecipeLineResponse,
    RecipePreviewRequest,
    RecipeSave,
    RecipeSummaryResponse,
)
from clubledger.services.recipe_costing import RecipeEditor, compute_line_cost
from clubledger.services.recipes import RecipeDetail, RecipeService

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _cost_payload(editor: RecipeEditor) -> dict:
    return {
        "yield_quantity": editor.yield_quantity,
        "batch_cost": editor.batch_cost,
        "unit_cost": editor.unit_cost,
        "ingredients": [
            RecipeLineResponse(
                id=line.id,
                ingredient_id=line.ingredient_id,
                name=line.name,
                unit_of_measure=line.unit_of_measure,
                unit_cost=line.unit_cost,
                total_quantity=line.total_quantity,
                unit_quantity=editor.unit_quantity(index),
                line_cost=compute_line_cost(line),
            )
            for index, line in enumerate(editor.lines)
        ],
    }


def _detail_response(detail: RecipeDetail) -> RecipeDetailResponse:
    recipe = detail.recipe
    return RecipeDetailResponse(
        id=recipe.id,
        name=recipe.name,
        description=recipe.description,
        calculated_cost=recipe.calculated_cost,
        **_cost_payload(detail.editor),
    )


@router.get("", response_model=list[RecipeSummaryResponse])
def list_recipes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List recipes ordered by name with their stored batch cost."""
    return RecipeService(db, current_user).list_recipes()


@router.post("", response_model=RecipeDetailResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    data: RecipeSave,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a recipe.

    Body ingredient quantities are for the whole batch; they are stored per
    yield unit. Unparseable quantities count as 0. Listing an ingredient
    twice is rejected with 400.
    """
    detail = RecipeService(db, current_user).create_recipe(
        name=data.name,
        description=data.description,
        yield_quantity=data.yield_quantity,
        inputs=data.ingredients,
    )
    return _detail_response(detail)


@router.post("/preview", response_model=RecipeCostResponse)
def preview_recipe(
    data: RecipePreviewRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Compute batch and unit cost for an unsaved recipe form."""
    editor = RecipeService(db, current_user).preview_recipe(data.yield_quantity, data.ingredients)
    return RecipeCostResponse(**_cost_payload(editor))


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
def get_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Load a recipe for editing, with quantities converted back to batch totals."""
    return _detail_response(RecipeService(db, current_user).get_recipe_for_editing(recipe_id))


@router.put("/{recipe_id}", response_model=RecipeDetailResponse)
def update_recipe(
    recipe_id: UUID,
    data: RecipeSave,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Replace a recipe and its ingredient list.

    Ingredients missing from the body are removed, new ones added and the
    rest updated, all in a single transaction.
    """
    detail = RecipeService(db, current_user).update_recipe(
        recipe_id,
        name=data.name,
        description=data.description,
        yield_quantity=data.yield_quantity,
        inputs=data.ingredients,
    )
    return _detail_response(detail)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    RecipeService(db, current_user).delete_recipe(recipe_id)

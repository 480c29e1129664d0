"""
General costs router.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from clubledger.core.deps import get_current_user
from clubledger.db.session import get_db
from clubledger.models.user import User
from clubledger.schemas.general_cost import (
    CategoryTotalResponse,
    GeneralCostCreate,
    GeneralCostListResponse,
    GeneralCostResponse,
)
from clubledger.services.general_costs import GeneralCostService, group_by_category, ledger_total

router = APIRouter(prefix="/general-costs", tags=["general-costs"])


@router.get("", response_model=GeneralCostListResponse)
def list_general_costs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List all general costs (newest first) with the overall and per-category totals."""
    costs = GeneralCostService(db, current_user).list_costs()
    return GeneralCostListResponse(
        items=[GeneralCostResponse.model_validate(cost) for cost in costs],
        total=ledger_total(costs),
        by_category=[CategoryTotalResponse.model_validate(group) for group in group_by_category(costs)],
    )


@router.post("", response_model=GeneralCostResponse, status_code=status.HTTP_201_CREATED)
def create_general_cost(
    data: GeneralCostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return GeneralCostService(db, current_user).create_cost(
        description=data.description,
        amount=data.amount,
        category=data.category,
        cost_date=data.date,
    )


@router.delete("/{cost_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_general_cost(
    cost_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    GeneralCostService(db, current_user).delete_cost(cost_id)

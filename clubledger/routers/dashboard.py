"""
Dashboard router: recent activity and the club's net result.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from clubledger.core.config import get_settings
from clubledger.core.deps import get_current_user
from clubledger.db.session import get_db
from clubledger.models.user import User
from clubledger.routers.events import event_response
from clubledger.schemas.dashboard import DashboardResponse
from clubledger.schemas.general_cost import GeneralCostResponse
from clubledger.services.dashboard import build_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
settings = get_settings()


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Summarize the most recent events and general costs.

    net_result = event revenue - event cost - general costs, over the
    DASHBOARD_RECENT_LIMIT most recent of each.
    """
    summary = build_dashboard(db, current_user, settings.DASHBOARD_RECENT_LIMIT)
    return DashboardResponse(
        recent_events=[event_response(event) for event in summary.events],
        recent_general_costs=[GeneralCostResponse.model_validate(cost) for cost in summary.general_costs],
        event_revenue=summary.event_revenue,
        event_cost=summary.event_cost,
        general_costs_total=summary.general_costs_total,
        net_result=summary.net_result,
        favorable=summary.favorable,
        currency=settings.CURRENCY_SYMBOL,
    )

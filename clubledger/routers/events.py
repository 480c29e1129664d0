"""
Events router: events, their sale items and financial summary.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from clubledger.core.deps import get_current_user
from clubledger.db.session import get_db
from clubledger.models.event import Event, EventItem, EventStatus
from clubledger.models.user import User
from clubledger.schemas.event import (
    EventCreate,
    EventDetailResponse,
    EventItemCreate,
    EventItemResponse,
    EventItemUpdate,
    EventResponse,
    EventSummaryResponse,
    EventUpdate,
)
from clubledger.services.events import EventService

router = APIRouter(prefix="/events", tags=["events"])


def event_response(event: Event) -> EventResponse:
    event_status = EventStatus(event.status)
    return EventResponse(
        id=event.id,
        title=event.title,
        description=event.description,
        event_date=event.event_date,
        status=event_status,
        status_label=event_status.label,
        total_cost=event.total_cost,
        total_revenue=event.total_revenue,
    )


def item_response(item: EventItem) -> EventItemResponse:
    return EventItemResponse(
        id=item.id,
        name=item.name,
        category=item.category,
        unit_cost=item.unit_cost,
        quantity=item.quantity,
        unit_price=item.unit_price,
        total_cost=item.total_cost,
        total_revenue=item.total_revenue,
        profit=item.total_revenue - item.total_cost,
    )


def _detail_response(service: EventService, event: Event) -> EventDetailResponse:
    summary = service.summarize_event(event)
    return EventDetailResponse(
        **event_response(event).model_dump(),
        items=[item_response(item) for item in event.items],
        summary=EventSummaryResponse.model_validate(summary),
    )


@router.get("", response_model=list[EventResponse])
def list_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List events, most recent event date first."""
    return [event_response(event) for event in EventService(db, current_user).list_events()]


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    data: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    event = EventService(db, current_user).create_event(
        title=data.title,
        description=data.description,
        event_date=data.event_date,
        status=data.status,
    )
    return event_response(event)


@router.get("/{event_id}", response_model=EventDetailResponse)
def get_event(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get an event with its items.

    The summary is computed from the items, not from the cached totals.
    """
    service = EventService(db, current_user)
    return _detail_response(service, service.get_event(event_id))


@router.patch("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: UUID,
    data: EventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    event = EventService(db, current_user).update_event(event_id, **data.model_dump(exclude_unset=True))
    return event_response(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete an event and all of its items."""
    EventService(db, current_user).delete_event(event_id)


# ============ Items ============

@router.post("/{event_id}/items", response_model=EventDetailResponse, status_code=status.HTTP_201_CREATED)
def add_event_item(
    event_id: UUID,
    data: EventItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a sale item; returns the event with refreshed totals."""
    service = EventService(db, current_user)
    service.add_item(
        event_id,
        name=data.name,
        category=data.category,
        unit_cost=data.unit_cost,
        quantity=data.quantity,
        unit_price=data.unit_price,
    )
    return _detail_response(service, service.get_event(event_id))


@router.patch("/{event_id}/items/{item_id}", response_model=EventDetailResponse)
def update_event_item(
    event_id: UUID,
    item_id: UUID,
    data: EventItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = EventService(db, current_user)
    service.update_item(event_id, item_id, **data.model_dump(exclude_unset=True))
    return _detail_response(service, service.get_event(event_id))


@router.delete("/{event_id}/items/{item_id}", response_model=EventDetailResponse)
def delete_event_item(
    event_id: UUID,
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove a sale item; returns the event with refreshed totals."""
    service = EventService(db, current_user)
    service.delete_item(event_id, item_id)
    return _detail_response(service, service.get_event(event_id))

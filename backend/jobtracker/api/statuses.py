from __future__ import annotations

from fastapi import APIRouter

from jobtracker.schemas.status import EventTypeOut, StatusOut
from jobtracker.services.event_types import EventType, get_all_event_types
from jobtracker.services.statuses import get_default_statuses


router = APIRouter()


@router.get("/application-statuses", response_model=list[StatusOut])
def list_application_statuses() -> list[StatusOut]:
    return [
        StatusOut(
            id=status.id,
            name=status.name,
            description=status.description,
            is_terminal=status.is_terminal,
            priority=status.priority,
        )
        for status in get_default_statuses()
    ]


@router.get("/event-types", response_model=list[EventTypeOut])
def list_event_types() -> tuple[EventType, ...]:
    return get_all_event_types()

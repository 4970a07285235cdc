from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError as PydanticValidationError

from jobtracker.dependencies import get_application_service, get_current_user_id
from jobtracker.schemas.application import (
    ApplicationCreate,
    ApplicationEvent,
    ApplicationStatsOut,
    EventAppended,
    EventCreate,
    JobApplication,
    MilestoneDatesUpdate,
)
from jobtracker.services.applications import ApplicationService
from jobtracker.services.event_log import chronological, new_event_id
from jobtracker.services.status_engine import calculate_current_status


router = APIRouter()


def _with_timeline(application: JobApplication) -> JobApplication:
    return application.model_copy(update={"events": list(chronological(application.events))})


def _to_event(payload: EventCreate) -> ApplicationEvent:
    return ApplicationEvent(
        id=payload.id or new_event_id(),
        title=payload.title,
        description=payload.description,
        date=payload.date,
    )


def _first_error(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"Validation error: {location}: {error.get('msg')}" if location else f"Validation error: {error.get('msg')}"


@router.get("", response_model=list[JobApplication])
def list_applications(
    status: list[str] | None = Query(default=None),
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> list[JobApplication]:
    return service.get_applications(user_id, status_ids=status)


@router.post("", response_model=JobApplication)
def create_application(
    payload: ApplicationCreate,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> JobApplication:
    data = payload.model_dump(exclude={"events", "current_status"})
    current_status = payload.current_status or calculate_current_status(data)
    return service.create_application(
        {
            **data,
            "user_id": user_id,
            "events": [_to_event(event) for event in payload.events],
            "current_status": current_status,
        }
    )


@router.get("/stats", response_model=ApplicationStatsOut)
def application_stats(
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> ApplicationStatsOut:
    return ApplicationStatsOut(**service.application_stats(user_id))


@router.post("/recalculate")
def recalculate_statuses(
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> dict[str, int | str]:
    updated_count = service.recalculate_current_statuses(user_id)
    return {"status": "recalculated", "updated_count": updated_count}


@router.delete("/clear")
def clear_applications(
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> dict[str, int | str]:
    deleted_count = service.delete_all_applications_for_user(user_id)
    return {"status": "cleared", "deleted_count": deleted_count}


@router.get("/{app_id}", response_model=JobApplication)
def get_application(
    app_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> JobApplication:
    application = service.get_application_by_id(user_id, app_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return _with_timeline(application)


@router.patch("/{app_id}/dates", response_model=JobApplication)
def update_milestone_dates(
    app_id: str,
    payload: dict[str, Any] = Body(...),
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> JobApplication:
    try:
        update = MilestoneDatesUpdate.model_validate(payload)
    except PydanticValidationError as exc:
        raise HTTPException(status_code=400, detail=_first_error(exc)) from exc

    date_updates = update.model_dump(exclude_unset=True, exclude={"event_id"})
    application = service.update_application_with_status_calculation(
        user_id,
        app_id,
        date_updates,
        event_id=update.event_id,
    )
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return _with_timeline(application)


@router.post("/{app_id}/events", response_model=EventAppended)
def add_event(
    app_id: str,
    payload: EventCreate,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> EventAppended:
    event = _to_event(payload)
    application = service.append_event(user_id, app_id, event)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return EventAppended(application=_with_timeline(application), event=event)


@router.delete("/{app_id}")
def delete_application(
    app_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ApplicationService = Depends(get_application_service),
) -> dict[str, str]:
    if not service.delete_application(user_id, app_id):
        raise HTTPException(status_code=404, detail="Application not found")
    return {"status": "deleted", "application_id": app_id}

from __future__ import annotations

import re
import uuid
from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from jobtracker.errors import ValidationError
from jobtracker.schemas.application import ApplicationEvent, JobApplication


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def new_event_id() -> str:
    return f"event_{uuid.uuid4().hex}"


def is_valid_event_date(value: Any) -> bool:
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def coerce_event(event: ApplicationEvent | Mapping[str, Any]) -> ApplicationEvent:
    if isinstance(event, ApplicationEvent):
        candidate = event
    elif not isinstance(event, Mapping):
        raise ValidationError(f"Event must be an object, got {type(event).__name__}")
    else:
        try:
            candidate = ApplicationEvent.model_validate(dict(event))
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid event: {exc}") from exc
    if not is_valid_event_date(candidate.date):
        raise ValidationError(f"Event date must be a valid YYYY-MM-DD date, got {candidate.date!r}")
    return candidate


def validate_events(events: Iterable[ApplicationEvent | Mapping[str, Any]]) -> list[ApplicationEvent]:
    validated: list[ApplicationEvent] = []
    seen: set[str] = set()
    for event in events:
        candidate = coerce_event(event)
        if candidate.id in seen:
            raise ValidationError(f"Duplicate event id {candidate.id!r}")
        seen.add(candidate.id)
        validated.append(candidate)
    return validated


def append(application: JobApplication, event: ApplicationEvent | Mapping[str, Any]) -> JobApplication:
    """Return a copy of ``application`` with ``event`` added after the existing events.

    Existing events keep their order and content; the input is left untouched.
    """
    candidate = coerce_event(event)
    if any(existing.id == candidate.id for existing in application.events):
        raise ValidationError(f"Event id {candidate.id!r} already exists on application {application.id}")
    return application.model_copy(update={"events": [*application.events, candidate]})


class ChronologicalView:
    """Events ordered by date, oldest first.

    Sorting happens on every iteration, so the view can be walked any number
    of times. Same-day events stay in insertion order.
    """

    def __init__(self, events: Iterable[ApplicationEvent]) -> None:
        self._events = tuple(events)

    def __iter__(self) -> Iterator[ApplicationEvent]:
        return iter(sorted(self._events, key=lambda event: event.date))

    def __len__(self) -> int:
        return len(self._events)


def chronological(events: Iterable[ApplicationEvent]) -> ChronologicalView:
    return ChronologicalView(events)

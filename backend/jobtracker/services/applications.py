from __future__ import annotations

import logging
import uuid
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from jobtracker.errors import ConcurrentUpdateError, ValidationError
from jobtracker.schemas.application import ApplicationEvent, JobApplication
from jobtracker.services import analytics, event_log
from jobtracker.services.repository import ApplicationRepository
from jobtracker.services.status_engine import (
    calculate_current_status,
    milestone_attribute,
    read_milestones,
)
from jobtracker.services.statuses import get_default_statuses


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_date_updates(updates: Mapping[str, Any]) -> dict[str, str | None]:
    """Check a milestone update payload and key it by attribute name.

    Only the six milestone fields are accepted, in camelCase or snake_case.
    Values must be strings or ``None``; an empty string clears the field.
    """
    unknown = sorted(key for key in updates if milestone_attribute(key) is None)
    if unknown:
        raise ValidationError(f"Unknown milestone field(s): {', '.join(unknown)}")

    normalized: dict[str, str | None] = {}
    for key, value in updates.items():
        attribute = milestone_attribute(key)
        if attribute in normalized:
            raise ValidationError(f"Milestone field {key!r} given more than once")
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"Milestone field {key!r} must be a date string or null")
        normalized[attribute] = value or None
    return normalized


class ApplicationService:
    def __init__(
        self,
        repository: ApplicationRepository,
        max_write_retries: int = 5,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.repository = repository
        self.max_write_retries = max(1, max_write_retries)
        self._clock = clock

    def create_application(self, data: Mapping[str, Any]) -> JobApplication:
        """Validate and store a new application.

        ``events`` and ``currentStatus`` are stored exactly as given. Callers
        that want a derived status must compute it before calling.
        """
        payload = dict(data)
        for reserved in ("id", "_id", "createdAt", "created_at", "updatedAt", "updated_at", "version"):
            payload.pop(reserved, None)

        events = payload.pop("events", None) or []
        if not isinstance(events, (list, tuple)):
            raise ValidationError("events must be a list")
        events = event_log.validate_events(events)
        now = self._clock()
        try:
            application = JobApplication.model_validate(
                {
                    **payload,
                    "id": uuid.uuid4().hex,
                    "events": events,
                    "created_at": now,
                    "updated_at": now,
                    "version": 1,
                }
            )
        except PydanticValidationError as exc:
            raise ValidationError(f"Validation error: {exc}") from exc

        stored = self.repository.add(application)
        logger.info("Created application %s for user %s", stored.id, stored.user_id)
        return stored

    def get_application_by_id(self, user_id: str, application_id: str) -> JobApplication | None:
        return self.repository.get(user_id, application_id)

    def get_all_applications_for_user(self, user_id: str) -> list[JobApplication]:
        return self.repository.list_for_user(user_id)

    def get_applications(self, user_id: str, status_ids: Iterable[str] | None = None) -> list[JobApplication]:
        return self.repository.list_for_user(user_id, status_ids=status_ids)

    def update_application_with_status_calculation(
        self,
        user_id: str,
        application_id: str,
        date_updates: Mapping[str, Any],
        event_id: str | None = None,
    ) -> JobApplication | None:
        """Set milestone dates and store the status they imply.

        The merge always starts from a fresh read; a concurrent write between
        the read and the conditional update triggers another attempt.
        """
        updates = normalize_date_updates(date_updates)

        for _ in range(self.max_write_retries):
            current = self.repository.get(user_id, application_id)
            if current is None:
                return None

            merged = {**read_milestones(current), **updates}
            status = calculate_current_status(merged)
            if event_id is not None:
                if not any(event.id == event_id for event in current.events):
                    raise ValidationError(f"Event {event_id!r} does not exist on application {application_id}")
                status = status.model_copy(update={"event_id": event_id})

            changes: dict[str, Any] = {**updates, "current_status": status, "updated_at": self._clock()}
            updated = self.repository.update_if_version(user_id, application_id, current.version, changes)
            if updated is not None:
                logger.info(
                    "Updated milestone dates %s on application %s; status %s -> %s",
                    sorted(updates),
                    application_id,
                    current.current_status.id,
                    status.id,
                )
                return updated
            logger.warning("Concurrent write on application %s, retrying milestone update", application_id)

        raise ConcurrentUpdateError(application_id, self.max_write_retries)

    def append_event(
        self,
        user_id: str,
        application_id: str,
        event: ApplicationEvent | Mapping[str, Any],
    ) -> JobApplication | None:
        candidate = event_log.coerce_event(event)

        for _ in range(self.max_write_retries):
            current = self.repository.get(user_id, application_id)
            if current is None:
                return None

            extended = event_log.append(current, candidate)
            updated = self.repository.update_if_version(
                user_id,
                application_id,
                current.version,
                {"events": extended.events, "updated_at": self._clock()},
            )
            if updated is not None:
                logger.info("Appended event %s to application %s", candidate.id, application_id)
                return updated
            logger.warning("Concurrent write on application %s, retrying event append", application_id)

        raise ConcurrentUpdateError(application_id, self.max_write_retries)

    def delete_application(self, user_id: str, application_id: str) -> bool:
        deleted = self.repository.delete(user_id, application_id)
        if deleted:
            logger.info("Deleted application %s for user %s", application_id, user_id)
        return deleted

    def delete_all_applications_for_user(self, user_id: str) -> int:
        deleted_count = self.repository.delete_all_for_user(user_id)
        logger.info("Deleted %d applications for user %s", deleted_count, user_id)
        return deleted_count

    def recalculate_current_statuses(self, user_id: str | None = None) -> int:
        """Rewrite stored statuses that no longer match their milestone dates.

        Returns the number of applications changed. Records modified
        concurrently are skipped; the concurrent writer already stored a
        freshly derived status.
        """
        applications = (
            self.repository.list_for_user(user_id) if user_id is not None else self.repository.list_all()
        )
        updated_count = 0
        for application in applications:
            derived = calculate_current_status(application)
            stored = application.current_status
            if derived.id == stored.id and derived.name == stored.name:
                continue
            changes = {"current_status": derived, "updated_at": self._clock()}
            if self.repository.update_if_version(application.user_id, application.id, application.version, changes):
                updated_count += 1
        if updated_count:
            logger.info("Recalculated current status on %d applications", updated_count)
        return updated_count

    def application_stats(self, user_id: str) -> dict[str, int]:
        counts = Counter(application.current_status.id for application in self.repository.list_for_user(user_id))
        stats = {status.id: counts.get(status.id, 0) for status in get_default_statuses()}
        stats["total"] = sum(counts.values())
        return stats


    def dashboard_metrics(self, user_id: str) -> dict[str, Any]:
        return analytics.dashboard_metrics(self.repository.list_for_user(user_id), self._clock())

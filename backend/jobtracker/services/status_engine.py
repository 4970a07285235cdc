"""Derive an application's current status from its milestone dates.

The rule is "latest date wins": every milestone field that holds a usable
date is a candidate, the candidate with the most recent date becomes the
current status, and exact ties go to the status that sits later in the
workflow. Workflow order is never enforced, so a phone screen dated after a
first-round interview still makes "Phone Screen" the current status.

Dates that are missing, empty or unparseable are ignored. They never raise:
format checks belong to the write path, not to derivation.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

from jobtracker.schemas.application import CurrentStatus
from jobtracker.services.statuses import StatusDefinition, get_status_by_id, initial_status


# Milestone attribute -> (durable camelCase key, status id), in ascending priority.
MILESTONE_FIELDS: dict[str, tuple[str, str]] = {
    "applied_date": ("appliedDate", "applied"),
    "phone_screen_date": ("phoneScreenDate", "phone_screen"),
    "round1_date": ("round1Date", "round_1"),
    "round2_date": ("round2Date", "round_2"),
    "accepted_date": ("acceptedDate", "accepted"),
    "declined_date": ("declinedDate", "declined"),
}

_ATTRIBUTE_BY_KEY: dict[str, str] = {
    **{attribute: attribute for attribute in MILESTONE_FIELDS},
    **{camel: attribute for attribute, (camel, _) in MILESTONE_FIELDS.items()},
}

# The subset of ISO-8601 that datetime.fromisoformat reads the same way on
# every supported interpreter.
_ISO_DATE_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{3}(?:\d{3})?)?)?(?:Z|[+-]\d{2}:\d{2})?)?"
)


def milestone_attribute(key: str) -> str | None:
    """Map a camelCase or snake_case milestone key to its attribute name."""
    return _ATTRIBUTE_BY_KEY.get(key)


def _candidates() -> list[tuple[str, StatusDefinition]]:
    pairs = []
    for attribute, (_, linked_status_id) in MILESTONE_FIELDS.items():
        status = get_status_by_id(linked_status_id)
        if status is None:
            raise LookupError(f"Status registry has no '{linked_status_id}' status")
        pairs.append((attribute, status))
    return sorted(pairs, key=lambda pair: pair[1].priority)


def parse_milestone_date(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        raw = value.strip()
        if not _ISO_DATE_PATTERN.fullmatch(raw):
            return None
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        # Offsets near year 1 or year 9999 have no UTC equivalent.
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except (ValueError, OverflowError):
            return None
    return parsed


def read_milestones(source: Mapping[str, Any] | Any) -> dict[str, Any]:
    """Collect the six milestone values from a mapping or an object.

    Mappings may use either the durable camelCase keys or attribute names;
    when both are present the attribute name wins.
    """
    values: dict[str, Any] = {}
    if isinstance(source, Mapping):
        for attribute, (camel, _) in MILESTONE_FIELDS.items():
            if attribute in source:
                values[attribute] = source[attribute]
            elif camel in source:
                values[attribute] = source[camel]
            else:
                values[attribute] = None
        return values

    for attribute in MILESTONE_FIELDS:
        values[attribute] = getattr(source, attribute, None)
    return values


def calculate_current_status(application: Mapping[str, Any] | Any) -> CurrentStatus:
    milestones = read_milestones(application)

    winner = initial_status()
    latest_date: datetime | None = None
    latest_priority = 0

    for attribute, status in _candidates():
        status_date = parse_milestone_date(milestones.get(attribute))
        if status_date is None:
            continue
        if (
            latest_date is None
            or status_date > latest_date
            or (status_date == latest_date and status.priority > latest_priority)
        ):
            winner = status
            latest_date = status_date
            latest_priority = status.priority

    return CurrentStatus(id=winner.id, name=winner.name)

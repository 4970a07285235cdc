from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class StatusDefinition:
    id: str
    name: str
    description: str
    is_terminal: bool
    priority: int


def status_id(name: str) -> str:
    """Turn a display name into its stored id ("Phone Screen" -> "phone_screen")."""
    return re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")


def _status(name: str, description: str, priority: int, is_terminal: bool = False) -> StatusDefinition:
    return StatusDefinition(
        id=status_id(name),
        name=name,
        description=description,
        is_terminal=is_terminal,
        priority=priority,
    )


_DEFAULT_STATUSES: tuple[StatusDefinition, ...] = (
    _status("Not Applied", "Application not yet submitted", 1),
    _status("Applied", "Application has been submitted", 2),
    _status("Phone Screen", "Initial phone screening interview", 3),
    _status("Round 1", "First round interview", 4),
    _status("Round 2", "Second round interview", 5),
    _status("Accepted", "Job offer accepted", 6, is_terminal=True),
    _status("Declined", "Application was declined or withdrawn", 7, is_terminal=True),
)

_STATUSES_BY_ID = {status.id: status for status in _DEFAULT_STATUSES}


def get_default_statuses() -> tuple[StatusDefinition, ...]:
    return _DEFAULT_STATUSES


def get_status_by_id(value: str) -> StatusDefinition | None:
    return _STATUSES_BY_ID.get(value)


def initial_status() -> StatusDefinition:
    return _DEFAULT_STATUSES[0]

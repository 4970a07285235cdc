from __future__ import annotations


class ValidationError(ValueError):
    """Malformed input rejected before anything is written."""


class ConcurrentUpdateError(RuntimeError):
    """A conditional write kept losing to concurrent writers."""

    def __init__(self, application_id: str, attempts: int) -> None:
        super().__init__(f"Application {application_id} changed concurrently {attempts} times; giving up")
        self.application_id = application_id
        self.attempts = attempts

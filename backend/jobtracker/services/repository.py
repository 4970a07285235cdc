from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from jobtracker.schemas.application import JobApplication


class ApplicationRepository(ABC):
    """Storage for applications. Every lookup is scoped by ``user_id``.

    ``update_if_version`` is the only write path for existing records: it
    applies ``changes`` (attribute name -> new value) and bumps ``version``
    only while the stored version still equals ``expected_version``. It
    returns ``None`` when no record matched, whether the record is missing,
    owned by someone else, or was changed in the meantime.
    """

    @abstractmethod
    def add(self, application: JobApplication) -> JobApplication: ...

    @abstractmethod
    def get(self, user_id: str, application_id: str) -> JobApplication | None: ...

    @abstractmethod
    def list_for_user(self, user_id: str, status_ids: Iterable[str] | None = None) -> list[JobApplication]: ...

    @abstractmethod
    def update_if_version(
        self,
        user_id: str,
        application_id: str,
        expected_version: int,
        changes: dict[str, Any],
    ) -> JobApplication | None: ...

    @abstractmethod
    def delete(self, user_id: str, application_id: str) -> bool: ...

    @abstractmethod
    def delete_all_for_user(self, user_id: str) -> int: ...

    @abstractmethod
    def list_all(self) -> list[JobApplication]: ...


class InMemoryApplicationRepository(ApplicationRepository):
    def __init__(self) -> None:
        self._records: dict[str, JobApplication] = {}
        self._lock = threading.Lock()

    def add(self, application: JobApplication) -> JobApplication:
        with self._lock:
            if application.id in self._records:
                raise KeyError(f"Application {application.id} already exists")
            self._records[application.id] = application.model_copy(deep=True)
        return application.model_copy(deep=True)

    def get(self, user_id: str, application_id: str) -> JobApplication | None:
        with self._lock:
            record = self._records.get(application_id)
            if record is None or record.user_id != user_id:
                return None
            return record.model_copy(deep=True)

    def list_for_user(self, user_id: str, status_ids: Iterable[str] | None = None) -> list[JobApplication]:
        wanted = set(status_ids) if status_ids is not None else None
        with self._lock:
            rows = [
                record.model_copy(deep=True)
                for record in self._records.values()
                if record.user_id == user_id and (wanted is None or record.current_status.id in wanted)
            ]
        return sorted(rows, key=lambda record: record.created_at, reverse=True)

    def update_if_version(
        self,
        user_id: str,
        application_id: str,
        expected_version: int,
        changes: dict[str, Any],
    ) -> JobApplication | None:
        with self._lock:
            record = self._records.get(application_id)
            if record is None or record.user_id != user_id or record.version != expected_version:
                return None
            updated = record.model_copy(update={**changes, "version": expected_version + 1}, deep=True)
            self._records[application_id] = updated
            return updated.model_copy(deep=True)

    def delete(self, user_id: str, application_id: str) -> bool:
        with self._lock:
            record = self._records.get(application_id)
            if record is None or record.user_id != user_id:
                return False
            del self._records[application_id]
            return True

    def delete_all_for_user(self, user_id: str) -> int:
        with self._lock:
            doomed = [key for key, record in self._records.items() if record.user_id == user_id]
            for key in doomed:
                del self._records[key]
            return len(doomed)

    def list_all(self) -> list[JobApplication]:
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

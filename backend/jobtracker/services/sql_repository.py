from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, update
from sqlalchemy.orm import Session, sessionmaker

from jobtracker.models.application import ApplicationRow
from jobtracker.schemas.application import JobApplication
from jobtracker.services.repository import ApplicationRepository


_PLAIN_COLUMNS = (
    "id",
    "user_id",
    "company_name",
    "role_name",
    "job_posting_url",
    "notes",
    "application_type",
    "role_type",
    "location_type",
    "applied_date",
    "phone_screen_date",
    "round1_date",
    "round2_date",
    "accepted_date",
    "declined_date",
    "created_at",
    "updated_at",
    "version",
)


def _column_value(name: str, value: Any) -> Any:
    if name == "events":
        return [event.model_dump(exclude_none=True) for event in value]
    if name in ("job_board", "workflow"):
        return value.model_dump()
    if name == "current_status":
        return value.model_dump(by_alias=True, exclude_none=True)
    return value


def _column_values(changes: dict[str, Any]) -> dict[str, Any]:
    values = {name: _column_value(name, value) for name, value in changes.items()}
    if "current_status" in changes:
        values["current_status_id"] = changes["current_status"].id
    return values


def _to_domain(row: ApplicationRow) -> JobApplication:
    payload = {name: getattr(row, name) for name in _PLAIN_COLUMNS}
    payload.update(
        job_board=row.job_board,
        workflow=row.workflow,
        events=row.events or [],
        current_status=row.current_status,
    )
    return JobApplication.model_validate(payload)


class SqlApplicationRepository(ApplicationRepository):
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def _session(self) -> Session:
        return self._session_factory()

    def add(self, application: JobApplication) -> JobApplication:
        data = {name: getattr(application, name) for name in _PLAIN_COLUMNS}
        data.update(
            _column_values(
                {
                    "job_board": application.job_board,
                    "workflow": application.workflow,
                    "events": application.events,
                    "current_status": application.current_status,
                }
            )
        )
        with self._session() as db:
            row = ApplicationRow(**data)
            db.add(row)
            db.commit()
            db.refresh(row)
            return _to_domain(row)

    def get(self, user_id: str, application_id: str) -> JobApplication | None:
        with self._session() as db:
            row = (
                db.query(ApplicationRow)
                .filter(ApplicationRow.id == application_id, ApplicationRow.user_id == user_id)
                .first()
            )
            return _to_domain(row) if row else None

    def list_for_user(self, user_id: str, status_ids: Iterable[str] | None = None) -> list[JobApplication]:
        with self._session() as db:
            query = db.query(ApplicationRow).filter(ApplicationRow.user_id == user_id)
            if status_ids is not None:
                query = query.filter(ApplicationRow.current_status_id.in_(list(status_ids)))
            rows = query.order_by(ApplicationRow.created_at.desc()).all()
            return [_to_domain(row) for row in rows]

    def update_if_version(
        self,
        user_id: str,
        application_id: str,
        expected_version: int,
        changes: dict[str, Any],
    ) -> JobApplication | None:
        values = _column_values(changes)
        values["version"] = expected_version + 1
        stmt = (
            update(ApplicationRow)
            .where(
                ApplicationRow.id == application_id,
                ApplicationRow.user_id == user_id,
                ApplicationRow.version == expected_version,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self._session() as db:
            result = db.execute(stmt)
            if result.rowcount != 1:
                db.rollback()
                return None
            db.commit()
            row = (
                db.query(ApplicationRow)
                .filter(ApplicationRow.id == application_id, ApplicationRow.user_id == user_id)
                .first()
            )
            return _to_domain(row) if row else None

    def delete(self, user_id: str, application_id: str) -> bool:
        with self._session() as db:
            result = db.execute(
                delete(ApplicationRow).where(
                    ApplicationRow.id == application_id,
                    ApplicationRow.user_id == user_id,
                )
            )
            db.commit()
            return result.rowcount == 1

    def delete_all_for_user(self, user_id: str) -> int:
        with self._session() as db:
            result = db.execute(delete(ApplicationRow).where(ApplicationRow.user_id == user_id))
            db.commit()
            return int(result.rowcount)

    def list_all(self) -> list[JobApplication]:
        with self._session() as db:
            return [_to_domain(row) for row in db.query(ApplicationRow).all()]

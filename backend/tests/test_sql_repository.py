from datetime import datetime

from sqlalchemy import text

from jobtracker.bootstrap import run_runtime_migrations
from jobtracker.database import Base, build_engine, build_session_factory
from jobtracker.models.application import ApplicationRow  # noqa: F401
from jobtracker.schemas.application import JobApplication
from jobtracker.services.sql_repository import SqlApplicationRepository


def _repository():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    return engine, SqlApplicationRepository(build_session_factory(engine))


def _record(application_id: str = "app-1", user_id: str = "user-a") -> JobApplication:
    now = datetime(2025, 1, 1, 9, 30)
    return JobApplication(
        id=application_id,
        userId=user_id,
        companyName="Example GmbH",
        roleName="Platform Engineer",
        jobBoard={"id": "stepstone", "name": "StepStone"},
        workflow={"id": "default", "name": "Default"},
        applicationType="warm",
        roleType="engineer",
        locationType="hybrid",
        appliedDate="2025-01-02",
        events=[{"id": "e1", "title": "Applied", "date": "2025-01-02"}],
        currentStatus={"id": "applied", "name": "Applied", "eventId": "e1"},
        createdAt=now,
        updatedAt=now,
    )


def test_round_trip_preserves_nested_documents():
    _, repository = _repository()
    stored = repository.add(_record())

    loaded = repository.get("user-a", "app-1")

    assert loaded == stored
    assert loaded.job_board.name == "StepStone"
    assert loaded.current_status.event_id == "e1"
    assert loaded.events[0].description is None


def test_conditional_update_requires_matching_version_and_owner():
    _, repository = _repository()
    repository.add(_record())

    assert repository.update_if_version("user-a", "app-1", 7, {"notes": "stale"}) is None
    assert repository.update_if_version("user-b", "app-1", 1, {"notes": "foreign"}) is None
    updated = repository.update_if_version("user-a", "app-1", 1, {"notes": "fresh"})

    assert updated.notes == "fresh"
    assert updated.version == 2
    assert repository.update_if_version("user-a", "app-1", 1, {"notes": "late"}) is None
    assert repository.get("user-a", "app-1").notes == "fresh"


def test_status_filter_uses_current_status_column():
    _, repository = _repository()
    repository.add(_record("app-1"))
    repository.add(_record("app-2"))
    repository.add(_record("app-3", user_id="user-b"))

    assert {record.id for record in repository.list_for_user("user-a", status_ids=["applied"])} == {"app-1", "app-2"}
    assert repository.list_for_user("user-a", status_ids=["declined"]) == []
    assert len(repository.list_all()) == 3


def test_runtime_migrations_upgrade_legacy_table():
    engine = build_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                CREATE TABLE applications (
                    id VARCHAR(64) PRIMARY KEY,
                    user_id VARCHAR(128) NOT NULL,
                    company_name VARCHAR(255) NOT NULL,
                    role_name VARCHAR(255) NOT NULL,
                    job_posting_url VARCHAR(1000),
                    notes TEXT,
                    job_board JSON NOT NULL,
                    workflow JSON NOT NULL,
                    application_type VARCHAR(20) NOT NULL,
                    role_type VARCHAR(20) NOT NULL,
                    location_type VARCHAR(20) NOT NULL,
                    applied_date VARCHAR(512),
                    events JSON NOT NULL,
                    current_status JSON NOT NULL,
                    created_at DATETIME NOT NULL,
                    updated_at DATETIME NOT NULL
                )
                """
            )
        )
        conn.execute(
            text(
                """
                INSERT INTO applications VALUES (
                    'legacy-1', 'user-a', 'Example GmbH', 'Data Engineer', NULL, NULL,
                    '{"id": "linkedin", "name": "LinkedIn"}', '{"id": "default", "name": "Default"}',
                    'cold', 'engineer', 'remote', '2025-01-15', '[]',
                    '{"id": "in_progress", "name": "In Progress"}',
                    '2025-01-15 10:00:00.000000', '2025-01-15 10:00:00.000000'
                )
                """
            )
        )

    run_runtime_migrations(engine)
    run_runtime_migrations(engine)

    repository = SqlApplicationRepository(build_session_factory(engine))
    migrated = repository.get("user-a", "legacy-1")
    assert migrated.current_status.id == "applied"
    assert migrated.declined_date is None
    assert migrated.version == 2
    assert [record.id for record in repository.list_for_user("user-a", status_ids=["applied"])] == ["legacy-1"]

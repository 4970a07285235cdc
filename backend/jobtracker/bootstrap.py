from __future__ import annotations

import json
import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from jobtracker.services.status_engine import MILESTONE_FIELDS, calculate_current_status


logger = logging.getLogger(__name__)


def _column_exists(conn, table_name: str, column_name: str) -> bool:
    rows = conn.execute(text(f"PRAGMA table_info('{table_name}')")).fetchall()
    return any(row[1] == column_name for row in rows)


def _add_column_if_missing(conn, table_name: str, column_name: str, column_sql: str) -> bool:
    if _column_exists(conn, table_name, column_name):
        return False
    conn.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {column_sql}"))
    return True


def _load_status(raw) -> dict:
    if isinstance(raw, dict):
        return raw
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        return {}


def run_runtime_migrations(engine: Engine) -> None:
    """Bring databases created by older releases up to the current schema.

    Adds the milestone date, status id and version columns when missing and
    re-derives every stored current status from its milestone dates.
    """
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as conn:
        added = []
        for column in MILESTONE_FIELDS:
            if _add_column_if_missing(conn, "applications", column, f"{column} VARCHAR(512)"):
                added.append(column)
        if _add_column_if_missing(conn, "applications", "current_status_id", "current_status_id VARCHAR(64)"):
            added.append("current_status_id")
        if _add_column_if_missing(conn, "applications", "version", "version INTEGER NOT NULL DEFAULT 1"):
            added.append("version")
        if added:
            logger.info("Added columns to applications: %s", ", ".join(added))

        conn.execute(text("UPDATE applications SET version = 1 WHERE version IS NULL"))

        columns = ", ".join(MILESTONE_FIELDS)
        rows = conn.execute(text(f"SELECT id, current_status, {columns} FROM applications")).mappings().all()
        repaired = 0
        for row in rows:
            stored = _load_status(row["current_status"])
            derived = calculate_current_status(dict(row))
            if stored.get("id") == derived.id and stored.get("name") == derived.name:
                continue
            conn.execute(
                text(
                    """
                    UPDATE applications
                    SET current_status = :current_status,
                        current_status_id = :current_status_id,
                        version = version + 1
                    WHERE id = :id
                    """
                ),
                {
                    "current_status": json.dumps(derived.model_dump(by_alias=True, exclude_none=True)),
                    "current_status_id": derived.id,
                    "id": row["id"],
                },
            )
            repaired += 1

        conn.execute(
            text(
                """
                UPDATE applications
                SET current_status_id = json_extract(current_status, '$.id')
                WHERE current_status_id IS NULL
                """
            ),
        )
        if repaired:
            logger.info("Re-derived current status on %d applications", repaired)

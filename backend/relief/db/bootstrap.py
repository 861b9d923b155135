from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Connection, Engine

import relief.models  # noqa: F401
from relief.db.base import Base
from relief.db.session import engine as default_engine

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "stored_collections": {"name", "payload", "updated_at"},
    "relief_assignments": {"id", "leave_request_id", "leave_date", "period", "substitute_teacher_id"},
    "activity_logs": {"id", "action", "message", "details", "created_at"},
}


def find_schema_gaps(connection: Connection) -> tuple[list[str], dict[str, list[str]]]:
    inspector = inspect(connection)
    table_names = set(inspector.get_table_names())
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    for table_name, columns in REQUIRED_COLUMNS.items():
        if table_name not in table_names:
            missing_tables.append(table_name)
            continue
        existing = {item["name"] for item in inspector.get_columns(table_name)}
        missing = sorted(columns - existing)
        if missing:
            missing_columns[table_name] = missing
    return missing_tables, missing_columns


def ensure_schema(engine: Engine | None = None) -> None:
    target = engine or default_engine
    Base.metadata.create_all(bind=target)
    with target.connect() as connection:
        missing_tables, missing_columns = find_schema_gaps(connection)
    if missing_tables or missing_columns:
        logger.warning(
            "Database schema is incomplete: missing tables %s, missing columns %s",
            missing_tables,
            missing_columns,
        )
    else:
        logger.info("Database schema ready")

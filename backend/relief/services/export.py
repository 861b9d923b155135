from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from pathlib import Path

from relief.core.exceptions import StorageError
from relief.services.store import ReliefStore

logger = logging.getLogger(__name__)

EXPORT_FILE_PREFIX = "school-data-"


def build_export_document(store: ReliefStore) -> dict:
    return {
        "teachers": [item.model_dump(mode="json", by_alias=True) for item in store.teachers],
        "timetable": [item.model_dump(mode="json", by_alias=True) for item in store.timetable],
        "leaves": [item.model_dump(mode="json", by_alias=True) for item in store.leaves],
    }


def render_export(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def export_filename(timestamp_ms: int | None = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    return f"{EXPORT_FILE_PREFIX}{timestamp_ms}.json"


def write_export(document: dict, directory: str | Path, *, timestamp_ms: int | None = None) -> Path:
    """Write ``document`` under ``directory`` and return the file path.

    The file is written to a temporary name in the same directory and renamed into
    place, so readers never observe a partial export.
    """
    target_dir = Path(directory)
    target = target_dir / export_filename(timestamp_ms)
    content = render_export(document)

    temp_name: str | None = None
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target_dir,
            prefix=".export-",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, target)
    except OSError as exc:
        if temp_name is not None and os.path.exists(temp_name):
            os.unlink(temp_name)
        logger.error("Export to %s failed", target, exc_info=True)
        raise StorageError(f"Unable to write export file {target}", details={"path": str(target)}) from exc

    logger.info("Exported data to %s", target)
    return target

"""Export and import files for PlantLog.

An export file is the RecordStore.export_all() snapshot written as
indented JSON and named after the day it was taken. Import reads such a
file back and hands it to RecordStore.import_all().
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .core.types import Date
from .exceptions import MalformedImport
from .host.filesystem import ensure_dir

if TYPE_CHECKING:
    from .core import RecordStore

logger = logging.getLogger(__name__)

EXPORT_PREFIX = "succulent-records"


def export_filename(today: date | str) -> str:
    """Return the export file name for a given day.

    Examples:
        >>> export_filename("2024-01-05")
        'succulent-records_2024-01-05.json'
    """
    return f"{EXPORT_PREFIX}_{Date.coerce(today)}.json"


def write_export(store: "RecordStore", directory: str | Path | None = None) -> Path:
    """Write the store's export snapshot into directory.

    Args:
        store: Store to export
        directory: Target directory (created if missing); defaults to the
            configured export directory (Settings.export_dir)

    Returns:
        Path of the written file; an existing file of the same name is
        overwritten
    """
    if directory is None:
        from .config import Settings
        directory = Settings().export_dir

    snapshot = store.export_all()
    path = ensure_dir(directory) / export_filename(snapshot["exportDate"][:10])
    path.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info(
        "Exported %d plants and %d care records to %s",
        len(snapshot["plants"]), len(snapshot["careRecords"]), path
    )
    return path


def read_import(path: str | Path) -> dict[str, Any]:
    """Read and decode an import file.

    Args:
        path: File to read; must have a .json suffix

    Returns:
        The decoded JSON object

    Raises:
        MalformedImport: If the suffix is wrong, the body is not UTF-8 JSON, or
            the JSON document is not an object
        FileNotFoundError: If path does not exist
    """
    path = Path(path)
    if path.suffix.lower() != ".json":
        raise MalformedImport(
            f"Import file must be a .json file: {path.name}",
            {"path": str(path)}
        )

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise MalformedImport(
            f"Import file is not UTF-8 text: {e}",
            {"path": str(path)}
        ) from e
    except json.JSONDecodeError as e:
        raise MalformedImport(
            f"Import file is not valid JSON: {e}",
            {"path": str(path), "line": e.lineno, "column": e.colno}
        ) from e

    if not isinstance(data, dict):
        raise MalformedImport(
            "Import file must contain a JSON object",
            {"path": str(path), "type": type(data).__name__}
        )
    return data


def import_file(store: "RecordStore", path: str | Path) -> list[str]:
    """Import an export file into store.

    Returns:
        Names of the collections that were replaced
    """
    return store.import_all(read_import(path))

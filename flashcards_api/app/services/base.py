"""
Shared plumbing for the SQL-backed services.

Every service is constructed with the application's ``Database`` and
opens one connection per operation.  The helpers here keep the
translation of ``sqlite3`` errors and the construction of partial
``UPDATE`` statements in one place.
"""

import logging
import sqlite3
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel

from ..core.db import Database
from ..core.errors import FlashcardsError, StorageError, ValidationFailure

logger = logging.getLogger(__name__)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def like_pattern(term: str) -> str:
    """Turn ``term`` into a ``LIKE ... ESCAPE '\\'`` pattern matching it as a substring."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def patch_changes(patch: BaseModel) -> Dict[str, Any]:
    """Return the fields a client actually supplied.

    Absent keys and explicit ``null`` are both treated as "not supplied";
    an empty string is a real value.
    """
    changes = patch.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationFailure("no fields to update")
    return changes


def build_update(
    table: str, columns: Mapping[str, str], changes: Mapping[str, Any], row_id: str
) -> Tuple[str, Tuple[Any, ...]]:
    """Build ``UPDATE <table> SET ... WHERE id = ?`` from an allow-list.

    ``columns`` maps schema field names to column names.  Only its keys
    are ever placed in the SQL text; ``changes`` contributes parameters.
    """
    assignments = []
    params = []
    for field, column in columns.items():
        if field in changes:
            assignments.append(f"{column} = ?")
            params.append(changes[field])
    if not assignments:
        raise ValidationFailure("no fields to update")
    params.append(row_id)
    sql = f"UPDATE {table} SET {', '.join(assignments)} WHERE id = ?"
    return sql, tuple(params)


class BaseService:
    """Base class holding the database handle."""

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def storage_error(exc: sqlite3.Error) -> FlashcardsError:
        """Log a raw engine error and return the client-safe replacement."""
        logger.error("Database error: %s", exc)
        return StorageError()

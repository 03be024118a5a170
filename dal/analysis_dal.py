"""Async Data Access Layer for the ANALYSIS table.

Provides AnalysisDAL with async CRUD operations compatible with
`utils.database_init.AsyncDatabaseInitializer`. The free-form `result`
document is stored as JSON text.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

import aiosqlite

from models.analysis_record import AnalysisRecord
from utils.database_init import AsyncDatabaseInitializer
from utils.errors import StoreError

LOGGER = logging.getLogger(__name__)

LIST_LIMIT = 100


def _utc_now() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AnalysisDAL:
    """Data access layer for ANALYSIS records.

    The constructor accepts an `AsyncDatabaseInitializer` (or any object
    exposing an async `connection()` context manager that yields an
    `aiosqlite.Connection`). Driver errors are re-raised as `StoreError`.
    """

    _COLUMNS = (
        "id",
        "image_name",
        "result",
        "notes",
        "refer_to_derm",
        "created_at",
        "updated_at",
    )
    _COLUMN_LIST = ", ".join(_COLUMNS)

    # Maps updatable record attributes onto their columns.
    _UPDATABLE = {
        "image_name": "image_name",
        "result": "result",
        "notes": "notes",
        "refer_to_derm": "refer_to_derm",
    }

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def create_analysis(self, record: AnalysisRecord) -> AnalysisRecord:
        """Insert a new ANALYSIS row and return the stored record.

        Args:
            record: AnalysisRecord with `id=None`; id and timestamps are assigned here.

        Returns:
            The persisted record including its generated id and timestamps.
        """
        now = _utc_now()
        stored = AnalysisRecord(
            id=uuid4().hex,
            result=record.result,
            image_name=record.image_name,
            notes=record.notes,
            refer_to_derm=bool(record.refer_to_derm),
            created_at=now,
            updated_at=now,
        )
        try:
            async with self._db.connection() as conn:
                await conn.execute(
                    f"INSERT INTO ANALYSIS ({self._COLUMN_LIST}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        stored.id,
                        stored.image_name,
                        json.dumps(stored.result),
                        stored.notes,
                        int(stored.refer_to_derm),
                        stored.created_at,
                        stored.updated_at,
                    ),
                )
                await conn.commit()
        except (aiosqlite.Error, TypeError, ValueError) as exc:
            raise StoreError(str(exc)) from exc
        return stored

    async def list_analyses(self, limit: int = LIST_LIMIT) -> List[AnalysisRecord]:
        """List ANALYSIS rows, newest first, capped at `limit`."""
        try:
            async with self._db.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {self._COLUMN_LIST} FROM ANALYSIS "
                    "ORDER BY created_at DESC, rowid DESC LIMIT ?",
                    (limit,),
                )
                rows = await cur.fetchall()
        except aiosqlite.Error as exc:
            raise StoreError(str(exc)) from exc
        return [self._row_to_record(r) for r in rows]

    async def get_analysis_by_id(self, analysis_id: str) -> Optional[AnalysisRecord]:
        """Return the AnalysisRecord for `analysis_id`, or None if not found."""
        try:
            async with self._db.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {self._COLUMN_LIST} FROM ANALYSIS WHERE id = ?",
                    (analysis_id,),
                )
                row = await cur.fetchone()
        except aiosqlite.Error as exc:
            raise StoreError(str(exc)) from exc
        return self._row_to_record(row) if row else None

    async def update_analysis(self, analysis_id: str, changes: Dict[str, Any]) -> Optional[AnalysisRecord]:
        """Apply `changes` to an ANALYSIS row and return the updated record.

        Args:
            analysis_id: Identifier of the row to update.
            changes: Mapping of record attribute name to new value. Unknown keys are ignored.

        Returns:
            The updated record, or None when no row has that id.
        """
        fields = []
        params: List[Any] = []
        for attr, value in changes.items():
            column = self._UPDATABLE.get(attr)
            if column is None:
                continue
            if attr == "result":
                value = json.dumps(value)
            elif attr == "refer_to_derm":
                value = int(bool(value))
            fields.append(f"{column} = ?")
            params.append(value)

        fields.append("updated_at = ?")
        params.append(_utc_now())
        params.append(analysis_id)
        sql = f"UPDATE ANALYSIS SET {', '.join(fields)} WHERE id = ?"

        try:
            async with self._db.connection() as conn:
                await conn.execute(sql, tuple(params))
                await conn.commit()
                cur = await conn.execute("SELECT changes()")
                changed = await cur.fetchone()
                if not (changed and changed[0] > 0):
                    return None
                cur = await conn.execute(
                    f"SELECT {self._COLUMN_LIST} FROM ANALYSIS WHERE id = ?",
                    (analysis_id,),
                )
                row = await cur.fetchone()
        except (aiosqlite.Error, TypeError, ValueError) as exc:
            raise StoreError(str(exc)) from exc
        return self._row_to_record(row) if row else None

    async def delete_analysis(self, analysis_id: str) -> bool:
        """Delete ANALYSIS row by id. Returns True if a row was deleted."""
        try:
            async with self._db.connection() as conn:
                await conn.execute("DELETE FROM ANALYSIS WHERE id = ?", (analysis_id,))
                await conn.commit()
                cur = await conn.execute("SELECT changes()")
                changed = await cur.fetchone()
        except aiosqlite.Error as exc:
            raise StoreError(str(exc)) from exc
        return bool(changed and changed[0] > 0)

    @staticmethod
    def _row_to_record(row: Sequence[Any]) -> AnalysisRecord:
        """Convert a DB row tuple into an AnalysisRecord."""
        return AnalysisRecord(
            id=row[0],
            image_name=row[1],
            result=json.loads(row[2]),
            notes=row[3],
            refer_to_derm=bool(row[4]),
            created_at=row[5],
            updated_at=row[6],
        )

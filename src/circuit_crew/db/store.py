"""Document store used for exercises, people, settings and sessions."""

import json
import re
from pathlib import Path
from typing import Protocol

import aiosqlite

from .engine import get_db_path, init_db

_SORT_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Store(Protocol):
    """Per-owner collections of JSON documents."""

    async def fetch_all(
        self, owner_id: str, collection: str, sort_key: str | None = None
    ) -> list[dict]: ...

    async def get(self, owner_id: str, collection: str, doc_id: str) -> dict | None: ...

    async def save(self, owner_id: str, collection: str, doc_id: str, data: dict) -> None: ...

    async def remove(self, owner_id: str, collection: str, doc_id: str) -> None: ...


class SQLiteStore:
    """Store backed by a single SQLite ``documents`` table."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self._initialized = False

    async def _ensure_schema(self) -> None:
        if not self._initialized:
            await init_db(self.db_path)
            self._initialized = True

    async def fetch_all(
        self, owner_id: str, collection: str, sort_key: str | None = None
    ) -> list[dict]:
        """Fetch every document of a collection, ``id`` merged into each dict."""
        await self._ensure_schema()

        query = "SELECT doc_id, data FROM documents WHERE owner_id = ? AND collection = ?"
        params: tuple = (owner_id, collection)
        if sort_key:
            if not _SORT_KEY.match(sort_key):
                raise ValueError(f"Invalid sort key: {sort_key!r}")
            query += " ORDER BY json_extract(data, ?)"
            params += (f"$.{sort_key}",)

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()

        return [{**json.loads(row["data"]), "id": row["doc_id"]} for row in rows]

    async def get(self, owner_id: str, collection: str, doc_id: str) -> dict | None:
        """Fetch a single document or None."""
        await self._ensure_schema()

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT doc_id, data FROM documents
                WHERE owner_id = ? AND collection = ? AND doc_id = ?
                """,
                (owner_id, collection, doc_id),
            )
            row = await cursor.fetchone()

        if row is None:
            return None
        return {**json.loads(row["data"]), "id": row["doc_id"]}

    async def save(self, owner_id: str, collection: str, doc_id: str, data: dict) -> None:
        """Insert or replace a document."""
        await self._ensure_schema()

        payload = {k: v for k, v in data.items() if k != "id"}
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO documents (owner_id, collection, doc_id, data)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (owner_id, collection, doc_id)
                DO UPDATE SET data = excluded.data, updated_at = CURRENT_TIMESTAMP
                """,
                (owner_id, collection, doc_id, json.dumps(payload)),
            )
            await db.commit()

    async def remove(self, owner_id: str, collection: str, doc_id: str) -> None:
        """Delete a document (no error if it does not exist)."""
        await self._ensure_schema()

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "DELETE FROM documents WHERE owner_id = ? AND collection = ? AND doc_id = ?",
                (owner_id, collection, doc_id),
            )
            await db.commit()

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: JSON document store on top of SQLAlchemy.
Each row holds one document of a collection. NO business rules here.
"""

import json
from typing import Any, Callable, Optional

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import UpstreamFailure
from app.core.logging import get_logger

logger = get_logger(__name__)

_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS documents (
        collection  VARCHAR(255) NOT NULL,
        doc_id      VARCHAR(255) NOT NULL,
        seq         INTEGER      NOT NULL,
        data        TEXT         NOT NULL,
        PRIMARY KEY (collection, doc_id)
    )
"""


def deep_merge(base: dict[str, Any], partial: dict[str, Any]) -> dict[str, Any]:
    """Merge ``partial`` into a copy of ``base``; nested dicts merge per key."""
    merged = dict(base)
    for key, value in partial.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class DocumentStore:
    """Collections of JSON documents keyed by id."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def create_schema(self) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(text(_CREATE_TABLE))
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Could not create documents table: {exc}") from exc

    # ── Read ──

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    text("SELECT data FROM documents WHERE collection = :c AND doc_id = :id"),
                    {"c": collection, "id": doc_id},
                ).first()
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Read of {collection}/{doc_id} failed: {exc}") from exc
        return json.loads(row[0]) if row else None

    def list(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(
                    text("SELECT doc_id, data FROM documents WHERE collection = :c ORDER BY seq"),
                    {"c": collection},
                ).all()
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Read of {collection} failed: {exc}") from exc
        return [(r[0], json.loads(r[1])) for r in rows]

    def find_one(self, collection: str, field: str, value: Any) -> Optional[tuple[str, dict[str, Any]]]:
        """First document whose top-level ``field`` equals ``value``."""
        for doc_id, data in self.list(collection):
            if data.get(field) == value:
                return doc_id, data
        return None

    def verify_connection(self) -> int:
        try:
            with self._engine.connect() as conn:
                return conn.execute(text("SELECT COUNT(*) FROM documents")).scalar() or 0
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Store unreachable: {exc}") from exc

    # ── Write ──

    def put(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or fully replace a document."""
        try:
            with self._engine.begin() as conn:
                if self._locked_read(conn, collection, doc_id) is None:
                    self._insert(conn, collection, doc_id, data)
                else:
                    self._replace(conn, collection, doc_id, data)
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Write of {collection}/{doc_id} failed: {exc}") from exc

    def merge(self, collection: str, doc_id: str, partial: dict[str, Any]) -> dict[str, Any]:
        """Deep-merge ``partial`` into a document, creating it if absent.

        Read and write happen in one transaction with the row locked, so
        concurrent merges touching different nested keys all survive.
        """
        try:
            with self._engine.begin() as conn:
                current = self._locked_read(conn, collection, doc_id)
                if current is None:
                    merged = deep_merge({}, partial)
                    self._insert(conn, collection, doc_id, merged)
                else:
                    merged = deep_merge(current, partial)
                    self._replace(conn, collection, doc_id, merged)
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Merge into {collection}/{doc_id} failed: {exc}") from exc
        return merged

    def update_fields(self, collection: str, doc_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Set top-level fields on an existing document. Raises KeyError."""
        try:
            with self._engine.begin() as conn:
                current = self._locked_read(conn, collection, doc_id)
                if current is None:
                    raise KeyError(f"{collection}/{doc_id}")
                current.update(fields)
                self._replace(conn, collection, doc_id, current)
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Update of {collection}/{doc_id} failed: {exc}") from exc
        return current

    def merge_unless(
        self,
        collection: str,
        doc_id: str,
        partial: dict[str, Any],
        satisfied: Callable[[dict[str, Any]], bool],
    ) -> bool:
        """Deep-merge ``partial`` unless ``satisfied(current)`` already holds.

        Check and write share one transaction with the row locked, so of two
        concurrent callers only one gets True. A missing document counts as
        ``{}`` and is created.
        """
        try:
            with self._engine.begin() as conn:
                current = self._locked_read(conn, collection, doc_id)
                if satisfied(current or {}):
                    return False
                if current is None:
                    self._insert(conn, collection, doc_id, deep_merge({}, partial))
                else:
                    self._replace(conn, collection, doc_id, deep_merge(current, partial))
        except SQLAlchemyError as exc:
            raise UpstreamFailure(f"Conditional merge into {collection}/{doc_id} failed: {exc}") from exc
        return True

    # ── Helpers ──

    def _locked_read(self, conn: Connection, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        lock = "" if self._engine.dialect.name == "sqlite" else " FOR UPDATE"
        row = conn.execute(
            text(f"SELECT data FROM documents WHERE collection = :c AND doc_id = :id{lock}"),
            {"c": collection, "id": doc_id},
        ).first()
        return json.loads(row[0]) if row else None

    @staticmethod
    def _insert(conn: Connection, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        seq = conn.execute(
            text("SELECT COALESCE(MAX(seq), 0) + 1 FROM documents WHERE collection = :c"),
            {"c": collection},
        ).scalar()
        conn.execute(
            text("INSERT INTO documents (collection, doc_id, seq, data) VALUES (:c, :id, :seq, :data)"),
            {"c": collection, "id": doc_id, "seq": seq, "data": json.dumps(data)},
        )

    @staticmethod
    def _replace(conn: Connection, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        conn.execute(
            text("UPDATE documents SET data = :data WHERE collection = :c AND doc_id = :id"),
            {"c": collection, "id": doc_id, "data": json.dumps(data)},
        )

    # ── Bulk / internal ──

    def clear(self) -> None:
        with self._engine.begin() as conn:
            conn.execute(text("DELETE FROM documents"))

    def dispose(self) -> None:
        """Close pooled connections; called on application shutdown."""
        self._engine.dispose()

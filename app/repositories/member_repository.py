# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Member document access.
Full-collection reads and single-member partial updates.
"""

from typing import Any, Optional

from app.core.config import settings
from app.models.domain import Member
from app.repositories.document_store import DocumentStore


class MemberRepository:
    """Typed access to ``clans/<clan_id>/members``."""

    def __init__(self, store: DocumentStore, clan_id: str = settings.CLAN_ID) -> None:
        self._store = store
        self._collection = f"clans/{clan_id}/members"

    # ── Read ──

    def list_members(self) -> list[Member]:
        return [Member.from_document(doc_id, doc) for doc_id, doc in self._store.list(self._collection)]

    def find_by_umid(self, umid: str) -> Optional[tuple[str, dict[str, Any]]]:
        return self._store.find_one(self._collection, "umid", umid)

    # ── Write ──

    def save(self, doc_id: str, doc: dict[str, Any]) -> None:
        self._store.put(self._collection, doc_id, doc)

    def update_fields(self, doc_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        return self._store.update_fields(self._collection, doc_id, fields)

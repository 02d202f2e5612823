# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Clan settings document access.
Point lookup and partial merge-update of the singleton settings document.
"""

from typing import Any, Optional

from app.core.config import settings
from app.models.domain import ClanSettings
from app.repositories.document_store import DocumentStore

WEEK_MARKERS = "lastReminderSentForWeek"
YEAR_MARKERS = "lastReminderSentForYear"


class SettingsRepository:
    """Typed access to ``clans/<clan_id>``."""

    def __init__(self, store: DocumentStore, clan_id: str = settings.CLAN_ID) -> None:
        self._store = store
        self._collection = "clans"
        self._doc_id = clan_id

    # ── Read ──

    def get_raw(self) -> Optional[dict[str, Any]]:
        return self._store.get(self._collection, self._doc_id)

    def get(self) -> Optional[ClanSettings]:
        doc = self.get_raw()
        return ClanSettings.from_document(doc) if doc is not None else None

    # ── Write ──

    def merge(self, partial: dict[str, Any]) -> dict[str, Any]:
        return self._store.merge(self._collection, self._doc_id, partial)

    def claim_week(self, boss_key: str, week: int, year: int) -> bool:
        """Record ``boss_key`` as reminded for ISO ``week`` of ``year``.

        Returns False when that week is already recorded. A stored week with
        no year counts as the current year.
        """
        def already_recorded(doc: dict[str, Any]) -> bool:
            weeks = doc.get(WEEK_MARKERS)
            years = doc.get(YEAR_MARKERS)
            weeks = weeks if isinstance(weeks, dict) else {}
            years = years if isinstance(years, dict) else {}
            return weeks.get(boss_key) == week and years.get(boss_key, year) == year

        return self._store.merge_unless(
            self._collection,
            self._doc_id,
            {WEEK_MARKERS: {boss_key: week}, YEAR_MARKERS: {boss_key: year}},
            already_recorded,
        )

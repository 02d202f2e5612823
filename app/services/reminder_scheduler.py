# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Reminder scheduler — the periodic tick.

Per boss type: Idle -> Due (schedule window hit, not yet sent this week)
-> Claimed (week marker stored atomically) -> Sent (dispatch attempted)
-> Idle once the week changes. Only the tick whose claim succeeds sends,
so overlapping ticks stay at-most-once per week.
"""

from datetime import datetime
from typing import Any, Optional

from app.core.exceptions import UpstreamFailure
from app.core.logging import get_logger
from app.metrics.prometheus import REMINDER_TICKS, REMINDERS_DISPATCHED
from app.models.domain import BOSS_TYPES, BossType, ClanSettings, Member
from app.repositories.member_repository import MemberRepository
from app.repositories.settings_repository import SettingsRepository
from app.services.composer import compose
from app.services.eligibility import missing_members
from app.services.webhook_dispatcher import WebhookDispatcher
from app.services.week_index import clan_timezone, iso_year, to_clan_time, week_index

logger = get_logger(__name__)


def day_of_week(ts: datetime) -> int:
    """0=Sunday .. 6=Saturday."""
    return (ts.weekday() + 1) % 7


def schedule_matches(clan: ClanSettings, boss: BossType, local_now: datetime) -> bool:
    """True from the scheduled minute until the end of that hour on the scheduled day."""
    schedule = clan.schedule_for(boss)
    if not schedule.is_complete:
        return False
    return (
        day_of_week(local_now) == schedule.day
        and local_now.hour == schedule.hour
        and local_now.minute >= schedule.minute
    )


def resolve_lead_names(clan: ClanSettings, members: list[Member]) -> list[str]:
    names = {m.id: m.name for m in members}
    return [names.get(lead, lead) for lead in clan.clan_leads]


class ReminderScheduler:
    """Decides, composes and sends the weekly boss-key reminders."""

    def __init__(
        self,
        settings_repo: SettingsRepository,
        member_repo: MemberRepository,
        dispatcher: WebhookDispatcher,
    ) -> None:
        self._settings = settings_repo
        self._members = member_repo
        self._dispatcher = dispatcher

    # ── Tick ──

    async def run_tick(self, now: Optional[datetime] = None) -> list[dict[str, Any]]:
        """Evaluate every boss type once. Never raises."""
        REMINDER_TICKS.inc()
        local_now = to_clan_time(now) if now else datetime.now(clan_timezone())

        try:
            clan = self._settings.get()
        except Exception as exc:
            logger.exception("Reminder tick aborted, settings unreadable: %s", exc)
            return []
        if clan is None:
            logger.warning("Reminder tick skipped: no clan settings document")
            return []
        if not clan.auto_reminders_enabled:
            logger.info("Reminder tick skipped: automatic reminders disabled")
            return []

        week, year = week_index(local_now), iso_year(local_now)
        members: Optional[list[Member]] = None
        outcomes: list[dict[str, Any]] = []

        for boss in BOSS_TYPES:
            if not clan.schedule_for(boss).is_complete:
                logger.warning(
                    "No complete reminder schedule for %s", boss.key, extra={"boss": boss.key}
                )
                outcomes.append(self._outcome(boss, "idle", week))
                continue
            if not schedule_matches(clan, boss, local_now) or clan.already_reminded(boss, week, year):
                outcomes.append(self._outcome(boss, "idle", week))
                continue

            if members is None:
                try:
                    members = self._members.list_members()
                except Exception as exc:
                    logger.exception("Could not load members: %s", exc, extra={"boss": boss.key})
                    REMINDERS_DISPATCHED.labels(boss=boss.key, status="error").inc()
                    outcomes.append(self._outcome(boss, "error", week, error=str(exc)))
                    continue

            try:
                claimed = self._settings.claim_week(boss.key, week, year)
            except Exception as exc:
                logger.exception("Could not store reminder week marker: %s", exc, extra={"boss": boss.key})
                REMINDERS_DISPATCHED.labels(boss=boss.key, status="error").inc()
                outcomes.append(self._outcome(boss, "error", week, error=str(exc)))
                continue
            if not claimed:
                logger.info(
                    "%s reminder for week %d already claimed", boss.display_name, week,
                    extra={"boss": boss.key, "week": week},
                )
                outcomes.append(self._outcome(boss, "idle", week))
                continue

            outcomes.append(await self._send_due(clan, boss, members, local_now, week))

        return outcomes

    async def _send_due(
        self,
        clan: ClanSettings,
        boss: BossType,
        members: list[Member],
        local_now: datetime,
        week: int,
    ) -> dict[str, Any]:
        log_ctx = {"boss": boss.key, "week": week}
        missing = missing_members(members, boss, local_now)
        error: Optional[str] = None

        if not missing:
            logger.info("All caught up on %s keys, nothing to send", boss.key, extra=log_ctx)
            status = "all_caught_up"
        else:
            message = compose(missing, boss, resolve_lead_names(clan, members))
            try:
                result = await self._dispatcher.send(clan.webhook_url, message)
                status = "sent" if result.status == "sent" else "not_configured"
                logger.info(
                    "%s reminder %s for %d members", boss.display_name, status, len(missing),
                    extra=log_ctx,
                )
            except UpstreamFailure as exc:
                status, error = "dispatch_failed", str(exc)
                logger.error("%s reminder dispatch failed: %s", boss.display_name, exc, extra=log_ctx)

        REMINDERS_DISPATCHED.labels(boss=boss.key, status=status).inc()
        return self._outcome(boss, status, week, missing=len(missing), error=error)

    # ── Manual operations ──

    def preview(self, boss: BossType, now: Optional[datetime] = None) -> dict[str, Any]:
        """Compose the reminder for ``boss`` without sending anything."""
        return self._draft(boss, now)[1]

    async def send_now(self, boss: BossType, now: Optional[datetime] = None) -> dict[str, Any]:
        """Send a reminder immediately. Leaves the weekly marker untouched."""
        clan, preview = self._draft(boss, now)
        if preview["message"] is None:
            logger.info("Manual %s reminder skipped: all caught up", boss.key, extra={"boss": boss.key})
            return {**preview, "status": "all_caught_up"}
        result = await self._dispatcher.send(clan.webhook_url, preview["message"])
        status = "sent" if result.status == "sent" else "not_configured"
        REMINDERS_DISPATCHED.labels(boss=boss.key, status=f"manual_{status}").inc()
        logger.info("Manual %s reminder %s", boss.key, status, extra={"boss": boss.key})
        return {**preview, "status": status}

    def _draft(self, boss: BossType, now: Optional[datetime]) -> tuple[ClanSettings, dict[str, Any]]:
        local_now = to_clan_time(now) if now else datetime.now(clan_timezone())
        clan = self._settings.get() or ClanSettings()
        members = self._members.list_members()
        missing = missing_members(members, boss, local_now)
        return clan, {
            "boss": boss.key,
            "week": week_index(local_now),
            "missing": [m.name for m in missing],
            "message": compose(missing, boss, resolve_lead_names(clan, members)) if missing else None,
        }

    @staticmethod
    def _outcome(boss: BossType, status: str, week: int, **extra: Any) -> dict[str, Any]:
        outcome: dict[str, Any] = {"boss": boss.key, "status": status, "week": week}
        outcome.update({k: v for k, v in extra.items() if v is not None})
        return outcome

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
Parsed from the raw settings / member documents held in the store.
"""

from datetime import date
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ── Boss types ──

class BossType(BaseModel):
    """A boss encounter members spend keys on."""
    model_config = ConfigDict(frozen=True)

    key: str
    display_name: str
    max_keys: int = Field(..., ge=1)
    count_field: str
    manual_field: str
    remaining_param: str


BOSS_TYPES: tuple[BossType, ...] = (
    BossType(
        key="hydra",
        display_name="Hydra",
        max_keys=3,
        count_field="hydraKeysCount",
        manual_field="hydraManualCompletion",
        remaining_param="hydraKeysRemaining",
    ),
    BossType(
        key="chimera",
        display_name="Chimera",
        max_keys=2,
        count_field="chimeraKeysCount",
        manual_field="chimeraManualCompletion",
        remaining_param="chimeraKeysRemaining",
    ),
)


def get_boss_type(key: str) -> BossType:
    """Look up a boss type by key. Raises KeyError."""
    for boss in BOSS_TYPES:
        if boss.key == key:
            return boss
    raise KeyError(f"Unknown boss type '{key}'")


# ── Clan settings ──

class ReminderSchedule(BaseModel):
    """Weekly reminder slot. ``day`` is 0=Sunday .. 6=Saturday."""
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return None not in (self.day, self.hour, self.minute)

    @classmethod
    def from_document(cls, raw: Any) -> "ReminderSchedule":
        """Parse ``{"day": 2, "time": "19:30"}``; bad parts are left unset."""
        if not isinstance(raw, dict):
            return cls()
        day = raw.get("day")
        if isinstance(day, str) and day.strip().isdigit():
            day = int(day)
        if not isinstance(day, int) or isinstance(day, bool) or not 0 <= day <= 6:
            day = None

        hour = minute = None
        time_str = raw.get("time")
        if isinstance(time_str, str) and ":" in time_str:
            h, _, m = time_str.strip().partition(":")
            if h.isdigit() and m.isdigit() and int(h) < 24 and int(m) < 60:
                hour, minute = int(h), int(m)
        return cls(day=day, hour=hour, minute=minute)


class ClanSettings(BaseModel):
    """The clan's singleton settings document."""
    webhook_url: Optional[str] = None
    auto_reminders_enabled: bool = False
    schedules: dict[str, ReminderSchedule] = Field(default_factory=dict)
    last_sent_week: dict[str, int] = Field(default_factory=dict)
    last_sent_year: dict[str, int] = Field(default_factory=dict)
    clan_leads: list[str] = Field(default_factory=list)

    def schedule_for(self, boss: BossType) -> ReminderSchedule:
        return self.schedules.get(boss.key, ReminderSchedule())

    def already_reminded(self, boss: BossType, week: int, year: int) -> bool:
        """A marker without a year is taken to be from the current year."""
        return (
            self.last_sent_week.get(boss.key) == week
            and self.last_sent_year.get(boss.key, year) == year
        )

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "ClanSettings":
        raw_schedules = doc.get("reminderSchedules") or {}
        return cls(
            webhook_url=doc.get("webhookUrl") or None,
            auto_reminders_enabled=doc.get("autoRemindersEnabled") is True,
            schedules={
                key: ReminderSchedule.from_document(value)
                for key, value in raw_schedules.items()
            },
            last_sent_week=_int_markers(doc.get("lastReminderSentForWeek")),
            last_sent_year=_int_markers(doc.get("lastReminderSentForYear")),
            clan_leads=[str(lead) for lead in doc.get("clanLeads") or []],
        )


def _int_markers(raw: Any) -> dict[str, int]:
    if not isinstance(raw, dict):
        return {}
    return {
        key: value for key, value in raw.items()
        if isinstance(value, int) and not isinstance(value, bool)
    }


# ── Members ──

class CountedKeys(BaseModel):
    """Keys tracked by the helper app: number of keys already used."""
    kind: Literal["counted"] = "counted"
    used: int = 0


class ManualCompletion(BaseModel):
    """No helper tracking: a lead ticks the member off by hand."""
    kind: Literal["manual"] = "manual"
    done: bool = False


KeyTracking = Union[CountedKeys, ManualCompletion]


class VacationWindow(BaseModel):
    start: date
    end: date

    def covers(self, day: date) -> bool:
        return self.start <= day <= self.end


class Member(BaseModel):
    """A clan member as the reminder engine sees it."""
    id: str
    name: str
    discord_id: Optional[str] = None
    umid: Optional[str] = None
    vacation: Optional[VacationWindow] = None
    tracking: dict[str, KeyTracking] = Field(default_factory=dict)

    def tracking_for(self, boss: BossType) -> KeyTracking:
        if boss.key in self.tracking:
            return self.tracking[boss.key]
        return CountedKeys() if self.umid else ManualCompletion()

    @classmethod
    def from_document(cls, doc_id: str, doc: dict[str, Any]) -> "Member":
        umid = doc.get("umid") or None
        tracking: dict[str, KeyTracking] = {}
        for boss in BOSS_TYPES:
            if umid:
                used = doc.get(boss.count_field, 0)
                tracking[boss.key] = CountedKeys(used=used if isinstance(used, int) else 0)
            else:
                tracking[boss.key] = ManualCompletion(done=bool(doc.get(boss.manual_field, False)))

        discord_id = doc.get("discordId")
        return cls(
            id=doc_id,
            name=doc.get("name") or doc_id,
            discord_id=str(discord_id) if discord_id is not None else None,
            umid=str(umid) if umid else None,
            vacation=_parse_vacation(doc.get("vacation")),
            tracking=tracking,
        )


def _parse_vacation(raw: Any) -> Optional[VacationWindow]:
    if not isinstance(raw, dict) or not raw.get("start") or not raw.get("end"):
        return None
    try:
        return VacationWindow(start=str(raw["start"])[:10], end=str(raw["end"])[:10])
    except ValueError:
        return None

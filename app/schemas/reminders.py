# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

from typing import Optional

from pydantic import BaseModel


# ── Key update ──

class KeyUpdateResponse(BaseModel):
    status: str
    member_id: str
    updated: dict[str, int]


# ── Reminders ──

class ReminderOutcome(BaseModel):
    boss: str
    status: str
    week: int
    missing: Optional[int] = None
    error: Optional[str] = None


class TickResponse(BaseModel):
    outcomes: list[ReminderOutcome]


class ReminderPreview(BaseModel):
    boss: str
    week: int
    missing: list[str]
    message: Optional[str] = None


class ManualReminderResponse(ReminderPreview):
    status: str

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Reminder endpoints — run a tick, preview, manual send.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_reminder_scheduler
from app.core.exceptions import UpstreamFailure
from app.models.domain import BossType, get_boss_type
from app.schemas.reminders import ManualReminderResponse, ReminderPreview, TickResponse
from app.services.reminder_scheduler import ReminderScheduler

router = APIRouter(prefix="/api/v1/reminders", tags=["Reminders"])


def _boss_or_404(boss: str) -> BossType:
    try:
        return get_boss_type(boss)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown boss type '{boss}'")


@router.post("/tick", response_model=TickResponse)
async def run_tick(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    """Run one scheduler tick now, exactly as the periodic job would."""
    return {"outcomes": await scheduler.run_tick()}


@router.get("/{boss}/preview", response_model=ReminderPreview)
def preview_reminder(
    boss: str,
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
):
    """Show who would be reminded and the message text."""
    return scheduler.preview(_boss_or_404(boss))


@router.post("/{boss}/send", response_model=ManualReminderResponse)
async def send_reminder(
    boss: str,
    scheduler: ReminderScheduler = Depends(get_reminder_scheduler),
):
    """Send a reminder right away. Does not count as this week's automatic send."""
    boss_type = _boss_or_404(boss)
    try:
        return await scheduler.send_now(boss_type)
    except UpstreamFailure as e:
        raise HTTPException(status_code=502, detail=str(e))

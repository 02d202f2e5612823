# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Eligibility — which members still owe keys for a boss type.
"""

from datetime import date, datetime
from typing import Iterable, Union

from app.models.domain import BossType, CountedKeys, ManualCompletion, Member


def is_on_vacation(member: Member, reference_date: date) -> bool:
    return member.vacation is not None and member.vacation.covers(reference_date)


def has_open_keys(member: Member, boss: BossType) -> bool:
    tracking = member.tracking_for(boss)
    if isinstance(tracking, CountedKeys):
        return tracking.used < boss.max_keys
    if isinstance(tracking, ManualCompletion):
        return not tracking.done
    raise TypeError(f"Unsupported key tracking: {type(tracking).__name__}")


def missing_members(
    members: Iterable[Member],
    boss: BossType,
    reference_date: Union[date, datetime],
) -> list[Member]:
    """Members with unused keys, in input order. Vacationers are always skipped."""
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()
    return [
        m for m in members
        if not is_on_vacation(m, reference_date) and has_open_keys(m, boss)
    ]

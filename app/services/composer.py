# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Reminder message composition.
Splits missing members into pingable chat mentions and a name-only list.
"""

import re
from typing import Sequence

from app.models.domain import BossType, Member

MENTION_ID_PATTERN = re.compile(r"\d{17,19}", re.ASCII)


def is_mentionable(member: Member) -> bool:
    return bool(member.discord_id) and MENTION_ID_PATTERN.fullmatch(member.discord_id) is not None


def partition_members(members: Sequence[Member]) -> tuple[list[Member], list[Member]]:
    """Return (mentionable, name_only), both in input order."""
    mentionable: list[Member] = []
    name_only: list[Member] = []
    for member in members:
        (mentionable if is_mentionable(member) else name_only).append(member)
    return mentionable, name_only


def compose(missing: Sequence[Member], boss: BossType, clan_leads: Sequence[str]) -> str:
    """Build the reminder text for members that still have keys left."""
    mentionable, name_only = partition_members(missing)

    lines = [
        f"**{boss.display_name} reminder**",
        f"These members still have {boss.display_name} keys left:",
    ]
    if mentionable:
        lines.append(" ".join(f"<@{m.discord_id}>" for m in mentionable))
    if name_only:
        lines.append("")
        lines.append("No ping: " + ", ".join(m.name for m in name_only))

    lines.append("")
    if clan_leads:
        lines.append("Sent on behalf of the clan leads: " + ", ".join(clan_leads))
    else:
        lines.append("Sent on behalf of the clan leads")
    return "\n".join(lines)

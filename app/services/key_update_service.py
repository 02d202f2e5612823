# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Key updates pushed by the helper app.
The helper reports REMAINING keys; the store keeps USED keys.
"""

from typing import Any, Mapping, Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging import get_logger
from app.metrics.prometheus import KEY_UPDATES
from app.models.domain import BOSS_TYPES, BossType
from app.repositories.member_repository import MemberRepository

logger = get_logger(__name__)


def used_from_remaining(boss: BossType, raw: Optional[str]) -> Optional[int]:
    """``max - remaining`` for a valid integer in ``[0, max]``, else None."""
    if raw is None:
        return None
    try:
        remaining = int(str(raw).strip())
    except ValueError:
        return None
    if not 0 <= remaining <= boss.max_keys:
        return None
    return boss.max_keys - remaining


class KeyUpdateService:
    """Converts helper reports into used-key counts on the member document."""

    def __init__(self, member_repo: MemberRepository) -> None:
        self._members = member_repo

    def apply(self, umid: Optional[str], remaining: Mapping[str, Optional[str]]) -> dict[str, Any]:
        """Update the member with ``umid``. Raises ValidationError / NotFoundError."""
        if not umid or not umid.strip():
            KEY_UPDATES.labels(result="invalid").inc()
            logger.warning("Missing umid parameter")
            raise ValidationError("Missing 'umid' parameter.")
        umid = umid.strip()

        match = self._members.find_by_umid(umid)
        if match is None:
            KEY_UPDATES.labels(result="not_found").inc()
            logger.warning("No member found with umid %s", umid, extra={"umid": umid})
            raise NotFoundError(f"No member found with umid {umid}.")
        member_id, _ = match

        to_update: dict[str, int] = {}
        for boss in BOSS_TYPES:
            raw = remaining.get(boss.remaining_param)
            used = used_from_remaining(boss, raw)
            if used is not None:
                to_update[boss.count_field] = used
            elif raw is not None:
                logger.info(
                    "Ignoring %s=%r, expected 0..%d", boss.remaining_param, raw, boss.max_keys,
                    extra={"member_id": member_id},
                )

        if not to_update:
            KEY_UPDATES.labels(result="no_change").inc()
            logger.info("No valid data to update for member %s", member_id, extra={"member_id": member_id})
            return {"status": "no_change", "member_id": member_id, "updated": {}}

        self._members.update_fields(member_id, to_update)
        KEY_UPDATES.labels(result="updated").inc()
        logger.info("Updated member %s: %s", member_id, to_update, extra={"member_id": member_id})
        return {"status": "updated", "member_id": member_id, "updated": to_update}

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Webhook dispatcher — the single outbound chat POST.
One attempt per call, bounded by a timeout. No retries.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from app.core.config import settings
from app.core.exceptions import UpstreamFailure
from app.core.logging import get_logger
from app.metrics.prometheus import WEBHOOK_DURATION

logger = get_logger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    status: str  # "sent" | "skipped"
    http_status: Optional[int] = None


class WebhookDispatcher:
    """Posts ``{content, username}`` to the clan's chat webhook."""

    def __init__(
        self,
        username: str = settings.WEBHOOK_USERNAME,
        timeout: float = settings.WEBHOOK_TIMEOUT,
    ) -> None:
        self._username = username
        self._timeout = timeout

    async def send(self, webhook_url: Optional[str], message: str) -> DispatchResult:
        """Deliver ``message``. Raises UpstreamFailure on non-2xx or transport error."""
        if not webhook_url or not webhook_url.strip():
            logger.info("Webhook URL not configured, skipping dispatch")
            return DispatchResult(status="skipped")

        payload = {"content": message.strip(), "username": self._username}
        try:
            with WEBHOOK_DURATION.time():
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(webhook_url.strip(), json=payload)
        except httpx.TimeoutException as exc:
            raise UpstreamFailure(f"Webhook timed out after {self._timeout}s") from exc
        except httpx.HTTPError as exc:
            raise UpstreamFailure(f"Webhook request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise UpstreamFailure(f"Webhook returned HTTP {resp.status_code}: {resp.text[:200]}")

        logger.info("Webhook delivered (status=%d)", resp.status_code)
        return DispatchResult(status="sent", http_status=resp.status_code)

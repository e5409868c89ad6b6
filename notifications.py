"""Order webhook notifications."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nameplate_errors import NotificationError

logger = logging.getLogger(__name__)

# Default timeout (in seconds) for webhook requests.
DEFAULT_TIMEOUT = 10.0


class WebhookNotifier:
    """POSTs an order summary as JSON to a configured URL."""

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = (url or "").strip()
        self.timeout = timeout
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def notify(self, summary: dict[str, Any]) -> None:
        """Deliver ``summary``; raise :class:`NotificationError` on failure."""

        if not self.enabled:
            logger.info("[Webhook] No webhook configured; skipping notification")
            return

        try:
            if self._client is not None:
                response = self._client.post(self.url, json=summary, timeout=self.timeout)
            else:
                with httpx.Client(timeout=httpx.Timeout(self.timeout)) as client:
                    response = client.post(self.url, json=summary)
        except httpx.HTTPError as exc:
            raise NotificationError(f"Webhook request failed: {exc}") from exc

        if not response.is_success:
            content = response.text[:200]
            raise NotificationError(
                f"Webhook returned {response.status_code}: {content}"
            )
        logger.info(f"[Webhook] Delivered summary for {summary.get('refId')}")

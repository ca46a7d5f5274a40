from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


class ConnectivityProbe:
    """Answers "are we online?" with one short request; `force_offline` skips the network."""

    def __init__(
        self,
        probe_url: str,
        timeout_seconds: float = 3.0,
        force_offline: bool = False,
    ) -> None:
        self.probe_url = probe_url
        self.timeout_seconds = timeout_seconds
        self.force_offline = force_offline

    async def is_online(self) -> bool:
        if self.force_offline:
            return False
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
                await client.head(self.probe_url)
        except httpx.HTTPError as error:
            logger.warning("Connectivity probe to %s failed: %s", self.probe_url, error)
            return False
        return True

import logging

import httpx

from jobbot.errors import FetchTimeoutError, TransportError

logger = logging.getLogger(__name__)


class Fetcher:
    """Single-attempt HTTP GET. Retrying is left to the caller."""

    def __init__(
        self,
        user_agent: str,
        timeout: float,
        accept: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout = timeout
        self._headers = {"User-Agent": user_agent}
        if accept:
            self._headers["Accept"] = accept
        self._transport = transport

    def fetch(self, url: str) -> str:
        try:
            with httpx.Client(
                timeout=self.timeout,
                headers=self._headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
        except httpx.TimeoutException as exc:
            logger.warning("GET %s timed out after %.0fs", url, self.timeout)
            raise FetchTimeoutError(f"Timed out after {self.timeout:.0f}s") from exc
        except httpx.HTTPError as exc:
            logger.warning("GET %s failed: %s", url, exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            logger.info("GET %s -> %s", url, response.status_code)
            raise TransportError(
                f"HTTP {response.status_code}", upstream_status=response.status_code
            )
        return response.text

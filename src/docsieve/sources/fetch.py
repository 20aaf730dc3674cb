"""HTTP transport for the remote documentation corpus."""

from __future__ import annotations

import logging
import time

import httpx

from docsieve.constants import DEFAULT_FETCH_TIMEOUT

logger = logging.getLogger(__name__)


class DocsFetcher:
    """Fetch one text document over HTTP. Fail-fast, no retry."""

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        self.url = url
        self._owns_client = client is None
        self._http = client if client is not None else httpx.Client(
            timeout=timeout, follow_redirects=True,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this fetcher created it."""
        if self._owns_client:
            self._http.close()

    def fetch(self) -> str:
        """Return the document text. Raises RuntimeError on any HTTP failure."""
        start = time.monotonic()
        try:
            response = self._http.get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RuntimeError(f"Failed to fetch docs from {self.url}: {e}") from e

        text = response.text
        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info("Fetched %d chars from %s in %dms", len(text), self.url, elapsed_ms)
        return text

"""Download the published model lifecycle document."""

import http.client
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Optional

from config.settings import LIFECYCLE_FETCH_TIMEOUT

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The lifecycle document could not be retrieved."""

    def __init__(self, url: str, cause: Exception, status: Optional[int] = None):
        self.url = url
        self.cause = cause
        self.status = status
        super().__init__(f"Failed to fetch {url}: {cause}")


@dataclass
class FetchResult:
    """Outcome of a single fetch: either ``text`` or ``error`` is meaningful."""

    url: str
    text: str = ""
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DocumentFetcher:
    """Retrieve a text document over HTTP(S) with one best-effort request.

    Failures never propagate as exceptions; they come back as a
    ``FetchResult`` carrying a ``FetchError``. There is no retry and no
    local caching.
    """

    def __init__(self, timeout: int = LIFECYCLE_FETCH_TIMEOUT):
        self.timeout = timeout

    def fetch(self, url: str) -> FetchResult:
        if not url:
            return FetchResult(url=url, error=FetchError(url, ValueError("no URL configured")))

        req = urllib.request.Request(
            url, headers={"User-Agent": "ai-deployment-inventory/0.1"}, method="GET"
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                status = getattr(resp, "status", 200)
                if status >= 400:
                    return FetchResult(
                        url=url,
                        error=FetchError(url, RuntimeError(f"HTTP {status}"), status=status),
                    )
                body = resp.read()
        except urllib.error.HTTPError as e:
            return FetchResult(url=url, error=FetchError(url, e, status=e.code))
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            # URLError covers DNS/connection failures; socket timeouts surface as OSError.
            # HTTPException covers bad ports (InvalidURL) and truncated bodies (IncompleteRead).
            return FetchResult(url=url, error=FetchError(url, e))

        text = body.decode("utf-8", errors="replace")
        logger.debug("Fetched %d bytes from %s", len(body), url)
        return FetchResult(url=url, text=text)

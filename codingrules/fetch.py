"""Retrieval of canonical coding-rule files from a remote distribution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .logging import get_logger

GIT_RAW_CONTENT_URL = "https://raw.githubusercontent.com"
GITHUB_PREFIX = "https://github.com"


class FetchError(RuntimeError):
    """Raised when a remote resource cannot be retrieved."""


@dataclass
class FetchRequest:
    """Represents a single text download."""

    url: str
    timeout: Optional[float]


class RemoteFetcher:
    """Downloads text resources over HTTP(S)."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Callable[[FetchRequest], str] | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport or self._http_transport
        self.logger = get_logger("fetch")

    def fetch(self, url: str) -> str:
        """Return the text found at ``url``."""
        self.logger.debug("Fetching %s", display_name(url))
        return self._transport(FetchRequest(url=url, timeout=self.timeout))

    @staticmethod
    def _http_transport(request: FetchRequest) -> str:
        http_request = Request(request.url, headers={"Accept": "text/plain"}, method="GET")
        timeout = request.timeout or RemoteFetcher.DEFAULT_TIMEOUT

        try:
            with urlopen(http_request, timeout=timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:  # pragma: no cover - depends on network
            raise FetchError(
                f"Unable to fetch {display_name(request.url)}: HTTP {exc.code} {exc.reason}"
            ) from exc
        except URLError as exc:  # pragma: no cover - depends on network
            raise FetchError(f"Unable to fetch {display_name(request.url)}: {exc.reason}") from exc

        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise FetchError(f"{display_name(request.url)} is not valid UTF-8 text") from exc


def display_name(url: str) -> str:
    """Render a raw-content URL as its browsable GitHub location."""
    return url.replace(GIT_RAW_CONTENT_URL, GITHUB_PREFIX)


__all__ = ["FetchError", "FetchRequest", "RemoteFetcher", "display_name"]

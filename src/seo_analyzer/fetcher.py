"""HTTP fetcher for the primary page and its auxiliary resources.

HTTP error statuses are data, not failures: fetch() returns the body of a
404 like any other page. Only transport-level problems raise FetchError.
"""

import logging
import time
from typing import Optional

import httpx

from seo_analyzer.config import Config
from seo_analyzer.constants import HEAD_NOT_SUPPORTED_CODES
from seo_analyzer.exceptions import FetchError
from seo_analyzer.models import FetchOutcome, PerformanceFacts, ProbeResult

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Async fetcher sharing one httpx client for a whole analysis run."""

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the fetcher.

        Args:
            config: Analyzer configuration (timeouts, redirect cap, user agent)
            transport: Optional httpx transport, used to fake the network in tests
        """
        self.config = config or Config()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpFetcher":
        self._client = httpx.AsyncClient(
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.9",
            },
            follow_redirects=True,
            max_redirects=self.config.max_redirects,
            timeout=self.config.page_timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("HttpFetcher must be used as an async context manager")
        return self._client

    async def fetch(self, url: str, timeout: Optional[float] = None) -> FetchOutcome:
        """GET a page and record performance facts.

        Args:
            url: Absolute URL to fetch
            timeout: Override for the page timeout, in seconds

        Returns:
            FetchOutcome with the raw body regardless of status code

        Raises:
            FetchError: On DNS, connect, timeout or reset failures, or when
                the redirect cap is exceeded
        """
        timeout = timeout if timeout is not None else self.config.page_timeout
        start_time = time.perf_counter()
        try:
            response = await self.client.get(url, timeout=timeout)
        except httpx.TooManyRedirects:
            raise FetchError(
                f"Exceeded maximum of {self.config.max_redirects} redirects", url=url
            )
        except httpx.TimeoutException:
            raise FetchError(f"Request timeout after {timeout}s", url=url)
        except httpx.HTTPError as e:
            raise FetchError(f"Connection error: {type(e).__name__}: {e}", url=url)
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL: {e}", url=url)
        load_time_ms = int((time.perf_counter() - start_time) * 1000)

        if response.status_code >= 400:
            logger.warning(f"{url} answered with HTTP {response.status_code}")

        performance = PerformanceFacts(
            load_time_ms=load_time_ms,
            response_time_ms=_elapsed_ms(response, load_time_ms),
            redirect_count=len(response.history),
            is_ssl=url.startswith("https://"),
            page_size_bytes=_page_size(response),
            status_code=response.status_code,
            final_url=str(response.url),
        )
        return FetchOutcome(html=response.text, performance=performance)

    async def probe(self, url: str, timeout: Optional[float] = None) -> ProbeResult:
        """Existence check via HEAD, falling back to GET when HEAD is refused.

        Never raises: transport failures come back as status 0 with an error.
        """
        timeout = timeout if timeout is not None else self.config.link_check_timeout
        try:
            response = await self.client.head(url, timeout=timeout)
            if response.status_code in HEAD_NOT_SUPPORTED_CODES:
                logger.debug(f"HEAD refused by {url} ({response.status_code}), retrying with GET")
                response = await self.client.get(url, timeout=timeout)
            return ProbeResult(status=response.status_code)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error_msg = str(e) if str(e) else type(e).__name__
            logger.debug(f"Probe failed for {url}: {error_msg}")
            return ProbeResult(status=0, error=error_msg)

    async def get_text(self, url: str, timeout: Optional[float] = None) -> Optional[str]:
        """Body of a successful (2xx) GET, None for any other outcome."""
        timeout = timeout if timeout is not None else self.config.page_timeout
        try:
            response = await self.client.get(url, timeout=timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"GET failed for {url}: {e}")
            return None
        if not response.is_success:
            logger.debug(f"GET {url} returned {response.status_code}")
            return None
        return response.text


def _elapsed_ms(response: httpx.Response, fallback: int) -> int:
    try:
        return int(response.elapsed.total_seconds() * 1000)
    except RuntimeError:
        # elapsed is only set once the response is closed
        return fallback


def _page_size(response: httpx.Response) -> int:
    content_length = response.headers.get("content-length")
    if content_length is not None:
        try:
            return int(content_length)
        except ValueError:
            pass
    return len(response.content)

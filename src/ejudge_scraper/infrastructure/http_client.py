"""Async HTTP client shared by every pipeline stage."""

from typing import Optional

from curl_cffi.requests import AsyncSession, Response
from curl_cffi.requests.exceptions import RequestException
from loguru import logger

from ejudge_scraper.domain.exceptions import FetchError
from ejudge_scraper.infrastructure.context import OperationContext
from ejudge_scraper.infrastructure.parsers.interfaces import Page
from ejudge_scraper.infrastructure.parsers.url_parser import URLParser

DEFAULT_TIMEOUT = 5.0


class AsyncHTTPClient:
    """Thin wrapper over one curl_cffi session that keeps the judge cookies."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[AsyncSession] = None):
        """
        Initialize HTTP client.

        Args:
            timeout: Per-request timeout in seconds
            session: Session to reuse (created lazily when omitted)
        """
        self.timeout = timeout
        self._session = session

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            self._session = AsyncSession(timeout=self.timeout)
        return self._session

    async def get(self, url: str, context: OperationContext) -> Response:
        """
        GET ``url`` bound to ``context``.

        Credentials in the query string never reach logs or error messages.

        Raises:
            FetchError: On transport errors and HTTP status >= 400
            OperationCancelledError: If the context is cancelled mid-request
        """
        safe_url = URLParser.mask_password(url)
        logger.debug(f"GET {safe_url}")

        try:
            response = await context.run(
                self.session.get(url, timeout=self.timeout), url=safe_url
            )
        except RequestException as e:
            logger.error(f"Request failed for {safe_url}: {e}")
            raise FetchError(safe_url, str(e).replace(url, safe_url)) from None

        logger.debug(f"Response {response.status_code} for {safe_url}")
        if response.status_code >= 400:
            raise FetchError(safe_url, f"HTTP {response.status_code}")

        return response

    async def get_bytes(self, url: str, context: OperationContext) -> bytes:
        """Get raw body of ``url``."""
        response = await self.get(url, context)
        return response.content

    async def get_page(self, url: str, context: OperationContext) -> Page:
        """
        Get ``url`` as a parsed page.

        The page carries the URL it was finally served from, so relative links
        resolve correctly after redirects.
        """
        response = await self.get(url, context)
        final_url = str(response.url or url)
        if final_url != url:
            logger.debug(
                f"Redirected {URLParser.mask_password(url)} -> {URLParser.mask_password(final_url)}"
            )
        return Page.from_bytes(final_url, response.content)

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

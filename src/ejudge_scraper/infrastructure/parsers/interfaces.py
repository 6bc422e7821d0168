"""Protocol interfaces for parsers."""

from dataclasses import dataclass
from typing import Protocol, TypeVar

from bs4 import BeautifulSoup

from ejudge_scraper.infrastructure.context import OperationContext

ResultT = TypeVar("ResultT", covariant=True)


@dataclass
class Page:
    """A fetched judge page, parsed and tagged with the URL it came from."""

    url: str
    soup: BeautifulSoup

    @classmethod
    def from_bytes(cls, url: str, raw: bytes) -> "Page":
        return cls(url=url, soup=BeautifulSoup(raw, "lxml"))


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def get_bytes(self, url: str, context: OperationContext) -> bytes:
        """Get raw content from URL."""
        ...

    async def get_page(self, url: str, context: OperationContext) -> Page:
        """Get URL as a page tagged with the URL it was finally served from."""
        ...


class PageParserProtocol(Protocol[ResultT]):
    """One pipeline stage: consume a parsed page, produce a typed result."""

    async def parse(self, page: Page, context: OperationContext) -> ResultT:
        """Parse page and extract data."""
        ...


class PdfRendererProtocol(Protocol):
    """Protocol for turning an HTML document into PDF bytes."""

    def render(self, html: str, base_url: str | None = None) -> bytes:
        """Render HTML to PDF."""
        ...

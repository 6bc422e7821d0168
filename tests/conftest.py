"""Shared fixtures: an in-memory judge and HTML builders."""

import asyncio
from collections.abc import Callable, Sequence

import pytest

from ejudge_scraper.domain.exceptions import FetchError
from ejudge_scraper.infrastructure.context import OperationContext
from ejudge_scraper.infrastructure.parsers import Page


class FakeHTTPClient:
    """Serves canned pages; every fetch goes through the real context."""

    def __init__(self):
        self.pages: dict[str, bytes] = {}
        self.failures: dict[str, Exception] = {}
        self.hanging: set[str] = set()
        self.redirects: dict[str, str] = {}
        self.calls: list[str] = []
        self.started = asyncio.Event()

    def add_page(self, url: str, html: str) -> None:
        self.pages[url] = html.encode()

    async def get_bytes(self, url: str, context: OperationContext) -> bytes:
        self.calls.append(url)
        return await context.run(self._respond(url), url=url)

    async def get_page(self, url: str, context: OperationContext) -> Page:
        raw = await self.get_bytes(url, context)
        return Page.from_bytes(self.redirects.get(url, url), raw)

    async def _respond(self, url: str) -> bytes:
        if url in self.hanging:
            self.started.set()
            await asyncio.Event().wait()
        if url in self.failures:
            raise self.failures[url]
        try:
            return self.pages[url]
        except KeyError:
            raise FetchError(url, "HTTP 404") from None


def build_table(
    header: Sequence[str], rows: Sequence[Sequence[str]], css_class: str = "b1"
) -> str:
    head = "".join(f"<th>{name}</th>" for name in header)
    body = "".join("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows)
    return f'<table class="{css_class}"><tr>{head}</tr>{body}</table>'


def build_document(body: str, head: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


@pytest.fixture
def http_client() -> FakeHTTPClient:
    return FakeHTTPClient()


@pytest.fixture
def context() -> OperationContext:
    return OperationContext()


@pytest.fixture
def make_table() -> Callable[..., str]:
    return build_table


@pytest.fixture
def make_document() -> Callable[..., str]:
    return build_document


@pytest.fixture
def make_page() -> Callable[[str, str], Page]:
    def factory(url: str, body: str) -> Page:
        return Page.from_bytes(url, build_document(body).encode())

    return factory

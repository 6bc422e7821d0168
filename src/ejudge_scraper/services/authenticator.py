"""Login against the judge."""

from dataclasses import dataclass

from loguru import logger

from ejudge_scraper.domain.models.links import SessionContext
from ejudge_scraper.infrastructure.context import OperationContext
from ejudge_scraper.infrastructure.parsers import (
    HTTPClientProtocol,
    LoginPageParser,
    URLParser,
)


@dataclass(frozen=True)
class Credentials:
    """Team login for one contest."""

    username: str
    password: str
    contest_id: int

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, contest_id={self.contest_id})"


class Authenticator:
    """Performs the login request and returns the session's entry point."""

    def __init__(
        self,
        http_client: HTTPClientProtocol,
        base_url: str,
        credentials: Credentials,
        page_parser: LoginPageParser | None = None,
    ):
        self.http_client = http_client
        self.base_url = base_url
        self.credentials = credentials
        self.page_parser = page_parser or LoginPageParser()

    @property
    def login_url(self) -> str:
        return URLParser.build_login_url(
            self.base_url,
            self.credentials.username,
            self.credentials.password,
            self.credentials.contest_id,
        )

    async def login(self, context: OperationContext) -> SessionContext:
        """
        Log in and resolve the entry point.

        Raises:
            FetchError: If the login request fails
            LinkNotFoundError: If the response carries no entry link
        """
        url = self.login_url
        logger.info(
            f"Logging in as {self.credentials.username} to contest {self.credentials.contest_id}"
        )

        page = await self.http_client.get_page(url, context)
        session = await self.page_parser.parse(page, context)

        logger.info(f"Logged in, entry point: {session.entry_url}")
        return session

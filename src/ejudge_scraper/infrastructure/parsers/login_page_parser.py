"""Parser for the page returned by the login request."""

from loguru import logger

from ejudge_scraper.domain.exceptions import LinkNotFoundError
from ejudge_scraper.domain.models.links import SessionContext
from ejudge_scraper.infrastructure.context import OperationContext

from .interfaces import Page
from .url_parser import URLParser

ENTRY_LINK_SELECTOR = ".user_actions .contest_actions_item > a[href]"


class LoginPageParser:
    """Extracts the authenticated entry point from the login response."""

    async def parse(self, page: Page, context: OperationContext) -> SessionContext:
        link = page.soup.select_one(ENTRY_LINK_SELECTOR)
        if link is None:
            logger.error(f"Entry link not found on login page {URLParser.mask_password(page.url)}")
            raise LinkNotFoundError("contest entry")

        entry_url = URLParser.resolve(page.url, str(link["href"]))
        session = SessionContext(entry_url=entry_url, session_id=URLParser.session_id(entry_url))

        logger.debug(f"Entry URL: {entry_url}")
        return session

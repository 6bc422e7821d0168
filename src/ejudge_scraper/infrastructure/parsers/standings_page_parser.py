"""Parser for the standings page."""

from loguru import logger

from ejudge_scraper.domain.models.results import StandingsSnapshot
from ejudge_scraper.infrastructure.context import OperationContext

from .interfaces import Page
from .url_parser import URLParser


class StandingsPageParser:
    """Makes the standings document self-contained for rendering."""

    async def parse(self, page: Page, context: OperationContext) -> StandingsSnapshot:
        """Absolutize the first stylesheet-like link and serialize the page."""
        link = page.soup.find("link", href=True)
        if link is not None:
            absolute = URLParser.resolve(page.url, str(link["href"]))
            logger.debug(f"Rewriting standings link {link['href']} -> {absolute}")
            link["href"] = absolute
        else:
            logger.warning(f"No resource link on standings page {page.url}")

        return StandingsSnapshot(url=page.url, html=str(page.soup))

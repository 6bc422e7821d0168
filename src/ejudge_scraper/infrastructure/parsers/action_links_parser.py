"""Parser for the action menu of the contest entry page."""

from bs4 import Tag
from loguru import logger

from ejudge_scraper.domain.exceptions import LinkNotFoundError
from ejudge_scraper.domain.models.labels import ActionLabel
from ejudge_scraper.domain.models.links import ActionLinks
from ejudge_scraper.infrastructure.context import OperationContext

from .interfaces import Page
from .url_parser import URLParser

ACTIONS_CLASS = "contest_actions_item"


class ActionLinksParser:
    """Resolves the Summary, Standings and Submissions links of the entry page."""

    async def parse(self, page: Page, context: OperationContext) -> ActionLinks:
        """
        Find every action link and resolve it against the entry page URL.

        Raises:
            LinkNotFoundError: If any of the three links is missing
        """
        # Class attribute must be exactly the menu item class, not merely contain it
        actions = [
            item
            for item in page.soup.find_all(class_=ACTIONS_CLASS)
            if item.get("class") == [ACTIONS_CLASS]
        ]

        resolved = {label: self._resolve(page.url, actions, label) for label in ActionLabel}

        links = ActionLinks(
            summary=resolved[ActionLabel.SUMMARY],
            standings=resolved[ActionLabel.STANDINGS],
            submissions=URLParser.with_all_runs(resolved[ActionLabel.SUBMISSIONS]),
        )

        logger.info(f"Resolved action links from {page.url}")
        return links

    def _resolve(self, page_url: str, actions: list[Tag], label: ActionLabel) -> str:
        for item in actions:
            candidates = [item] if item.name == "a" and item.has_attr("href") else []
            for link in candidates + item.find_all("a", href=True):
                if link.get_text(strip=True) == label.value:
                    url = URLParser.resolve(page_url, str(link["href"]))
                    logger.debug(f"{label.value} link: {url}")
                    return url

        logger.error(f"{label.value!r} link not found on {page_url}")
        raise LinkNotFoundError(label.value)

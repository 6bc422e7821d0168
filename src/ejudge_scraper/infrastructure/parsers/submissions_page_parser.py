"""Parser for the submissions page and the sources it links to."""

from dataclasses import replace

from bs4 import Tag
from loguru import logger

from ejudge_scraper.domain.exceptions import FetchError, LinkNotFoundError
from ejudge_scraper.domain.models.labels import SOURCE_LINK_TEXT, ColumnLabel
from ejudge_scraper.domain.models.submission import Submission
from ejudge_scraper.infrastructure.context import OperationContext

from .interfaces import HTTPClientProtocol, Page
from .table_decoder import TableDecoder, set_accepted, set_text
from .url_parser import URLParser


class SubmissionsPageParser:
    """Decodes the submissions table and downloads one source per problem."""

    def __init__(self, http_client: HTTPClientProtocol):
        """
        Initialize parser.

        Args:
            http_client: Client used to download submission sources
        """
        self.http_client = http_client
        self.decoder: TableDecoder[Submission] = TableDecoder(
            Submission,
            {
                ColumnLabel.PROBLEM: set_text("problem_id"),
                ColumnLabel.LANGUAGE: set_text("language"),
                ColumnLabel.RESULT: set_accepted,
            },
        )

    async def parse(self, page: Page, context: OperationContext) -> list[Submission]:
        """
        Parse submissions page and fetch the source of every retained row.

        Only the first row of each problem is retained. Every row, dropped or
        not, must carry a source link before any source is fetched.

        Raises:
            DecodeError: If a row fails to decode
            LinkNotFoundError: If a row has no source link
            FetchError: If a source download fails
            OperationCancelledError: If the context is cancelled mid-download
        """
        submissions = self._decode(page)
        logger.info(f"Parsed {len(submissions)} unique submission(s), fetching sources")

        return await self._load_sources(submissions, context)

    def _decode(self, page: Page) -> list[Submission]:
        table = self.decoder.find_table(page.soup)
        if table is None:
            logger.warning(f"No submissions table on {page.url}")
            return []

        submissions: list[Submission] = []
        seen: set[str] = set()

        for row, submission in self.decoder.iter_rows(table):
            source_url = URLParser.resolve(page.url, self._source_href(row))

            if submission.problem_id in seen:
                logger.debug(f"Skipping duplicate submission for problem {submission.problem_id}")
                continue

            seen.add(submission.problem_id)
            submissions.append(replace(submission, source_url=source_url))

        return submissions

    def _source_href(self, row: Tag) -> str:
        for link in row.find_all("a", href=True):
            if link.get_text(strip=True) == SOURCE_LINK_TEXT:
                return str(link["href"])

        logger.error("Source link not found in submissions row")
        raise LinkNotFoundError(SOURCE_LINK_TEXT)

    async def _load_sources(
        self, submissions: list[Submission], context: OperationContext
    ) -> list[Submission]:
        sources: list[bytes] = []

        # One download at a time, in row order
        for submission in submissions:
            try:
                raw = await self.http_client.get_bytes(submission.source_url, context)
            except FetchError as e:
                logger.error(f"Failed to fetch source {submission.source_url}: {e.reason}")
                raise

            logger.debug(f"Fetched {len(raw)} byte(s) for problem {submission.problem_id}")
            sources.append(raw)

        return [replace(submission, source=raw) for submission, raw in zip(submissions, sources)]

"""Parser for the contest summary (problem list) page."""

from loguru import logger

from ejudge_scraper.domain.models.labels import ColumnLabel
from ejudge_scraper.domain.models.problem import Problem
from ejudge_scraper.domain.models.results import ProblemsSummary
from ejudge_scraper.infrastructure.context import OperationContext

from .interfaces import Page
from .table_decoder import TableDecoder, set_accepted, set_run_id, set_text


class SummaryPageParser:
    """Decodes the summary table into problems."""

    def __init__(self):
        self.decoder: TableDecoder[Problem] = TableDecoder(
            Problem,
            {
                ColumnLabel.SHORT_NAME: set_text("id"),
                ColumnLabel.LONG_NAME: set_text("name"),
                ColumnLabel.STATUS: set_accepted,
                ColumnLabel.RUN_ID: set_run_id,
            },
        )

    async def parse(self, page: Page, context: OperationContext) -> ProblemsSummary:
        """
        Parse summary page.

        Returns:
            Problems in row order and the verbatim inner HTML of the table

        Raises:
            DecodeError: If any row fails to decode
        """
        table = self.decoder.find_table(page.soup)
        if table is None:
            logger.warning(f"No summary table on {page.url}")
            return ProblemsSummary()

        table_html = table.decode_contents()
        problems = self.decoder.decode(table)

        logger.info(f"Parsed {len(problems)} problem(s) from summary")
        return ProblemsSummary(problems=problems, table_html=table_html)

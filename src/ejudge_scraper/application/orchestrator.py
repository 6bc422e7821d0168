"""Async orchestrator for coordinating the contest extraction pipeline."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from loguru import logger

from ejudge_scraper.domain.exceptions import StageError
from ejudge_scraper.domain.models import (
    ActionLinks,
    ContestResults,
    ProblemsSummary,
    SessionContext,
    StandingsSnapshot,
    Submission,
)
from ejudge_scraper.infrastructure.context import OperationContext
from ejudge_scraper.infrastructure.parsers import (
    ActionLinksParser,
    HTTPClientProtocol,
    PageParserProtocol,
    StandingsPageParser,
    SubmissionsPageParser,
    SummaryPageParser,
)
from ejudge_scraper.services.authenticator import Authenticator


@dataclass
class PipelineState:
    """Results collected so far during one run."""

    session: SessionContext
    links: Optional[ActionLinks] = None
    summary: Optional[ProblemsSummary] = None
    standings: Optional[StandingsSnapshot] = None
    submissions: Optional[list[Submission]] = None


@dataclass(frozen=True)
class PipelineStep:
    """A page stage: where its URL comes from and where its result goes."""

    name: str
    parser: PageParserProtocol[Any]
    target: Callable[[PipelineState], str]
    result_field: str


class ContestScrapeOrchestrator:
    """Runs login and the page stages in a fixed order over one HTTP client."""

    def __init__(
        self,
        http_client: HTTPClientProtocol,
        authenticator: Authenticator,
        *,
        link_parser: Optional[PageParserProtocol[ActionLinks]] = None,
        summary_parser: Optional[PageParserProtocol[ProblemsSummary]] = None,
        standings_parser: Optional[PageParserProtocol[StandingsSnapshot]] = None,
        submissions_parser: Optional[PageParserProtocol[list[Submission]]] = None,
    ):
        """
        Initialize orchestrator with dependency injection.

        Args:
            http_client: Client shared by every stage
            authenticator: Performs the login request
            link_parser: Entry page stage
            summary_parser: Summary page stage
            standings_parser: Standings page stage
            submissions_parser: Submissions page stage
        """
        self.http_client = http_client
        self.authenticator = authenticator

        self.steps: list[PipelineStep] = [
            PipelineStep(
                "links",
                link_parser or ActionLinksParser(),
                lambda state: state.session.entry_url,
                "links",
            ),
            PipelineStep(
                "problems",
                summary_parser or SummaryPageParser(),
                lambda state: state.links.summary,
                "summary",
            ),
            PipelineStep(
                "standings",
                standings_parser or StandingsPageParser(),
                lambda state: state.links.standings,
                "standings",
            ),
            PipelineStep(
                "submissions",
                submissions_parser or SubmissionsPageParser(http_client),
                lambda state: state.links.submissions,
                "submissions",
            ),
        ]

    async def run(self, context: OperationContext) -> ContestResults:
        """
        Run the whole pipeline.

        Raises:
            StageError: On the first failure, naming the stage and URL in flight
        """
        run_context = context.child()

        logger.info("Step 1: Logging in")
        try:
            session = await self.authenticator.login(run_context)
        except Exception as e:
            logger.error(f"Login failed: {e}")
            raise StageError("login", self.authenticator.base_url, e) from e

        state = PipelineState(session=session)

        for number, step in enumerate(self.steps, start=2):
            url = step.target(state)
            logger.info(f"Step {number}: Parsing {step.name} page")

            try:
                page = await self.http_client.get_page(url, run_context)
                result = await step.parser.parse(page, run_context)
            except Exception as e:
                logger.error(f"Stage {step.name} failed at {url}: {e}")
                raise StageError(step.name, url, e) from e

            setattr(state, step.result_field, result)

        logger.info("Contest extraction completed successfully")
        return ContestResults(
            session=session,
            links=state.links,
            summary=state.summary,
            standings=state.standings,
            submissions=state.submissions or [],
        )

"""Service for scraping and exporting one contest."""

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from loguru import logger

from ejudge_scraper.domain.models import ContestResults
from ejudge_scraper.infrastructure.context import OperationContext
from ejudge_scraper.infrastructure.parsers import PdfRendererProtocol
from ejudge_scraper.services.export import ContestExporter

if TYPE_CHECKING:
    from ejudge_scraper.application.orchestrator import ContestScrapeOrchestrator
    from ejudge_scraper.infrastructure.http_client import AsyncHTTPClient


class ContestScrapeService:
    """Runs the extraction pipeline, renders standings and writes the results."""

    def __init__(
        self,
        *,
        orchestrator: "ContestScrapeOrchestrator",
        renderer: Optional[PdfRendererProtocol] = None,
        exporter: Optional[ContestExporter] = None,
        http_client: Optional["AsyncHTTPClient"] = None,
    ):
        """Initialize service with dependencies."""
        self.orchestrator = orchestrator
        self.renderer = renderer
        self.exporter = exporter or ContestExporter()
        self.http_client = http_client

    async def scrape(self, context: OperationContext) -> ContestResults:
        """
        Extract the contest and render the standings when a renderer is set.

        Raises:
            StageError: If a pipeline stage fails
            RenderError: If PDF rendering fails
            OperationCancelledError: If the context was cancelled while rendering
        """
        results = await self.orchestrator.run(context)

        if self.renderer is not None:
            logger.info("Rendering standings to PDF")
            results.standings_pdf = await asyncio.to_thread(
                self.renderer.render, results.standings.html, results.standings.url
            )
        else:
            logger.debug("PDF rendering disabled")

        # A signal during rendering only marks the context; honour it here
        context.raise_if_cancelled()

        return results

    async def scrape_and_export(self, output_dir: Path, context: OperationContext) -> Path:
        """Extract the contest and write everything under ``output_dir``."""
        results = await self.scrape(context)
        context.raise_if_cancelled()
        return self.exporter.export(results, output_dir)

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.close()

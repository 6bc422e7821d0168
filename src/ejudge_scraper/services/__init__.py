from ejudge_scraper.config import Settings
from ejudge_scraper.services.authenticator import Authenticator, Credentials
from ejudge_scraper.services.contest import ContestScrapeService
from ejudge_scraper.services.export import ContestExporter


def create_scrape_service(settings: Settings) -> ContestScrapeService:
    """Factory function to create scrape service with all dependencies."""
    from ejudge_scraper.application.orchestrator import ContestScrapeOrchestrator
    from ejudge_scraper.infrastructure.http_client import AsyncHTTPClient
    from ejudge_scraper.infrastructure.pdf_renderer import WeasyPrintRenderer

    settings.validate()

    # One client for the whole run so the session cookies are shared
    http_client = AsyncHTTPClient(timeout=settings.timeout)
    authenticator = Authenticator(
        http_client,
        settings.base_url,
        Credentials(
            username=settings.username,
            password=settings.password,
            contest_id=settings.contest_id,
        ),
    )

    return ContestScrapeService(
        orchestrator=ContestScrapeOrchestrator(http_client, authenticator),
        renderer=WeasyPrintRenderer() if settings.render_pdf else None,
        http_client=http_client,
    )


__all__ = [
    "Authenticator",
    "ContestExporter",
    "ContestScrapeService",
    "Credentials",
    "create_scrape_service",
]

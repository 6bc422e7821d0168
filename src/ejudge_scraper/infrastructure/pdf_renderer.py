"""PDF rendering of standings snapshots."""

from typing import Optional

from loguru import logger

from ejudge_scraper.domain.exceptions import RenderError


class WeasyPrintRenderer:
    """Renders HTML documents to PDF with WeasyPrint."""

    def __init__(self, presentational_hints: bool = True):
        self.presentational_hints = presentational_hints

    def render(self, html: str, base_url: Optional[str] = None) -> bytes:
        """
        Render ``html`` to PDF bytes.

        Args:
            html: Self-contained HTML document
            base_url: URL used to resolve any remaining relative references

        Raises:
            RenderError: If WeasyPrint is unavailable or rendering fails
        """
        try:
            # Needs native pango/cairo libraries, only loaded when rendering
            from weasyprint import HTML
        except (ImportError, OSError) as e:
            logger.error(f"WeasyPrint not available: {e}")
            raise RenderError(f"WeasyPrint not available: {e}") from e

        try:
            pdf = HTML(string=html, base_url=base_url).write_pdf(
                presentational_hints=self.presentational_hints
            )
        except Exception as e:
            logger.error(f"PDF generation failed: {e}")
            raise RenderError(f"Failed to generate PDF: {e}") from e

        logger.info(f"Rendered PDF ({len(pdf)} bytes)")
        return pdf

"""Exceptions raised while scraping a contest."""


class ContestScraperError(Exception):
    """Base error for the contest scraper."""

    pass


class ConfigurationError(ContestScraperError):
    """Missing or invalid configuration value."""

    pass


class URLParsingError(ContestScraperError, ValueError):
    """Invalid URL format or unable to parse URL."""

    pass


class LinkNotFoundError(ContestScraperError):
    """A required labeled hyperlink is absent from the page."""

    def __init__(self, label: str):
        self.label = str(label)
        super().__init__(f"{self.label!r} href not found")


class DecodeError(ContestScraperError):
    """A table cell could not be decoded into the expected type."""

    def __init__(self, message: str, names: list[str], cols: list[str]):
        self.names = list(names)
        self.cols = list(cols)
        super().__init__(f"{message} (names={self.names}, cols={self.cols})")


class FetchError(ContestScraperError):
    """Transport error or non-success status while fetching a URL."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"fetch url: {url}: {reason}")


class OperationCancelledError(ContestScraperError):
    """The operation context was cancelled while a fetch was in flight."""

    def __init__(self, url: str | None = None, reason: str = "cancelled"):
        self.url = url
        self.reason = reason
        target = f" while fetching {url}" if url else ""
        super().__init__(f"operation {reason}{target}")


class StageError(ContestScraperError):
    """A pipeline stage failed; the original error is chained as ``__cause__``."""

    def __init__(self, stage: str, url: str | None, error: Exception):
        self.stage = stage
        self.url = url
        self.error = error
        super().__init__(f"stage {stage!r} failed at {url}: {error}")

    @property
    def cancelled(self) -> bool:
        return isinstance(self.error, OperationCancelledError)


class RenderError(ContestScraperError):
    """The PDF renderer failed."""

    pass


class ExportError(ContestScraperError):
    """Results could not be written to the output directory."""

    pass

"""Parsers for extracting data from judge pages."""

from .action_links_parser import ActionLinksParser
from .interfaces import (
    HTTPClientProtocol,
    Page,
    PageParserProtocol,
    PdfRendererProtocol,
)
from .login_page_parser import LoginPageParser
from .standings_page_parser import StandingsPageParser
from .submissions_page_parser import SubmissionsPageParser
from .summary_page_parser import SummaryPageParser
from .table_decoder import TableDecoder
from .url_parser import URLParser

__all__ = [
    "ActionLinksParser",
    "HTTPClientProtocol",
    "LoginPageParser",
    "Page",
    "PageParserProtocol",
    "PdfRendererProtocol",
    "StandingsPageParser",
    "SubmissionsPageParser",
    "SummaryPageParser",
    "TableDecoder",
    "URLParser",
]

"""Value objects for the authenticated session and its action links."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    """Authenticated entry point of one run."""

    entry_url: str
    session_id: str = ""


@dataclass(frozen=True)
class ActionLinks:
    """Absolute URLs of the Summary, Standings and Submissions pages."""

    summary: str
    standings: str
    submissions: str

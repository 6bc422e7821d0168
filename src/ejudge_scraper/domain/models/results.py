"""Value objects produced by the extraction stages."""

from dataclasses import dataclass, field

from .links import ActionLinks, SessionContext
from .problem import Problem
from .submission import Submission


@dataclass(frozen=True)
class ProblemsSummary:
    """Decoded summary table together with its verbatim inner HTML."""

    problems: list[Problem] = field(default_factory=list)
    table_html: str = ""


@dataclass(frozen=True)
class StandingsSnapshot:
    """Standings document with its stylesheet link made absolute."""

    url: str
    html: str


@dataclass
class ContestResults:
    """Everything one pipeline run extracted."""

    session: SessionContext
    links: ActionLinks
    summary: ProblemsSummary
    standings: StandingsSnapshot
    submissions: list[Submission] = field(default_factory=list)
    standings_pdf: bytes | None = None

    @property
    def problems(self) -> list[Problem]:
        return self.summary.problems

"""Domain models package."""

from .labels import ACCEPTED_STATUS, SOURCE_LINK_TEXT, ActionLabel, ColumnLabel
from .links import ActionLinks, SessionContext
from .problem import Problem
from .results import ContestResults, ProblemsSummary, StandingsSnapshot
from .submission import Submission

__all__ = [
    "ACCEPTED_STATUS",
    "ActionLabel",
    "ActionLinks",
    "ColumnLabel",
    "ContestResults",
    "Problem",
    "ProblemsSummary",
    "SOURCE_LINK_TEXT",
    "SessionContext",
    "StandingsSnapshot",
    "Submission",
]

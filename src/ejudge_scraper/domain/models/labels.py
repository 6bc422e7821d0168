"""Closed sets of labels the judge pages are matched against."""

from enum import Enum


ACCEPTED_STATUS = "OK"


class ActionLabel(str, Enum):
    """Visible text of the action-menu links on the entry page."""

    SUMMARY = "Summary"
    STANDINGS = "Standings"
    SUBMISSIONS = "Submissions"


class ColumnLabel(str, Enum):
    """Header texts of the columns the table decoder knows about."""

    # Summary table
    SHORT_NAME = "Short name"
    LONG_NAME = "Long name"
    STATUS = "Status"
    RUN_ID = "Run ID"

    # Submissions table
    PROBLEM = "Problem"
    LANGUAGE = "Language"
    RESULT = "Result"

    @classmethod
    def lookup(cls, header: str) -> "ColumnLabel | None":
        """Return the label whose text is exactly ``header``, if any."""
        try:
            return cls(header)
        except ValueError:
            return None


SOURCE_LINK_TEXT = "View"

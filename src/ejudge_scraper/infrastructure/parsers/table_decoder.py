"""Header-label driven decoding of the judge's result tables."""

import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, Optional, TypeVar

from bs4 import BeautifulSoup, Tag
from loguru import logger

from ejudge_scraper.domain.exceptions import DecodeError
from ejudge_scraper.domain.models.labels import ACCEPTED_STATUS, ColumnLabel

RecordT = TypeVar("RecordT")

# Receives the fields collected so far for the row and one cell's raw text
FieldSetter = Callable[[dict[str, Any], str], None]

TABLE_CLASS = "b1"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def set_text(field_name: str) -> FieldSetter:
    """Setter storing the cell text verbatim."""

    def setter(fields: dict[str, Any], text: str) -> None:
        fields[field_name] = text

    return setter


def set_accepted(fields: dict[str, Any], text: str) -> None:
    fields["accepted"] = text == ACCEPTED_STATUS


def set_run_id(fields: dict[str, Any], text: str) -> None:
    # Only meaningful for accepted rows; columns to the left are already read
    if not fields.get("accepted"):
        return
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid run id {text!r}")
    fields["run_id"] = int(text)


class TableDecoder(Generic[RecordT]):
    """
    Decodes a table whose first row holds column names.

    Each data row becomes one record: for every header cell whose text exactly
    matches a known label, the registered setter is applied to the cell at the
    same position. Setters run left to right, so a setter may depend on fields
    set by earlier columns.
    """

    def __init__(
        self,
        record_type: Callable[..., RecordT],
        setters: Mapping[ColumnLabel, FieldSetter],
    ):
        """
        Initialize decoder.

        Args:
            record_type: Called with the collected fields as keyword arguments
            setters: Field setter for each column label the decoder cares about
        """
        self.record_type = record_type
        self.setters = dict(setters)

    @staticmethod
    def find_table(soup: BeautifulSoup | Tag) -> Optional[Tag]:
        """Find the first table whose class attribute is exactly ``b1``."""
        for table in soup.find_all("table"):
            if table.get("class") == [TABLE_CLASS]:
                return table
        return None

    @staticmethod
    def rows(table: Tag) -> list[Tag]:
        """Rows belonging to ``table`` itself, nested tables excluded."""
        return [row for row in table.find_all("tr") if row.find_parent("table") is table]

    @staticmethod
    def cells(row: Tag) -> list[str]:
        """Raw text of every cell of ``row``, left to right."""
        return [cell.get_text() for cell in row.find_all(["th", "td"], recursive=False)]

    def decode_row(self, names: list[str], cols: list[str]) -> RecordT:
        """
        Decode one data row.

        Raises:
            DecodeError: If a setter cannot convert its cell
        """
        fields: dict[str, Any] = {}

        for idx, name in enumerate(names):
            label = ColumnLabel.lookup(name)
            setter = self.setters.get(label) if label is not None else None
            if setter is None or idx >= len(cols):
                continue

            try:
                setter(fields, cols[idx])
            except ValueError as e:
                raise DecodeError(f"decode {name.lower()}: {e}", names, cols) from e

        return self.record_type(**fields)

    def iter_rows(self, table: Tag) -> Iterator[tuple[Tag, RecordT]]:
        """
        Yield every data row with its decoded record, in document order.

        Iteration stops at the first row that fails to decode.
        """
        rows = self.rows(table)
        if not rows:
            return

        names = self.cells(rows[0])
        logger.debug(f"Table columns: {names}")

        for row in rows[1:]:
            cols = self.cells(row)
            try:
                record = self.decode_row(names, cols)
            except DecodeError as e:
                logger.error(f"Failed to decode row: {e}")
                raise
            yield row, record

    def decode(self, table: Tag) -> list[RecordT]:
        """Decode every data row of ``table``."""
        return [record for _, record in self.iter_rows(table)]

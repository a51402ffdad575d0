from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Protocol, Sequence, Union

import pandas as pd

from .normalize import cell_text, split_lines

LOGGER = logging.getLogger(__name__)

ReferenceTable = Dict[str, str]


class ParseFailure(ValueError):
    """The spreadsheet container could not be decoded."""


class SpreadsheetDecoder(Protocol):
    def decode(self, buffer: bytes) -> List[List[object]]:
        ...


@dataclass
class ExcelDecoder:
    """Decode an XLSX/XLS buffer into rows of cells using pandas.

    Reads the first sheet unless ``sheet`` names or indexes another one.
    Trailing empty cells are dropped from every row, so a row that only
    fills column A comes back with a single cell.
    """

    sheet: Optional[Union[str, int]] = None

    def decode(self, buffer: bytes) -> List[List[object]]:
        sheet_name = 0 if self.sheet is None else self.sheet
        df = pd.read_excel(
            io.BytesIO(buffer), sheet_name=sheet_name, header=None, dtype=object
        )
        rows: List[List[object]] = []
        for values in df.itertuples(index=False, name=None):
            row = [None if pd.isna(v) else v for v in values]
            while row and row[-1] is None:
                row.pop()
            rows.append(row)
        return rows


def parse_delimited_text(content: str) -> ReferenceTable:
    """Build a reference table from CSV or tab-separated text.

    Each non-blank line is split on tab when it contains one, otherwise on
    comma. The first two fields are key and value; lines with fewer fields
    or an empty key are skipped. A repeated key keeps the last value.
    """
    table: ReferenceTable = {}
    for line in split_lines(content):
        trimmed = line.strip()
        if not trimmed:
            continue
        sep = "\t" if "\t" in trimmed else ","
        parts = trimmed.split(sep)
        if len(parts) < 2:
            continue
        key = parts[0].strip()
        if key:
            table[key] = parts[1].strip()
    LOGGER.debug("Parsed %d reference entries from text", len(table))
    return table


def parse_tabular_rows(rows: Sequence[Sequence[object]]) -> ReferenceTable:
    """Build a reference table from a decoded grid (cell 0 key, cell 1 value)."""
    table: ReferenceTable = {}
    for row in rows:
        if row is None or len(row) < 2:
            continue
        key = cell_text(row[0])
        if key:
            table[key] = cell_text(row[1])
    LOGGER.debug("Parsed %d reference entries from %d rows", len(table), len(rows))
    return table


def parse_spreadsheet(
    buffer: bytes, decoder: Optional[SpreadsheetDecoder] = None
) -> ReferenceTable:
    """Decode a spreadsheet buffer and build a reference table from its rows.

    Raises:
        ParseFailure: If the decoder cannot read the buffer.
    """
    dec = decoder if decoder is not None else ExcelDecoder()
    try:
        rows = dec.decode(buffer)
    except Exception as exc:
        LOGGER.error("Failed to decode spreadsheet: %s", exc)
        raise ParseFailure(f"Failed to parse Excel file: {exc}") from exc
    return parse_tabular_rows(rows)


@dataclass
class ReferenceStats:
    total_rows: int
    unique_keys: int
    last_updated: datetime

    @classmethod
    def from_table(
        cls, table: ReferenceTable, now: Optional[datetime] = None
    ) -> "ReferenceStats":
        # keys are unique by construction, so both counts are the table size
        return cls(
            total_rows=len(table),
            unique_keys=len(table),
            last_updated=now if now is not None else datetime.now(),
        )

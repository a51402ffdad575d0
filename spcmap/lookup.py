from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping

from .normalize import split_lines

LOGGER = logging.getLogger(__name__)


@dataclass
class QueryResult:
    output: str
    found: int
    missing: int

    @property
    def lines(self) -> List[str]:
        return self.output.split("\n")


def translate(query_text: str, table: Mapping[str, str]) -> QueryResult:
    """Translate each line of query_text through the reference table.

    Output line i always corresponds to input line i. Blank lines pass
    through as empty lines and are not counted; unknown keys also produce
    an empty line and count as missing.
    """
    found = 0
    missing = 0
    out: List[str] = []
    for line in split_lines(query_text):
        key = line.strip()
        if not key:
            out.append("")
            continue
        if key in table:
            out.append(table[key])
            found += 1
        else:
            out.append("")
            missing += 1
    LOGGER.debug("Translated %d lines: %d found, %d missing", len(out), found, missing)
    return QueryResult(output="\n".join(out), found=found, missing=missing)

from __future__ import annotations

import math
import re
from typing import List, Optional

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> List[str]:
    """Split on LF or CRLF, keeping empty lines (including a trailing one)."""
    return _LINE_BREAK.split(text)


def cell_text(value: Optional[object]) -> str:
    """Coerce a decoded spreadsheet cell to trimmed text.

    None and NaN become ""; integral floats drop the ".0" so 1001.0 reads
    as 1001, the way the spreadsheet displays it. Everything else goes
    through str(): booleans give "True"/"False" and date cells give
    "2024-01-01 00:00:00".
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value)).strip()
    return str(value).strip()

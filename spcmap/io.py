from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Union

from .reference import ExcelDecoder, ReferenceTable, parse_delimited_text, parse_spreadsheet

SPREADSHEET_EXTENSIONS = {".xlsx", ".xlsm", ".xls"}


def is_spreadsheet(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in SPREADSHEET_EXTENSIONS


def read_text(path: Union[str, Path]) -> str:
    """Read a text file, or stdin when path is "-". A UTF-8 BOM is dropped."""
    if str(path) == "-":
        return sys.stdin.read()
    p = Path(path)
    if not p.exists():
        raise ValueError(f"File not found: {p}")
    return p.read_text(encoding="utf-8-sig")


def load_reference(
    path: Union[str, Path], sheet: Optional[Union[str, int]] = None
) -> ReferenceTable:
    """Load a reference table from a file (or pasted text on stdin for "-").

    Spreadsheets (.xlsx/.xls) are decoded from bytes; anything else is read
    as delimited text.

    Raises:
        ValueError: If the file is missing.
        ParseFailure: If a spreadsheet cannot be decoded.
    """
    if str(path) != "-" and is_spreadsheet(path):
        p = Path(path)
        if not p.exists():
            raise ValueError(f"File not found: {p}")
        return parse_spreadsheet(p.read_bytes(), ExcelDecoder(sheet=sheet))
    return parse_delimited_text(read_text(path))


def write_result(text: str, output_path: Union[str, Path]) -> Path:
    """Write translated output text and return the written path."""
    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    return out_path


def default_output_path(query_path: Path) -> Path:
    """Return the default output path next to the query file.

    e.g., codes.txt -> codes.translated.txt
    """
    return query_path.with_name(f"{query_path.stem}.translated.txt")

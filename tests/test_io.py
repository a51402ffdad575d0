from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import pandas as pd

from spcmap.io import (
    default_output_path,
    is_spreadsheet,
    load_reference,
    read_text,
    write_result,
)
from spcmap.reference import ParseFailure


def _has_openpyxl() -> bool:
    try:
        import openpyxl  # noqa: F401
    except Exception:
        return False
    return True


class TestIO(unittest.TestCase):
    def test_default_output_path(self):
        p = Path("/tmp/codes.txt")
        self.assertEqual(default_output_path(p).name, "codes.translated.txt")

    def test_is_spreadsheet(self):
        self.assertTrue(is_spreadsheet("ref.xlsx"))
        self.assertTrue(is_spreadsheet("REF.XLS"))
        self.assertFalse(is_spreadsheet("ref.csv"))
        self.assertFalse(is_spreadsheet("ref.tsv"))

    def test_load_text_reference_strips_bom(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "ref.csv"
            p.write_bytes("\ufeffSPC1,ASIN1\r\nSPC2\tASIN2\r\n".encode("utf-8"))
            self.assertEqual(load_reference(p), {"SPC1": "ASIN1", "SPC2": "ASIN2"})

    def test_load_reference_from_stdin(self):
        with patch("sys.stdin", io.StringIO("K\tV\n")):
            self.assertEqual(load_reference("-"), {"K": "V"})

    def test_missing_file(self):
        with self.assertRaises(ValueError):
            load_reference("/nonexistent/ref.csv")
        with self.assertRaises(ValueError):
            load_reference("/nonexistent/ref.xlsx")

    def test_corrupt_workbook_leaves_previous_table(self):
        with tempfile.TemporaryDirectory() as td:
            good = Path(td) / "ref.csv"
            good.write_text("A,1\n", encoding="utf-8")
            bad = Path(td) / "ref.xlsx"
            bad.write_bytes(b"definitely not a zip container")

            table = load_reference(good)
            try:
                table = load_reference(bad)
            except ParseFailure:
                pass
            self.assertEqual(table, {"A": "1"})

    def test_read_write_text(self):
        with tempfile.TemporaryDirectory() as td:
            out = write_result("V1\n\nV3", Path(td) / "nested" / "out.txt")
            self.assertTrue(out.exists())
            self.assertEqual(read_text(out), "V1\n\nV3")

    @unittest.skipIf(not _has_openpyxl(), "openpyxl not installed")
    def test_load_xlsx_first_sheet(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "ref.xlsx"
            first = pd.DataFrame(
                [
                    ["SPC001", "ASIN001"],
                    [1001, "ASIN_NUM"],
                    ["ONLY_A", None],
                    [None, "ORPHAN"],
                    ["SPC001", "ASIN001_NEW"],
                ]
            )
            with pd.ExcelWriter(p) as xw:
                first.to_excel(xw, index=False, header=False, sheet_name="First")
                pd.DataFrame([["X", "Y"]]).to_excel(
                    xw, index=False, header=False, sheet_name="Second"
                )
            table = load_reference(p)
            self.assertEqual(table, {"SPC001": "ASIN001_NEW", "1001": "ASIN_NUM"})

            second = load_reference(p, sheet="Second")
            self.assertEqual(second, {"X": "Y"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from spcmap.cli import SAMPLE_REFERENCE, main


def run() -> int:
    with tempfile.TemporaryDirectory() as td:
        here = Path(td)
        ref = here / "reference.csv"
        query = here / "codes.txt"
        ref.write_text(SAMPLE_REFERENCE, encoding="utf-8")
        query.write_text("A1\nA2\n\nSPC001\nSPCMISSING", encoding="utf-8")
        code = main([str(ref), "--query", str(query), "--save"])
        out_path = query.with_name("codes.translated.txt")
        assert out_path.exists(), "Output file not written"
        lines = out_path.read_text(encoding="utf-8").split("\n")
        assert lines == ["B1_ASIN_UPDATED", "B2_ASIN", "", "ASIN001", ""], lines
        print("Smoke test passed. Wrote:", out_path)
    return code


if __name__ == "__main__":
    raise SystemExit(run())

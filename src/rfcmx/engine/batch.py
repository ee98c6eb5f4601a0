"""
Row-by-row RFC generation for CSV input.

Rows are independent: a bad row records its error and the rest carry on.
"""

from __future__ import annotations

import csv
import logging
from typing import Dict, Iterable, Iterator, Optional, TextIO

from ..config import RfcmxConfig
from ..errors import IdentifierError
from .generator import TaxIdGenerator

logger = logging.getLogger(__name__)

INPUT_COLUMNS = ("nombres", "paterno", "materno", "fecha")
OUTPUT_COLUMNS = INPUT_COLUMNS + ("rfc", "error")


def generate_rows(rows: Iterable[Dict[str, str]], cfg: Optional[RfcmxConfig] = None) -> Iterator[Dict[str, str]]:
    gen = TaxIdGenerator(cfg)
    for i, row in enumerate(rows, start=1):
        out = {col: (row.get(col) or "").strip() for col in INPUT_COLUMNS}
        try:
            out["rfc"] = gen.generate(out["nombres"], out["paterno"], out["materno"], out["fecha"])
            out["error"] = ""
        except IdentifierError as e:
            logger.debug("row %d rejected: %s", i, e)
            out["rfc"] = ""
            out["error"] = str(e)
        yield out


def process_csv(src: TextIO, dest: TextIO, cfg: Optional[RfcmxConfig] = None) -> Dict[str, int]:
    """
    Read rows with a header (nombres,paterno,materno,fecha) and write them
    back with 'rfc' and 'error' columns. Returns row counts.
    """
    reader = csv.DictReader(src)
    missing = [c for c in ("nombres", "fecha") if c not in (reader.fieldnames or [])]
    if missing:
        raise ValueError(f"CSV header is missing columns: {', '.join(missing)}")

    writer = csv.DictWriter(dest, fieldnames=list(OUTPUT_COLUMNS))
    writer.writeheader()
    counts = {"rows": 0, "errors": 0}
    for out in generate_rows(reader, cfg):
        counts["rows"] += 1
        if out["error"]:
            counts["errors"] += 1
        writer.writerow(out)
    return counts

"""
Finds identifiers in files and confirms each one with the full validators.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import RfcmxConfig
from ..detect.regex_backend import RegexBackend, Span
from .validation import validate_identifier


@dataclass
class FileFinding:
    path: str
    spans: List[Span]


@dataclass
class ScanResult:
    files: int
    identifiers: int
    valid: int
    findings: List[FileFinding]


class Scanner:
    """
    Runs the regex backend over text and re-checks every span with the
    kind-specific validator (date and blocklist on top of the checksum).
    """

    def __init__(self, cfg: Optional[RfcmxConfig] = None, only_valid: bool = False) -> None:
        self.cfg = cfg or RfcmxConfig()
        self.only_valid = only_valid
        self.backend = RegexBackend(kinds=self.cfg.detectors.enabled_kinds())

    # ---------------- Public API ----------------

    def scan_text(self, text: str) -> List[Span]:
        spans: List[Span] = []
        for s in self.backend.detect(text):
            if s.valid:
                s.valid = validate_identifier(s.text, s.type, self.cfg).valid
            if self.only_valid and not s.valid:
                continue
            spans.append(s)
        return spans

    def scan_path(self, src: Path) -> ScanResult:
        """Scan a file or an entire directory tree."""
        findings: List[FileFinding] = []
        files = 0
        identifiers = 0
        valid = 0
        for p in self._iter_files(src):
            files += 1
            text = p.read_text(errors="ignore")
            spans = self.scan_text(text)
            identifiers += len(spans)
            valid += sum(1 for s in spans if s.valid)
            if spans:
                findings.append(FileFinding(str(p), spans))
        return ScanResult(files=files, identifiers=identifiers, valid=valid, findings=findings)

    # --------------- Internals ------------------

    def _iter_files(self, src: Path) -> Iterable[Path]:
        if src.is_file():
            yield src
            return
        for p in sorted(src.rglob("*")):
            if p.is_file():
                yield p

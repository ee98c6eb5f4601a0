"""
Regex-based detection of RFC, CURP and NSS identifiers.

What this does
--------------
- Loads the YAML rule pack (`rulesets/identifiers.yaml`) that defines one
  structural pattern per identifier kind.
- Compiles those patterns in priority order and applies optional
  **normalizers** (uppercase, strip dashes) and **validators** (check digits).
- `classify` answers "what kind of identifier is this string?" by structure
  alone; `detect` finds every identifier inside free text.

Why a regex backend?
--------------------
All three identifiers are fixed-length, fixed-charset codes: deterministic
patterns find them, and the check digits weed out look-alikes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import re
import yaml
from importlib import resources

from .validators import curp_check_ok, normalize_spaces_dashes, normalize_upper, nss_check_ok, rfc_check_ok


# ---- Data model returned to callers ------------------------------------------------------

@dataclass
class Span:
    """
    An identifier found in text.

    Attributes:
        start: Start character offset (inclusive).
        end:   End character offset (exclusive).
        text:  Raw matched text slice (pre-normalization).
        type:  Identifier kind ('RFC', 'CURP', 'NSS').
        confidence: Rule confidence, halved when the checksum fails.
        valid: Whether the embedded check characters are consistent.
    """
    start: int
    end: int
    text: str
    type: str
    confidence: float
    valid: bool = True


# ---- Registry of named normalizers/validators --------------------------------------------

# Map validator names (as used in YAML) to callables.
_VALIDATORS: Dict[str, Callable[[str], bool]] = {
    "rfc": rfc_check_ok,
    "curp": curp_check_ok,
    "nss": nss_check_ok,
}

# Map normalizer names (as used in YAML) to callables.
_NORMALIZERS: Dict[str, Callable[[str], str]] = {
    "strip_spaces_dashes": normalize_spaces_dashes,
    "upper": normalize_upper,
}


# ---- Backend -----------------------------------------------------------------------------

class RegexBackend:
    """
    Load the identifier rule pack and run the compiled patterns.

    Each rule can specify:
      - regex:       the pattern string
      - flags:       ["I"] for a case-insensitive pattern
      - normalize:   names of normalizers to apply before validation
      - validators:  names of checksum validators
      - confidence:  float score assigned to matches from this rule
      - priority:    lower runs first; decides `classify` ties
    """

    def __init__(self, kinds: Optional[Iterable[str]] = None) -> None:
        wanted = {k.upper() for k in kinds} if kinds is not None else None
        self.rules: List[Tuple[str, re.Pattern, Dict[str, Any]]] = []

        text = resources.files("rfcmx.detect.rulesets").joinpath("identifiers.yaml").read_text(encoding="utf-8")
        data = yaml.safe_load(text) or {}
        for key, spec in (data.get("patterns", {}) or {}).items():
            compiled = self._compile_rule(key, spec)
            if compiled and (wanted is None or compiled[2]["type"] in wanted):
                self.rules.append(compiled)

        self.rules.sort(key=lambda rule: rule[2]["priority"])

    # -- Compilation helpers ----------------------------------------------------------------

    def _compile_rule(
        self, key: str, spec: Any
    ) -> Tuple[str, re.Pattern, Dict[str, Any]] | None:
        """
        Turn a YAML rule into a compiled regex and a metadata dict.

        Rules are mappings with at least a `regex`; anything else is skipped.
        """
        if not isinstance(spec, dict) or "regex" not in spec:
            return None

        flags = re.I if "I" in spec.get("flags", []) else 0
        pat = re.compile(spec["regex"], flags)

        meta = {
            "type": key,
            "validators": spec.get("validators", []),
            "normalize": spec.get("normalize", []),
            "confidence": float(spec.get("confidence", 0.99)),
            "priority": int(spec.get("priority", 0)),
        }
        return key, pat, meta

    # -- Execution helpers ------------------------------------------------------------------

    def _apply_normalizers(self, text: str, names: List[str]) -> str:
        """
        Apply 0..N normalizers in order. Unknown names are ignored (for forward-compat).
        """
        for n in names:
            func = _NORMALIZERS.get(n)
            if func:
                text = func(text)
        return text

    def _validators_ok(self, text: str, names: List[str]) -> bool:
        """
        Return True only if all requested validators pass. Unknown names are skipped.
        """
        for name in names:
            fn = _VALIDATORS.get(name)
            if fn and not fn(text):
                return False
        return True

    # -- Public API -------------------------------------------------------------------------

    @property
    def kinds(self) -> List[str]:
        return [meta["type"] for _, _, meta in self.rules]

    def classify(self, candidate: str) -> Optional[str]:
        """
        Kind of the first rule whose pattern matches the whole candidate.

        Structure only: a match with a wrong check digit is still classified.
        The candidate should already be cleaned (uppercase, no separators).
        """
        for _, pat, meta in self.rules:
            if pat.fullmatch(candidate):
                return meta["type"]
        return None

    def detect(self, text: str, validate: bool = False) -> List[Span]:
        """
        Run all compiled rules against the input text and return `Span`s.

        Order of operations per match:
          1) regex match -> raw substring (m.group(0))
          2) normalize   -> e.g., uppercase
          3) validate    -> check digits; drop the span only if `validate`
          4) emit Span   -> raw substring, kind, confidence and verdict
        """
        spans: List[Span] = []

        for _, pat, meta in self.rules:
            for m in pat.finditer(text):
                raw = m.group(0)
                norm = self._apply_normalizers(raw, meta["normalize"])
                ok = self._validators_ok(norm, meta["validators"])

                if validate and not ok:
                    continue

                spans.append(
                    Span(
                        start=m.start(),
                        end=m.end(),
                        text=raw,
                        type=meta["type"],
                        confidence=meta["confidence"] if ok else meta["confidence"] / 2,
                        valid=ok,
                    )
                )

        spans.sort(key=lambda s: s.start)
        return spans

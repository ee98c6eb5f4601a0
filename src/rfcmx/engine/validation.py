"""
Validation of RFC, CURP and NSS identifiers.

Every entry point is total: it accepts any text (or None) and reports the
verdict in a `ValidationResult` instead of raising. The checks run in the
same order for each kind:

  1) STRUCTURE - fixed length and charset (rule pack patterns)
  2) DATE      - embedded date is a real day within the accepted years
  3) BLOCKLIST - leading letters are not a blocklisted word
  4) CHECKSUM  - embedded check characters are recomputed and compared
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..config import RfcmxConfig, ValidationConfig
from ..detect.regex_backend import RegexBackend
from ..detect.validators import curp_check_digit, normalize_spaces_dashes, nss_check_pair
from ..errors import InvalidIdentifierFormatError
from .check_digit import check_digit
from .dates import is_valid_date, resolve_century
from .letters import is_obscene

logger = logging.getLogger(__name__)


class IdentifierKind(str, Enum):
    RFC = "RFC"
    CURP = "CURP"
    NSS = "NSS"
    UNKNOWN = "unknown"


# Federal entity codes used in CURP positions 12-13.
CURP_STATES: Dict[str, str] = {
    "AS": "AGUASCALIENTES",
    "BC": "BAJA CALIFORNIA",
    "BS": "BAJA CALIFORNIA SUR",
    "CC": "CAMPECHE",
    "CL": "COAHUILA",
    "CM": "COLIMA",
    "CS": "CHIAPAS",
    "CH": "CHIHUAHUA",
    "DF": "CIUDAD DE MEXICO",
    "DG": "DURANGO",
    "GT": "GUANAJUATO",
    "GR": "GUERRERO",
    "HG": "HIDALGO",
    "JC": "JALISCO",
    "MC": "ESTADO DE MEXICO",
    "MN": "MICHOACAN",
    "MS": "MORELOS",
    "NT": "NAYARIT",
    "NL": "NUEVO LEON",
    "OC": "OAXACA",
    "PL": "PUEBLA",
    "QT": "QUERETARO",
    "QR": "QUINTANA ROO",
    "SP": "SAN LUIS POTOSI",
    "SL": "SINALOA",
    "SR": "SONORA",
    "TC": "TABASCO",
    "TS": "TAMAULIPAS",
    "TL": "TLAXCALA",
    "VZ": "VERACRUZ",
    "YN": "YUCATAN",
    "ZS": "ZACATECAS",
    "NE": "NACIDO EN EL EXTRANJERO",
}


@dataclass
class ValidationResult:
    valid: bool
    kind: IdentifierKind
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def errors(self) -> List[str]:
        return list(self.details.get("errors", []))

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["kind"] = self.kind.value
        return out


@lru_cache(maxsize=1)
def _backend() -> RegexBackend:
    # Compiled patterns are read-only after construction.
    return RegexBackend()


def clean_candidate(candidate: Optional[str]) -> str:
    """Uppercase, trim, drop inner spaces and dashes: ' pegj-800101 ln4' -> 'PEGJ800101LN4'."""
    if not isinstance(candidate, str):
        return ""
    return normalize_spaces_dashes(candidate.strip().upper())


def detect_kind(candidate: Optional[str]) -> IdentifierKind:
    """
    Structural kind of a candidate, tried in priority order RFC, CURP, NSS.

    Checksums are not consulted.
    """
    kind = _backend().classify(clean_candidate(candidate))
    return IdentifierKind(kind) if kind else IdentifierKind.UNKNOWN


def _require_structure(value: str, kind: IdentifierKind) -> None:
    if _backend().classify(value) != kind.value:
        raise InvalidIdentifierFormatError(f"{value!r} is not a well-formed {kind.value}")


def _plausible_year(year: int, vcfg: ValidationConfig, today: date) -> bool:
    return vcfg.min_year <= year <= today.year


def _decode_yymmdd(
    yymmdd: str, vcfg: ValidationConfig, today: date, century: Optional[int] = None
) -> Tuple[Optional[date], Optional[str]]:
    yy, mm, dd = int(yymmdd[0:2]), int(yymmdd[2:4]), int(yymmdd[4:6])
    year = century + yy if century is not None else resolve_century(yy, vcfg.century_pivot, today)
    if not is_valid_date(year, mm, dd):
        return None, f"embedded date {yymmdd} is not a calendar date"
    if not _plausible_year(year, vcfg, today):
        return None, f"embedded year {year} is out of range"
    return date(year, mm, dd), None


def _run(
    kind: IdentifierKind,
    candidate: Optional[str],
    cfg: Optional[RfcmxConfig],
    today: Optional[date],
    checks: Callable[[str, ValidationConfig, date, Dict[str, Any]], List[str]],
) -> ValidationResult:
    cfg = cfg or RfcmxConfig()
    today = today or date.today()
    value = clean_candidate(candidate)
    details: Dict[str, Any] = {"normalized": value}

    try:
        _require_structure(value, kind)
    except InvalidIdentifierFormatError as e:
        details["errors"] = [str(e)]
        logger.debug("%s rejected: %s", kind.value, e)
        return ValidationResult(valid=False, kind=kind, details=details)

    errors = checks(value, cfg.validation, today, details)
    details["errors"] = errors
    if errors:
        logger.debug("%s %s rejected: %s", kind.value, value, "; ".join(errors))
    return ValidationResult(valid=not errors, kind=kind, details=details)


# ---- RFC ---------------------------------------------------------------------------------

def _rfc_checks(value: str, vcfg: ValidationConfig, today: date, details: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    letters = value[:4]
    details.update(letters=letters, homoclave=value[10:12], check_digit=value[12])

    born, err = _decode_yymmdd(value[4:10], vcfg, today)
    details["birth_date"] = born.isoformat() if born else None
    if err:
        errors.append(err)

    if vcfg.check_blocklist and is_obscene(letters):
        errors.append(f"leading letters {letters} are blocklisted")

    expected = check_digit(value[:12])
    details["expected_check_digit"] = expected
    if expected != value[12]:
        errors.append(f"check digit {value[12]} does not match expected {expected}")
    return errors


def validate_rfc(
    candidate: Optional[str], cfg: Optional[RfcmxConfig] = None, today: Optional[date] = None
) -> ValidationResult:
    return _run(IdentifierKind.RFC, candidate, cfg, today, _rfc_checks)


# ---- CURP --------------------------------------------------------------------------------

def _curp_checks(value: str, vcfg: ValidationConfig, today: date, details: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    letters = value[:4]
    state = value[11:13]
    differentiator = value[16]
    details.update(
        letters=letters,
        sex=value[10],
        state=state,
        state_name=CURP_STATES.get(state),
        differentiator=differentiator,
        check_digit=value[17],
    )

    # 17th character: digit for births before 2000, letter from 2000 on.
    century = 1900 if differentiator.isdigit() else 2000
    born, err = _decode_yymmdd(value[4:10], vcfg, today, century=century)
    details["birth_date"] = born.isoformat() if born else None
    if err:
        errors.append(err)

    if state not in CURP_STATES:
        errors.append(f"unknown state code {state}")

    if vcfg.check_blocklist and is_obscene(letters):
        errors.append(f"leading letters {letters} are blocklisted")

    expected = curp_check_digit(value)
    details["expected_check_digit"] = expected
    if expected != value[17]:
        errors.append(f"check digit {value[17]} does not match expected {expected}")
    return errors


def validate_curp(
    candidate: Optional[str], cfg: Optional[RfcmxConfig] = None, today: Optional[date] = None
) -> ValidationResult:
    return _run(IdentifierKind.CURP, candidate, cfg, today, _curp_checks)


# ---- NSS ---------------------------------------------------------------------------------

def _nss_checks(value: str, vcfg: ValidationConfig, today: date, details: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    details.update(
        subdelegation=value[0:2],
        registration_year=None,
        birth_year=None,
        sequence=value[6:9],
        check_pair=value[9:11],
    )

    registered = resolve_century(int(value[2:4]), vcfg.century_pivot, today)
    born = resolve_century(int(value[4:6]), vcfg.century_pivot, today)
    details.update(registration_year=registered, birth_year=born)
    if not _plausible_year(registered, vcfg, today) or not _plausible_year(born, vcfg, today):
        errors.append("embedded year is out of range")
    elif born > registered:
        errors.append(f"birth year {born} is after registration year {registered}")

    expected = nss_check_pair(value)
    details["expected_check_pair"] = expected
    if expected != value[9:11]:
        errors.append(f"check pair {value[9:11]} does not match expected {expected}")
    return errors


def validate_nss(
    candidate: Optional[str], cfg: Optional[RfcmxConfig] = None, today: Optional[date] = None
) -> ValidationResult:
    return _run(IdentifierKind.NSS, candidate, cfg, today, _nss_checks)


# ---- Dispatch ----------------------------------------------------------------------------

_BY_KIND = {
    IdentifierKind.RFC: validate_rfc,
    IdentifierKind.CURP: validate_curp,
    IdentifierKind.NSS: validate_nss,
}


def validate_identifier(
    candidate: Optional[str],
    kind: Union[IdentifierKind, str, None] = None,
    cfg: Optional[RfcmxConfig] = None,
    today: Optional[date] = None,
) -> ValidationResult:
    """
    Validate a candidate identifier. Never raises.

    With `kind` given only that kind is checked; otherwise the structural
    kind decides. Unknown structure yields valid=False, kind=UNKNOWN.
    """
    if kind is not None:
        try:
            resolved = IdentifierKind(kind.upper() if isinstance(kind, str) else kind)
        except ValueError:
            resolved = IdentifierKind.UNKNOWN
    else:
        resolved = detect_kind(candidate)

    validator = _BY_KIND.get(resolved)
    if validator is None:
        return ValidationResult(
            valid=False,
            kind=IdentifierKind.UNKNOWN,
            details={"normalized": clean_candidate(candidate), "errors": ["not a recognized identifier"]},
        )
    return validator(candidate, cfg, today)

"""
Birth-date parsing and the YYMMDD date segment.

Strict layouts are the contract: zero-padded, tried in a fixed order, the
first one that yields a real calendar date wins. When none matches, a
permissive pass accepts unpadded fields, a handful of extra separators,
ISO timestamps, and English or Spanish month names.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional, Tuple, Union

from ..config import DateConfig
from ..errors import InvalidDateError
from .normalize import normalize_text

logger = logging.getLogger(__name__)

DateInput = Union[str, date, datetime]

# (layout name, pattern) in the order they are tried.
STRICT_LAYOUTS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("MM/DD/YYYY", re.compile(r"(?P<m>\d{2})/(?P<d>\d{2})/(?P<y>\d{4})")),
    ("YYYY-MM-DD", re.compile(r"(?P<y>\d{4})-(?P<m>\d{2})-(?P<d>\d{2})")),
    ("DD/MM/YYYY", re.compile(r"(?P<d>\d{2})/(?P<m>\d{2})/(?P<y>\d{4})")),
    ("MM-DD-YYYY", re.compile(r"(?P<m>\d{2})-(?P<d>\d{2})-(?P<y>\d{4})")),
    ("DD-MM-YYYY", re.compile(r"(?P<d>\d{2})-(?P<m>\d{2})-(?P<y>\d{4})")),
)

_PERMISSIVE_FORMATS = (
    "%m/%d/%Y",
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%m-%d-%Y",
    "%d-%m-%Y",
    "%Y/%m/%d",
    "%d.%m.%Y",
    "%Y%m%d",
    "%B %d, %Y",
    "%B %d %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%b %d %Y",
    "%d %b %Y",
)

MESES_ES = {
    "ENERO": 1,
    "FEBRERO": 2,
    "MARZO": 3,
    "ABRIL": 4,
    "MAYO": 5,
    "JUNIO": 6,
    "JULIO": 7,
    "AGOSTO": 8,
    "SEPTIEMBRE": 9,
    "SETIEMBRE": 9,
    "OCTUBRE": 10,
    "NOVIEMBRE": 11,
    "DICIEMBRE": 12,
}

# '15 de enero de 1985', '15 enero 1985'
_SPANISH_LONG = re.compile(r"(?P<d>\d{1,2}) (?:DE )?(?P<mes>[A-Z]+) (?:DE |DEL )?(?P<y>\d{4})")


def is_valid_date(year: int, month: int, day: int) -> bool:
    """True when (year, month, day) names a real calendar day (leap-year aware)."""
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def resolve_century(yy: int, pivot: Optional[int] = None, today: Optional[date] = None) -> int:
    """
    Expand a two-digit year.

    `yy <= pivot` -> 2000s, otherwise 1900s. Without an explicit pivot the
    current two-digit year is used, so the result never lies in the future.
    """
    if pivot is None:
        pivot = (today or date.today()).year % 100
    return 2000 + yy if yy <= pivot else 1900 + yy


def _strict(text: str) -> Optional[date]:
    for name, pattern in STRICT_LAYOUTS:
        m = pattern.fullmatch(text)
        if not m:
            continue
        y, mo, d = int(m.group("y")), int(m.group("m")), int(m.group("d"))
        if is_valid_date(y, mo, d):
            logger.debug("date %r matched strict layout %s", text, name)
            return date(y, mo, d)
    return None


def _permissive(text: str) -> Optional[date]:
    collapsed = " ".join(text.split())

    for fmt in _PERMISSIVE_FORMATS:
        try:
            return datetime.strptime(collapsed, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(collapsed).date()
    except ValueError:
        pass

    m = _SPANISH_LONG.fullmatch(normalize_text(collapsed))
    if m and m.group("mes") in MESES_ES:
        y, mo, d = int(m.group("y")), MESES_ES[m.group("mes")], int(m.group("d"))
        if is_valid_date(y, mo, d):
            return date(y, mo, d)

    return None


def parse_birth_date(value: DateInput, cfg: Optional[DateConfig] = None, today: Optional[date] = None) -> date:
    """
    Resolve a birth date from text (or pass a date object through).

    Raises:
        InvalidDateError: no layout yields a real date, the year is earlier
            than `cfg.min_year`, or the date lies after `today`.
    """
    cfg = cfg or DateConfig()
    today = today or date.today()

    if isinstance(value, datetime):
        parsed: Optional[date] = value.date()
    elif isinstance(value, date):
        parsed = value
    elif value is not None and not isinstance(value, str):
        raise InvalidDateError(f"Unsupported birth date type: {type(value).__name__}")
    else:
        text = (value or "").strip()
        if not text:
            raise InvalidDateError("Birth date is empty.")
        parsed = _strict(text)
        if parsed is None and cfg.permissive:
            parsed = _permissive(text)
            if parsed is not None:
                logger.debug("date %r accepted by permissive parse", text)
        if parsed is None:
            raise InvalidDateError(f"Unrecognized birth date: {value!r}")

    if parsed.year < cfg.min_year:
        raise InvalidDateError(f"Birth year {parsed.year} is earlier than {cfg.min_year}.")
    if parsed > today:
        raise InvalidDateError(f"Birth date {parsed.isoformat()} is in the future.")
    return parsed


def encode_birth_date(value: DateInput, cfg: Optional[DateConfig] = None, today: Optional[date] = None) -> str:
    """Return the YYMMDD segment, e.g. '01/15/1985' -> '850115'."""
    d = parse_birth_date(value, cfg, today)
    return f"{d.year % 100:02d}{d.month:02d}{d.day:02d}"

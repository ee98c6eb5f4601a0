"""
Checksum validators and normalizers used by the regex backend.

Why this file exists
--------------------
A structural pattern alone accepts any 13 alphanumerics as an RFC or any 11
digits as an NSS. These functions recompute the embedded check characters so
the backend (and the full validators in `engine.validation`) can tell a
well-formed identifier from a typo.

Design principles
-----------------
- **Pure functions**: no config, no clock, no I/O.
- **Total**: any string in, a bool (or check string) out. Wrong lengths are
  rejected, never raised.
"""

from __future__ import annotations

from typing import Dict

from ..engine.check_digit import check_digit

# CURP ordinal table: Ñ sits between N and O.
CURP_VALUES: Dict[str, int] = {ch: i for i, ch in enumerate("0123456789ABCDEFGHIJKLMNÑOPQRSTUVWXYZ")}

NSS_WEIGHTS = (10, 9, 8, 7, 6, 5, 4, 3, 2)


def _digits_only(s: str) -> str:
    """Return only the digit characters from a string."""
    return "".join(ch for ch in s if ch.isdigit())


def normalize_spaces_dashes(s: str) -> str:
    """
    Remove spaces and dashes from a string.

    Lets rules accept user-friendly forms ('PEGJ-800101-LN4', '1205 8500 105')
    while validators operate on the canonical representation.
    """
    return s.replace(" ", "").replace("-", "")


def normalize_upper(s: str) -> str:
    return s.strip().upper()


def rfc_check_ok(s: str) -> bool:
    """
    Recompute the 13th character of an individual's RFC.

    Args:
        s: Candidate RFC, already uppercased and without separators.
    """
    if len(s) != 13:
        return False
    return check_digit(s[:12]) == s[12]


def curp_check_digit(s: str) -> str:
    """
    Check digit for the first 17 characters of a CURP.

    Weights run 18 down to 2; the digit is (10 - sum mod 10) mod 10.
    """
    total = sum(CURP_VALUES.get(ch, 0) * (18 - i) for i, ch in enumerate(s[:17]))
    return str((10 - total % 10) % 10)


def curp_check_ok(s: str) -> bool:
    if len(s) != 18:
        return False
    return curp_check_digit(s) == s[17]


def nss_check_pair(s: str) -> str:
    """
    Two-digit check pair over the first 9 digits of an NSS.

    Weighted sum (10..2) mod 11; remainders 0 and 1 give '00',
    anything else gives 11 - remainder, zero-padded.
    """
    digits = _digits_only(s)[:9]
    total = sum(int(d) * w for d, w in zip(digits, NSS_WEIGHTS))
    r = total % 11
    if r in (0, 1):
        return "00"
    return f"{11 - r:02d}"


def nss_check_ok(s: str) -> bool:
    n = _digits_only(s)
    if len(n) != 11 or n != s:
        return False
    return nss_check_pair(n) == n[9:]

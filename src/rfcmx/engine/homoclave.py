"""
Homoclave: two characters that tell apart people sharing letters and date.

Steps:
  1) Expand the full name into digits, two per character, behind a leading '0'.
  2) Sum (d[i]*10 + d[i+1]) * d[i+1] over every adjacent digit pair.
  3) Keep the last three digits and split them by 34 into quotient/remainder.
  4) Map both through the 34-symbol alphabet.

Characters missing from the table (punctuation that survived normalization)
are skipped: they add no digits at all.
"""

from __future__ import annotations

import logging
import string
from typing import Dict

logger = logging.getLogger(__name__)

NAME_EQUIVALENCES: Dict[str, str] = {
    " ": "00",
    "0": "00", "1": "01", "2": "02", "3": "03", "4": "04",
    "5": "05", "6": "06", "7": "07", "8": "08", "9": "09",
    "&": "10", "%": "10",
    "A": "11", "B": "12", "C": "13", "D": "14", "E": "15", "F": "16", "G": "17", "H": "18", "I": "19",
    "J": "21", "K": "22", "L": "23", "M": "24", "N": "25", "O": "26", "P": "27", "Q": "28", "R": "29",
    "S": "32", "T": "33", "U": "34", "V": "35", "W": "36", "X": "37", "Y": "38", "Z": "39",
}

# Quotient/remainder -> symbol. No 'O', it reads as zero.
HOMOCLAVE_ALPHABET = "123456789ABCDEFGHIJKLMNPQRSTUVWXYZ"


def _check_tables() -> None:
    missing = set(string.ascii_uppercase + string.digits + " ") - set(NAME_EQUIVALENCES)
    if missing:
        raise RuntimeError(f"NAME_EQUIVALENCES lacks {sorted(missing)}")
    if len(HOMOCLAVE_ALPHABET) != 34 or len(set(HOMOCLAVE_ALPHABET)) != 34:
        raise RuntimeError("HOMOCLAVE_ALPHABET must hold 34 distinct symbols")


_check_tables()


def name_to_digits(full_name: str) -> str:
    """
    Numeric expansion of a normalized full name.

    Example:
      'AB' -> '0' + '11' + '12' -> '01112'
    """
    return "0" + "".join(NAME_EQUIVALENCES.get(ch, "") for ch in full_name)


def homoclave_from_name(full_name: str) -> str:
    """Homoclave for an already concatenated, normalized full name."""
    digits = name_to_digits(full_name)

    total = 0
    for i in range(len(digits) - 1):
        nxt = int(digits[i + 1])
        total += int(digits[i : i + 2]) * nxt

    base = total % 1000
    quotient, remainder = divmod(base, 34)
    logger.debug("homoclave sum=%d base=%d q=%d r=%d", total, base, quotient, remainder)
    return HOMOCLAVE_ALPHABET[quotient] + HOMOCLAVE_ALPHABET[remainder]


def homoclave(paterno: str, materno: str, nombre: str) -> str:
    """
    Homoclave over '{paterno} {materno} {nombre}', trimmed.

    Fragments must be normalized but not stripped of leading words.
    """
    return homoclave_from_name(f"{paterno} {materno} {nombre}".strip())

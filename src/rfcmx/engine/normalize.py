"""
Text normalization and leading-word stripping for name fragments.

Two stages run before any letter is picked from a name:

  1) NORMALIZE - uppercase, fold accents, transliterate to ASCII, turn
                 separators into spaces, collapse whitespace. Idempotent.
  2) STRIP     - drop non-significant leading words ("MARIA", "JOSE", "DE",
                 "LA", ...) so the letter code is built from the word that
                 actually identifies the person.

The homoclave uses stage 1 only; the letter code uses both.
"""

from __future__ import annotations

import re
import unicodedata
from typing import FrozenSet

from unidecode import unidecode

# Leading tokens ignored in given names ("MARIA GUADALUPE" -> "GUADALUPE").
GIVEN_NAME_STOPWORDS: FrozenSet[str] = frozenset(
    {"MARIA", "JOSE", "DE", "DEL", "LOS", "LAS", "LA", "MA", "MA.", "J.", "J"}
)

# Leading tokens ignored in surnames ("DE LA CRUZ" -> "CRUZ").
SURNAME_STOPWORDS: FrozenSet[str] = frozenset(
    {"DE", "LA", "LAS", "MC", "VON", "DEL", "LOS", "Y", "MAC", "VAN"}
)

# Characters folded to a space before accents are removed.
_SEPARATORS = str.maketrans({"/": " ", "-": " ", "Ü": " "})

_WS = re.compile(r"\s+")


def strip_diacritics(text: str) -> str:
    """
    Remove combining marks: 'Á' -> 'A', 'Ñ' -> 'N', 'Ç' -> 'C'.
    """
    nfd = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in nfd if not unicodedata.combining(ch))


def normalize_text(text: str | None) -> str:
    """
    Canonical uppercase form of a name fragment.

    Examples:
      '  josé   pérez ' -> 'JOSE PEREZ'
      'Peña/Muñoz'      -> 'PENA MUNOZ'
      'Ruiz-Gámez'      -> 'RUIZ GAMEZ'
    """
    if not text:
        return ""
    s = text.upper().translate(_SEPARATORS)
    s = strip_diacritics(s)
    # letters without a decomposition: 'Ø' -> 'O', 'Ł' -> 'L', 'Æ' -> 'AE'
    s = unidecode(s).upper()
    return _WS.sub(" ", s).strip()


def strip_leading_words(text: str, stopwords: FrozenSet[str]) -> str:
    """
    Drop leading tokens found in `stopwords`.

    Only a token followed by a space can be dropped, so the last word always
    survives. An empty input returns an empty string.
    """
    remainder = text
    while " " in remainder:
        head, rest = remainder.split(" ", 1)
        if head not in stopwords:
            break
        remainder = rest
    return remainder


def strip_given_names(text: str) -> str:
    return strip_leading_words(text, GIVEN_NAME_STOPWORDS)


def strip_surname(text: str) -> str:
    return strip_leading_words(text, SURNAME_STOPWORDS)

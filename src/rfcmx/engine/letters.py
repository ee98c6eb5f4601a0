"""
Four-letter name code at the head of an individual's RFC.

Inputs are normalized and stripped fragments (see `normalize.py`). Missing
positions are filled with 'X', and a code that spells a blocklisted word
gets its last letter replaced with 'X'.
"""

from __future__ import annotations

import logging
import re
from typing import FrozenSet

logger = logging.getLogger(__name__)

VOWELS = "AEIOU"

SENTINEL = "X"

# Four-letter words that must not appear at the head of an identifier.
OBSCENE_WORDS: FrozenSet[str] = frozenset(
    {
        "BUEI", "BATO", "BOFE", "BUEY", "CACA", "CACO", "CAGA", "CAGO", "CAKA", "CAKO",
        "COGE", "COGI", "COJA", "COJE", "COJI", "COJO", "COLA", "CULO", "FALO", "FETO",
        "FOCA", "GATA", "GETA", "GUEI", "GUEY", "JETA", "JOTO", "KACA", "KACO", "KAGA",
        "KAGO", "KAKA", "KOGE", "KOGI", "KOJA", "KOJE", "KOJI", "KOJO", "KOLA", "KULO",
        "LILO", "LOBA", "LOCA", "LOCO", "LOKA", "LOKO", "LORA", "LORO", "MALA", "MAMA",
        "MAME", "MAMO", "MEAR", "MEAS", "MEON", "MIAR", "MION", "MOCO", "MOKO", "MULA",
        "MULO", "NACA", "NACO", "PEDA", "PEDO", "PENE", "PIPI", "PITO", "POPO", "PUTA",
        "PUTO", "QULO", "RATA", "ROBA", "ROBE", "ROBO", "RUIN", "SAPO", "SENO", "SOPE",
        "TETA", "VACA", "VAGA", "VAGO", "VUEI", "VUEY", "WUEI", "WUEY",
    }
)


def is_obscene(code: str) -> bool:
    return code in OBSCENE_WORDS


_NOT_LETTER = re.compile(r"[^A-Z]")


def _letters(value: str) -> str:
    # digits, punctuation and '&' never make it into the code
    return _NOT_LETTER.sub("", value)


def _char_at(value: str, idx: int) -> str:
    return value[idx] if len(value) > idx else SENTINEL


def first_internal_vowel(value: str) -> str:
    """First vowel after position 0, or 'X' when there is none."""
    for ch in value[1:]:
        if ch in VOWELS:
            return ch
    return SENTINEL


def letter_code(nombre: str, paterno: str, materno: str) -> str:
    """
    Build the 4-letter code from stripped name fragments.

    Rules:
      - no maternal surname:  paterno[0:2] + nombre[0:2]
      - no paternal surname:  materno[0:2] + nombre[0:2]
      - both present:
          paterno of 1-2 chars -> paterno[0] + materno[0] + nombre[0:2]
          otherwise            -> paterno[0] + first internal vowel of paterno
                                  + materno[0] + nombre[0]
    """
    nombre, paterno, materno = _letters(nombre), _letters(paterno), _letters(materno)

    if not materno:
        code = _char_at(paterno, 0) + _char_at(paterno, 1) + _char_at(nombre, 0) + _char_at(nombre, 1)
    elif not paterno:
        code = _char_at(materno, 0) + _char_at(materno, 1) + _char_at(nombre, 0) + _char_at(nombre, 1)
    elif len(paterno) <= 2:
        code = _char_at(paterno, 0) + _char_at(materno, 0) + _char_at(nombre, 0) + _char_at(nombre, 1)
    else:
        code = (
            _char_at(paterno, 0)
            + first_internal_vowel(paterno)
            + _char_at(materno, 0)
            + _char_at(nombre, 0)
        )

    if is_obscene(code):
        logger.debug("letter code %s is blocklisted, replacing last letter", code)
        code = code[:3] + SENTINEL
    return code

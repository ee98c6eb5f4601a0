"""
Assembles an individual's RFC from name and birth date.

Order of operations:
  1) validate input     -> InvalidNameError before anything is computed
  2) normalize          -> uppercase, accent-free, single-spaced fragments
  3) strip              -> leading stopwords removed (letter code only)
  4) letters + date     -> 'PEGJ' + '800101'
  5) homoclave          -> computed on the unstripped fragments
  6) check digit        -> over the 12-character prefix
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..config import RfcmxConfig
from ..errors import InvalidNameError
from .check_digit import check_digit
from .dates import DateInput, encode_birth_date
from .homoclave import homoclave
from .letters import letter_code
from .normalize import normalize_text, strip_given_names, strip_surname

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersonName:
    """Raw name as supplied by the caller."""
    given_names: str
    paternal_surname: Optional[str] = None
    maternal_surname: Optional[str] = None

    def validate(self) -> None:
        if not (self.given_names or "").strip():
            raise InvalidNameError("Given names must not be empty.")
        if not (self.paternal_surname or "").strip() and not (self.maternal_surname or "").strip():
            raise InvalidNameError("At least one surname is required.")


@dataclass(frozen=True)
class NormalizedNameSet:
    nombre: str
    paterno: str
    materno: str

    @classmethod
    def from_person(cls, person: PersonName) -> "NormalizedNameSet":
        return cls(
            nombre=normalize_text(person.given_names),
            paterno=normalize_text(person.paternal_surname),
            materno=normalize_text(person.maternal_surname),
        )

    def stripped(self) -> "NormalizedNameSet":
        return NormalizedNameSet(
            nombre=strip_given_names(self.nombre),
            paterno=strip_surname(self.paterno),
            materno=strip_surname(self.materno),
        )


@dataclass(frozen=True)
class TaxId:
    """A generated 13-character RFC and its segments."""
    letters: str
    birth_date: str
    homoclave: str
    check_digit: str

    @property
    def value(self) -> str:
        return f"{self.letters}{self.birth_date}{self.homoclave}{self.check_digit}"

    def __str__(self) -> str:
        return self.value


class TaxIdGenerator:
    """
    Stateless RFC generator bound to a configuration.

    Instances hold only read-only config, so one generator can be shared
    across threads.
    """

    def __init__(self, cfg: Optional[RfcmxConfig] = None) -> None:
        self.cfg = cfg or RfcmxConfig()

    def build(self, person: PersonName, birth_date: DateInput, today: Optional[date] = None) -> TaxId:
        person.validate()

        names = NormalizedNameSet.from_person(person)
        if not names.nombre:
            raise InvalidNameError(f"Given names have no usable characters: {person.given_names!r}")
        if not names.paterno and not names.materno:
            raise InvalidNameError("Surnames have no usable characters.")

        date_code = encode_birth_date(birth_date, self.cfg.dates, today)

        stripped = names.stripped()
        letters = letter_code(stripped.nombre, stripped.paterno, stripped.materno)
        homo = homoclave(names.paterno, names.materno, names.nombre)
        digit = check_digit(letters + date_code + homo)

        logger.debug("rfc segments letters=%s date=%s homoclave=%s check=%s", letters, date_code, homo, digit)
        return TaxId(letters=letters, birth_date=date_code, homoclave=homo, check_digit=digit)

    def generate(
        self,
        given_names: str,
        paternal_surname: Optional[str],
        maternal_surname: Optional[str],
        birth_date: DateInput,
        today: Optional[date] = None,
    ) -> str:
        person = PersonName(given_names, paternal_surname, maternal_surname)
        return self.build(person, birth_date, today).value


def generate_tax_id(
    given_names: str,
    paternal_surname: Optional[str],
    maternal_surname: Optional[str],
    birth_date: DateInput,
    cfg: Optional[RfcmxConfig] = None,
    today: Optional[date] = None,
) -> str:
    """
    Generate the 13-character RFC of an individual.

    Example:
        >>> generate_tax_id("Juan", "Pérez", "García", "01/01/1980")
        'PEGJ800101LN4'

    Raises:
        InvalidNameError: empty given names, or both surnames empty.
        InvalidDateError: birth date not recognized, before the minimum
            year, or after `today` (default: the current date).
    """
    return TaxIdGenerator(cfg).generate(given_names, paternal_surname, maternal_surname, birth_date, today)

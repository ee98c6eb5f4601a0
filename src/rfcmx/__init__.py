"""rfcmx: Mexican RFC generation and RFC/CURP/NSS validation."""

from .engine.generator import TaxId, TaxIdGenerator, generate_tax_id
from .engine.validation import IdentifierKind, ValidationResult, detect_kind, validate_identifier
from .errors import IdentifierError, InvalidDateError, InvalidIdentifierFormatError, InvalidNameError

__version__ = "0.1.0"

__all__ = [
    "TaxId",
    "TaxIdGenerator",
    "generate_tax_id",
    "IdentifierKind",
    "ValidationResult",
    "detect_kind",
    "validate_identifier",
    "IdentifierError",
    "InvalidDateError",
    "InvalidIdentifierFormatError",
    "InvalidNameError",
    "__version__",
]

"""CUSIP - Parse and validate CUSIP security identifiers."""

__version__ = "1.0.0"

from .checksum import compute_check_digit
from .codec import CHAR_VALUES, char_value, is_cusip_char
from .errors import (
    ChecksumMismatch,
    CUSIPError,
    InvalidCharacter,
    InvalidCheckDigit,
    LengthError,
)
from .identifier import CINS, CUSIP
from .parsing import (
    build_from_parts,
    build_from_payload,
    normalize,
    parse,
    parse_loose,
    parse_strict,
    validate,
)

__all__ = [
    "CHAR_VALUES",
    "CINS",
    "CUSIP",
    "CUSIPError",
    "ChecksumMismatch",
    "InvalidCharacter",
    "InvalidCheckDigit",
    "LengthError",
    "build_from_parts",
    "build_from_payload",
    "char_value",
    "compute_check_digit",
    "is_cusip_char",
    "normalize",
    "parse",
    "parse_loose",
    "parse_strict",
    "validate",
]

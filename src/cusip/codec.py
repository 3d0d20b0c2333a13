"""Character classification and layout rules for CUSIP text."""

from __future__ import annotations

import string
from types import MappingProxyType
from typing import Mapping

from .errors import InvalidCharacter, InvalidCheckDigit, LengthError

CUSIP_LENGTH = 9
PAYLOAD_LENGTH = 8
ISSUER_NUM_LENGTH = 6
ISSUE_NUM_LENGTH = 2
CHECK_DIGIT_POSITION = 9

# Digits are 0-9, letters 10-35, then the three private placement symbols.
CHAR_VALUES: Mapping[str, int] = MappingProxyType(
    {
        **{char: value for value, char in enumerate(string.digits)},
        **{char: value + 10 for value, char in enumerate(string.ascii_uppercase)},
        "*": 36,
        "@": 37,
        "#": 38,
    }
)

DIGITS = frozenset(string.digits)


def is_cusip_char(char: str) -> bool:
    """Return ``True`` when ``char`` may appear in positions 1-8."""

    return char in CHAR_VALUES


def char_value(char: str, position: int) -> int:
    """Return the checksum value of ``char`` found at 1-indexed ``position``."""

    try:
        return CHAR_VALUES[char]
    except KeyError:
        raise InvalidCharacter(char, position) from None


def check_chars(text: str, offset: int = 0) -> None:
    """Raise :class:`InvalidCharacter` for the first disallowed character.

    ``offset`` shifts reported positions so fragments such as an issue
    number are reported against their place in the full identifier.
    """

    for index, char in enumerate(text, start=offset + 1):
        if char not in CHAR_VALUES:
            raise InvalidCharacter(char, index)


def check_format(text: str) -> None:
    """Validate length, character classes and the check digit's shape.

    The check digit's value is not compared against the checksum here.
    """

    if not isinstance(text, str):
        raise TypeError(f"CUSIP must be a str, not {type(text).__name__}")
    if len(text) != CUSIP_LENGTH:
        raise LengthError(len(text))
    check_chars(text[:PAYLOAD_LENGTH])
    check_digit = text[PAYLOAD_LENGTH]
    if check_digit not in DIGITS:
        raise InvalidCheckDigit(check_digit, CHECK_DIGIT_POSITION)

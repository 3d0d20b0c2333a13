"""The modulus 10 "double-add-double" check digit used by CUSIP."""

from __future__ import annotations

from .codec import PAYLOAD_LENGTH, char_value
from .errors import LengthError


def compute_check_digit(cusip8: str) -> str:
    """
    Compute the check digit for the first eight characters of a CUSIP.

    Every second character (positions 2, 4, 6 and 8) has its value doubled,
    and each resulting value contributes the sum of its decimal digits.

    Args:
        cusip8: Issuer number followed by issue number

    Returns:
        The expected check digit as a one character string

    Raises:
        LengthError: ``cusip8`` is not eight characters long
        InvalidCharacter: ``cusip8`` holds a character with no checksum value
    """
    if len(cusip8) != PAYLOAD_LENGTH:
        raise LengthError(len(cusip8), PAYLOAD_LENGTH, "payload")

    total = 0
    for position, char in enumerate(cusip8, start=1):
        value = char_value(char, position)
        if position % 2 == 0:
            value *= 2
        total += value // 10 + value % 10

    return str((10 - total % 10) % 10)

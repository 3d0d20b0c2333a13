"""Parse and build CUSIP identifiers."""

from __future__ import annotations

from .checksum import compute_check_digit
from .codec import ISSUE_NUM_LENGTH, ISSUER_NUM_LENGTH, PAYLOAD_LENGTH, check_chars
from .errors import ChecksumMismatch, CUSIPError, LengthError
from .identifier import CUSIP


def parse(text: str) -> CUSIP:
    """
    Parse ``text`` checking its layout only.

    Any structurally valid identifier is accepted, whether or not its check
    digit agrees with the checksum.

    Raises:
        LengthError: ``text`` is not nine characters long
        InvalidCharacter: a disallowed character appears in positions 1-8
        InvalidCheckDigit: position 9 is not a decimal digit
    """
    return CUSIP(text)


def parse_strict(text: str) -> CUSIP:
    """
    Parse ``text`` and require a correct check digit.

    Raises:
        ChecksumMismatch: in addition to everything :func:`parse` raises
    """
    cusip = parse(text)
    expected = compute_check_digit(cusip.cusip8)
    if expected != cusip.check_digit:
        raise ChecksumMismatch(expected, cusip.check_digit)
    return cusip


def normalize(text: str) -> str:
    """Strip surrounding whitespace and uppercase ASCII letters."""

    return "".join(
        char.upper() if "a" <= char <= "z" else char for char in text.strip()
    )


def parse_loose(text: str, strict: bool = True) -> CUSIP:
    """Parse ``text`` after :func:`normalize`, strictly unless told otherwise."""

    normalized = normalize(text)
    return parse_strict(normalized) if strict else parse(normalized)


def validate(text: str) -> bool:
    """Return ``True`` when ``text`` is a CUSIP with a correct check digit."""

    try:
        parse_strict(text)
    except CUSIPError:
        return False
    return True


def build_from_payload(cusip8: str) -> CUSIP:
    """Complete an eight character issuer and issue number with its check digit."""

    if len(cusip8) != PAYLOAD_LENGTH:
        raise LengthError(len(cusip8), PAYLOAD_LENGTH, "payload")
    check_chars(cusip8)
    return CUSIP(cusip8 + compute_check_digit(cusip8))


def build_from_parts(issuer_num: str, issue_num: str) -> CUSIP:
    """Assemble a CUSIP from its issuer and issue numbers."""

    if len(issuer_num) != ISSUER_NUM_LENGTH:
        raise LengthError(len(issuer_num), ISSUER_NUM_LENGTH, "issuer number")
    check_chars(issuer_num)
    if len(issue_num) != ISSUE_NUM_LENGTH:
        raise LengthError(len(issue_num), ISSUE_NUM_LENGTH, "issue number")
    check_chars(issue_num, offset=ISSUER_NUM_LENGTH)
    return build_from_payload(issuer_num + issue_num)

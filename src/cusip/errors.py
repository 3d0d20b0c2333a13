"""Errors raised while parsing or building CUSIP identifiers."""

from __future__ import annotations


class CUSIPError(ValueError):
    """Base class for every CUSIP parsing or building failure."""


class LengthError(CUSIPError):
    """Input is not the expected number of characters."""

    def __init__(self, actual: int, expected: int = 9, field: str = "CUSIP") -> None:
        self.actual = actual
        self.expected = expected
        self.field = field
        super().__init__(
            f"invalid {field} length {actual} characters when expecting {expected}"
        )


class InvalidCharacter(CUSIPError):
    """A character outside ``0-9``, ``A-Z``, ``*``, ``@`` and ``#``."""

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"invalid character {char!r} at position {position}")


class InvalidCheckDigit(CUSIPError):
    """The final character is not a decimal digit."""

    def __init__(self, char: str, position: int = 9) -> None:
        self.char = char
        self.position = position
        super().__init__(
            f"check digit {char!r} at position {position} is not one ASCII decimal digit"
        )


class ChecksumMismatch(CUSIPError):
    """The check digit is well formed but does not match the computed value."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"incorrect check digit {actual!r} when expecting {expected!r}")

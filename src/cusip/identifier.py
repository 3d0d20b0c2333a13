"""Validated CUSIP values and the CINS view over them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .checksum import compute_check_digit
from .codec import DIGITS, ISSUER_NUM_LENGTH, PAYLOAD_LENGTH, check_format

# CINS country codes left unassigned by the registration authority.
EXTENDED_COUNTRY_CODES = frozenset("IOZ")


@dataclass(frozen=True, order=True, repr=False)
class CUSIP:
    """
    A structurally valid nine character CUSIP.

    Construction only checks the layout. Use :func:`cusip.parse_strict` when
    the check digit must also agree with the checksum.
    """

    payload: str

    def __post_init__(self) -> None:
        check_format(self.payload)

    def __str__(self) -> str:
        return self.payload

    def __repr__(self) -> str:
        return f"CUSIP({self.payload!r})"

    @property
    def issuer_num(self) -> str:
        return self.payload[:ISSUER_NUM_LENGTH]

    @property
    def issue_num(self) -> str:
        return self.payload[ISSUER_NUM_LENGTH:PAYLOAD_LENGTH]

    @property
    def check_digit(self) -> str:
        return self.payload[PAYLOAD_LENGTH]

    @property
    def cusip6(self) -> str:
        """Alias for the issuer number, as it is often called in filings."""

        return self.issuer_num

    @property
    def cusip8(self) -> str:
        """Everything but the check digit."""

        return self.payload[:PAYLOAD_LENGTH]

    @property
    def has_valid_check_digit(self) -> bool:
        return compute_check_digit(self.cusip8) == self.check_digit

    @property
    def is_cins(self) -> bool:
        """CINS numbers start with a letter identifying the issuer's country."""

        return self.payload[0].isalpha()

    def as_cins(self) -> Optional["CINS"]:
        return CINS(self) if self.is_cins else None

    @property
    def has_private_issuer(self) -> bool:
        """
        Issuer numbers reserved for internal use.

        Covers ``???99?`` as well as ``99000?`` through ``99999?``.
        """
        issuer = self.issuer_num
        if issuer[3:5] == "99":
            return True
        return issuer[:2] == "99" and all(char in DIGITS for char in issuer[2:5])

    @property
    def is_private_issue(self) -> bool:
        """Issue numbers ``90``-``99`` and ``9A``-``9Y`` are reserved for internal use."""

        tens, ones = self.issue_num
        return tens == "9" and (ones in DIGITS or "A" <= ones <= "Y")

    @property
    def is_private_use(self) -> bool:
        return self.has_private_issuer or self.is_private_issue


@dataclass(frozen=True, order=True, repr=False)
class CINS:
    """A CUSIP International Numbering System identifier."""

    cusip: CUSIP

    def __post_init__(self) -> None:
        if not self.cusip.is_cins:
            raise ValueError(f"{self.cusip} is not a CINS number")

    def __str__(self) -> str:
        return str(self.cusip)

    def __repr__(self) -> str:
        return f"CINS({self.cusip.payload!r})"

    @property
    def country_code(self) -> str:
        return self.cusip.payload[0]

    @property
    def is_base(self) -> bool:
        return self.country_code not in EXTENDED_COUNTRY_CODES

    @property
    def is_extended(self) -> bool:
        return self.country_code in EXTENDED_COUNTRY_CODES

    @property
    def issuer_num(self) -> str:
        """The issuer number without its leading country code."""

        return self.cusip.issuer_num[1:]

    @property
    def issue_num(self) -> str:
        return self.cusip.issue_num

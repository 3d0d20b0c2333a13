"""Tests for the parsing and building functions."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from cusip import (
    ChecksumMismatch,
    CUSIPError,
    InvalidCharacter,
    InvalidCheckDigit,
    LengthError,
    build_from_parts,
    build_from_payload,
    compute_check_digit,
    normalize,
    parse,
    parse_loose,
    parse_strict,
    validate,
)

VALID = ["023135106", "037833100", "09739D100", "254709108", "837649128", "S08000AA9", "12345*@#7"]


class TestParse:
    """Test lenient and strict parsing."""

    def test_amazon(self):
        """Fields are split at positions 6 and 8."""
        cusip = parse_strict("023135106")
        assert cusip.payload == "023135106"
        assert cusip.issuer_num == "023135"
        assert cusip.issue_num == "10"
        assert cusip.check_digit == "6"

    def test_apple(self):
        """A check digit of zero validates."""
        assert parse_strict("037833100").check_digit == "0"

    def test_incorrect_check_digit(self):
        """Lenient parsing accepts what strict parsing rejects."""
        cusip = parse("023135107")
        assert cusip.check_digit == "7"

        with pytest.raises(ChecksumMismatch) as excinfo:
            parse_strict("023135107")
        assert excinfo.value.expected == "6"
        assert excinfo.value.actual == "7"

    @pytest.mark.parametrize("func", [parse, parse_strict])
    def test_too_short(self, func):
        """Eight characters is a length error in both modes."""
        with pytest.raises(LengthError) as excinfo:
            func("02313510")
        assert excinfo.value.actual == 8

    @pytest.mark.parametrize("func", [parse, parse_strict])
    def test_lowercase_letter(self, func):
        """Lowercase input is not silently uppercased."""
        with pytest.raises(InvalidCharacter) as excinfo:
            func("02313a106")
        assert excinfo.value.char == "a"
        assert excinfo.value.position == 6

    @pytest.mark.parametrize("func", [parse, parse_strict])
    def test_letter_check_digit(self, func):
        """A letter in position nine is a structural error, not a mismatch."""
        with pytest.raises(InvalidCheckDigit) as excinfo:
            func("02313510A")
        assert excinfo.value.position == 9

    def test_errors_share_base_class(self):
        """Callers can catch every failure with CUSIPError or ValueError."""
        for text in ("", "02313a106", "02313510A", "023135107"):
            with pytest.raises(CUSIPError):
                parse_strict(text)
            with pytest.raises(ValueError):
                parse_strict(text)

    @pytest.mark.parametrize("text", VALID)
    def test_reparse_is_idempotent(self, text):
        """Parsing the canonical form again yields an equal value."""
        cusip = parse_strict(text)
        again = parse_strict(str(cusip))
        assert again == cusip
        assert (again.issuer_num, again.issue_num, again.check_digit) == (
            cusip.issuer_num,
            cusip.issue_num,
            cusip.check_digit,
        )

    @pytest.mark.parametrize("cusip8", ["02313510", "09739D10", "S08000AA", "12345*@#"])
    def test_strict_matches_checksum(self, cusip8):
        """Exactly one check digit passes strict parsing for a payload."""
        accepted = []
        for digit in "0123456789":
            parse(cusip8 + digit)
            if validate(cusip8 + digit):
                accepted.append(digit)
        assert accepted == [compute_check_digit(cusip8)]


class TestLooseParsing:
    """Test explicit normalization."""

    def test_normalize(self):
        """Whitespace is stripped and ASCII letters uppercased."""
        assert normalize("\t09739d100    ") == "09739D100"

    def test_normalize_leaves_non_ascii(self):
        """Only a-z is uppercased."""
        assert normalize("0973ßd100") == "0973ßD100"

    def test_parse_loose(self):
        """Loose parsing is strict by default."""
        assert parse_loose("\t09739d100    ").payload == "09739D100"
        with pytest.raises(ChecksumMismatch):
            parse_loose(" 023135107 ")

    def test_parse_loose_lenient(self):
        """Loose parsing can skip the checksum."""
        assert parse_loose(" 023135107 ", strict=False).payload == "023135107"


class TestValidate:
    """Test validate function."""

    @pytest.mark.parametrize("text", VALID)
    def test_valid(self, text):
        assert validate(text)

    @pytest.mark.parametrize("text", ["", "023135107", "02313a106", "09739d100", "023135106 "])
    def test_invalid(self, text):
        assert not validate(text)


class TestBuild:
    """Test building CUSIPs from their parts."""

    def test_from_payload(self):
        """The computed check digit is appended."""
        assert build_from_payload("02313510").payload == "023135106"

    def test_from_payload_wrong_length(self):
        with pytest.raises(LengthError) as excinfo:
            build_from_payload("023135106")
        assert excinfo.value.actual == 9
        assert excinfo.value.field == "payload"

    def test_from_payload_invalid_character(self):
        with pytest.raises(InvalidCharacter) as excinfo:
            build_from_payload("0231-510")
        assert excinfo.value.position == 5

    def test_from_parts(self):
        cusip = build_from_parts("09739D", "10")
        assert cusip.payload == "09739D100"
        assert validate(str(cusip))

    def test_from_parts_wrong_issuer_length(self):
        with pytest.raises(LengthError) as excinfo:
            build_from_parts("02313", "10")
        assert excinfo.value.expected == 6
        assert excinfo.value.field == "issuer number"

    def test_from_parts_wrong_issue_length(self):
        with pytest.raises(LengthError) as excinfo:
            build_from_parts("023135", "100")
        assert excinfo.value.expected == 2
        assert excinfo.value.field == "issue number"

    def test_from_parts_reports_issue_position(self):
        """Issue number positions continue from the issuer number."""
        with pytest.raises(InvalidCharacter) as excinfo:
            build_from_parts("023135", "1a")
        assert excinfo.value.char == "a"
        assert excinfo.value.position == 8


def test_package_import_skips_batch_dependencies():
    """Importing the parser alone does not load polars or tqdm."""
    code = (
        "import sys, cusip; "
        "cusip.parse_strict('023135106'); "
        "print('polars' in sys.modules, 'tqdm' in sys.modules)"
    )
    src = str(Path(__file__).resolve().parents[1] / "src")
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(filter(None, [src, os.environ.get("PYTHONPATH")]))}
    result = subprocess.run(
        [sys.executable, "-c", code], capture_output=True, text=True, check=True, env=env
    )
    assert result.stdout.strip() == "False False"

"""Unit tests for validation utilities."""

import pytest

from app.utils.exceptions import ValidationError
from app.validators.unified import parse_limit, require_wallet_address, validate_wallet_address


class TestWalletAddressValidation:
    """Tests for wallet address validation."""

    def test_empty_address_invalid(self):
        """Empty address should be invalid."""
        assert validate_wallet_address("") == (False, "Address is empty")

    def test_short_address_invalid(self):
        """Short address should be invalid."""
        assert validate_wallet_address("0x1234") == (False, "Address must be 42 characters")

    def test_no_0x_prefix_invalid(self):
        """Address without 0x prefix should be invalid."""
        is_valid, _ = validate_wallet_address("1" * 42)
        assert not is_valid

    def test_valid_address_format(self):
        """Valid address format should pass."""
        assert validate_wallet_address("0x" + "1" * 40) == (True, None)

    def test_invalid_hex_characters(self):
        """Address with non-hex characters should be invalid."""
        assert validate_wallet_address("0x" + "z" * 40) == (False, "Invalid address format")

    def test_trailing_newline_invalid(self):
        """A newline after 40 hex characters is not part of an address."""
        is_valid, _ = validate_wallet_address("0x" + "1" * 40 + "\n")
        assert not is_valid


class TestRequireWalletAddress:
    """Tests for the raising validator used by the API."""

    def test_returns_lower_case(self):
        mixed = "0xA2F9ebe6b91c2c4020e87c879445885ba54aebb7"
        assert require_wallet_address(mixed) == mixed.lower()

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            (None, "address is required"),
            ("", "address is required"),
            (123, "address must be a string"),
            ("0x123", "Invalid address format"),
            ("0x" + "a" * 40 + "\n", "Invalid address format"),
            ("0x" + "a" * 39 + "\n", "Invalid address format"),
        ],
    )
    def test_errors(self, value, message):
        with pytest.raises(ValidationError) as exc_info:
            require_wallet_address(value)
        assert exc_info.value.message == message
        assert exc_info.value.field == "address"

    def test_custom_field_name(self):
        with pytest.raises(ValidationError, match="Invalid wallet format"):
            require_wallet_address("nope", field_name="wallet")


class TestParseLimit:
    """Tests for the ``limit`` query parameter."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, 50), ("10", 10), ("abc", 50), ("0", 50), ("-5", 50), ("", 50)],
    )
    def test_parse_limit(self, raw, expected):
        assert parse_limit(raw) == expected

    def test_custom_default(self):
        assert parse_limit("x", default=20) == 20

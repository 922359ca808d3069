"""
Tests for operand resolution.
"""

import pytest
import sys
import os
import string

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from regasm.errors import ParseError
from regasm.operands import (
    has_binary_marker,
    parse_decimal,
    resolve_mov_source,
    resolve_operand,
)


class TestHasBinaryMarker:
    """Tests for has_binary_marker."""

    @pytest.mark.parametrize("token", ["b1", "B0", "b101", "xb1", "bxb1"])
    def test_marker_followed_by_digit(self, token):
        """Test tokens with a digit directly after a b marker."""
        assert has_binary_marker(token)

    @pytest.mark.parametrize("token", ["b", "bad", "bx1", "1b", "abc"])
    def test_no_marker(self, token):
        """Test tokens where no b is directly followed by a digit."""
        assert not has_binary_marker(token)


class TestResolveOperand:
    """Tests for resolve_operand."""

    @pytest.mark.parametrize("value", [0, 1, 7, 255, 1000, 65535])
    def test_decimal(self, value):
        """Test that decimal tokens resolve to themselves."""
        assert resolve_operand(str(value)) == value

    @pytest.mark.parametrize("token,expected", [
        ("b0", 0),
        ("b1", 1),
        ("b101", 5),
        ("B1111", 15),
        ("b1111111111111111", 65535),
    ])
    def test_binary(self, token, expected):
        """Test that b-prefixed binary literals are parsed base 2."""
        assert resolve_operand(token) == expected

    def test_invalid_binary_is_fatal(self):
        """Test that a marker with non-binary digits raises."""
        with pytest.raises(ParseError, match="Not a valid binary number: b12"):
            resolve_operand("b12", line_num=3)

    @pytest.mark.parametrize("token", ["b1_0", "b0b11", "b1_1_1", "B1_"])
    def test_binary_rejects_int_syntax(self, token):
        """Test that underscores and a 0b prefix are not binary digits."""
        with pytest.raises(ParseError, match="Not a valid binary number"):
            resolve_operand(token)

    def test_binary_too_wide(self):
        """Test that binary values above 16 bits are rejected."""
        with pytest.raises(ParseError, match="does not fit in 16 bits"):
            resolve_operand("b" + "1" * 17)

    def test_b_without_digit_is_register(self):
        """Test that 'b' with no qualifying digit falls back to a letter."""
        assert resolve_operand("b") == 1
        assert resolve_operand("bad") == 1

    @pytest.mark.parametrize("index,letter", list(enumerate(string.ascii_lowercase)))
    def test_letters_case_insensitive(self, index, letter):
        """Test that a-z and A-Z map to 0-25."""
        assert resolve_operand(letter) == index
        assert resolve_operand(letter.upper()) == index

    @pytest.mark.parametrize("token", ["1,", "65536", "-1", "?", "_x"])
    def test_unrecognised_falls_back_to_zero(self, token):
        """Test the lenient fallback for unresolvable tokens."""
        assert resolve_operand(token) == 0

    def test_strict_rejects_unrecognised(self):
        """Test that strict resolution raises instead of returning 0."""
        with pytest.raises(ParseError, match="Cannot resolve operand: 1,") as exc:
            resolve_operand("1,", line_num=2, strict=True)
        assert exc.value.line_num == 2

    def test_strict_accepts_letters_and_numbers(self):
        """Test that strict mode still resolves normal operands."""
        assert resolve_operand("c", strict=True) == 2
        assert resolve_operand("42", strict=True) == 42


class TestResolveMovSource:
    """Tests for resolve_mov_source."""

    def test_literal(self):
        """Test that decimals are immediate values."""
        assert resolve_mov_source("5") == (True, 5)

    def test_register(self):
        """Test that letters are register references."""
        assert resolve_mov_source("c") == (False, 2)

    def test_binary_looking_token_is_register(self):
        """Test that MOV does not apply the binary rule to its source."""
        assert resolve_mov_source("b101") == (False, 1)

    def test_parse_decimal_range(self):
        """Test the 16-bit decimal bounds."""
        assert parse_decimal("65535") == 65535
        assert parse_decimal("65536") is None
        assert parse_decimal("") is None

    def test_parse_decimal_leading_plus(self):
        """Test that a single leading + is accepted."""
        assert parse_decimal("+5") == 5
        assert resolve_operand("+5") == 5
        assert resolve_mov_source("+5") == (True, 5)
        assert parse_decimal("+") is None
        assert parse_decimal("++5") is None

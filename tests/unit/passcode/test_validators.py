"""Tests for passcode input validation."""

import pytest

from kanban.core.modules.passcode.validators import validate_code, validate_name
from kanban.core.result import Err, ErrorKind, Ok


class TestValidateCode:
    """Passcodes are exactly six ASCII digits."""

    def test_valid(self):
        assert validate_code("000000") == Ok("000000")
        assert validate_code("123456") == Ok("123456")

    @pytest.mark.parametrize("code", ["", "12345", "1234567", "12a456", " 123456", "123456\n", "١٢٣٤٥٦"])
    def test_invalid(self, code):
        result = validate_code(code)
        assert isinstance(result, Err)
        assert result.kind == ErrorKind.MALFORMED_INPUT
        assert result.message == "Passcode must be exactly 6 digits"


class TestValidateName:
    def test_strips_whitespace(self):
        assert validate_name("  Guest  ") == Ok("Guest")

    def test_required(self):
        result = validate_name("   ")
        assert isinstance(result, Err)
        assert result.message == "Name is required"

    def test_length_limit(self):
        assert validate_name("x" * 100) == Ok("x" * 100)
        assert isinstance(validate_name("x" * 101), Err)

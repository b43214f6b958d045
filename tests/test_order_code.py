"""Tests for short order codes."""

from datetime import date

import pytest

from tally.core.exceptions import ValidationError
from tally.domain.order_code import (
    generate_order_code,
    is_valid_order_code,
    normalize_order_code,
    to_base36,
)


class TestToBase36:

    def test_zero(self):
        assert to_base36(0) == "0"

    def test_digit_boundaries(self):
        assert to_base36(35) == "Z"
        assert to_base36(36) == "10"
        assert to_base36(36 * 36 - 1) == "ZZ"

    def test_largest_eight_hex_digits(self):
        assert to_base36(0xFFFFFFFF) == "1Z141Z3"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            to_base36(-1)


class TestGenerateOrderCode:

    def test_uses_year_and_id_tail(self):
        code = generate_order_code("00000000-0000-0000-0000-0000ffffffff", date(2025, 3, 14))
        assert code == "25-1Z141Z3"

    def test_same_id_gives_same_code(self):
        order_id = "123e4567-e89b-12d3-a456-426614174000"
        first = generate_order_code(order_id, date(2025, 1, 1))
        second = generate_order_code(order_id, date(2025, 1, 1))
        assert first == second
        assert first == f"25-{to_base36(0x14174000)}"

    def test_all_zero_tail(self):
        code = generate_order_code("00000000-0000-0000-0000-000000000000", date(2025, 6, 1))
        assert code == "25-0"

    def test_year_is_zero_padded(self):
        order_id = "00000000-0000-0000-0000-000000000024"
        assert generate_order_code(order_id, date(2005, 1, 1)) == "05-10"
        assert generate_order_code(order_id, date(2100, 1, 1)) == "00-10"

    def test_hyphens_are_ignored(self):
        with_hyphens = generate_order_code("0000-0000-00ab-cdef", date(2024, 1, 1))
        without = generate_order_code("000000000000abcdef", date(2024, 1, 1))
        assert with_hyphens == without

    def test_code_without_id(self):
        code = generate_order_code(today=date(2025, 1, 1))
        assert code.startswith("25-")
        assert is_valid_order_code(code)

    def test_only_upper_case_base36_characters(self):
        code = generate_order_code("9f1c2e3d-4b5a-6978-8a9b-0c1d2e3f4a5b", date(2025, 1, 1))
        assert is_valid_order_code(code)
        assert code == code.upper()

    def test_non_hex_id_rejected(self):
        with pytest.raises(ValidationError):
            generate_order_code("order-xyz", date(2025, 1, 1))


class TestNormalizeOrderCode:

    def test_trims_and_upper_cases(self):
        assert normalize_order_code("  25-9p7c ") == "25-9P7C"

    def test_valid_pattern(self):
        assert is_valid_order_code("25-9P7C")
        assert not is_valid_order_code("25-9p7c")
        assert not is_valid_order_code("2025-9P7C")
        assert not is_valid_order_code("25-")

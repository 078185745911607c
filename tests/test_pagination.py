"""
Tests for Offset Pagination
"""

import pytest

from catalog.services.pagination import DEFAULT_LIMIT, OffsetPagination


class TestResolve:
    """Tests for OffsetPagination.resolve()."""

    def test_resolve_valid_values(self):
        page = OffsetPagination.resolve(10, 20)

        assert page == OffsetPagination(limit=10, offset=20)

    def test_resolve_absent_values(self):
        page = OffsetPagination.resolve(None, None)

        assert page.limit == DEFAULT_LIMIT
        assert page.offset == 0

    @pytest.mark.parametrize("raw_limit", [0, -1, "abc", "", True, float("nan")])
    def test_resolve_invalid_limit_defaults(self, raw_limit):
        assert OffsetPagination.resolve(raw_limit, 0).limit == DEFAULT_LIMIT

    @pytest.mark.parametrize("raw_offset", [-5, "abc", None])
    def test_resolve_invalid_offset_defaults(self, raw_offset):
        assert OffsetPagination.resolve(5, raw_offset).offset == 0

    @pytest.mark.parametrize("raw", [2**63, 10**30, 10**400, "1e30"])
    def test_resolve_values_beyond_64_bits_default(self, raw):
        page = OffsetPagination.resolve(raw, raw)

        assert page == OffsetPagination(limit=DEFAULT_LIMIT, offset=0)

    def test_resolve_largest_64_bit_value(self):
        assert OffsetPagination.resolve(2**63 - 1, 0).limit == 2**63 - 1

    def test_resolve_offset_zero_is_valid(self):
        assert OffsetPagination.resolve(5, 0).offset == 0

    def test_resolve_numeric_strings(self):
        assert OffsetPagination.resolve("8", "24") == OffsetPagination(limit=8, offset=24)

    def test_resolve_custom_default(self):
        assert OffsetPagination.resolve(None, None, default_limit=50).limit == 50


class TestNextPage:
    def test_next_page_is_limit_plus_offset(self):
        assert OffsetPagination(limit=16, offset=32).next_page == 48

    def test_next_page_not_clamped(self):
        """The cursor is reported even when it is far past the data."""
        assert OffsetPagination.resolve(16, 10_000).next_page == 10_016

"""Tests for range expression expansion."""

import pytest

from gistembed.directive.ranges import MAX_SPAN, expand_range
from gistembed.errors import InvalidRangeError


class TestExpandRange:
    """Tests for expand_range()."""

    def test_pairs_and_singles(self) -> None:
        """Pairs are inclusive and mix with single numbers."""
        assert expand_range("1-3,5") == {1, 2, 3, 5}

    def test_empty_expression(self) -> None:
        """Empty input names no lines."""
        assert expand_range("") == frozenset()
        assert expand_range("   ") == frozenset()

    def test_duplicates_collapse(self) -> None:
        """Repeated numbers appear once."""
        assert expand_range("5,5,5") == {5}

    def test_overlapping_pairs(self) -> None:
        """Overlapping pairs are unioned regardless of order."""
        assert expand_range("4-6,1-5") == {1, 2, 3, 4, 5, 6}

    def test_descending_pair_is_swapped(self) -> None:
        """A hi-lo pair expands the same as lo-hi."""
        assert expand_range("5-3") == {3, 4, 5}

    def test_whitespace_around_segments(self) -> None:
        """Spaces around numbers and dashes are tolerated."""
        assert expand_range(" 1 - 2 , 7 ") == {1, 2, 7}

    def test_span_limit(self) -> None:
        """A pair may span MAX_SPAN lines but no more."""
        assert len(expand_range(f"1-{MAX_SPAN}")) == MAX_SPAN
        with pytest.raises(InvalidRangeError):
            expand_range(f"1-{MAX_SPAN + 1}")
        with pytest.raises(InvalidRangeError):
            expand_range("1000000000-1")

    @pytest.mark.parametrize("expression", ["a", "1-b", "1,,2", "1-2-3", "-4", "0"])
    def test_malformed_segments_rejected(self, expression: str) -> None:
        """Non-numeric, empty, negative or zero segments raise."""
        with pytest.raises(InvalidRangeError) as excinfo:
            expand_range(expression)
        assert excinfo.value.expression == expression

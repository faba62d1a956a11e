"""Tests for slice infrastructure.

Validates the immutable view pattern for text and sequence input.
"""

from __future__ import annotations

import pytest

from parsecomb.errors import InputTypeError
from parsecomb.slice import SeqSlice, Slice, Span, TextSlice, as_slice

# ============================================================================
# CONSTRUCTION
# ============================================================================


class TestTextSliceBasic:
    """Test basic TextSlice functionality."""

    def test_create_full_view(self) -> None:
        """Default bounds cover the whole source."""
        text = TextSlice("hello")

        assert text.start == 0
        assert text.end == 5
        assert len(text) == 5
        assert not text.is_empty

    def test_create_partial_view(self) -> None:
        """Explicit bounds select a window."""
        text = TextSlice("hello", 1, 3)

        assert text.value == "el"
        assert text.offset == 1

    def test_bounds_are_clamped(self) -> None:
        """Out-of-range bounds are clamped to the source."""
        text = TextSlice("hi", 5, 10)

        assert text.start == 2
        assert text.end == 2
        assert text.is_empty

    def test_immutability(self) -> None:
        """TextSlice is a frozen dataclass."""
        text = TextSlice("hello")

        with pytest.raises(AttributeError):
            text.start = 3  # type: ignore[misc]

    def test_empty_source(self) -> None:
        """Empty source gives an empty view."""
        text = TextSlice("")

        assert text.is_empty
        assert len(text) == 0
        assert text.first() is None

    def test_equal_views_compare_equal(self) -> None:
        """Views over equal data with equal bounds are equal."""
        assert TextSlice("abc", 1) == TextSlice("abc", 1)
        assert TextSlice("abc", 1) != TextSlice("abc", 2)


# ============================================================================
# HEAD / SPLIT
# ============================================================================


class TestFirst:
    """Test first() head extraction."""

    def test_first_text(self) -> None:
        """first() returns the head character and the remainder."""
        head, rest = TextSlice("abc").first()  # type: ignore[misc]

        assert head == "a"
        assert rest.value == "bc"
        assert rest.offset == 1

    def test_first_does_not_mutate(self) -> None:
        """The original view is unchanged after first()."""
        text = TextSlice("abc")
        text.first()

        assert text.value == "abc"

    def test_first_multibyte_code_point(self) -> None:
        """Characters outside the BMP are single elements."""
        head, rest = TextSlice("😀x").first()  # type: ignore[misc]

        assert head == "😀"
        assert rest.value == "x"

    def test_first_sequence(self) -> None:
        """first() over a list yields the item."""
        head, rest = SeqSlice([10, 20, 30]).first()  # type: ignore[misc]

        assert head == 10
        assert rest.value == [20, 30]

    def test_first_bytes(self) -> None:
        """bytes elements are ints."""
        head, rest = SeqSlice(b"AB").first()  # type: ignore[misc]

        assert head == 65
        assert rest.value == b"B"


class TestSplitAt:
    """Test split_at() prefix extraction."""

    def test_split_exact(self) -> None:
        """Splitting at the length gives the whole prefix and empty rest."""
        prefix, rest = TextSlice("abc").split_at(3)  # type: ignore[misc]

        assert prefix.value == "abc"
        assert rest.is_empty

    def test_split_zero(self) -> None:
        """Splitting at zero gives an empty prefix."""
        prefix, rest = TextSlice("abc").split_at(0)  # type: ignore[misc]

        assert prefix.is_empty
        assert rest.value == "abc"

    def test_split_insufficient_input(self) -> None:
        """Requesting more than available returns None, not a partial prefix."""
        assert TextSlice("ab").split_at(3) is None
        assert SeqSlice([1]).split_at(2) is None

    def test_split_negative_raises(self) -> None:
        """Negative lengths are a programming error."""
        with pytest.raises(ValueError, match="must be >= 0"):
            TextSlice("ab").split_at(-1)

    def test_split_shares_source(self) -> None:
        """Both halves view the same source object (no copy)."""
        source = [1, 2, 3, 4]
        prefix, rest = SeqSlice(source).split_at(2)  # type: ignore[misc]

        assert prefix.source is source
        assert rest.source is source

    def test_split_inside_window(self) -> None:
        """Splitting a window keeps absolute offsets."""
        prefix, rest = TextSlice("0123456", 2, 6).split_at(1)  # type: ignore[misc]

        assert prefix.value == "2"
        assert rest.value == "345"
        assert rest.offset == 3


# ============================================================================
# PREFIX MATCHING
# ============================================================================


class TestStartsWith:
    """Test element-wise prefix comparison."""

    def test_text_prefix(self) -> None:
        """A str literal is matched as a prefix."""
        assert TextSlice("hello").starts_with("he")
        assert not TextSlice("hello").starts_with("eh")

    def test_text_prefix_respects_window_end(self) -> None:
        """Characters beyond the window end never match."""
        assert not TextSlice("hello", 0, 2).starts_with("hel")

    def test_empty_literal_always_matches(self) -> None:
        """The empty literal is a prefix of every view."""
        assert TextSlice("").starts_with("")
        assert SeqSlice([]).starts_with([])

    def test_sequence_prefix(self) -> None:
        """Sequence literals compare item by item."""
        assert SeqSlice((1, 2, 3)).starts_with([1, 2])
        assert not SeqSlice((1, 2, 3)).starts_with([2])

    def test_text_slice_with_sequence_literal(self) -> None:
        """A list of characters is compared element-wise against text."""
        assert TextSlice("abc").starts_with(["a", "b"])


# ============================================================================
# CONSUMED VIEW / LOCATION
# ============================================================================


class TestBetween:
    """Test between() for consumed-input views."""

    def test_between_returns_consumed_part(self) -> None:
        """between(rest) is the part of the view before rest."""
        text = TextSlice("hello world")
        _, rest = text.split_at(5)  # type: ignore[misc]

        assert text.between(rest).value == "hello"

    def test_between_same_view_is_empty(self) -> None:
        """Nothing consumed gives an empty view."""
        text = TextSlice("abc", 1)

        assert text.between(text).is_empty


class TestLineCol:
    """Test line/column computation."""

    def test_start_of_source(self) -> None:
        assert TextSlice("line1\nline2").line_col() == (1, 1)

    def test_start_of_second_line(self) -> None:
        assert TextSlice("line1\nline2", 6).line_col() == (2, 1)

    def test_middle_of_second_line(self) -> None:
        assert TextSlice("line1\nline2", 8).line_col() == (2, 3)


class TestSpan:
    """Test Span value type."""

    def test_span_length(self) -> None:
        assert len(Span(2, 7)) == 5

    def test_span_is_frozen(self) -> None:
        span = Span(0, 1)
        with pytest.raises(AttributeError):
            span.start = 1  # type: ignore[misc]


# ============================================================================
# as_slice
# ============================================================================


class TestAsSlice:
    """Test conversion of raw input to slices."""

    def test_str_becomes_text_slice(self) -> None:
        assert isinstance(as_slice("abc"), TextSlice)

    def test_list_becomes_seq_slice(self) -> None:
        assert isinstance(as_slice([1, 2]), SeqSlice)

    def test_tuple_and_bytes_become_seq_slice(self) -> None:
        assert isinstance(as_slice((1,)), SeqSlice)
        assert isinstance(as_slice(b"x"), SeqSlice)

    def test_slice_passes_through(self) -> None:
        text = TextSlice("abc", 1)

        assert as_slice(text) is text

    def test_iterator_rejected(self) -> None:
        """Iterators cannot be viewed without consuming them."""
        with pytest.raises(InputTypeError, match="Cannot parse input of type"):
            as_slice(iter([1, 2]))

    def test_input_type_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            as_slice(42)

    def test_builtin_slices_satisfy_protocol(self) -> None:
        assert isinstance(TextSlice("a"), Slice)
        assert isinstance(SeqSlice([1]), Slice)
        assert not isinstance("a", Slice)

    def test_iteration_over_view(self) -> None:
        assert list(SeqSlice([1, 2, 3], 1)) == [2, 3]
        assert "".join(TextSlice("abc", 0, 2)) == "ab"

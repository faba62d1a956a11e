"""Immutable input views for type-safe parsing.

Every parser takes a Slice and returns the unconsumed Slice alongside its
output. A Slice is a window ``[start, end)`` over an underlying source;
splitting only moves the window boundaries, it never copies the source.

Design Philosophy:
    - Views are immutable (frozen dataclasses)
    - EOF is a state (is_empty), not an exception
    - Every split returns NEW views (the original is unchanged)
    - Elements are the source's own units: code points for ``str``,
      items for any other ``Sequence``
    - Materialising the viewed data (``value``) is the only copy, and only
      happens on request

Extension:
    Any object satisfying the ``Slice`` protocol can be parsed: token
    streams behind a cursor, rope structures, memory-mapped buffers.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, Self, runtime_checkable

from parsecomb.errors import ErrorTemplate, InputTypeError

__all__ = ["SeqSlice", "Slice", "Span", "TextSlice", "as_slice"]


@runtime_checkable
class Slice[T](Protocol):
    """Capability contract for parser input.

    Implementations must be cheap to copy (a view, not the data) and must
    never mutate the underlying source. Splitting yields independent views
    over the same data.
    """

    @property
    def offset(self) -> int:
        """Absolute index of the first viewed element within the source."""
        ...

    @property
    def is_empty(self) -> bool: ...

    @property
    def value(self) -> Any:
        """The viewed elements as a concrete object (copies)."""
        ...

    def __len__(self) -> int: ...

    def first(self) -> tuple[T, Self] | None:
        """Return the first element and the remainder, or None when empty."""
        ...

    def split_at(self, n: int) -> tuple[Self, Self] | None:
        """Return ``(prefix, remainder)`` with ``len(prefix) == n``.

        Returns None when fewer than ``n`` elements remain. Never returns a
        partial prefix.
        """
        ...

    def starts_with(self, literal: Sequence[T]) -> bool:
        """Whether the view begins with ``literal``, compared element-wise."""
        ...

    def between(self, rest: Self) -> Self:
        """The part of this view that lies before ``rest``.

        ``rest`` must be a suffix of this view (as returned by a parser).
        """
        ...


@dataclass(frozen=True, slots=True)
class Span:
    """Absolute range ``[start, end)`` of consumed input.

    Example:
        >>> span = Span(2, 5)
        >>> len(span)
        3
    """

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


class _SourceView:
    """Window arithmetic shared by the built-in slices.

    Subclasses are frozen dataclasses declaring ``source``, ``start`` and
    ``end``.
    """

    __slots__ = ()

    source: Any
    start: int
    end: int

    def _clamp(self, start: int, end: int | None) -> None:
        size = len(self.source)
        hi = size if end is None else max(0, min(end, size))
        lo = max(0, min(start, hi))
        # Frozen dataclass: normalise once during __post_init__.
        object.__setattr__(self, "start", lo)
        object.__setattr__(self, "end", hi)

    def _view(self, start: int, end: int) -> Self:
        return type(self)(self.source, start, end)

    @property
    def offset(self) -> int:
        return self.start

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    def __len__(self) -> int:
        return self.end - self.start

    def __iter__(self) -> Iterator[Any]:
        source = self.source
        for i in range(self.start, self.end):
            yield source[i]

    def first(self) -> tuple[Any, Self] | None:
        if self.start >= self.end:
            return None
        return self.source[self.start], self._view(self.start + 1, self.end)

    def split_at(self, n: int) -> tuple[Self, Self] | None:
        if n < 0:
            raise ValueError(ErrorTemplate.negative_length(n))
        if n > self.end - self.start:
            return None
        mid = self.start + n
        return self._view(self.start, mid), self._view(mid, self.end)

    def starts_with(self, literal: Sequence[Any]) -> bool:
        size = len(literal)
        if size > self.end - self.start:
            return False
        source = self.source
        base = self.start
        return all(source[base + i] == item for i, item in enumerate(literal))

    def between(self, rest: Self) -> Self:
        # Clamp keeps the result inside this view even for a foreign rest.
        stop = max(self.start, min(rest.offset, self.end))
        return self._view(self.start, stop)

    @property
    def value(self) -> Any:
        return self.source[self.start : self.end]


@dataclass(frozen=True, slots=True, repr=False)
class TextSlice(_SourceView):
    """View over a ``str``. Elements are single code points.

    Python strings index by code point, so a split can never land inside a
    multi-byte character regardless of the text's eventual encoding.

    Example:
        >>> text = TextSlice("héllo")
        >>> head, rest = text.first()
        >>> head, rest.value
        ('h', 'éllo')
        >>> prefix, rest = text.split_at(2)
        >>> prefix.value, rest.value
        ('hé', 'llo')
        >>> text.split_at(10) is None
        True
    """

    source: str
    start: int = 0
    end: int | None = field(default=None)

    def __post_init__(self) -> None:
        self._clamp(self.start, self.end)

    def starts_with(self, literal: Sequence[Any]) -> bool:
        if isinstance(literal, str):
            return self.source.startswith(literal, self.start, self.end)
        return _SourceView.starts_with(self, literal)

    @property
    def value(self) -> str:
        return self.source[self.start : self.end]

    def line_col(self) -> tuple[int, int]:
        """Compute line and column for the start of this view.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = offset. Meant for building error values, not
            for use on the hot path.

        Example:
            >>> TextSlice("line1\\nline2", 8).line_col()
            (2, 3)
        """
        pos = self.start
        line = self.source.count("\n", 0, pos) + 1
        last_newline = self.source.rfind("\n", 0, pos)
        col = pos - last_newline if last_newline >= 0 else pos + 1
        return (line, col)

    def __repr__(self) -> str:
        preview = self.source[self.start : min(self.end, self.start + 20)]
        more = "..." if self.end - self.start > 20 else ""
        return f"TextSlice({preview!r}{more} @ {self.start}..{self.end})"


@dataclass(frozen=True, slots=True, repr=False)
class SeqSlice[T](_SourceView):
    """View over any ``Sequence`` (list, tuple, bytes, token arrays).

    Example:
        >>> tokens = SeqSlice(["let", "x", "=", "1"])
        >>> head, rest = tokens.first()
        >>> head, len(rest)
        ('let', 3)
        >>> rest.starts_with(["x", "="])
        True
    """

    source: Sequence[T]
    start: int = 0
    end: int | None = field(default=None)

    def __post_init__(self) -> None:
        self._clamp(self.start, self.end)

    def __repr__(self) -> str:
        return f"SeqSlice({type(self.source).__name__} @ {self.start}..{self.end})"


def as_slice(source: Any) -> Slice[Any]:
    """View ``source`` as a Slice.

    - ``str`` becomes a ``TextSlice``
    - objects already satisfying ``Slice`` are returned unchanged
    - any other ``Sequence`` becomes a ``SeqSlice``

    Raises:
        InputTypeError: For non-sequence input (iterators, mappings, ...)

    Example:
        >>> as_slice("abc").value
        'abc'
        >>> as_slice((1, 2, 3)).value
        (1, 2, 3)
    """
    if isinstance(source, str):
        return TextSlice(source)
    if isinstance(source, Slice):
        return source
    if isinstance(source, Sequence):
        return SeqSlice(source)
    raise InputTypeError(ErrorTemplate.unsupported_input(type(source).__name__))

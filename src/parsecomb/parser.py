"""Parser core and combinator algebra.

A ``Parser`` owns a single function from a ``Slice`` to an ``Outcome``.
Combinators never run anything eagerly: each one returns a new ``Parser``
whose function delegates to the wrapped parser(s) and post-processes the
outcome.

Architecture:
    - Parser is a frozen dataclass: no mutable state, no identity beyond
      its behaviour
    - Every parse function takes a Slice (immutable) and returns
      ``Success(value, rest)`` or ``Failure(error)``
    - Failures are values. Only contract violations raise
      (see :mod:`parsecomb.errors`)

Error Propagation:
    Combinators never unify error types on their own. The supported pattern
    is to ``map_err`` every primitive into one caller-defined error type
    before combining with sequencing or alternation:

        >>> from enum import Enum
        >>> from parsecomb.primitives import just
        >>> class Expect(Enum):
        ...     OPEN = "("
        ...     CLOSE = ")"
        >>> open_ = just("(").map_err(lambda _: Expect.OPEN)
        >>> close = just(")").map_err(lambda _: Expect.CLOSE)
        >>> open_.then(close).parse("(]")
        Failure(error=<Expect.CLOSE: ')'>)

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from parsecomb.constants import UNIT_ERROR
from parsecomb.errors import (
    ErrorTemplate,
    InvalidRepetitionError,
    ZeroWidthRepetitionError,
)
from parsecomb.outcome import Failure, Outcome, Success
from parsecomb.slice import Slice, Span, as_slice

__all__ = ["ParseFn", "Parser"]

logger = logging.getLogger(__name__)

type ParseFn[I, O, E] = Callable[[I], Outcome[O, I, E]]


def _check_bounds(at_least: int, at_most: int | None) -> None:
    if at_least < 0:
        raise InvalidRepetitionError(ErrorTemplate.negative_minimum(at_least))
    if at_most is not None and at_most < at_least:
        raise InvalidRepetitionError(ErrorTemplate.maximum_below_minimum(at_least, at_most))


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Parser[I: Slice[Any], O, E]:
    """Owned, immutable wrapper around a parse function.

    Example:
        >>> from parsecomb.primitives import unit
        >>> digit = unit().filter(str.isdigit).map(int)
        >>> digit.parse("7up")
        Success(value=7, rest=TextSlice('up' @ 1..3))

    Attributes:
        run: The wrapped parse function (Slice -> Outcome)
        name: Optional label used in repr() and log records
    """

    run: ParseFn[I, O, E]
    name: str | None = None

    @property
    def label(self) -> str:
        """Human-readable label: the name, or the parse function's name."""
        if self.name is not None:
            return self.name
        return getattr(self.run, "__qualname__", repr(self.run))

    def __repr__(self) -> str:
        return f"<Parser {self.label}>"

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def parse_at(self, input: I) -> Outcome[O, I, E]:  # noqa: A002
        """Run the parser on a Slice.

        Use this when calling a parser from inside another parse function.
        """
        return self.run(input)

    def parse(self, source: Any) -> Outcome[O, I, E]:
        """Run the parser on raw input (``str``, any ``Sequence``) or a Slice.

        Returns:
            ``Success(value, rest)`` or ``Failure(error)``

        Raises:
            InputTypeError: If ``source`` cannot be viewed as a Slice
        """
        return self.run(as_slice(source))

    def __call__(self, source: Any) -> Outcome[O, I, E]:
        return self.parse(source)

    def named(self, name: str) -> "Parser[I, O, E]":
        """Return the same parser carrying ``name`` as its label."""
        return replace(self, name=name)

    def traced(self, name: str | None = None) -> "Parser[I, O, E]":
        """Return a parser that logs every attempt and outcome at DEBUG level."""
        run = self.run
        label = name if name is not None else self.label

        def parse_traced(input: I) -> Outcome[O, I, E]:  # noqa: A002
            logger.debug("Trying %s at offset %d", label, input.offset)
            outcome = run(input)
            if isinstance(outcome, Success):
                logger.debug(
                    "%s matched offsets %d..%d", label, input.offset, outcome.rest.offset
                )
            else:
                logger.debug("%s failed at offset %d: %r", label, input.offset, outcome.error)
            return outcome

        return Parser(parse_traced, label)

    # ------------------------------------------------------------------
    # Output and error transforms
    # ------------------------------------------------------------------

    def map[O2](self, f: Callable[[O], O2]) -> "Parser[I, O2, E]":
        """Replace the output with ``f(output)``. Failures pass through.

        ``f`` is never called on a failed outcome.
        """
        run = self.run

        def parse_map(input: I) -> Outcome[O2, I, E]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Failure):
                return outcome
            return Success(f(outcome.value), outcome.rest)

        return Parser(parse_map)

    def map_err[E2](self, f: Callable[[E], E2]) -> "Parser[I, O, E2]":
        """Replace the error with ``f(error)``. Successes pass through."""
        run = self.run

        def parse_map_err(input: I) -> Outcome[O, I, E2]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Success):
                return outcome
            return Failure(f(outcome.error))

        return Parser(parse_map_err)

    def ignore(self) -> "Parser[I, None, E]":
        """Drop the output (replace it with ``None``)."""
        return self.map(_discard)

    def ignore_err(self) -> "Parser[I, O, None]":
        """Drop the error (replace it with the unit error)."""
        return self.map_err(_discard)

    def value[V](self, value: V) -> "Parser[I, V, E]":
        """Replace the output with a constant."""
        return self.map(lambda _: value)

    def filter(
        self,
        predicate: Callable[[O], bool],
        on_reject: Callable[[O], E] | None = None,
    ) -> "Parser[I, O, E]":
        """Fail when the output does not satisfy ``predicate``.

        The rejection error is ``on_reject(output)``, or the unit error when
        ``on_reject`` is omitted. Rejection happens after the wrapped parser
        consumed input; the caller only ever sees the error, so an enclosing
        ``or_``/``optional`` retries from the original input.

        Example:
            >>> from parsecomb.primitives import unit
            >>> upper = unit().filter(str.isupper, lambda c: f"lowercase {c!r}")
            >>> upper.parse("abc")
            Failure(error="lowercase 'a'")
        """
        run = self.run

        def parse_filter(input: I) -> Outcome[O, I, E]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Failure) or predicate(outcome.value):
                return outcome
            if on_reject is None:
                return Failure(UNIT_ERROR)
            return Failure(on_reject(outcome.value))

        return Parser(parse_filter)

    def filter_map[O2](
        self,
        f: Callable[[O], O2 | None],
        on_reject: Callable[[O], E] | None = None,
    ) -> "Parser[I, O2, E]":
        """Map the output with ``f``; a ``None`` result rejects like ``filter``."""
        run = self.run

        def parse_filter_map(input: I) -> Outcome[O2, I, E]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Failure):
                return outcome
            mapped = f(outcome.value)
            if mapped is not None:
                return Success(mapped, outcome.rest)
            if on_reject is None:
                return Failure(UNIT_ERROR)
            return Failure(on_reject(outcome.value))

        return Parser(parse_filter_map)

    # ------------------------------------------------------------------
    # Sequencing
    # ------------------------------------------------------------------

    def then[O2](self, other: "Parser[I, O2, E]") -> "Parser[I, tuple[O, O2], E]":
        """Parse with self, then other on the remainder; output both as a pair."""
        first_run = self.run
        second_run = other.run

        def parse_then(input: I) -> Outcome[tuple[O, O2], I, E]:  # noqa: A002
            first = first_run(input)
            if isinstance(first, Failure):
                return first
            second = second_run(first.rest)
            if isinstance(second, Failure):
                return second
            return Success((first.value, second.value), second.rest)

        return Parser(parse_then)

    def left[O2](self, other: "Parser[I, O2, E]") -> "Parser[I, O, E]":
        """Parse with self, then other; keep self's output."""
        first_run = self.run
        second_run = other.run

        def parse_left(input: I) -> Outcome[O, I, E]:  # noqa: A002
            first = first_run(input)
            if isinstance(first, Failure):
                return first
            second = second_run(first.rest)
            if isinstance(second, Failure):
                return second
            return Success(first.value, second.rest)

        return Parser(parse_left)

    def right[O2](self, other: "Parser[I, O2, E]") -> "Parser[I, O2, E]":
        """Parse with self, then other; keep other's output."""
        first_run = self.run
        second_run = other.run

        def parse_right(input: I) -> Outcome[O2, I, E]:  # noqa: A002
            first = first_run(input)
            if isinstance(first, Failure):
                return first
            return second_run(first.rest)

        return Parser(parse_right)

    def and_then[O2](self, f: Callable[[O], "Parser[I, O2, E]"]) -> "Parser[I, O2, E]":
        """Continue with the parser ``f(output)`` on the remainder.

        Lets the rest of the grammar depend on what was already parsed.

        Example:
            >>> from parsecomb.primitives import unit
            >>> counted = unit().filter(str.isdigit).and_then(
            ...     lambda n: unit().many(int(n), int(n)).recognize()
            ... )
            >>> counted.parse("3abcd").value.value
            'abc'
        """
        run = self.run

        def parse_and_then(input: I) -> Outcome[O2, I, E]:  # noqa: A002
            first = run(input)
            if isinstance(first, Failure):
                return first
            return f(first.value).run(first.rest)

        return Parser(parse_and_then)

    flat_map = and_then

    def surround[OL, OR](
        self, left: "Parser[I, OL, E]", right: "Parser[I, OR, E]"
    ) -> "Parser[I, O, E]":
        """Parse ``left``, self, ``right``; keep self's output."""
        return left.right(self).left(right)

    # ------------------------------------------------------------------
    # Alternation
    # ------------------------------------------------------------------

    def or_[E2](self, other: "Parser[I, O, E2]") -> "Parser[I, O, E | E2]":
        """Parse with self; on failure, parse the ORIGINAL input with other.

        First success wins. When both fail, other's error is returned (it is
        the last interpretation attempted).
        """
        first_run = self.run
        second_run = other.run

        def parse_or(input: I) -> Outcome[O, I, E | E2]:  # noqa: A002
            first = first_run(input)
            if isinstance(first, Success):
                return first
            return second_run(input)

        return Parser(parse_or)

    def __or__[E2](self, other: "Parser[I, O, E2]") -> "Parser[I, O, E | E2]":
        return self.or_(other)

    def optional(self) -> "Parser[I, O | None, E]":
        """Always succeed: the output, or ``None`` with no input consumed."""
        run = self.run

        def parse_optional(input: I) -> Outcome[O | None, I, E]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Success):
                return outcome
            return Success(None, input)

        return Parser(parse_optional)

    # ------------------------------------------------------------------
    # Repetition
    # ------------------------------------------------------------------

    def many(
        self,
        at_least: int = 0,
        at_most: int | None = None,
        *,
        strict: bool = False,
    ) -> "Parser[I, tuple[O, ...], E]":
        """Repeat until the parser fails or ``at_most`` outputs are collected.

        The remaining input is the state after the last success; a failing
        attempt's consumption is discarded. Fewer than ``at_least`` outputs
        is a failure carrying the error of the attempt that ended the loop.

        An iteration that succeeds without consuming input ends the
        repetition (its output is kept). With ``strict=True`` it raises
        ZeroWidthRepetitionError instead.

        Raises:
            InvalidRepetitionError: At construction, for negative
                ``at_least`` or ``at_most`` below ``at_least``
        """
        _check_bounds(at_least, at_most)
        run = self.run
        label = self.label

        def parse_many(input: I) -> Outcome[tuple[O, ...], I, E]:  # noqa: A002
            values: list[O] = []
            current = input
            stop_error: Any = UNIT_ERROR
            while at_most is None or len(values) < at_most:
                outcome = run(current)
                if isinstance(outcome, Failure):
                    stop_error = outcome.error
                    break
                values.append(outcome.value)
                if len(outcome.rest) == len(current):
                    _zero_width(label, current.offset, len(values) - 1, strict=strict)
                    break
                current = outcome.rest
            if len(values) < at_least:
                return Failure(stop_error)
            return Success(tuple(values), current)

        return Parser(parse_many)

    def separate[OS](
        self,
        by: "Parser[I, OS, E]",
        *,
        at_least: int = 0,
        trailing: bool = True,
        strict: bool = False,
    ) -> "Parser[I, tuple[O, ...], E]":
        """Parse zero or more items separated by ``by``; collect the items.

        With ``trailing=True`` a separator after the last item is consumed;
        otherwise it is left in the remaining input. Zero-width iterations
        (item and separator both consuming nothing) follow the same policy
        as ``many``.
        """
        _check_bounds(at_least, None)
        item_run = self.run
        sep_run = by.run
        label = self.label

        def parse_separate(input: I) -> Outcome[tuple[O, ...], I, E]:  # noqa: A002
            values: list[O] = []
            current = input
            after_item = input
            stop_error: Any = UNIT_ERROR
            while True:
                item = item_run(current)
                if isinstance(item, Failure):
                    stop_error = item.error
                    if not trailing:
                        current = after_item
                    break
                values.append(item.value)
                after_item = item.rest
                sep = sep_run(after_item)
                if isinstance(sep, Failure):
                    stop_error = sep.error
                    current = after_item
                    break
                if len(sep.rest) == len(current):
                    _zero_width(label, current.offset, len(values) - 1, strict=strict)
                    current = after_item
                    break
                current = sep.rest
            if len(values) < at_least:
                return Failure(stop_error)
            return Success(tuple(values), current)

        return Parser(parse_separate)

    # ------------------------------------------------------------------
    # Consumption introspection
    # ------------------------------------------------------------------

    def with_span(self) -> "Parser[I, tuple[O, Span], E]":
        """Pair the output with the absolute span of input it consumed."""
        run = self.run

        def parse_with_span(input: I) -> Outcome[tuple[O, Span], I, E]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Failure):
                return outcome
            return Success((outcome.value, Span(input.offset, outcome.rest.offset)), outcome.rest)

        return Parser(parse_with_span)

    def recognize(self) -> "Parser[I, I, E]":
        """Output the consumed input (as a Slice) instead of the parsed value.

        Example:
            >>> from parsecomb.primitives import unit
            >>> word = unit().filter(str.isalpha).many(1).recognize()
            >>> word.parse("hello world").value.value
            'hello'
        """
        run = self.run

        def parse_recognize(input: I) -> Outcome[I, I, E]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Failure):
                return outcome
            return Success(input.between(outcome.rest), outcome.rest)

        return Parser(parse_recognize)

    def lookahead(self) -> "Parser[I, O, E]":
        """Run the parser without consuming input on success."""
        run = self.run

        def parse_lookahead(input: I) -> Outcome[O, I, E]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Failure):
                return outcome
            return Success(outcome.value, input)

        return Parser(parse_lookahead)

    def negate(self, on_success: Callable[[O], E] | None = None) -> "Parser[I, None, E]":
        """Succeed with ``None`` (consuming nothing) iff the parser fails.

        When the parser matches, fail with ``on_success(output)`` or the unit
        error.
        """
        run = self.run

        def parse_negate(input: I) -> Outcome[None, I, E]:  # noqa: A002
            outcome = run(input)
            if isinstance(outcome, Failure):
                return Success(None, input)
            if on_success is None:
                return Failure(UNIT_ERROR)
            return Failure(on_success(outcome.value))

        return Parser(parse_negate)


def _discard(_: object) -> None:
    return None


def _zero_width(label: str, offset: int, iteration: int, *, strict: bool) -> None:
    if strict:
        raise ZeroWidthRepetitionError(
            ErrorTemplate.zero_width_iteration(label, offset, iteration),
            offset=offset,
            iteration=iteration,
        )
    logger.debug(
        "Zero-width iteration %d of %s at offset %d; stopping repetition",
        iteration,
        label,
        offset,
    )

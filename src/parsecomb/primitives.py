"""Primitive parsers.

These are the starting points for building grammars. Element-level
predicates are built by composing ``unit()`` with ``Parser.filter``:

    >>> from parsecomb.primitives import just, unit
    >>> char = lambda c: unit().filter(lambda d: d == c)
    >>> char("a").then(just("bc")).parse("abc").value
    ('a', 'bc')

Every primitive fails with the unit error (``None``); use ``map_err`` to
turn it into a caller-defined error.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence
from typing import Any

from parsecomb.constants import UNIT_ERROR
from parsecomb.errors import ErrorTemplate
from parsecomb.outcome import Failure, Outcome, Success
from parsecomb.parser import Parser
from parsecomb.slice import Slice

__all__ = ["choice", "end", "fail", "identity", "just", "pure", "unit"]


def unit[T]() -> Parser[Slice[T], T, None]:
    """Consume and output a single element.

    For text this is a one-character ``str``; for other sequences it is the
    item itself. Fails with the unit error on empty input.
    """

    def parse_unit(input: Slice[T]) -> Outcome[T, Slice[T], None]:  # noqa: A002
        head = input.first()
        if head is None:
            return Failure(UNIT_ERROR)
        element, rest = head
        return Success(element, rest)

    return Parser(parse_unit, "unit")


def just[L: Sequence[Any]](literal: L) -> Parser[Slice[Any], L, None]:
    """Match ``literal`` as a prefix of the input (element-wise) and output it.

    Consumes nothing on failure.

    Example:
        >>> just("hello").parse("hello, world").value
        'hello'
        >>> just([1, 2]).parse([1, 2, 3]).rest.value
        [3]
    """
    size = len(literal)

    def parse_just(input: Slice[Any]) -> Outcome[L, Slice[Any], None]:  # noqa: A002
        if not input.starts_with(literal):
            return Failure(UNIT_ERROR)
        split = input.split_at(size)
        if split is None:
            return Failure(UNIT_ERROR)
        return Success(literal, split[1])

    return Parser(parse_just, f"just({literal!r})")


def identity() -> Parser[Slice[Any], None, None]:
    """Succeed with ``None`` without consuming anything."""
    return pure(None).named("identity")


def pure[O](value: O) -> Parser[Slice[Any], O, None]:
    """Succeed with ``value`` without consuming anything."""

    def parse_pure(input: Slice[Any]) -> Outcome[O, Slice[Any], None]:  # noqa: A002
        return Success(value, input)

    return Parser(parse_pure, f"pure({value!r})")


def fail[E](error: E = UNIT_ERROR) -> Parser[Slice[Any], Any, E]:
    """Always fail with ``error``."""

    def parse_fail(input: Slice[Any]) -> Outcome[Any, Slice[Any], E]:  # noqa: A002, ARG001
        return Failure(error)

    return Parser(parse_fail, "fail")


def end() -> Parser[Slice[Any], None, None]:
    """Succeed (consuming nothing) only when the input is exhausted."""

    def parse_end(input: Slice[Any]) -> Outcome[None, Slice[Any], None]:  # noqa: A002
        if input.is_empty:
            return Success(None, input)
        return Failure(UNIT_ERROR)

    return Parser(parse_end, "end")


def choice[I: Slice[Any], O, E](*parsers: Parser[I, O, E]) -> Parser[I, O, E]:
    """Try each parser on the original input; the first success wins.

    Equivalent to ``a.or_(b).or_(c)...`` without the nesting. When every
    parser fails, the last parser's error is returned.

    Raises:
        ValueError: If no parsers are given
    """
    if not parsers:
        raise ValueError(ErrorTemplate.empty_choice())
    runs = tuple(parser.run for parser in parsers)

    def parse_choice(input: I) -> Outcome[O, I, E]:  # noqa: A002
        outcome: Outcome[O, I, E] = Failure(UNIT_ERROR)  # type: ignore[arg-type]
        for run in runs:
            outcome = run(input)
            if isinstance(outcome, Success):
                return outcome
        return outcome

    return Parser(parse_choice, "choice")

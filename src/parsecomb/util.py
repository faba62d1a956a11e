"""Parsers that are not primitives, but are handy building blocks."""

from collections.abc import Callable, Collection
from typing import Any

from parsecomb.parser import Parser
from parsecomb.primitives import unit
from parsecomb.slice import Slice

__all__ = ["none_of", "one_of", "recognize_while"]


def recognize_while[T](
    predicate: Callable[[T], bool], *, at_least: int = 1
) -> Parser[Slice[T], Slice[T], None]:
    """Consume elements while ``predicate`` holds; output the consumed view.

    Fails when fewer than ``at_least`` elements match.

    Example:
        >>> digits = recognize_while(str.isdigit)
        >>> digits.parse("2024-01").value.value
        '2024'
    """
    return unit().filter(predicate).ignore().many(at_least).recognize().ignore_err()


def _members(elements: Collection[Any]) -> Collection[Any]:
    # Members of a str are its characters, not its substrings.
    if isinstance(elements, str):
        return tuple(elements)
    return elements


def one_of(elements: Collection[Any]) -> Parser[Slice[Any], Any, None]:
    """Consume one element equal to a member of ``elements``.

    A ``str`` collection is treated as its individual characters, so
    ``one_of("+-")`` over a token list simply rejects non-str tokens.
    """
    members = _members(elements)
    return unit().filter(lambda element: element in members).named(f"one_of({elements!r})")


def none_of(elements: Collection[Any]) -> Parser[Slice[Any], Any, None]:
    """Consume one element not equal to any member of ``elements``."""
    members = _members(elements)
    return unit().filter(lambda element: element not in members).named(
        f"none_of({elements!r})"
    )

"""Forward declarations for recursive grammars.

A grammar rule that refers to itself (directly or through other rules)
needs a parser that exists before its body can be built:

    >>> from parsecomb.primitives import just
    >>> nested = forward("nested")
    >>> nested.define(nested.surround(just("("), just(")")).or_(just("x")))
    >>> nested.parse("((x))").value
    'x'

Recursion depth is tracked per thread and per forward parser, so parsers
stay shareable across threads without locking. Input nested deeper than
``max_depth`` is a parse failure like any other: the forward parser returns
``Failure(on_exceeded)`` and enclosing alternatives are still tried.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from parsecomb.constants import MAX_DEPTH, UNIT_ERROR
from parsecomb.errors import (
    DepthLimitExceededError,
    ErrorTemplate,
    ParserRedefinitionError,
    UndefinedParserError,
)
from parsecomb.outcome import Failure, Outcome
from parsecomb.parser import Parser

__all__ = ["DepthGuard", "ForwardParser", "forward"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage:
        guard = DepthGuard(max_depth=50, name="expr")
        with guard:
            # Recursive operation
            outcome = body.parse_at(input)

    Entering past ``max_depth`` raises DepthLimitExceededError. Forward
    parsers check ``is_exceeded()`` first and return a Failure instead.

    Thread Safety:
        Not shared: each thread gets its own guard (see ``_ForwardBody``).

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        name: Label of the guarded parser, for error messages
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    name: str = "<forward>"
    current_depth: int = field(default=0, init=False)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth."""
        if self.is_exceeded():
            raise DepthLimitExceededError(
                ErrorTemplate.depth_exceeded(self.name, self.max_depth),
                max_depth=self.max_depth,
            )
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """Check if depth limit has been reached."""
        return self.current_depth >= self.max_depth


class _ForwardBody:
    """Callable cell holding the definition of a forward parser.

    Bound exactly once, before the first parse. Holds no parse-time state
    other than the per-thread depth guards.
    """

    __slots__ = ("_local", "max_depth", "name", "on_exceeded", "parser")

    def __init__(self, name: str, max_depth: int, on_exceeded: Any) -> None:
        self.name = name
        self.max_depth = max_depth
        self.on_exceeded = on_exceeded
        self.parser: Parser[Any, Any, Any] | None = None
        self._local = threading.local()

    def _guard(self) -> DepthGuard:
        guard: DepthGuard | None = getattr(self._local, "guard", None)
        if guard is None:
            guard = DepthGuard(max_depth=self.max_depth, name=self.name)
            self._local.guard = guard
        return guard

    def __call__(self, input: Any) -> Outcome[Any, Any, Any]:  # noqa: A002
        parser = self.parser
        if parser is None:
            raise UndefinedParserError(ErrorTemplate.undefined_forward(self.name))
        guard = self._guard()
        if guard.is_exceeded():
            logger.warning(
                "Nesting depth limit %d reached in %s at offset %d",
                self.max_depth,
                self.name,
                input.offset,
            )
            return Failure(self.on_exceeded)
        with guard:
            return parser.run(input)


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class ForwardParser[O, E](Parser[Any, O, E]):
    """A parser whose body is supplied later with ``define()``."""

    @property
    def is_defined(self) -> bool:
        return self._body.parser is not None

    @property
    def _body(self) -> _ForwardBody:
        body = self.run
        assert isinstance(body, _ForwardBody)
        return body

    def define(self, parser: Parser[Any, O, E]) -> None:
        """Bind the body of this forward declaration.

        Raises:
            ParserRedefinitionError: If the parser is already defined
        """
        body = self._body
        if body.parser is not None:
            raise ParserRedefinitionError(ErrorTemplate.forward_redefined(body.name))
        body.parser = parser
        logger.debug("Defined forward parser %s as %s", body.name, parser.label)


def forward(
    name: str | None = None,
    *,
    max_depth: int = MAX_DEPTH,
    on_exceeded: Any = UNIT_ERROR,
) -> ForwardParser[Any, Any]:
    """Declare a parser now and define it later, for recursive rules.

    Args:
        name: Label for repr(), logs and error messages
        max_depth: Maximum nesting of this parser within one parse call
        on_exceeded: Error of the Failure returned when input nests deeper
            than ``max_depth`` (default: the unit error)
    """
    label = name if name is not None else "<forward>"
    return ForwardParser(_ForwardBody(label, max_depth, on_exceeded), label)

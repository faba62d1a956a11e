"""Exception hierarchy for combinator contract violations.

Parse failures are never raised: they are returned as ``Failure`` values
carrying a caller-defined error. The exceptions here signal programming
errors in how parsers are built or wired together (invalid repetition
bounds, zero-width repetition in strict mode, undefined forward
declarations) and resource limits (recursion depth).

All messages are produced by ``ErrorTemplate``. NO f-strings at raise sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "CombinatorError",
    "DepthLimitExceededError",
    "ErrorTemplate",
    "InputTypeError",
    "InvalidRepetitionError",
    "ParserRedefinitionError",
    "UndefinedParserError",
    "ZeroWidthRepetitionError",
]


class CombinatorError(Exception):
    """Base exception for all parsecomb contract violations."""


class InvalidRepetitionError(CombinatorError, ValueError):
    """Repetition bounds are invalid (negative minimum, max below min).

    Raised at construction time by ``Parser.many()`` and ``Parser.separate()``.
    """


class ZeroWidthRepetitionError(CombinatorError):
    """A repeated parser succeeded without consuming input.

    Only raised by ``many(strict=True)`` / ``separate(strict=True)``.
    The non-strict default stops the repetition after such an iteration.

    Attributes:
        offset: Input offset at which the zero-width iteration happened
        iteration: Zero-based index of the offending iteration
    """

    def __init__(self, message: str, *, offset: int, iteration: int) -> None:
        super().__init__(message)
        self.offset = offset
        self.iteration = iteration


class UndefinedParserError(CombinatorError):
    """A forward-declared parser was invoked before ``define()`` was called."""


class ParserRedefinitionError(CombinatorError):
    """``define()`` was called on a forward-declared parser a second time."""


class DepthLimitExceededError(CombinatorError):
    """A DepthGuard was entered past its configured limit.

    Raised only by direct use of ``DepthGuard``. Forward parsers check the
    guard first and report over-deep input as a parse Failure.

    Attributes:
        max_depth: The limit that was exceeded
    """

    def __init__(self, message: str, *, max_depth: int) -> None:
        super().__init__(message)
        self.max_depth = max_depth


class InputTypeError(CombinatorError, TypeError):
    """Input cannot be viewed as a Slice (not a str, Sequence, or Slice)."""


class ErrorTemplate:
    """Centralized error message templates.

    All contract-violation messages are created here, providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def negative_minimum(minimum: int) -> str:
        """Repetition minimum below zero."""
        return f"Repetition minimum must be >= 0, got {minimum}"

    @staticmethod
    def maximum_below_minimum(minimum: int, maximum: int) -> str:
        """Repetition maximum smaller than the minimum."""
        return f"Repetition maximum ({maximum}) must be >= minimum ({minimum})"

    @staticmethod
    def zero_width_iteration(name: str, offset: int, iteration: int) -> str:
        """Repeated parser matched the empty string."""
        return (
            f"Parser {name} succeeded without consuming input at offset {offset} "
            f"(iteration {iteration}); repetition would not terminate"
        )

    @staticmethod
    def undefined_forward(name: str) -> str:
        """Forward declaration used before definition."""
        return f"Forward-declared parser {name} was invoked before define()"

    @staticmethod
    def forward_redefined(name: str) -> str:
        """Forward declaration defined twice."""
        return f"Forward-declared parser {name} is already defined"

    @staticmethod
    def depth_exceeded(name: str, max_depth: int) -> str:
        """Recursion through a forward declaration went too deep."""
        return f"Maximum nesting depth ({max_depth}) exceeded in {name}"

    @staticmethod
    def empty_choice() -> str:
        """choice() called without parsers."""
        return "choice() requires at least one parser"

    @staticmethod
    def negative_length(length: int) -> str:
        """Slice split with a negative length."""
        return f"Prefix length must be >= 0, got {length}"

    @staticmethod
    def unsupported_input(type_name: str) -> str:
        """Input is not sliceable."""
        return (
            f"Cannot parse input of type {type_name}: "
            "expected str, a Sequence, or a Slice"
        )

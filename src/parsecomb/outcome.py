"""Parse outcomes: the two-case result of running a parser.

Pattern:
    Every parser has signature:
        def parse_foo(input: Slice) -> Outcome[Foo, Slice, Error]:
            ...
            return Success(parsed_value, rest)
            ...
            return Failure(error)

    Callers branch with structural pattern matching:
        match parser.parse("..."):
            case Success(value, rest):
                ...
            case Failure(error):
                ...

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import Literal

__all__ = ["Failure", "Outcome", "Success"]


@dataclass(frozen=True, slots=True)
class Success[O, I]:
    """Parser succeeded: parsed value plus the unconsumed input.

    ``rest`` is always a suffix of the input the parser was invoked on.

    Example:
        >>> from parsecomb.slice import TextSlice
        >>> outcome = Success("h", TextSlice("hello", 1))
        >>> outcome.value
        'h'
        >>> outcome.rest.value
        'ello'
    """

    value: O
    rest: I

    @property
    def is_success(self) -> Literal[True]:
        return True

    @property
    def is_failure(self) -> Literal[False]:
        return False

    def __bool__(self) -> Literal[True]:
        return True


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """Parser failed with a caller-defined error.

    Carries no partial output and no remaining input.
    """

    error: E

    @property
    def is_success(self) -> Literal[False]:
        return False

    @property
    def is_failure(self) -> Literal[True]:
        return True

    def __bool__(self) -> Literal[False]:
        return False


type Outcome[O, I, E] = Success[O, I] | Failure[E]

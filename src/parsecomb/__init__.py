"""parsecomb - Parser combinators over immutable input slices.

Build parsers out of small, independently testable pieces. A parser turns a
Slice of input (text or any sequence, e.g. a token array) into either
``Success(value, rest)`` or ``Failure(error)``, where the error type is
entirely up to the caller.

Public API:
    Parser - The unit of composition (map, filter, then, or_, many, ...)
    Success, Failure, Outcome - Parse outcomes
    Slice, TextSlice, SeqSlice, Span, as_slice - Input views
    unit, just, identity, pure, fail, end, choice - Primitive parsers
    recognize_while, one_of, none_of - Derived parsers
    forward, ForwardParser - Recursive grammars

Exceptions:
    CombinatorError - Base class for contract violations (never parse failures)

Example:
    >>> from parsecomb import just, unit
    >>> digit = unit().filter(str.isdigit).map(int)
    >>> digit.many(1).parse("42!").value
    (4, 2)
"""

from .errors import (
    CombinatorError,
    DepthLimitExceededError,
    InputTypeError,
    InvalidRepetitionError,
    ParserRedefinitionError,
    UndefinedParserError,
    ZeroWidthRepetitionError,
)
from .forward import ForwardParser, forward
from .outcome import Failure, Outcome, Success
from .parser import Parser
from .primitives import choice, end, fail, identity, just, pure, unit
from .slice import SeqSlice, Slice, Span, TextSlice, as_slice
from .util import none_of, one_of, recognize_while

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("parsecomb")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CombinatorError",
    "DepthLimitExceededError",
    "Failure",
    "ForwardParser",
    "InputTypeError",
    "InvalidRepetitionError",
    "Outcome",
    "Parser",
    "ParserRedefinitionError",
    "SeqSlice",
    "Slice",
    "Span",
    "Success",
    "TextSlice",
    "UndefinedParserError",
    "ZeroWidthRepetitionError",
    "__version__",
    "as_slice",
    "choice",
    "end",
    "fail",
    "forward",
    "identity",
    "just",
    "none_of",
    "one_of",
    "pure",
    "recognize_while",
    "unit",
]

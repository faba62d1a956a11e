"""JSON Value Example - A Recursive Grammar With Caller-Defined Errors.

Builds a JSON parser (https://json.org) from the public parsecomb API only:

1. Every primitive's unit error is mapped into one ``Expect`` enumeration
2. ``forward()`` ties the recursive knot between values, arrays and objects
3. ``separate``/``surround``/``choice`` assemble the structural rules
4. ``lookahead().and_then()`` picks the rule from the first character, so
   the failing rule's own error reaches the caller
5. ``recognize`` turns consumed input back into text for numbers

Exponents and ``\\u`` escapes are not supported.

Run:
    python examples/json_value.py

Python 3.13+.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from parsecomb import (
    Failure,
    Outcome,
    Parser,
    choice,
    end,
    forward,
    just,
    none_of,
    one_of,
    recognize_while,
    unit,
)


class Expect(Enum):
    """What the parser expected at the point of failure."""

    VALUE = "value"
    STRING = "string"
    NUMBER = "number"
    COLON = "':'"
    CLOSE_QUOTE = "closing '\"'"
    CLOSE_BRACE = "closing '}'"
    CLOSE_BRACKET = "closing ']'"
    END = "end of input"
    SHALLOWER = "shallower nesting"


ESCAPES = {'"': '"', "\\": "\\", "/": "/", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}


def token(literal: str, error: Expect | None = None) -> Parser[Any, str, Expect | None]:
    """Match ``literal``, failing with ``error``."""
    return just(literal).map_err(lambda _: error)


def _number(text: str) -> int | float:
    return float(text) if "." in text else int(text)


def build() -> Parser[Any, Any, Expect | None]:
    """Build the document parser: one element followed by end of input."""
    ws = recognize_while(str.isspace, at_least=0).ignore()

    escape = just("\\").right(one_of(ESCAPES)).map(ESCAPES.__getitem__)
    string = (
        escape.or_(none_of('"\\'))
        .many()
        .map("".join)
        .surround(token('"', Expect.STRING), token('"', Expect.CLOSE_QUOTE))
        .named("string")
    )

    digits = recognize_while(lambda c: "0" <= c <= "9")
    number = (
        just("-")
        .optional()
        .then(digits)
        .then(just(".").then(digits).optional())
        .recognize()
        .map(lambda view: _number(view.value))
        .map_err(lambda _: Expect.NUMBER)
        .named("number")
    )
    keyword = choice(
        token("true").value(True),
        token("false").value(False),
        token("null").value(None),
    ).map_err(lambda _: Expect.VALUE)

    value = forward("json-value", on_exceeded=Expect.SHALLOWER)
    element = value.surround(ws, ws)

    # An empty container closes at once; otherwise at least one item must
    # parse, so the item's own error reaches the caller.
    member = string.surround(ws, ws).left(token(":", Expect.COLON)).then(element)
    members = member.separate(token(","), at_least=1, trailing=False).map(dict)
    obj = token("{").left(ws).right(
        token("}").map(lambda _: {}).or_(members.left(token("}", Expect.CLOSE_BRACE)))
    )

    items = element.separate(token(","), at_least=1, trailing=False).map(list)
    array = token("[").left(ws).right(
        token("]").map(lambda _: []).or_(items.left(token("]", Expect.CLOSE_BRACKET)))
    )

    def dispatch(first: str) -> Parser[Any, Any, Expect | None]:
        if first == "{":
            return obj
        if first == "[":
            return array
        if first == '"':
            return string
        if first == "-" or first.isdigit():
            return number
        return keyword

    value.define(unit().lookahead().map_err(lambda _: Expect.VALUE).and_then(dispatch))

    return element.left(end().map_err(lambda _: Expect.END))


def parse_json(source: str) -> Outcome[Any, Any, Expect | None]:
    """Parse a complete JSON document."""
    return build().parse(source)


def main() -> None:
    """Parse a sample document and a malformed one."""
    document = """
    {
        "name": "parsecomb",
        "tags": ["parser", "combinator"],
        "stable": false,
        "version": 0.1,
        "depth": {"max": 100, "unit": null}
    }
    """

    print("=" * 60)
    print("Valid document")
    print("=" * 60)
    outcome = parse_json(document)
    print(outcome.value if outcome else outcome)
    print()

    print("=" * 60)
    print("Malformed document")
    print("=" * 60)
    outcome = parse_json('{"name" "parsecomb"}')
    if isinstance(outcome, Failure):
        print(f"Expected {outcome.error.value}")


if __name__ == "__main__":
    main()

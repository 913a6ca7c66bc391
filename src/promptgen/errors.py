# -------------------------------------
# template parse errors
# -------------------------------------
"""
Errors raised while expanding a template.

Every error carries `offset`, a character index into the template
(a Python string index, so multi-byte input reports correct positions).
"""
from __future__ import annotations

from enum import Enum

__all__ = [
    "ParseError",
    "UnexpectedClosingBrace",
    "UnclosedBrace",
    "InvalidWeightSpecifier",
    "WeightErrorCause",
    "locate",
    "format_error",
]


# ============================================================
# Errors
# ============================================================

class ParseError(ValueError):
    """Base class for template errors; `offset` is a character index."""

    def __init__(self, offset: int, message: str):
        super().__init__(message)
        self.offset = offset


class UnexpectedClosingBrace(ParseError):
    def __init__(self, offset: int):
        super().__init__(offset, f"Unexpected closing brace at char {offset}")


class UnclosedBrace(ParseError):
    def __init__(self, offset: int):
        super().__init__(offset, f"Unclosed open brace at char {offset}")


class WeightErrorCause(str, Enum):
    NOT_A_NUMBER = "not a number"
    NEGATIVE = "negative value"


class InvalidWeightSpecifier(ParseError):
    def __init__(self, offset: int, specifier: str, cause: WeightErrorCause):
        super().__init__(
            offset,
            f"Invalid weight specifier at char {offset}: {specifier!r} ({cause.value})",
        )
        self.specifier = specifier
        self.cause = cause


# ============================================================
# Reporting
# ============================================================

def locate(template: str, offset: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of a character offset."""
    offset = max(0, min(offset, len(template)))
    head = template[:offset]
    line = head.count("\n") + 1
    column = offset - (head.rfind("\n") + 1) + 1
    return line, column


def format_error(template: str, err: ParseError) -> str:
    """
    Render an error with its position and a caret under the failing character:

        Unexpected closing brace at char 4 (line 1, column 5)
          ab}c}
              ^
    """
    line, column = locate(template, err.offset)
    text = template.split("\n")[line - 1].rstrip("\r")
    return (
        f"{err} (line {line}, column {column})\n"
        f"  {text}\n"
        f"  {' ' * (column - 1)}^"
    )

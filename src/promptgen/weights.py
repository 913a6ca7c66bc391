# -------------------------------------
# weight specifiers
# -------------------------------------
"""
Parse the optional `:<number>` weight that may end a choice.

    "box:3"       -> ("box", 3.0)
    "12:30:0.5"   -> ("12:30", 0.5)      last colon only
    "plain"       -> ("plain", 1.0)
"""
from __future__ import annotations

import math
import re

from .errors import InvalidWeightSpecifier, WeightErrorCause

DEFAULT_WEIGHT = 1.0

_number_re = re.compile(
    r"""
    ^\s*
    [+-]?
    (?:\d+\.?\d*|\.\d+)    # mantissa
    (?:e[+-]?\d+)?         # optional exponent
    \s*$
    |
    ^\s*[+-]?inf(?:inity)?  # only so a negative infinity reads as negative
    \s*$
    """,
    re.VERBOSE | re.IGNORECASE,
)


def _parse_number(tok: str) -> float | None:
    """Decimal literal or signed infinity -> float, or None if `tok` is neither."""
    if not _number_re.match(tok):
        return None
    return float(tok)


def parse_weight(segment: str, offset: int = 0, tolerant: bool = False) -> tuple[str, float]:
    """
    Split a trailing weight off a literal segment.

    Args:
        segment: literal text scanned since the previous control character
        offset: character offset of segment[0] in the template
        tolerant: keep an unparsable specifier as literal text (weight 1.0)

    Returns:
        (text, weight)

    Raises:
        InvalidWeightSpecifier: unparsable specifier (strict mode only), or a
            negative weight, -inf and overflowing literals included (always)
    """
    text, sep, specifier = segment.rpartition(":")
    if not sep:
        return segment, DEFAULT_WEIGHT

    where = offset + len(text) + 1
    weight = _parse_number(specifier)
    if weight is not None and weight < 0:
        raise InvalidWeightSpecifier(where, specifier, WeightErrorCause.NEGATIVE)
    if weight is None or not math.isfinite(weight):
        if tolerant:
            return segment, DEFAULT_WEIGHT
        raise InvalidWeightSpecifier(where, specifier, WeightErrorCause.NOT_A_NUMBER)
    return text, weight

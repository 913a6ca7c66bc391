# -------------------------------------
# choice selection
# -------------------------------------
"""
Pick one alternative out of a resolved choice group.

Modes:
  random        weighted draw (default)
  shortest      fewest characters, first on ties
  longest       most characters, last on ties
  most-likely   highest weight, last on ties
  least-likely  lowest weight, first on ties

Only `random` touches the random source.
"""
from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol

import numpy as np

from . import generator_state as state

if TYPE_CHECKING:
    from .expander import Choice


class RandomSource(Protocol):
    def random(self) -> float: ...


class SelectionMode(str, Enum):
    RANDOM = "random"
    SHORTEST = "shortest"
    LONGEST = "longest"
    MOST_LIKELY = "most-likely"
    LEAST_LIKELY = "least-likely"

    @classmethod
    def parse(cls, name: str | SelectionMode) -> SelectionMode:
        """Accept enum values case-insensitively, with '_' or '-'."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("_", "-")
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown selection mode {name!r} (expected one of: {valid})") from None


# ============================================================
# Helpers
# ============================================================

def _first_min(values: np.ndarray) -> int:
    return int(np.argmin(values))


def _last_max(values: np.ndarray) -> int:
    return len(values) - 1 - int(np.argmax(values[::-1]))


def _lengths(choices: Sequence[Choice]) -> np.ndarray:
    return np.fromiter((len(c.text) for c in choices), dtype=np.int64, count=len(choices))


def _weights(choices: Sequence[Choice]) -> np.ndarray:
    return np.fromiter((c.weight for c in choices), dtype=np.float64, count=len(choices))


# ============================================================
# Selection strategies
# ============================================================

def pick_weighted(choices: Sequence[Choice], rng: RandomSource) -> Choice:
    """
    One uniform draw scaled by the weight sum; the first choice whose running
    total passes it wins. All-zero weights fall back to a uniform pick.
    """
    n = len(choices)
    weights = _weights(choices)
    total = float(weights.sum())
    draw = rng.random()
    if total <= 0.0:
        return choices[min(int(draw * n), n - 1)]
    # side="right" keeps zero-weight entries from ever matching
    idx = int(np.searchsorted(np.cumsum(weights), draw * total, side="right"))
    return choices[min(idx, n - 1)]


def pick_shortest(choices: Sequence[Choice], rng: RandomSource | None = None) -> Choice:
    return choices[_first_min(_lengths(choices))]


def pick_longest(choices: Sequence[Choice], rng: RandomSource | None = None) -> Choice:
    return choices[_last_max(_lengths(choices))]


def pick_most_likely(choices: Sequence[Choice], rng: RandomSource | None = None) -> Choice:
    return choices[_last_max(_weights(choices))]


def pick_least_likely(choices: Sequence[Choice], rng: RandomSource | None = None) -> Choice:
    return choices[_first_min(_weights(choices))]


SELECTORS: dict[SelectionMode, Callable[..., Choice]] = {
    SelectionMode.RANDOM:       pick_weighted,
    SelectionMode.SHORTEST:     pick_shortest,
    SelectionMode.LONGEST:      pick_longest,
    SelectionMode.MOST_LIKELY:  pick_most_likely,
    SelectionMode.LEAST_LIKELY: pick_least_likely,
}


def select(
    choices: Sequence[Choice],
    mode: SelectionMode = SelectionMode.RANDOM,
    rng: RandomSource | None = None,
) -> Choice:
    """Return exactly one of `choices` (which must be non-empty)."""
    if not choices:
        raise ValueError("cannot select from an empty choice list")
    if len(choices) == 1:
        return choices[0]
    mode = SelectionMode.parse(mode)
    if mode is SelectionMode.RANDOM and rng is None:
        rng = state.get_rng()
    return SELECTORS[mode](choices, rng)

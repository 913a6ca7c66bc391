# -------------------------------------
# template expansion core
# -------------------------------------
"""
expander.py

Scanner + frame-stack evaluator for brace/pipe choice templates.

    "a {red|blue:2} {car|{big |}boat}"

  - {x|y|z}   one group, resolves to exactly one alternative
  - x:2       trailing weight on an alternative (last colon, default 1)
  - groups nest; inner groups resolve first, so a parent only ever
    sees concrete text
  - text outside braces is one implicit, single-choice group

Evaluation is a single left-to-right scan driven by the next control
character ('|', '{', '}'). Open groups live on an explicit stack of
Frames; '}' pops the innermost frame, selects one Choice and splices
its text into the parent's open choice.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from .config import DEFAULT_CONFIG, GenerationConfig
from .errors import UnclosedBrace, UnexpectedClosingBrace
from .selection import RandomSource, SelectionMode, select
from .weights import DEFAULT_WEIGHT, parse_weight

logger = logging.getLogger(__name__)

__all__ = [
    "Choice",
    "Frame",
    "next_control",
    "expand",
    "validate",
    "generate",
]


# ============================================================
# Frames
# ============================================================

@dataclass
class Choice:
    parts: list[str] = field(default_factory=list)
    weight: float = DEFAULT_WEIGHT

    @property
    def text(self) -> str:
        if len(self.parts) > 1:
            self.parts[:] = ["".join(self.parts)]
        return self.parts[0] if self.parts else ""

    def append(self, s: str) -> None:
        if s:
            self.parts.append(s)


@dataclass
class Frame:
    """One open group. choices[-1] is the choice still accumulating text."""
    start_index: int
    choices: list[Choice] = field(default_factory=lambda: [Choice()])

    @property
    def current(self) -> Choice:
        return self.choices[-1]

    def finish_choice(self, segment: str, offset: int, tolerant: bool) -> None:
        """Weight-parse the literal run that ends the open choice."""
        text, weight = parse_weight(segment, offset, tolerant)
        self.current.append(text)
        self.current.weight = weight

    def new_choice(self) -> None:
        self.choices.append(Choice())


# ============================================================
# Scanner
# ============================================================

_CONTROL_RE = re.compile(r"[|{}]")


def next_control(template: str, pos: int = 0) -> tuple[str, str | None, int]:
    """
    Find the next '|', '{' or '}' at or after pos.

    Returns (literal, control, index); with no control character left,
    control is None and literal is the rest of the template.
    """
    m = _CONTROL_RE.search(template, pos)
    if m is None:
        return template[pos:], None, len(template)
    i = m.start()
    return template[pos:i], template[i], i


# ============================================================
# Evaluator
# ============================================================

def expand(
    template: str,
    config: GenerationConfig | None = None,
    rng: RandomSource | None = None,
) -> str:
    """
    Resolve every choice group in template and return the flat string.

    Raises:
        UnexpectedClosingBrace: '}' with no open group
        UnclosedBrace: '{' never closed (innermost one reported)
        InvalidWeightSpecifier: bad or negative ':weight'
    """
    config = config or DEFAULT_CONFIG
    mode = config.selection_mode
    tolerant = config.tolerate_malformed_weights

    stack: list[Frame] = [Frame(0)]
    pos = 0
    while True:
        pre, ctrl, index = next_control(template, pos)
        if ctrl is None:
            break

        if ctrl == "{":
            stack[-1].current.append(pre)
            stack.append(Frame(index))
        elif ctrl == "|":
            stack[-1].finish_choice(pre, pos, tolerant)
            stack[-1].new_choice()
        else:
            stack[-1].finish_choice(pre, pos, tolerant)
            if len(stack) == 1:
                raise UnexpectedClosingBrace(index)
            frame = stack.pop()
            winner = select(frame.choices, mode, rng)
            stack[-1].current.parts.extend(winner.parts)

        pos = index + 1

    stack[-1].finish_choice(template[pos:], pos, tolerant)
    if len(stack) > 1:
        raise UnclosedBrace(stack[-1].start_index)
    return select(stack[0].choices, mode, rng).text


def validate(template: str, config: GenerationConfig | None = None) -> None:
    """
    Parse template once without consuming randomness.

    A random-mode config is swapped for shortest mode; deterministic modes
    are used as given.

    Parse errors do not depend on which alternatives get picked, so a
    template that validates can be expanded any number of times.
    """
    config = config or DEFAULT_CONFIG
    if not config.deterministic:
        config = GenerationConfig(SelectionMode.SHORTEST, config.tolerate_malformed_weights)
    expand(template, config)


def generate(
    template: str,
    count: int,
    config: GenerationConfig | None = None,
    rng: RandomSource | None = None,
) -> Iterator[str]:
    """
    Validate template now, then lazily yield `count` independent expansions
    sharing one random source.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    validate(template, config)
    logger.debug("generating %d prompt(s) from %d-char template", count, len(template))
    return (expand(template, config, rng) for _ in range(count))

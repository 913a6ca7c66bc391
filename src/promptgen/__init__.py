# -------------------------------------
# promptgen: random prompt templates
# -------------------------------------
"""
Expand brace/pipe choice templates into prompts.

    >>> from promptgen import expand, GenerationConfig, SelectionMode
    >>> expand("a {big|small} {cat|dog}", GenerationConfig(SelectionMode.SHORTEST))
    'a big cat'

This package provides:
- the expansion core (expander): expand, validate, generate
- selection modes (selection): random, shortest, longest, most-likely, least-likely
- errors with character offsets (errors)
- YAML run configuration (config) and the command line (cli)
"""

__all__ = [
    # expander
    "expand",
    "validate",
    "generate",
    "Choice",
    "Frame",
    # config
    "GenerationConfig",
    "DEFAULT_CONFIG",
    "ConfigError",
    "load_config",
    # selection
    "SelectionMode",
    "select",
    # errors
    "ParseError",
    "UnexpectedClosingBrace",
    "UnclosedBrace",
    "InvalidWeightSpecifier",
    "WeightErrorCause",
    "format_error",
    # weights
    "parse_weight",
    # random source
    "seed",
]

from .config import DEFAULT_CONFIG, ConfigError, GenerationConfig, load_config
from .errors import (
    InvalidWeightSpecifier,
    ParseError,
    UnclosedBrace,
    UnexpectedClosingBrace,
    WeightErrorCause,
    format_error,
)
from .expander import Choice, Frame, expand, generate, validate
from .generator_state import seed
from .selection import SelectionMode, select
from .weights import parse_weight

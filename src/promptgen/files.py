# -------------------------------------
# template and prompt file utilities
# -------------------------------------
import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Global cache for template file contents
_file_cache: dict[str, str] = {}


def read_template(fn: str) -> str:
    """
    Return the template stored in file fn, trailing line breaks dropped.
    Caches file contents across calls.
    """
    if fn not in _file_cache:
        with open(fn, "r", encoding="utf-8") as f:
            _file_cache[fn] = f.read().rstrip("\r\n")
        logger.debug("read template %s (%d chars)", fn, len(_file_cache[fn]))
    return _file_cache[fn]


def clear_cache() -> None:
    """Clear the file cache."""
    _file_cache.clear()


LINE_BREAKS = ("\n", "\r")


def has_line_break(text: str) -> bool:
    return any(c in text for c in LINE_BREAKS)


def write_prompts(fn: str, prompts: Iterable[str]) -> int:
    """
    Write prompts to fn, one per line, consuming the iterable lazily.
    Returns the number of prompts written.

    Raises ValueError on a prompt containing a line break.
    """
    n = 0
    with open(fn, "w", encoding="utf-8") as f:
        for prompt in prompts:
            if has_line_break(prompt):
                raise ValueError(f"prompt {n + 1} spans several lines: {prompt!r}")
            f.write(prompt)
            f.write("\n")
            n += 1
    logger.debug("wrote %d prompt(s) to %s", n, fn)
    return n


def drain(prompts: Iterable[str]) -> int:
    """Consume prompts without storing them; returns the count."""
    n = 0
    for _ in prompts:
        n += 1
    return n

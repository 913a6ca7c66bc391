# -------------------------------------
# promptgen CLI entry point
# -------------------------------------
"""
CLI entry point for promptgen.

Usage:
    python -m promptgen "a {red|blue} {car|boat}" -n 5 -v
"""
from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())

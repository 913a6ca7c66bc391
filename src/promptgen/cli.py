# -------------------------------------
# promptgen CLI
# -------------------------------------
"""
Generate prompts from a random template.

Prompts in the form `a random {prompt|word}` pick one of the words between
the braces. Braces nest: `this {{large |}cake|{loud|tiny} boat} is not very
nice` can give `this cake is not very nice` or `this loud boat is not very
nice`. Choices take weights: `{ball:1|box:3}` gives `box` 3x as often as
`ball`.

Usage:
    promptgen "a {red|blue:2} {car|boat}" -n 10 -v
    python -m promptgen -f template.txt -n 100 -o prompts.txt --mode longest
"""
import argparse
import logging
import sys
from typing import Any

from . import files as filefuns
from . import generator_state as state
from .config import ConfigError, GenerationConfig, check_types, load_config
from .errors import ParseError, format_error
from .expander import generate
from .selection import SelectionMode

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "mode": SelectionMode.RANDOM.value,
    "tolerant": False,
    "num": 1,
    "out": "prompts.txt",
    "seed": None,
    "verbose": False,
    "dry_run": False,
}


def _non_negative_int(text: str) -> int:
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if n < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return n


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="promptgen",
        description=__doc__.split("\n\n")[0].strip(),
        epilog="Configuration file keys: " + ", ".join(sorted(DEFAULTS)),
    )
    p.add_argument("prompt", nargs="?", help="Source template to expand")
    p.add_argument("--file", "-f", help="Read the template from a UTF-8 file instead")
    p.add_argument("--num", "-n", type=_non_negative_int, default=None, help="Number of prompts to generate (default: 1)")
    p.add_argument("--out", "-o", default=None, help="Output file (default: prompts.txt)")
    p.add_argument("--verbose", "-v", action="store_true", default=None, help="Print generated prompts to console")
    p.add_argument("--dry-run", "-d", action="store_true", default=None, help="Don't save the generated prompts; not very useful without --verbose")
    p.add_argument(
        "--mode", "-m",
        choices=[m.value for m in SelectionMode],
        default=None,
        help="How each group picks its alternative (default: random)",
    )
    p.add_argument("--tolerant", "-t", action="store_true", default=None, help="Keep malformed ':weight' text literally instead of failing")
    p.add_argument("--seed", "-s", type=int, default=None, help="Seed the random source for reproducible output")
    p.add_argument("--config", "-c", help="YAML file with default settings")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for stderr diagnostics (default: WARNING)",
    )
    return p


def _resolve_settings(args: argparse.Namespace) -> dict[str, Any]:
    """Command line beats config file beats DEFAULTS."""
    settings = dict(DEFAULTS)
    if args.config:
        settings.update(load_config(args.config))
    for key in DEFAULTS:
        v = getattr(args, key)
        if v is not None:
            settings[key] = v
    check_types(settings, "settings")
    if settings["num"] < 0:
        raise ConfigError(f"num must be >= 0, got {settings['num']}")
    seed = settings["seed"]
    if seed is not None and str(seed).lower() not in state.ENTROPY_WORDS:
        try:
            int(seed)
        except (TypeError, ValueError):
            raise ConfigError(f"seed must be an integer or 'auto', got {seed!r}") from None
    return settings


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if (args.prompt is None) == (args.file is None):
        ap.error("give exactly one of PROMPT or --file")

    template = args.prompt
    try:
        settings = _resolve_settings(args)
        if args.file is not None:
            template = filefuns.read_template(args.file)
        config = GenerationConfig.from_mapping(settings)
        if not settings["dry_run"] and filefuns.has_line_break(template):
            raise ConfigError(
                "template spans several lines but the output file holds one prompt per line; "
                "join the lines or use --dry-run --verbose"
            )
        if settings["seed"] is not None:
            state.seed(settings["seed"])

        prompts = generate(template, settings["num"], config)

        if settings["verbose"]:
            prompts = _echo(prompts)
        if settings["dry_run"]:
            n = filefuns.drain(prompts)
        else:
            n = filefuns.write_prompts(settings["out"], prompts)
        logger.info("generated %d prompt(s)", n)
    except ParseError as e:
        print(f"promptgen error: {format_error(template, e)}", file=sys.stderr)
        return 2
    except (ConfigError, OSError) as e:
        print(f"promptgen error: {e}", file=sys.stderr)
        return 2

    return 0


def _echo(prompts):
    for prompt in prompts:
        print(prompt)
        yield prompt


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line interface for kdlite."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kdlite.errors import ParseError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    tokens: bool
    indent: int


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="kdlite",
        description="Parse a kdlite document and dump its node tree",
    )
    p.add_argument("input", help="Input .kdl file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--tokens",
        action="store_true",
        default=None,
        help="Dump the token stream instead of the node tree",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="Spaces per nesting level in the tree dump (default: 2)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover kdlite.toml)",
    )
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "kdlite.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    tokens = False
    indent = 2
    cfg_dump = config.get("dump")
    if isinstance(cfg_dump, dict):
        cfg_tokens = cfg_dump.get("tokens")
        if isinstance(cfg_tokens, bool):
            tokens = cfg_tokens
        cfg_indent = cfg_dump.get("indent")
        if isinstance(cfg_indent, int) and not isinstance(cfg_indent, bool):
            indent = cfg_indent

    if args.tokens is not None:
        tokens = args.tokens
    if args.indent is not None:
        indent = args.indent

    if indent < 1:
        raise argparse.ArgumentTypeError(f"indent must be a positive integer, got {indent}")

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        tokens=tokens,
        indent=indent,
    )


def render_file(options: CliOptions) -> str:
    """Read, lex, and parse a kdlite file, returning the dump text."""
    from kdlite.debug import dump_nodes, dump_tokens
    from kdlite.lexer import lex
    from kdlite.parser import parse

    source = options.input_file.read_text(encoding="utf-8")
    tokens = lex(source)

    out = io.StringIO()
    if options.tokens:
        dump_tokens(tokens, file=out)
    else:
        dump_nodes(parse(tokens), file=out, indent=options.indent)
    return out.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        text = render_file(options)
    except ParseError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)

    return 0

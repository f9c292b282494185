"""Command-line interface for gencoder.

Usage:
    gencoder generate [-f gencoder.yaml] [-t <dir|url>] [-p k=v ...] [-o <dir>] [-a]
                      [--helpers <file> ...] [--max-workers N] [--dry-run]
    gencoder introspect [-f gencoder.yaml] [-o json|yaml]
    gencoder init
"""

import argparse
import logging
import sys

from gencoder import __version__
from gencoder.cli.generate import cmd_generate
from gencoder.cli.init import cmd_init
from gencoder.cli.introspect import cmd_introspect
from gencoder.errors import GencoderError


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gencoder",
        description="Generate code from templates and database table metadata",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # generate
    gen = sub.add_parser(
        "generate", aliases=["gen", "g"],
        help="Generate code from templates and table metadata",
    )
    gen.set_defaults(command="generate")
    gen.add_argument(
        "-f", "--config", default=None,
        help="Config file to use (default: $GENCODER_CONFIG or gencoder.yaml)",
    )
    gen.add_argument(
        "-t", "--templates", default=None,
        help="Override templates location, a directory or GitHub URL",
    )
    gen.add_argument(
        "-p", "--properties", action="append", default=[],
        help="Property overrides, -p k1=v1 -p k2=v2,k3=v3",
    )
    gen.add_argument(
        "-o", "--output", default=None,
        help="Output directory for generated files",
    )
    gen.add_argument(
        "-a", "--include-non-tpl", action="store_true",
        help="Also copy non-template files from the templates location",
    )
    gen.add_argument(
        "--helpers", action="append", default=[],
        help="Python file defining a HELPERS dict of extra template helpers",
    )
    gen.add_argument(
        "--max-workers", type=_positive_int, default=None,
        help="Cap on concurrent table introspection per database",
    )
    gen.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )

    # introspect
    intro = sub.add_parser(
        "introspect", aliases=["i", "intro"],
        help="Print resolved render contexts without writing files",
    )
    intro.set_defaults(command="introspect")
    intro.add_argument("-f", "--config", default=None, help="Config file to use")
    intro.add_argument(
        "-o", "--output", default="json", choices=["json", "yaml", "yml"],
        help="Output format (default json)",
    )

    # init
    sub.add_parser(
        "init", help="Create a starter gencoder.yaml and templates directory",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "generate": cmd_generate,
        "introspect": cmd_introspect,
        "init": cmd_init,
    }

    try:
        return dispatch[args.command](args)
    except GencoderError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

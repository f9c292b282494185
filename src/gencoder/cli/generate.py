"""Generate CLI command."""

import argparse
from pathlib import Path

from gencoder.config.loader import Config


def load_cli_config(args: argparse.Namespace) -> Config:
    """Load the config file, tolerating its absence when templates are given."""
    from gencoder.config.loader import load_config
    from gencoder.paths import config_path

    path = Path(args.config) if args.config else config_path()
    if not path.exists() and getattr(args, "templates", None):
        return Config()
    return load_config(path)


def cmd_generate(args: argparse.Namespace) -> int:
    from gencoder.config.properties import parse_property_overrides
    from gencoder.generate import generate

    cli_properties = parse_property_overrides(args.properties)
    config = load_cli_config(args)
    if args.templates:
        config.templates = args.templates
    if args.output:
        config.output = args.output

    result = generate(
        config,
        cli_properties=cli_properties,
        include_non_templates=args.include_non_tpl,
        helper_files=args.helpers,
        max_workers=args.max_workers,
        dry_run=args.dry_run,
    )

    print(result.summary())
    return 0

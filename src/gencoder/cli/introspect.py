"""Introspect CLI command."""

import argparse
import json

import yaml


def cmd_introspect(args: argparse.Namespace) -> int:
    from gencoder.cli.generate import load_cli_config
    from gencoder.schema.collect import collect_render_contexts

    config = load_cli_config(args)
    collected = collect_render_contexts(config)
    data = [ctx.as_dict() for ctx in collected.contexts]

    if args.output == "json":
        print(json.dumps(data, indent=2))
    else:
        print(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), end="")
    return 0

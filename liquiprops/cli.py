#!/usr/bin/env python3
"""liquiprops - Manage liquibase.properties configurations and their recency cache."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .domains.configuration.store.configurations import RemoveConfigurationOption


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="liquiprops",
        description="Manage liquibase.properties configurations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--settings",
        metavar="PATH",
        help="Path to settings JSON file (overrides ~/.liquiprops/settings.json)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser("show", help="Show the parsed content of a properties file")
    show_parser.add_argument("path", help="Path to the liquibase.properties file")

    preview_parser = subparsers.add_parser("preview", help="Preview a properties file with masked passwords")
    preview_parser.add_argument("path", help="Path to the liquibase.properties file")

    normalize_parser = subparsers.add_parser("normalize", help="Rewrite a properties file in canonical form")
    normalize_parser.add_argument("path", help="Path to the liquibase.properties file")

    reference_parser = subparsers.add_parser(
        "reference-args",
        help="Print --reference-* arguments built from a properties file",
    )
    reference_parser.add_argument("path", help="Path to the liquibase.properties file")

    subparsers.add_parser("drivers", help="List the pre-configured database drivers")

    config_parser = subparsers.add_parser("config", help="Manage saved configurations")
    config_parser.set_defaults(subcommand_parser=config_parser)
    config_subparsers = config_parser.add_subparsers(dest="config_command", help="Configuration commands")
    config_subparsers.add_parser("list", help="List all saved configurations")
    add_parser = config_subparsers.add_parser("add", help="Register a properties file under a name")
    add_parser.add_argument("name", help="Configuration name")
    add_parser.add_argument("path", help="Path to the liquibase.properties file")
    remove_parser = config_subparsers.add_parser("remove", help="Remove a configuration")
    remove_parser.add_argument("name", help="Configuration name")
    remove_parser.add_argument(
        "--mode",
        choices=[option.value for option in RemoveConfigurationOption],
        default=RemoveConfigurationOption.CACHE.value,
        help="What to remove: cached values, also the saved entry, or also the file (default: cache)",
    )

    cache_parser = subparsers.add_parser("cache", help="Inspect the recently used values")
    cache_parser.set_defaults(subcommand_parser=cache_parser)
    cache_subparsers = cache_parser.add_subparsers(dest="cache_command", help="Cache commands")
    contexts_parser = cache_subparsers.add_parser("contexts", help="Show or replace the cached contexts")
    contexts_parser.add_argument("path", help="Path to the liquibase.properties file")
    contexts_parser.add_argument("--set", nargs="*", metavar="CONTEXT", help="Replace the cached contexts")
    changelogs_parser = cache_subparsers.add_parser("changelogs", help="Show the recently used changelogs")
    changelogs_parser.add_argument("path", help="Path to the liquibase.properties file")
    changelogs_parser.add_argument("--use", metavar="CHANGELOG", help="Mark a changelog as used now")
    clear_parser = cache_subparsers.add_parser("clear", help="Remove cached values")
    clear_parser.add_argument("paths", nargs="*", metavar="PATH", help="Properties files to forget (default: all)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.settings:
        os.environ["LIQUIPROPS_SETTINGS_PATH"] = str(args.settings)
    _configure_logging(args.verbose)

    from .domains.cache.cli.commands import (
        cmd_cache_changelogs,
        cmd_cache_clear,
        cmd_cache_contexts,
    )
    from .domains.configuration.cli.commands import (
        cmd_config_add,
        cmd_config_list,
        cmd_config_remove,
        cmd_drivers,
        cmd_normalize,
        cmd_preview,
        cmd_reference_args,
        cmd_show,
    )

    commands = {
        "show": cmd_show,
        "preview": cmd_preview,
        "normalize": cmd_normalize,
        "reference-args": cmd_reference_args,
        "drivers": cmd_drivers,
    }
    if args.command in commands:
        return commands[args.command](args)

    if args.command == "config":
        if args.config_command == "list":
            return cmd_config_list(args)
        elif args.config_command == "add":
            return cmd_config_add(args)
        elif args.config_command == "remove":
            return cmd_config_remove(args)
        else:
            args.subcommand_parser.print_help()
            return 1

    if args.command == "cache":
        if args.cache_command == "contexts":
            return cmd_cache_contexts(args)
        elif args.cache_command == "changelogs":
            return cmd_cache_changelogs(args)
        elif args.cache_command == "clear":
            return cmd_cache_clear(args)
        else:
            args.subcommand_parser.print_help()
            return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())

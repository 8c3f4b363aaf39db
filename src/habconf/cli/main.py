# Copyright 2026 habconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the habconf command-line interface."""

import argparse
import dataclasses
import sys
from pathlib import Path

from habconf.catalog.build import CatalogError, build_catalog, compile_name_filter
from habconf.config.settings import (
    CONFIG_FILE_NAME,
    ConfigError,
    ConverterConfig,
    default_config_text,
    load_converter_config,
)
from habconf.jsondb.reader import JsonDbError, load_database
from habconf.render.writer import ExportError, export_catalog
from habconf.validation.checks import validate

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the habconf CLI."""
    parser = argparse.ArgumentParser(
        prog="habconf",
        description="habconf: convert a home-automation JSON database into configuration files",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default converter configuration",
        description=f"Create a default {CONFIG_FILE_NAME} in a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )

    # convert subcommand
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a JSON database into device and variable files",
        description=(
            "Read the JSON database, build devices and variables, and write the "
            "device and variable configuration files."
        ),
    )
    convert_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Base directory for relative paths and the configuration file (default: current directory)",
    )
    convert_parser.add_argument(
        "--config",
        help=f"Configuration file (default: DIRECTORY/{CONFIG_FILE_NAME} if present)",
    )
    convert_parser.add_argument("--input", help="JSON database folder (overrides the configuration)")
    convert_parser.add_argument("--output", help="Output folder (overrides the configuration)")
    convert_parser.add_argument(
        "--filter",
        help="Regular expression; only records whose name matches are converted",
    )
    convert_parser.add_argument(
        "--include-default-endpoints",
        action="store_true",
        help="Also write endpoints that have no properties",
    )
    convert_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print progress information",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "convert":
        return _cmd_convert(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(default_config_text(), encoding="utf-8")
    print(f"Initialized habconf configuration at '{config_file}'.")
    return 0


def _cmd_convert(args: argparse.Namespace) -> int:
    """Handle the convert subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    try:
        config = _load_config(directory, args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    input_dir = Path(args.input) if args.input else directory / config.input_directory
    output_dir = Path(args.output) if args.output else directory / config.output_directory
    name_filter = args.filter if args.filter is not None else config.name_filter
    options = dataclasses.replace(
        config.render_options(),
        include_default_endpoints=args.include_default_endpoints or config.include_default_endpoints,
    )

    try:
        pattern = compile_name_filter(name_filter)
        if args.verbose:
            print(f"Reading JSON database from '{input_dir}'...")
        records = load_database(input_dir)
        if args.verbose:
            print(
                f"  {len(records.devices)} device record(s), {len(records.variables)} variable record(s), "
                f"{len(records.links)} link record(s), {len(records.annotations)} annotation record(s)"
            )
            if pattern is not None:
                print(f"  name filter: {pattern.pattern}")
        catalog = build_catalog(records, pattern)
    except (JsonDbError, CatalogError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        children = sum(len(c.children) for c in catalog.containers)
        print(
            f"Built {len(catalog.containers)} container(s) with {children} child device(s), "
            f"{len(catalog.devices)} standalone device(s), {len(catalog.variables)} variable(s)."
        )

    for warning in validate(catalog).warnings:
        print(f"Warning: {warning.message}")

    try:
        written = export_catalog(
            catalog,
            output_dir,
            options,
            devices_file=config.devices_file,
            variables_file=config.variables_file,
        )
    except ExportError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote devices to '{written['devices']}'.")
    print(f"Wrote variables to '{written['variables']}'.")
    return 0


def _load_config(directory: Path, config_arg: str | None) -> ConverterConfig:
    """Load the explicit config file, the directory's config file, or the defaults."""
    if config_arg:
        return load_converter_config(Path(config_arg))
    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        return load_converter_config(config_file)
    return ConverterConfig()

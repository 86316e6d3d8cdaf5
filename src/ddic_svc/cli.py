#!/usr/bin/env python3
"""
Command-line tool for dictionary snapshot files.

Usage:
    ddic validate data/dictionary.json
    ddic ddl data/dictionary.json --table ZPATIENT --dialect HANA
    ddic ddl data/dictionary.json --all
    ddic where-used data/dictionary.json domain ZNAME_40
    ddic init-sample data/dictionary.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from colorama import Fore, Style, just_fix_windows_console

from .ddl.dialect import SqlDialect
from .ddl.generator import DdlGenerator
from .errors import InvalidArgumentError
from .patient import schema as patient_schema
from .persistence.repository import DictionaryRepository
from .persistence.serializer import DictionarySerializationError
from .registry.dictionary import DataDictionary
from .registry.validator import ConsistencyValidator, Severity
from .registry.where_used import WhereUsedAnalyzer

SEVERITY_COLORS = {
    Severity.ERROR: Fore.RED,
    Severity.WARNING: Fore.YELLOW,
}


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}"


def print_error(message: str) -> None:
    print(colorize(f"Error: {message}", Fore.RED), file=sys.stderr)


def print_json(data: Any, indent: int = 2) -> None:
    print(json.dumps(data, indent=indent))


def _load(path: str) -> DataDictionary:
    return DictionaryRepository(path).load()


def cmd_validate(args) -> int:
    """Validate a snapshot and print its findings."""
    result = ConsistencyValidator(_load(args.snapshot)).validate()

    for finding in result.findings:
        label = colorize(finding.severity.value, SEVERITY_COLORS[finding.severity])
        print(f"{label}: {finding.message}")

    summary = result.summary()
    if result.has_errors():
        print(colorize(summary, Style.BRIGHT + Fore.RED))
        return 1
    print(colorize(summary, Style.BRIGHT + Fore.GREEN))
    return 0


def cmd_ddl(args) -> int:
    """Print DDL for one table, one view or the whole dictionary."""
    dictionary = _load(args.snapshot)
    generator = DdlGenerator()

    if args.all:
        print(generator.generate_schema(dictionary, args.dialect))
        return 0

    if args.table:
        table = dictionary.get_table(args.table)
        if table is None:
            print_error(f"Table not found: {args.table}")
            return 1
        print(generator.generate_create_table(table, args.dialect))
        return 0

    view = dictionary.get_view(args.view)
    if view is None:
        print_error(f"View not found: {args.view}")
        return 1
    print(generator.generate_create_view(view, args.dialect))
    return 0


def cmd_where_used(args) -> int:
    """Print reverse dependencies of a domain, data element or table as JSON."""
    dictionary = _load(args.snapshot)
    analyzer = WhereUsedAnalyzer(dictionary)

    if args.kind == "domain":
        found = dictionary.get_domain(args.name) is not None
        usages = analyzer.all_usages_of_domain(args.name)
    elif args.kind == "data-element":
        found = dictionary.get_data_element(args.name) is not None
        usages = analyzer.usages_of_data_element(args.name)
    else:
        found = dictionary.get_table(args.name) is not None
        usages = analyzer.usages_of_table(args.name)

    if not found:
        print_error(f"{args.kind} not found: {args.name}")
        return 1

    print_json(usages)
    return 0


def cmd_init_sample(args) -> int:
    """Write a snapshot holding the patient registration schema."""
    dictionary = DataDictionary()
    patient_schema.initialize(dictionary)
    DictionaryRepository(args.output).save(dictionary)
    print(colorize(f"Wrote {dictionary.count()['total']} objects to {args.output}", Fore.GREEN))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ddic",
        description="Validate, analyse and generate DDL from data dictionary snapshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # validate command
    validate_parser = subparsers.add_parser("validate", help="Run the consistency checks")
    validate_parser.add_argument("snapshot", help="Snapshot file (.json, .yaml or .yml)")

    # ddl command
    ddl_parser = subparsers.add_parser("ddl", help="Generate CREATE statements")
    ddl_parser.add_argument("snapshot", help="Snapshot file")
    target = ddl_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--table", help="Table name")
    target.add_argument("--view", help="View name")
    target.add_argument("--all", action="store_true", help="All tables and views")
    ddl_parser.add_argument(
        "--dialect",
        default=SqlDialect.POSTGRESQL.value,
        help="POSTGRESQL, H2 or HANA (default: POSTGRESQL)",
    )

    # where-used command
    where_parser = subparsers.add_parser("where-used", help="Show what depends on an object")
    where_parser.add_argument("snapshot", help="Snapshot file")
    where_parser.add_argument("kind", choices=["domain", "data-element", "table"])
    where_parser.add_argument("name", help="Object name")

    # init-sample command
    sample_parser = subparsers.add_parser("init-sample", help="Write the patient sample schema")
    sample_parser.add_argument("output", help="Target snapshot file")

    return parser


COMMANDS = {
    "validate": cmd_validate,
    "ddl": cmd_ddl,
    "where-used": cmd_where_used,
    "init-sample": cmd_init_sample,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    just_fix_windows_console()
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args)
    except (DictionarySerializationError, InvalidArgumentError) as e:
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)

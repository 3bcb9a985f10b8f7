#!/usr/bin/env python3
"""
distribution-rights command-line interface.

Usage:
    distribution-rights [--csv PATH] [--data PATH] [--format text|json] <command> ...

Commands:
    add-distributor NAME [--parent PARENT]
    add-permission NAME REGION [--type include|exclude]
    check NAME REGION
    list

Mutating commands write the distributor state back on success; ``check`` and
``list`` never write.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, List, Optional

from pydantic import BaseModel

from distribution_rights import __version__
from distribution_rights.config.settings import AppConfig
from distribution_rights.errors import DistributionError, StateSaveError
from distribution_rights.models import DistributorListing, DistributorRecord, PermissionCheck, RuleChange
from distribution_rights.tools import (
    add_distributor_tool,
    add_permission_tool,
    check_permission_tool,
    list_distributors_tool,
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="distribution-rights",
        description="Manage distributors and check their regional permissions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", "-V", action="version", version=f"distribution-rights {__version__}")
    parser.add_argument("--csv", help="Path to the locations CSV file")
    parser.add_argument("--data", help="Path to the distributors data file")
    parser.add_argument(
        "--exclude-policy",
        choices=["unrestricted", "parent-checked"],
        help="Whether exclude rules must pass the parent check",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")

    sub = parser.add_subparsers(dest="command", metavar="command")

    add_dist = sub.add_parser("add-distributor", help="Register a distributor")
    add_dist.add_argument("name", help="Distributor name")
    add_dist.add_argument("--parent", "-p", default="", help="Parent distributor name")

    add_perm = sub.add_parser("add-permission", help="Add an include or exclude rule")
    add_perm.add_argument("name", help="Distributor name")
    add_perm.add_argument("region", help="Region code, e.g. US, CA-US or LA-CA-US")
    add_perm.add_argument(
        "--type", "-t",
        dest="rule_type",
        choices=["include", "exclude"],
        default="include",
        help="Permission type (default: include)",
    )

    check = sub.add_parser("check", help="Check whether a distributor may operate in a region")
    check.add_argument("name", help="Distributor name")
    check.add_argument("region", help="Region code")

    sub.add_parser("list", help="List all distributors and their rules")
    return parser


def _config_from_args(args: argparse.Namespace) -> AppConfig:
    config = AppConfig.from_env()
    if args.csv:
        config.catalog.csv_path = args.csv
    if args.data:
        config.store.data_path = args.data
    if args.exclude_policy:
        config.policy.exclude_policy = args.exclude_policy
    if args.log_level:
        config.log_level = args.log_level
    return config


def _render_distributor(record: DistributorRecord) -> str:
    return f"Successfully added distributor: {record.name}"


def _render_rule_change(change: RuleChange) -> str:
    return (
        f"Successfully added {change.ruleType.value} permission for "
        f"{change.region} to {change.distributor}"
    )


def _render_check(check: PermissionCheck) -> str:
    names = ", ".join(check.region.names)
    return "\n".join([
        f"Permission check for {check.distributor}:",
        f"Region: {check.region.code} ({names})",
        f"Result: {str(check.allowed).lower()}",
    ])


def _render_listing(listing: DistributorListing) -> str:
    lines = ["Registered Distributors:"]
    for record in listing.distributors:
        lines.append(f"- {record.name} (Parent: {record.parentName or 'none'})")
        lines.append("  Includes:")
        lines.extend(f"    - {region}" for region in record.includes)
        lines.append("  Excludes:")
        lines.extend(f"    - {region}" for region in record.excludes)
        lines.append("")
    return "\n".join(lines)


def _emit(result: BaseModel, fmt: str, render: Callable) -> None:
    if fmt == "json":
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        print(render(result))


def _report_error(exc: Exception, fmt: str, code: str, prefix: str = "Error") -> None:
    if fmt == "json":
        print(json.dumps({"error": code, "message": str(exc)}, indent=2), file=sys.stderr)
    else:
        print(f"{prefix}: {exc}", file=sys.stderr)


_RENDERERS = {
    "add-distributor": _render_distributor,
    "add-permission": _render_rule_change,
    "check": _render_check,
    "list": _render_listing,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_USAGE

    config = _config_from_args(args)

    try:
        logging.basicConfig(
            level=config.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        if args.command == "add-distributor":
            result = add_distributor_tool(args.name, args.parent, config=config)
        elif args.command == "add-permission":
            result = add_permission_tool(args.name, args.region, args.rule_type, config=config)
        elif args.command == "check":
            result = check_permission_tool(args.name, args.region, config=config)
        else:
            result = list_distributors_tool(config=config)
    except StateSaveError as exc:
        # The change was applied before the write failed.
        if exc.result is not None:
            _emit(exc.result, args.format, _RENDERERS[args.command])
        _report_error(exc, args.format, exc.code, prefix="Error saving state")
        return EXIT_ERROR
    except DistributionError as exc:
        _report_error(exc, args.format, exc.code)
        return EXIT_ERROR
    except ValueError as exc:
        _report_error(exc, args.format, "invalid_argument")
        return EXIT_USAGE

    _emit(result, args.format, _RENDERERS[args.command])
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

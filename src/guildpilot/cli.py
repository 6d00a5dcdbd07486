"""
GuildPilot CLI

Command-line interface for resolving authority and inspecting datasets.

Usage:
    guildpilot resolve --jurisdiction Ontario --role "Key Grip" --department Grip
    guildpilot organizations
    guildpilot jurisdictions
    guildpilot validate datasets/custom.yaml
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from .canon import compute_dataset_hash
from .config import Settings
from .engine import AuthorityResolver, create_resolver
from .exceptions import GuildPilotError
from .packs import DatasetPackLoader

logger = logging.getLogger(__name__)


def _build_resolver(args: argparse.Namespace) -> AuthorityResolver:
    settings = Settings.from_env()
    if args.dataset:
        settings = replace(settings, dataset_path=args.dataset)
    return create_resolver(settings)


def _print_error(error: GuildPilotError) -> None:
    print(f"ERROR: {error}", file=sys.stderr)
    for item in error.details.get("errors", []):
        if isinstance(item, dict):
            # pydantic error entries
            location = ".".join(str(part) for part in item.get("loc", ()))
            item = f"{location}: {item.get('msg')}"
        print(f"  - {item}", file=sys.stderr)


def cmd_resolve(args: argparse.Namespace) -> int:
    """Resolve authority for one role."""
    resolver = _build_resolver(args)
    result = resolver.resolve(args.jurisdiction, args.role, args.department)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    registry = resolver.dataset.registry
    print("=" * 60)
    print("AUTHORITY RESOLUTION")
    print("=" * 60)
    print(f"  Jurisdiction: {result.jurisdiction or '-'}")
    print(f"  Role:         {result.role or '-'}")
    print(f"  Department:   {result.department or '-'}")
    print()
    print(f"{'Organization':<12} {'Tier':<24} {'Matched':<20}")
    print("-" * 60)
    for match in result.matches:
        print(
            f"{match.organization_id:<12} "
            f"{match.tier.value:<24} "
            f"{match.matched_key or '':<20}"
        )
    print("-" * 60)
    primary = registry.get(result.primary)
    print(f"  Primary: {result.primary}" + (f" ({primary.name})" if primary else ""))
    if result.has_competing_authority:
        print("  Competing authority: " + ", ".join(result.organization_ids))
    if result.used_catch_all:
        print("  No rule matched; catch-all organization applied")
    print()
    return 0


def cmd_organizations(args: argparse.Namespace) -> int:
    """List organizations in the active dataset."""
    resolver = _build_resolver(args)

    print(f"{'ID':<10} {'Dues':>6}  {'Name'}")
    print("-" * 70)
    for organization in resolver.dataset.registry:
        print(f"{organization.id:<10} {organization.dues_percent:>6}  {organization.name}")
    print("-" * 70)
    print(f"{len(resolver.dataset.registry)} organizations")
    return 0


def cmd_jurisdictions(args: argparse.Namespace) -> int:
    """List jurisdictions and the rule tables that cover them."""
    resolver = _build_resolver(args)

    print(f"{'Jurisdiction':<28} {'Code':<5} {'Overrides':<10} {'Overlaps':<9} {'Alias of'}")
    print("-" * 70)
    for summary in resolver.dataset.describe_jurisdictions():
        print(
            f"{summary['name']:<28} "
            f"{summary['code'] or '':<5} "
            f"{'yes' if summary['has_overrides'] else 'no':<10} "
            f"{'yes' if summary['has_overlaps'] else 'no':<9} "
            f"{summary['alias_of'] or ''}"
        )
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a dataset pack file."""
    loader = DatasetPackLoader(strict_version=not args.no_strict)
    try:
        dataset = loader.load(args.pack)
    except GuildPilotError as e:
        print("VALIDATION FAILED")
        print("-" * 40)
        _print_error(e)
        return 1

    print("VALIDATION PASSED")
    print("-" * 40)
    print(f"  Dataset:       {dataset.name} {dataset.version}")
    print(f"  Organizations: {len(dataset.registry)}")
    print(f"  Overrides:     {len(dataset.overrides.rules)} jurisdictions")
    print(f"  Overlaps:      {len(dataset.overlaps.rules)} jurisdictions")
    print(f"  Hash:          {compute_dataset_hash(dataset)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="GuildPilot authority resolution CLI",
        prog="guildpilot",
    )
    parser.add_argument(
        "--dataset",
        default=None,
        help="Dataset pack to use instead of the built-in data (overrides GP_DATASET_PATH)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve authority for a role")
    resolve_parser.add_argument("-j", "--jurisdiction", default="", help="Province or territory")
    resolve_parser.add_argument("-r", "--role", default="", help="Job role")
    resolve_parser.add_argument("-d", "--department", default="", help="Department")
    resolve_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    resolve_parser.set_defaults(func=cmd_resolve)

    # Organizations command
    org_parser = subparsers.add_parser("organizations", help="List organizations")
    org_parser.set_defaults(func=cmd_organizations)

    # Jurisdictions command
    jur_parser = subparsers.add_parser("jurisdictions", help="List jurisdictions")
    jur_parser.set_defaults(func=cmd_jurisdictions)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a dataset pack")
    validate_parser.add_argument("pack", help="Path to a YAML or JSON pack")
    validate_parser.add_argument(
        "--no-strict",
        action="store_true",
        help="Warn instead of failing on a schema version mismatch",
    )
    validate_parser.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    logger.debug("Running command %s", args.command)
    try:
        return args.func(args)
    except GuildPilotError as e:
        _print_error(e)
        return 2


if __name__ == "__main__":
    sys.exit(main())

"""
GuildPilot Engine

The authority resolver and its module-level convenience API.

Usage:
    from guildpilot.engine import AuthorityResolver, resolve_authorities

    resolve_authorities("Ontario", "Key Grip", "Grip")   # ("u-873", "u-nabet")
"""
from __future__ import annotations

from .resolver import (
    AuthorityResolver,
    create_resolver,
    get_default_resolver,
    get_organization,
    list_organizations,
    reset_default_resolver,
    resolve_authorities,
    resolve_primary_authority,
)

__all__ = [
    "AuthorityResolver",
    "create_resolver",
    "get_default_resolver",
    "get_organization",
    "list_organizations",
    "reset_default_resolver",
    "resolve_authorities",
    "resolve_primary_authority",
]

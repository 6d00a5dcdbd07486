"""
GuildPilot Rule Tables

The three rule sources consulted by the resolver:

- NationalStandards: single-valued role/department defaults, used when a
  jurisdiction has nothing to say
- JurisdictionOverrides: per-jurisdiction ordered rule lists
- OverlapTable: per-jurisdiction competing-authority rules that add
  organizations on top of whatever the other tiers produced

All tables are frozen after construction. Jurisdiction aliasing (e.g.
the Atlantic provinces sharing Nova Scotia's rules) happens here, at
build time, never as a branch in the resolver.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence, TypeVar, Union

from ..exceptions import RuleDefinitionError
from ..matching import first_match, longest_match, normalize
from .enums import Jurisdiction, canonical_jurisdiction

R = TypeVar("R")

JurisdictionKey = Union[str, Jurisdiction]


def _check_keys(keys: Sequence[str], owner: str) -> tuple[str, ...]:
    """Freeze a key collection, rejecting blank keys."""
    frozen = tuple(keys)
    for key in frozen:
        if not normalize(key):
            raise RuleDefinitionError(
                message=f"{owner} contains an empty substring",
                details={"keys": list(frozen)},
            )
    return frozen


# =============================================================================
# Jurisdiction Rule
# =============================================================================

@dataclass(frozen=True)
class JurisdictionRule:
    """
    One entry in a jurisdiction's override list.

    The rule takes part in the role tier through ``role_substrings`` and
    in the department tier through ``department_substrings``. A rule
    matches a tier when any of its substrings is contained in the
    respective field.

    Attributes:
        organization_id: Organization assigned when the rule matches
        role_substrings: Keys matched against the role name
        department_substrings: Keys matched against the department name
    """
    organization_id: str
    role_substrings: tuple[str, ...] = ()
    department_substrings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "role_substrings",
            _check_keys(self.role_substrings, f"Rule for '{self.organization_id}'"),
        )
        object.__setattr__(
            self, "department_substrings",
            _check_keys(self.department_substrings, f"Rule for '{self.organization_id}'"),
        )
        if not self.role_substrings and not self.department_substrings:
            raise RuleDefinitionError(
                message=(
                    f"Rule for '{self.organization_id}' needs role or "
                    "department substrings"
                ),
                details={"organization_id": self.organization_id},
            )

    def match_role(self, role: str) -> Optional[str]:
        """Key that matched the normalized role, if any."""
        return first_match(role, self.role_substrings)

    def match_department(self, department: str) -> Optional[str]:
        """Key that matched the normalized department, if any."""
        return first_match(department, self.department_substrings)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        result: dict[str, Any] = {"organization_id": self.organization_id}
        if self.role_substrings:
            result["roles"] = list(self.role_substrings)
        if self.department_substrings:
            result["departments"] = list(self.department_substrings)
        return result


# =============================================================================
# Overlap Rule
# =============================================================================

@dataclass(frozen=True)
class OverlapRule:
    """
    A documented competing-authority claim.

    When the role matches ``role_substrings`` or the department matches
    ``department_substrings``, every id in ``organization_ids`` joins the
    result, whatever earlier tiers produced.

    Attributes:
        organization_ids: Organizations sharing authority, in display order
        role_substrings: Keys matched against the role name
        department_substrings: Keys matched against the department name
        label: Short name of the overlap (e.g., "Ontario transportation")
    """
    organization_ids: tuple[str, ...]
    role_substrings: tuple[str, ...] = ()
    department_substrings: tuple[str, ...] = ()
    label: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "organization_ids", tuple(self.organization_ids))
        if not self.organization_ids:
            raise RuleDefinitionError(
                message=f"Overlap '{self.label}' assigns no organizations",
            )
        owner = f"Overlap '{self.label}'"
        object.__setattr__(
            self, "role_substrings", _check_keys(self.role_substrings, owner)
        )
        object.__setattr__(
            self, "department_substrings", _check_keys(self.department_substrings, owner)
        )
        if not self.role_substrings and not self.department_substrings:
            raise RuleDefinitionError(
                message=f"{owner} needs role or department substrings",
            )

    def match(self, role: str, department: str) -> Optional[str]:
        """
        Key that triggered the overlap for normalized inputs, if any.

        Role keys are tried before department keys.
        """
        return first_match(role, self.role_substrings) or first_match(
            department, self.department_substrings
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        result: dict[str, Any] = {"organization_ids": list(self.organization_ids)}
        if self.label:
            result["label"] = self.label
        if self.role_substrings:
            result["roles"] = list(self.role_substrings)
        if self.department_substrings:
            result["departments"] = list(self.department_substrings)
        return result


# =============================================================================
# National Standards
# =============================================================================

@dataclass(frozen=True)
class NationalMappingEntry:
    """A role or department key mapped to one organization."""
    key: str
    organization_id: str

    def __post_init__(self) -> None:
        _check_keys((self.key,), f"National mapping for '{self.organization_id}'")


@dataclass(frozen=True)
class NationalStandards:
    """
    Jurisdiction-independent defaults.

    Both mappings are single-valued. When several keys match, the
    longest key wins and equal lengths go to the earlier entry, because
    several keys are substrings of each other ("Director" and
    "Director of Photography").
    """
    role_entries: tuple[NationalMappingEntry, ...] = ()
    department_entries: tuple[NationalMappingEntry, ...] = ()

    @classmethod
    def from_mappings(
        cls,
        roles: Mapping[str, str],
        departments: Mapping[str, str],
    ) -> NationalStandards:
        """Build from ordered ``{key: organization_id}`` mappings."""
        return cls(
            role_entries=tuple(NationalMappingEntry(k, v) for k, v in roles.items()),
            department_entries=tuple(
                NationalMappingEntry(k, v) for k, v in departments.items()
            ),
        )

    def lookup_role(self, role: str) -> Optional[NationalMappingEntry]:
        """Most specific role entry contained in the role name."""
        return longest_match(role, self.role_entries, key_of=lambda e: e.key)

    def lookup_department(self, department: str) -> Optional[NationalMappingEntry]:
        """Most specific department entry contained in the department name."""
        return longest_match(department, self.department_entries, key_of=lambda e: e.key)

    @property
    def organization_ids(self) -> set[str]:
        """Every organization id the table refers to."""
        return {
            e.organization_id
            for e in (*self.role_entries, *self.department_entries)
        }


# =============================================================================
# Jurisdiction-keyed tables
# =============================================================================

def expand_aliases(
    declared: Mapping[str, tuple[R, ...]],
    aliases: Mapping[str, str],
    require_source: bool = True,
) -> dict[str, tuple[R, ...]]:
    """
    Point each alias at its source's rule tuple.

    Aliases may chain (A -> B -> C). The alias shares the source's tuple
    object rather than a copy.

    Args:
        declared: Rule lists keyed by canonical jurisdiction
        aliases: ``{alias: source}`` with canonical keys
        require_source: Reject aliases whose chain ends at an undeclared
            jurisdiction. When False, such aliases are simply skipped.

    Raises:
        RuleDefinitionError: On cycles, on aliases that shadow a declared
            list, or on unknown sources when ``require_source`` is set
    """
    table = dict(declared)
    for alias in aliases:
        if alias in declared:
            raise RuleDefinitionError(
                message=f"Alias '{alias}' would replace its own declared rules",
                details={"alias": alias},
            )
        seen = [alias]
        source = aliases[alias]
        while source in aliases:
            if source in seen:
                raise RuleDefinitionError(
                    message=f"Alias cycle: {' -> '.join(seen + [source])}",
                    details={"alias": alias},
                )
            seen.append(source)
            source = aliases[source]
        if source in declared:
            table[alias] = declared[source]
        elif require_source:
            raise RuleDefinitionError(
                message=f"Alias '{alias}' points at undeclared jurisdiction '{source}'",
                details={"alias": alias, "source": source},
            )
    return table


def _canonical_keys(
    mapping: Mapping[JurisdictionKey, Any],
    owner: str,
) -> list[tuple[str, Any]]:
    """
    Canonicalize jurisdiction keys, keeping declaration order.

    Raises:
        RuleDefinitionError: If two keys name the same jurisdiction
            (e.g. "ON" and "Ontario")
    """
    seen: dict[str, str] = {}
    items = []
    for key, value in mapping.items():
        canonical = canonical_jurisdiction(key)
        declared = getattr(key, "value", key)
        if canonical in seen:
            raise RuleDefinitionError(
                message=(
                    f"{owner} keys '{seen[canonical]}' and '{declared}' "
                    f"both name jurisdiction '{canonical}'"
                ),
                details={"jurisdiction": canonical, "keys": [seen[canonical], declared]},
            )
        seen[canonical] = declared
        items.append((canonical, value))
    return items


def _canonical_aliases(aliases: Optional[Mapping[JurisdictionKey, JurisdictionKey]]) -> dict[str, str]:
    return {
        alias: canonical_jurisdiction(source)
        for alias, source in _canonical_keys(aliases or {}, "Alias")
    }


def _canonical_rules(
    rules: Mapping[JurisdictionKey, Iterable[R]],
    owner: str,
) -> dict[str, tuple[R, ...]]:
    return {key: tuple(value) for key, value in _canonical_keys(rules, owner)}


@dataclass(frozen=True)
class JurisdictionOverrides:
    """
    Jurisdiction -> ordered override rules.

    Usage:
        overrides = JurisdictionOverrides.build(
            {Jurisdiction.NS: [JurisdictionRule(...)]},
            aliases={Jurisdiction.NB: Jurisdiction.NS},
        )
        overrides.rules_for("New Brunswick")  # same tuple as Nova Scotia
    """
    rules: Mapping[str, tuple[JurisdictionRule, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    aliases: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(
        cls,
        rules: Mapping[JurisdictionKey, Iterable[JurisdictionRule]],
        aliases: Optional[Mapping[JurisdictionKey, JurisdictionKey]] = None,
    ) -> JurisdictionOverrides:
        canonical_aliases = _canonical_aliases(aliases)
        table = expand_aliases(_canonical_rules(rules, "Override"), canonical_aliases)
        return cls(
            rules=MappingProxyType(table),
            aliases=MappingProxyType(canonical_aliases),
        )

    def rules_for(self, jurisdiction: JurisdictionKey) -> tuple[JurisdictionRule, ...]:
        """Rules for a jurisdiction; unknown jurisdictions have none."""
        return self.rules.get(canonical_jurisdiction(jurisdiction), ())

    @property
    def jurisdictions(self) -> tuple[str, ...]:
        return tuple(self.rules.keys())

    @property
    def organization_ids(self) -> set[str]:
        return {rule.organization_id for rules in self.rules.values() for rule in rules}


@dataclass(frozen=True)
class OverlapTable:
    """Jurisdiction -> competing-authority rules."""
    rules: Mapping[str, tuple[OverlapRule, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(
        cls,
        rules: Mapping[JurisdictionKey, Iterable[OverlapRule]],
        aliases: Optional[Mapping[JurisdictionKey, JurisdictionKey]] = None,
    ) -> OverlapTable:
        # Sources without overlaps are fine: the alias then has none either
        table = expand_aliases(
            _canonical_rules(rules, "Overlap"),
            _canonical_aliases(aliases),
            require_source=False,
        )
        return cls(rules=MappingProxyType(table))

    def rules_for(self, jurisdiction: JurisdictionKey) -> tuple[OverlapRule, ...]:
        return self.rules.get(canonical_jurisdiction(jurisdiction), ())

    @property
    def jurisdictions(self) -> tuple[str, ...]:
        return tuple(self.rules.keys())

    @property
    def organization_ids(self) -> set[str]:
        return {
            organization_id
            for rules in self.rules.values()
            for rule in rules
            for organization_id in rule.organization_ids
        }

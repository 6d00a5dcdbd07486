"""
GuildPilot Authority Dataset

Bundles the organization registry, the three rule tables and the
catch-all organization into one immutable value that is built once and
handed to the resolver.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import ReferentialIntegrityError
from .enums import Jurisdiction
from .organization import OrganizationRegistry
from .rules import JurisdictionOverrides, NationalStandards, OverlapTable


def validate_reference_integrity(dataset: AuthorityDataset, source: str = "") -> None:
    """
    Check every id referenced by a table exists in the registry.

    Raises:
        ReferentialIntegrityError: Listing all dangling references
    """
    registry = dataset.registry
    errors = []

    if dataset.catch_all_id not in registry:
        errors.append(f"catch-all references unknown organization '{dataset.catch_all_id}'")

    for entry in dataset.national.role_entries:
        if entry.organization_id not in registry:
            errors.append(
                f"national role '{entry.key}' references unknown organization "
                f"'{entry.organization_id}'"
            )
    for entry in dataset.national.department_entries:
        if entry.organization_id not in registry:
            errors.append(
                f"national department '{entry.key}' references unknown organization "
                f"'{entry.organization_id}'"
            )

    for jurisdiction, rules in dataset.overrides.rules.items():
        if jurisdiction in dataset.overrides.aliases:
            continue
        for rule in rules:
            if rule.organization_id not in registry:
                errors.append(
                    f"override in '{jurisdiction}' references unknown organization "
                    f"'{rule.organization_id}'"
                )

    for jurisdiction, rules in dataset.overlaps.rules.items():
        for rule in rules:
            for organization_id in rule.organization_ids:
                if organization_id not in registry:
                    errors.append(
                        f"overlap '{rule.label or jurisdiction}' references unknown "
                        f"organization '{organization_id}'"
                    )

    if errors:
        # Aliased overlap tuples are shared, so the same miss can repeat
        unique = list(dict.fromkeys(errors))
        raise ReferentialIntegrityError(
            message=f"{len(unique)} dangling organization reference(s)",
            details={"errors": unique},
            source=source or None,
        )


@dataclass(frozen=True)
class AuthorityDataset:
    """
    Everything the resolver needs, frozen.

    Construct through ``build`` so referential integrity is checked.

    Attributes:
        registry: Organization records
        national: Jurisdiction-independent defaults
        overrides: Per-jurisdiction rule lists
        overlaps: Competing-authority rules
        catch_all_id: Organization returned when nothing else matched
        name: Dataset label, for display and logs
        version: Dataset revision
    """
    registry: OrganizationRegistry
    national: NationalStandards
    overrides: JurisdictionOverrides
    overlaps: OverlapTable
    catch_all_id: str
    name: str = "default"
    version: str = "1.0.0"
    source: str = field(default="", compare=False)

    @classmethod
    def build(
        cls,
        registry: OrganizationRegistry,
        national: NationalStandards,
        overrides: JurisdictionOverrides,
        overlaps: OverlapTable,
        catch_all_id: str,
        name: str = "default",
        version: str = "1.0.0",
        source: str = "",
    ) -> AuthorityDataset:
        """
        Assemble and validate a dataset.

        Raises:
            ReferentialIntegrityError: If any table names an unknown id
        """
        dataset = cls(
            registry=registry,
            national=national,
            overrides=overrides,
            overlaps=overlaps,
            catch_all_id=catch_all_id,
            name=name,
            version=version,
            source=source,
        )
        validate_reference_integrity(dataset, source=source)
        return dataset

    @property
    def referenced_ids(self) -> set[str]:
        """All organization ids used by the tables."""
        return (
            {self.catch_all_id}
            | self.national.organization_ids
            | self.overrides.organization_ids
            | self.overlaps.organization_ids
        )

    def alias_source(self, jurisdiction: str) -> Optional[str]:
        """Jurisdiction whose rules an alias borrows, if it is one."""
        return self.overrides.aliases.get(jurisdiction)

    def describe_jurisdictions(self) -> list[dict[str, Any]]:
        """
        Summary of every known jurisdiction and any custom table keys.

        Provinces and territories come first, in enum order, followed by
        keys that only a custom dataset uses.
        """
        names = [j.value for j in Jurisdiction]
        for key in (*self.overrides.rules, *self.overlaps.rules):
            if key not in names:
                names.append(key)

        summaries = []
        for name in names:
            member = Jurisdiction.coerce(name)
            summaries.append({
                "name": name,
                "code": member.code if member is not None else None,
                "has_overrides": bool(self.overrides.rules.get(name)),
                "has_overlaps": bool(self.overlaps.rules.get(name)),
                "alias_of": self.alias_source(name),
            })
        return summaries

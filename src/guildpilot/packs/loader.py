"""
GuildPilot Dataset Pack Loader

Loads and validates dataset packs from YAML or JSON files.

Converts Pydantic schema models to GuildPilot domain models and builds
an AuthorityDataset, so a pack goes through the same integrity checks
as the compiled-in data.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from ..exceptions import (
    DatasetLoadError,
    DatasetValidationError,
    DatasetVersionMismatch,
    GuildPilotError,
)
from ..models import (
    AuthorityDataset,
    JurisdictionOverrides,
    JurisdictionRule,
    MembershipTier,
    NationalMappingEntry,
    NationalStandards,
    Organization,
    OrganizationRegistry,
    OverlapRule,
    OverlapTable,
    TargetMetric,
)
from .schema import (
    SCHEMA_VERSION,
    DatasetPackSchema,
    JurisdictionRuleSchema,
    OrganizationSchema,
    OverlapRuleSchema,
    check_schema_version,
    validate_dataset_pack,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_organization(schema: OrganizationSchema) -> Organization:
    """Convert OrganizationSchema to Organization model."""
    return Organization(
        id=schema.id,
        name=schema.name,
        description=schema.description,
        dues_rate=schema.dues_rate,
        application_fee=schema.application_fee,
        benefits=tuple(schema.benefits),
        membership_tiers=tuple(
            MembershipTier(
                name=t.name,
                target_metric=TargetMetric(t.target_metric),
                target_value=t.target_value,
                description=t.description,
            )
            for t in schema.membership_tiers
        ),
        jurisdiction_notes=schema.jurisdiction_notes,
        residency_rule=schema.residency_rule,
        application_steps=tuple(schema.application_steps),
    )


def _convert_rule(schema: JurisdictionRuleSchema) -> JurisdictionRule:
    return JurisdictionRule(
        organization_id=schema.organization_id,
        role_substrings=tuple(schema.roles),
        department_substrings=tuple(schema.departments),
    )


def _convert_overlap(schema: OverlapRuleSchema) -> OverlapRule:
    return OverlapRule(
        organization_ids=tuple(schema.organization_ids),
        role_substrings=tuple(schema.roles),
        department_substrings=tuple(schema.departments),
        label=schema.label,
    )


def _convert_dataset_pack(schema: DatasetPackSchema, source: str = "") -> AuthorityDataset:
    """Convert DatasetPackSchema to a validated AuthorityDataset."""
    national = NationalStandards(
        role_entries=tuple(
            NationalMappingEntry(e.key, e.organization_id)
            for e in schema.national_standards.roles
        ),
        department_entries=tuple(
            NationalMappingEntry(e.key, e.organization_id)
            for e in schema.national_standards.departments
        ),
    )
    overrides = JurisdictionOverrides.build(
        {
            jurisdiction: [_convert_rule(r) for r in rules]
            for jurisdiction, rules in schema.jurisdiction_overrides.items()
        },
        aliases=schema.aliases,
    )
    overlaps = OverlapTable.build(
        {
            jurisdiction: [_convert_overlap(r) for r in rules]
            for jurisdiction, rules in schema.overlaps.items()
        },
        aliases=schema.aliases,
    )
    return AuthorityDataset.build(
        registry=OrganizationRegistry.from_records(
            _convert_organization(o) for o in schema.organizations
        ),
        national=national,
        overrides=overrides,
        overlaps=overlaps,
        catch_all_id=schema.catch_all_id,
        name=schema.name,
        version=schema.version,
        source=source,
    )


# =============================================================================
# Model to Pack Export
# =============================================================================

def dataset_to_pack_dict(dataset: AuthorityDataset) -> dict[str, Any]:
    """
    Serialize a dataset in pack form.

    The output loads back into an equal dataset. Aliased jurisdictions
    are written as aliases, not as copies of their source's rules.
    """
    aliases = dict(dataset.overrides.aliases)
    return {
        "schema_version": SCHEMA_VERSION,
        "name": dataset.name,
        "version": dataset.version,
        "catch_all_id": dataset.catch_all_id,
        "organizations": [o.to_dict() for o in dataset.registry],
        "national_standards": {
            "roles": [
                {"key": e.key, "organization_id": e.organization_id}
                for e in dataset.national.role_entries
            ],
            "departments": [
                {"key": e.key, "organization_id": e.organization_id}
                for e in dataset.national.department_entries
            ],
        },
        "jurisdiction_overrides": {
            jurisdiction: [r.to_dict() for r in rules]
            for jurisdiction, rules in dataset.overrides.rules.items()
            if jurisdiction not in aliases
        },
        "aliases": aliases,
        "overlaps": {
            jurisdiction: [r.to_dict() for r in rules]
            for jurisdiction, rules in dataset.overlaps.rules.items()
            if jurisdiction not in aliases
        },
    }


# =============================================================================
# Dataset Pack Loader
# =============================================================================

class DatasetPackLoader:
    """
    Loads dataset packs from YAML or JSON files.

    Usage:
        loader = DatasetPackLoader()
        dataset = loader.load("path/to/dataset.yaml")
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject packs with incompatible schema
                versions. If False, log a warning and try to load anyway.
        """
        self.strict_version = strict_version

    def load(self, path: Union[str, Path]) -> AuthorityDataset:
        """
        Load a dataset pack from a file.

        Args:
            path: Path to YAML or JSON file

        Returns:
            Validated AuthorityDataset

        Raises:
            DatasetLoadError: If the file cannot be read or parsed
            DatasetVersionMismatch: If schema version incompatible
            DatasetValidationError: If schema validation fails
            RuleDefinitionError: If a rule table is malformed
            ReferentialIntegrityError: If a table names an unknown organization
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise DatasetLoadError(
                message=f"Failed to load dataset pack: {e}",
                details={"path": str(path), "error": str(e)},
                source=str(path),
            ) from e

        dataset = self.load_data(data, source=str(path))
        logger.info(
            "Loaded dataset pack %s (%s %s, %d organizations)",
            path,
            dataset.name,
            dataset.version,
            len(dataset.registry),
        )
        return dataset

    def load_data(self, data: Any, source: str = "") -> AuthorityDataset:
        """Validate already-parsed pack data and build the dataset."""
        if not isinstance(data, dict):
            raise DatasetLoadError(
                message="Dataset pack root must be a mapping",
                details={"type": type(data).__name__},
                source=source or None,
            )

        if not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            if self.strict_version:
                raise DatasetVersionMismatch(
                    message=(
                        f"Schema version mismatch: pack has {pack_version}, "
                        f"expected {SCHEMA_VERSION}"
                    ),
                    details={
                        "pack_version": pack_version,
                        "expected_version": SCHEMA_VERSION,
                    },
                    source=source or None,
                )
            logger.warning(
                "Loading pack %s with schema version %s (expected %s)",
                source or "<string>",
                pack_version,
                SCHEMA_VERSION,
            )

        try:
            schema = validate_dataset_pack(data)
        except ValidationError as e:
            raise DatasetValidationError(
                message=f"Dataset pack validation failed: {e.error_count()} errors",
                details={
                    "errors": e.errors(include_url=False, include_context=False),
                    "path": source,
                },
                source=source or None,
            ) from e

        try:
            return _convert_dataset_pack(schema, source=source)
        except GuildPilotError as e:
            if not e.source:
                e.source = source or None
            raise

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                return json.load(f)
            else:
                # Try YAML first, then JSON
                content = f.read()
                try:
                    return yaml.safe_load(content)
                except yaml.YAMLError:
                    return json.loads(content)


# =============================================================================
# Convenience Functions
# =============================================================================

def load_dataset_pack(
    path: Union[str, Path],
    strict_version: bool = True,
) -> AuthorityDataset:
    """
    Load a dataset pack from a file.

    Convenience function that creates a temporary loader.
    """
    return DatasetPackLoader(strict_version=strict_version).load(path)


def load_dataset_pack_from_string(
    content: str,
    format: str = "yaml",
    strict_version: bool = True,
) -> AuthorityDataset:
    """
    Load a dataset pack from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
        strict_version: Reject incompatible schema versions

    Raises:
        DatasetLoadError: If the content cannot be parsed
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DatasetLoadError(
            message=f"Failed to parse dataset pack: {e}",
            details={"format": format, "error": str(e)},
        ) from e

    return DatasetPackLoader(strict_version=strict_version).load_data(data)

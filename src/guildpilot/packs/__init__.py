"""
GuildPilot Dataset Packs

YAML/JSON files that replace the compiled-in dataset:

    from guildpilot.packs import load_dataset_pack

    dataset = load_dataset_pack("datasets/canada.yaml")
"""
from __future__ import annotations

from .loader import (
    DatasetPackLoader,
    dataset_to_pack_dict,
    load_dataset_pack,
    load_dataset_pack_from_string,
)
from .schema import (
    SCHEMA_VERSION,
    DatasetPackSchema,
    check_schema_version,
    validate_dataset_pack,
)

__all__ = [
    "SCHEMA_VERSION",
    "DatasetPackLoader",
    "DatasetPackSchema",
    "check_schema_version",
    "dataset_to_pack_dict",
    "load_dataset_pack",
    "load_dataset_pack_from_string",
    "validate_dataset_pack",
]

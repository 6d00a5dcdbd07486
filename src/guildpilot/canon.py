"""
Canonical JSON Serialization

Deterministic JSON for hashing datasets and comparing results:
- Sorted keys
- No whitespace
- Decimals as strings, enums as values

The same dataset always produces the same hash, so the service and CLI
can report which rule set answered a query.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from .models import AuthorityDataset
from .packs.loader import dataset_to_pack_dict


def _default_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for non-standard types.

    Handles Decimal, Enum, dataclasses and sets.
    """
    if isinstance(obj, Decimal):
        # Preserve exact decimal representation
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        default=_default_serializer,
        ensure_ascii=False,
    )


def content_hash(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON form."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()


def content_hash_short(obj: Any, length: int = 12) -> str:
    """Truncated content hash for display."""
    return content_hash(obj)[:length]


def compute_dataset_hash(dataset: AuthorityDataset) -> str:
    """
    Hash of a dataset's tables and records.

    Computed over the pack form, so a compiled-in dataset and the same
    data loaded from a pack hash identically. The ``source`` field is
    not part of the hash.
    """
    return content_hash(dataset_to_pack_dict(dataset))

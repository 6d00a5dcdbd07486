"""
GuildPilot Configuration

Settings come from environment variables:

    GP_DATASET_PATH    Optional YAML/JSON pack replacing the built-in dataset
    GP_STRICT_VERSION  Reject packs with an unsupported schema version (true)
    GP_CACHE_ENABLED   Memoize resolutions (true)
    GP_CACHE_SIZE      Most resolutions kept in the memo cache (4096)
    GP_LOG_LEVEL       Log level for the guildpilot logger (INFO)
    GP_DOCS_ENABLED    Serve OpenAPI docs from the HTTP service (true)
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_CACHE_SIZE = 4096

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the resolver, CLI and HTTP service."""
    dataset_path: Optional[str] = None
    strict_version: bool = True
    cache_enabled: bool = True
    cache_size: int = DEFAULT_CACHE_SIZE
    log_level: str = "INFO"
    docs_enabled: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Settings:
        """
        Read settings from ``env`` (defaults to ``os.environ``).

        Raises:
            ValueError: If GP_CACHE_SIZE is not a positive integer
        """
        if env is None:
            env = os.environ
        dataset_path = (env.get("GP_DATASET_PATH") or "").strip() or None
        return cls(
            dataset_path=dataset_path,
            strict_version=_env_bool(env, "GP_STRICT_VERSION", True),
            cache_enabled=_env_bool(env, "GP_CACHE_ENABLED", True),
            cache_size=_env_positive_int(env, "GP_CACHE_SIZE", DEFAULT_CACHE_SIZE),
            log_level=(env.get("GP_LOG_LEVEL") or "INFO").strip().upper(),
            docs_enabled=_env_bool(env, "GP_DOCS_ENABLED", True),
        )

"""Configuration management for distribution-rights.

Loads settings from environment variables with sensible defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class CatalogConfig:
    """Region catalog configuration."""
    csv_path: str = "cities.csv"

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        return cls(
            csv_path=os.getenv("DISTRIBUTION_RIGHTS_CSV", "cities.csv"),
        )


@dataclass
class StoreConfig:
    """Distributor state store configuration."""
    data_path: str = "distributors.json"

    @classmethod
    def from_env(cls) -> "StoreConfig":
        return cls(
            data_path=os.getenv("DISTRIBUTION_RIGHTS_DATA", "distributors.json"),
        )


@dataclass
class PolicyConfig:
    """Permission rule policy."""
    exclude_policy: str = "unrestricted"  # "unrestricted", "parent-checked"

    @classmethod
    def from_env(cls) -> "PolicyConfig":
        return cls(
            exclude_policy=os.getenv("DISTRIBUTION_RIGHTS_EXCLUDE_POLICY", "unrestricted"),
        )


@dataclass
class AppConfig:
    """Top-level application configuration."""
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            catalog=CatalogConfig.from_env(),
            store=StoreConfig.from_env(),
            policy=PolicyConfig.from_env(),
            log_level=os.getenv("DISTRIBUTION_RIGHTS_LOG_LEVEL", "WARNING"),
        )

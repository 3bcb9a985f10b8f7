from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Callable, Iterator, Optional, TypeVar

from distribution_rights.config.settings import AppConfig
from distribution_rights.errors import StateSaveError, StateStoreError
from distribution_rights.graph.permissions import ExcludePolicy
from distribution_rights.models import (
    DistributorListing,
    DistributorRecord,
    PermissionCheck,
    RuleChange,
    RuleType,
)
from distribution_rights.regions.catalog import RegionCatalog, load_catalog
from distribution_rights.storage.state_store import StateStore
from distribution_rights.system import DistributionSystem

LOG = logging.getLogger("tools")

# One load -> mutate -> save cycle at a time per process.
_SESSION_LOCK = threading.Lock()

T = TypeVar("T")


@lru_cache(maxsize=None)
def _load_catalog_cached(resolved_path: str) -> RegionCatalog:
    return load_catalog(Path(resolved_path))


def get_catalog(path: str | Path) -> RegionCatalog:
    """Return the shared catalog for a gazetteer path, loading it on first use."""
    return _load_catalog_cached(str(Path(path).resolve()))


def clear_catalog_cache() -> None:
    _load_catalog_cached.cache_clear()


def open_system(config: AppConfig) -> DistributionSystem:
    catalog = get_catalog(config.catalog.csv_path)
    graph = StateStore(Path(config.store.data_path)).load_graph()
    return DistributionSystem(catalog, graph, ExcludePolicy(config.policy.exclude_policy))


def save_system(system: DistributionSystem, config: AppConfig) -> None:
    store = StateStore(Path(config.store.data_path))
    try:
        store.save_graph(system.graph)
    except StateStoreError as exc:
        LOG.error("Error saving state: %s", exc)
        raise


@contextmanager
def session(config: Optional[AppConfig] = None, persist: bool = False) -> Iterator[DistributionSystem]:
    """Load the system, hand it to the caller, and save it if ``persist`` and no error was raised."""
    config = config or AppConfig.from_env()
    with _SESSION_LOCK:
        system = open_system(config)
        yield system
        if persist:
            save_system(system, config)


def _commit(config: Optional[AppConfig], change: Callable[[DistributionSystem], T]) -> T:
    """Apply ``change`` in a persisting session. A failed save still carries the applied result."""
    result = None
    try:
        with session(config, persist=True) as system:
            result = change(system)
    except StateSaveError as exc:
        exc.result = result
        raise
    return result


def add_distributor_tool(
    name: str, parent_name: Optional[str] = None, config: Optional[AppConfig] = None
) -> DistributorRecord:
    return _commit(config, lambda system: system.add_distributor(name, parent_name or "").to_record())


def add_permission_tool(
    name: str,
    region: str,
    rule_type: str | RuleType = RuleType.INCLUDE,
    config: Optional[AppConfig] = None,
) -> RuleChange:
    rule_type = RuleType(rule_type)

    def change(system: DistributionSystem) -> RuleChange:
        system.add_permission(name, region, is_include=rule_type == RuleType.INCLUDE)
        return RuleChange(distributor=name, region=region, ruleType=rule_type)

    return _commit(config, change)


def check_permission_tool(name: str, region: str, config: Optional[AppConfig] = None) -> PermissionCheck:
    with session(config) as system:
        allowed = system.check_permission(name, region)
        return PermissionCheck(
            distributor=name,
            region=system.describe_region(region),
            allowed=allowed,
        )


def list_distributors_tool(config: Optional[AppConfig] = None) -> DistributorListing:
    with session(config) as system:
        return DistributorListing(distributors=system.list_distributors())

"""
DistributionSystem: the facade over the region catalog and distributor graph.

Operations are keyed by distributor name and region code. Unknown names and
region codes are reported as typed errors before the permission engine runs.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

from distribution_rights.errors import UnknownRegionError
from distribution_rights.graph.distributors import Distributor, DistributorGraph
from distribution_rights.graph.permissions import ExcludePolicy, add_permission, has_permission
from distribution_rights.models import DistributorRecord, RegionDescription
from distribution_rights.regions.catalog import RegionCatalog

LOG = logging.getLogger("system")


class DistributionSystem:
    """
    Owns one distributor graph and a shared, read-only region catalog.

    Example:
        system = DistributionSystem(load_catalog(Path("cities.csv")))
        system.add_distributor("ACME")
        system.add_permission("ACME", "US", is_include=True)
        system.check_permission("ACME", "LA-CA-US")   # True
    """

    def __init__(
        self,
        catalog: RegionCatalog,
        graph: Optional[DistributorGraph] = None,
        exclude_policy: ExcludePolicy = ExcludePolicy.UNRESTRICTED,
    ) -> None:
        self._catalog = catalog
        self._graph = graph if graph is not None else DistributorGraph()
        self._exclude_policy = ExcludePolicy(exclude_policy)

    @property
    def catalog(self) -> RegionCatalog:
        return self._catalog

    @property
    def graph(self) -> DistributorGraph:
        return self._graph

    @property
    def exclude_policy(self) -> ExcludePolicy:
        return self._exclude_policy

    def validate_region(self, code: str) -> bool:
        """Check whether ``code`` is a known catalog key."""
        return code in self._catalog

    def _require_region(self, code: str) -> None:
        if not self.validate_region(code):
            raise UnknownRegionError(code)

    def add_distributor(self, name: str, parent_name: str = "") -> Distributor:
        node = self._graph.add_distributor(name, parent_name)
        LOG.info("Added distributor %s (parent: %s)", name, parent_name or "none")
        return node

    def add_permission(self, name: str, region: str, is_include: bool = True) -> None:
        """
        Add an include or exclude rule for a distributor.

        Raises:
            UnknownDistributorError: If the distributor is not registered
            UnknownRegionError: If the region is not in the catalog
            ParentDenialError: If the parent does not authorize the region
        """
        node = self._graph.get(name)
        self._require_region(region)
        add_permission(node, region, is_include, self._exclude_policy)
        LOG.info("Added %s permission for %s to %s", "include" if is_include else "exclude", region, name)

    def check_permission(self, name: str, region: str) -> bool:
        """
        Decide whether a distributor may operate in a region.

        The region is validated before the distributor is looked up, so an
        unknown region is reported without touching the graph.
        """
        self._require_region(region)
        return has_permission(self._graph.get(name), region)

    def describe_region(self, code: str) -> RegionDescription:
        self._require_region(code)
        return RegionDescription(
            code=code,
            level=self._catalog.level_of(code),
            names=list(self._catalog.describe(code)),
        )

    def list_distributors(self) -> List[DistributorRecord]:
        return [self._graph.get(name).to_record() for name in self._graph.names()]

    def to_records(self) -> Mapping[str, DistributorRecord]:
        return self._graph.to_records()

    @classmethod
    def from_records(
        cls,
        catalog: RegionCatalog,
        records: Mapping[str, DistributorRecord],
        exclude_policy: ExcludePolicy = ExcludePolicy.UNRESTRICTED,
    ) -> "DistributionSystem":
        return cls(catalog, DistributorGraph.from_records(records), exclude_policy)

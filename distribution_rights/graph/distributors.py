"""
Distributor graph: a forest of named distributors.

The graph owns every node. A node's ``parent`` is a reference to another node
of the same graph and is only ever set by the graph, so parents always
outlive their children and nodes are never removed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Set

from distribution_rights.errors import (
    DuplicateDistributorError,
    UnknownDistributorError,
    UnknownParentError,
)
from distribution_rights.models import DistributorRecord

LOG = logging.getLogger("graph.distributors")


@dataclass(eq=False)
class Distributor:
    """A distribution entity and its include/exclude region rules."""

    name: str
    parent: Optional["Distributor"] = None
    includes: Set[str] = field(default_factory=set)
    excludes: Set[str] = field(default_factory=set)

    @property
    def parent_name(self) -> str:
        return self.parent.name if self.parent is not None else ""

    def to_record(self) -> DistributorRecord:
        return DistributorRecord(
            name=self.name,
            parentName=self.parent_name,
            includes=sorted(self.includes),
            excludes=sorted(self.excludes),
        )

    def __repr__(self) -> str:
        return f"Distributor({self.name!r}, parent={self.parent_name or None!r})"


class DistributorGraph:
    """
    Registry of distributors keyed by name.

    Example:
        graph = DistributorGraph()
        graph.add_distributor("ACME")
        graph.add_distributor("ACME-WEST", parent_name="ACME")
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, Distributor] = {}

    def add_distributor(self, name: str, parent_name: str = "") -> Distributor:
        """
        Register a new distributor with empty rule sets.

        Args:
            name: Unique distributor name
            parent_name: Name of an already registered parent, or "" for a root

        Raises:
            ValueError: If name is blank
            DuplicateDistributorError: If name is taken
            UnknownParentError: If parent_name is not registered
        """
        if not name or not name.strip():
            raise ValueError("Distributor name cannot be empty")
        if name in self._nodes:
            raise DuplicateDistributorError(name)

        parent = None
        if parent_name:
            parent = self._nodes.get(parent_name)
            if parent is None:
                raise UnknownParentError(parent_name)

        node = Distributor(name=name, parent=parent)
        self._nodes[name] = node
        return node

    def get(self, name: str) -> Distributor:
        node = self._nodes.get(name)
        if node is None:
            raise UnknownDistributorError(name)
        return node

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[Distributor]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def names(self) -> List[str]:
        return sorted(self._nodes)

    def link_parent(self, name: str, parent_name: str) -> None:
        """
        Attach an existing node under an existing parent.

        Only used while rebuilding a graph from stored records, where nodes
        may arrive in any order.

        Raises:
            ValueError: If the link would create a cycle
        """
        node = self.get(name)
        parent = self._nodes.get(parent_name)
        if parent is None:
            raise UnknownParentError(parent_name)

        current: Optional[Distributor] = parent
        while current is not None:
            if current is node:
                raise ValueError(f"Parent link {name} -> {parent_name} would create a cycle")
            current = current.parent
        node.parent = parent

    def to_records(self) -> Dict[str, DistributorRecord]:
        return {name: node.to_record() for name, node in self._nodes.items()}

    @classmethod
    def from_records(cls, records: Mapping[str, DistributorRecord]) -> "DistributorGraph":
        """
        Rebuild a graph from stored records keyed by distributor name.

        Nodes are created first and linked to their parents in a second pass.
        A record naming a missing parent is kept as a root.

        Raises:
            ValueError: If the parent links contain a cycle
        """
        graph = cls()
        for name, record in records.items():
            graph._nodes[name] = Distributor(
                name=name,
                includes=set(record.includes),
                excludes=set(record.excludes),
            )

        for name, record in records.items():
            if not record.parentName:
                continue
            if record.parentName not in graph._nodes:
                LOG.warning(
                    "Distributor %s names missing parent %s; loading it as a root",
                    name,
                    record.parentName,
                )
                continue
            graph.link_parent(name, record.parentName)

        return graph

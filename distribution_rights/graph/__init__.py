"""
Distributor graph and permission engine.

Usage:
    from distribution_rights.graph import DistributorGraph, has_permission, add_permission

    graph = DistributorGraph()
    root = graph.add_distributor("ACME")
    add_permission(root, "US", is_include=True)
    child = graph.add_distributor("ACME-WEST", parent_name="ACME")
    add_permission(child, "CA-US", is_include=True)

    has_permission(child, "LA-CA-US")   # True
    has_permission(child, "NY-US")      # False
"""

from distribution_rights.graph.distributors import Distributor, DistributorGraph
from distribution_rights.graph.permissions import ExcludePolicy, add_permission, has_permission

__all__ = [
    "Distributor",
    "DistributorGraph",
    "ExcludePolicy",
    "add_permission",
    "has_permission",
]

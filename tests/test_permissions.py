"""
Tests for graph.permissions: rule evaluation and invariant-enforcing mutation.

Tests cover:
- Excludes override includes at every level
- Child authorization is bounded by every ancestor
- Parent denial for includes, and both exclude policies
- Contradictory rules are accepted with a warning
"""

from __future__ import annotations

import logging

import pytest

from distribution_rights.errors import ParentDenialError
from distribution_rights.graph.distributors import DistributorGraph
from distribution_rights.graph.permissions import ExcludePolicy, add_permission, has_permission


@pytest.fixture
def graph():
    return DistributorGraph()


@pytest.fixture
def root(graph):
    node = graph.add_distributor("ROOT")
    add_permission(node, "US", is_include=True)
    return node


@pytest.fixture
def child(graph, root):
    return graph.add_distributor("CHILD", parent_name="ROOT")


class TestHasPermission:
    """Tests for has_permission()."""

    def test_no_rules_denies(self, graph):
        node = graph.add_distributor("EMPTY")
        assert not has_permission(node, "US")

    @pytest.mark.parametrize("region", ["US", "CA-US", "NY-US", "NYC-NY-US"])
    def test_root_country_include(self, root, region):
        assert has_permission(root, region)

    def test_root_denies_other_country(self, root):
        assert not has_permission(root, "FR")

    def test_exclude_wins_over_include(self, root):
        add_permission(root, "CA-US", is_include=False)
        assert not has_permission(root, "CA-US")
        assert not has_permission(root, "LA-CA-US")
        assert has_permission(root, "NY-US")

    def test_same_code_in_both_sets_is_denied(self, graph):
        node = graph.add_distributor("BOTH")
        add_permission(node, "US", is_include=True)
        add_permission(node, "US", is_include=False)
        assert not has_permission(node, "US")

    def test_city_include_does_not_cover_province(self, graph):
        node = graph.add_distributor("CITY")
        add_permission(node, "LA-CA-US", is_include=True)
        assert has_permission(node, "LA-CA-US")
        assert not has_permission(node, "CA-US")
        assert not has_permission(node, "US")

    def test_child_without_rules_denies(self, root, child):
        assert not has_permission(child, "CA-US")

    def test_child_is_bounded_by_parent(self, root, child):
        add_permission(child, "CA-US", is_include=True)
        assert has_permission(child, "LA-CA-US")
        assert not has_permission(child, "NY-US")

    def test_parent_change_is_visible_to_child(self, root, child):
        add_permission(child, "CA-US", is_include=True)
        assert has_permission(child, "SF-CA-US")
        add_permission(root, "SF-CA-US", is_include=False)
        assert not has_permission(child, "SF-CA-US")
        assert has_permission(child, "LA-CA-US")

    def test_grandchild_is_bounded_by_all_ancestors(self, graph, root, child):
        add_permission(child, "CA-US", is_include=True)
        grandchild = graph.add_distributor("GRANDCHILD", parent_name="CHILD")
        add_permission(grandchild, "LA-CA-US", is_include=True)
        assert has_permission(grandchild, "LA-CA-US")

        add_permission(root, "CA-US", is_include=False)
        assert not has_permission(grandchild, "LA-CA-US")

    def test_deep_chain_does_not_recurse(self, graph):
        """Evaluation walks the chain iteratively."""
        parent = graph.add_distributor("N0")
        add_permission(parent, "US", is_include=True)
        for i in range(1, 3000):
            node = graph.add_distributor(f"N{i}", parent_name=parent.name)
            node.includes.add("US")
            parent = node
        assert has_permission(parent, "CA-US")
        assert not has_permission(parent, "FR")


class TestAddPermission:
    """Tests for add_permission()."""

    def test_root_accepts_any_include(self, graph):
        node = graph.add_distributor("FREE")
        add_permission(node, "FR", is_include=True)
        assert node.includes == {"FR"}

    def test_child_include_outside_parent_is_denied(self, root, child):
        with pytest.raises(ParentDenialError) as excinfo:
            add_permission(child, "FR", is_include=True)
        assert excinfo.value.parent_name == "ROOT"
        assert excinfo.value.region == "FR"
        assert child.includes == set()
        assert child.excludes == set()

    def test_child_include_inside_parent_is_accepted(self, root, child):
        add_permission(child, "CA-US", is_include=True)
        assert child.includes == {"CA-US"}

    def test_child_include_of_parent_excluded_region_is_denied(self, root, child):
        add_permission(root, "CA-US", is_include=False)
        with pytest.raises(ParentDenialError):
            add_permission(child, "LA-CA-US", is_include=True)

    def test_unrestricted_exclude_skips_parent_check(self, root, child):
        add_permission(child, "FR", is_include=False)
        assert child.excludes == {"FR"}

    def test_parent_checked_exclude_is_denied(self, root, child):
        with pytest.raises(ParentDenialError):
            add_permission(child, "FR", is_include=False, exclude_policy=ExcludePolicy.PARENT_CHECKED)
        assert child.excludes == set()

    def test_parent_checked_exclude_inside_parent(self, root, child):
        add_permission(child, "NY-US", is_include=False, exclude_policy=ExcludePolicy.PARENT_CHECKED)
        assert child.excludes == {"NY-US"}

    def test_duplicate_rule_is_idempotent(self, root):
        add_permission(root, "US", is_include=True)
        assert root.includes == {"US"}

    def test_contradiction_is_logged(self, root, caplog):
        with caplog.at_level(logging.WARNING, logger="graph.permissions"):
            add_permission(root, "US", is_include=False)
        assert root.includes == {"US"}
        assert root.excludes == {"US"}
        assert "both includes and excludes US" in caplog.text

"""Tests for graph.distributors: registration, lookup and record reconstruction."""

import logging

import pytest

from distribution_rights.errors import (
    DuplicateDistributorError,
    UnknownDistributorError,
    UnknownParentError,
)
from distribution_rights.graph.distributors import DistributorGraph
from distribution_rights.models import DistributorRecord


@pytest.fixture
def graph():
    g = DistributorGraph()
    g.add_distributor("ACME")
    g.add_distributor("ACME-WEST", parent_name="ACME")
    g.add_distributor("ACME-LA", parent_name="ACME-WEST")
    g.add_distributor("OTHER")
    return g


class TestRegistration:
    """Tests for DistributorGraph.add_distributor()."""

    def test_root_has_no_parent(self, graph):
        node = graph.get("ACME")
        assert node.parent is None
        assert node.parent_name == ""
        assert node.includes == set()
        assert node.excludes == set()

    def test_child_links_to_parent(self, graph):
        assert graph.get("ACME-WEST").parent is graph.get("ACME")

    def test_duplicate_name_rejected(self):
        g = DistributorGraph()
        g.add_distributor("A", "")
        with pytest.raises(DuplicateDistributorError) as excinfo:
            g.add_distributor("A", "")
        assert excinfo.value.code == "duplicate_distributor"
        assert len(g) == 1

    def test_unknown_parent_rejected(self, graph):
        with pytest.raises(UnknownParentError, match="NOPE"):
            graph.add_distributor("ORPHAN", parent_name="NOPE")
        assert "ORPHAN" not in graph

    def test_blank_name_rejected(self, graph):
        with pytest.raises(ValueError):
            graph.add_distributor("   ")


class TestLookup:
    def test_get_unknown_raises(self, graph):
        with pytest.raises(UnknownDistributorError):
            graph.get("NOPE")

    def test_names_sorted(self, graph):
        assert graph.names() == ["ACME", "ACME-LA", "ACME-WEST", "OTHER"]


class TestLinkParent:
    def test_cycle_rejected(self, graph):
        with pytest.raises(ValueError, match="cycle"):
            graph.link_parent("ACME", "ACME-LA")
        assert graph.get("ACME").parent is None

    def test_self_link_rejected(self, graph):
        with pytest.raises(ValueError, match="cycle"):
            graph.link_parent("OTHER", "OTHER")

    def test_relink(self, graph):
        graph.link_parent("OTHER", "ACME")
        assert graph.get("OTHER").parent_name == "ACME"


class TestRecords:
    """Tests for to_records() / from_records()."""

    def test_to_records_sorts_rules(self, graph):
        node = graph.get("ACME")
        node.includes.update({"US", "FR"})
        node.excludes.add("CA-US")
        record = graph.to_records()["ACME"]
        assert record.includes == ["FR", "US"]
        assert record.excludes == ["CA-US"]
        assert record.parentName == ""

    def test_from_records_tolerates_child_before_parent(self):
        records = {
            "CHILD": DistributorRecord(name="CHILD", parentName="ROOT", includes=["CA-US"]),
            "ROOT": DistributorRecord(name="ROOT", includes=["US"]),
        }
        graph = DistributorGraph.from_records(records)
        assert graph.get("CHILD").parent is graph.get("ROOT")
        assert graph.get("CHILD").includes == {"CA-US"}

    def test_from_records_keeps_dangling_child_as_root(self, caplog):
        records = {"CHILD": DistributorRecord(name="CHILD", parentName="GONE")}
        with caplog.at_level(logging.WARNING, logger="graph.distributors"):
            graph = DistributorGraph.from_records(records)
        assert graph.get("CHILD").parent is None
        assert "missing parent GONE" in caplog.text

    def test_from_records_rejects_cycle(self):
        records = {
            "A": DistributorRecord(name="A", parentName="B"),
            "B": DistributorRecord(name="B", parentName="A"),
        }
        with pytest.raises(ValueError, match="cycle"):
            DistributorGraph.from_records(records)

    def test_roundtrip(self, graph):
        graph.get("ACME").includes.add("US")
        graph.get("ACME-WEST").includes.add("CA-US")
        graph.get("ACME-WEST").excludes.add("SF-CA-US")
        rebuilt = DistributorGraph.from_records(graph.to_records())
        assert rebuilt.to_records() == graph.to_records()

"""Tests for GraphNode and the record models it wraps."""

from hyptrack.graph import GraphNode, LinkRef
from hyptrack.models import HypothesisLink, HypothesisPhase, HypothesisStatus
from tests.core.graph_test_helpers import make_hypothesis


class TestHypothesisStatus:
    """Tests for HypothesisStatus enum."""

    def test_all_statuses_exist(self):
        expected = {
            "UNVERIFIED": "unverified",
            "VERIFYING": "verifying",
            "CONFIRMED": "confirmed",
            "REFUTED": "refuted",
        }
        for name, value in expected.items():
            assert getattr(HypothesisStatus, name).value == value

    def test_concluded(self):
        assert HypothesisStatus.CONFIRMED.is_concluded
        assert HypothesisStatus.REFUTED.is_concluded
        assert not HypothesisStatus.VERIFYING.is_concluded
        assert not HypothesisStatus.UNVERIFIED.is_concluded

    def test_phases(self):
        assert HypothesisStatus.UNVERIFIED.phase == HypothesisPhase.MAP
        assert HypothesisStatus.VERIFYING.phase == HypothesisPhase.LOOP
        assert HypothesisStatus.REFUTED.phase == HypothesisPhase.LOOP
        assert HypothesisStatus.CONFIRMED.phase == HypothesisPhase.LEAP


class TestHypothesis:
    """Tests for Hypothesis record."""

    def test_priority_is_impact_times_uncertainty(self):
        hyp = make_hypothesis("H1", impact=4, uncertainty=5)

        assert hyp.priority == 20

    def test_str(self):
        assert str(make_hypothesis("H1", title="Users want dark mode")) == "H1: Users want dark mode"

    def test_phase_follows_status(self):
        assert make_hypothesis("H1", status="confirmed").phase == HypothesisPhase.LEAP

    def test_link_str(self):
        assert str(HypothesisLink(id="L", from_id="A", to_id="B")) == "A --> B"
        assert str(HypothesisLink(id="L", from_id="A", to_id="B", label="x")) == "A --[x]--> B"


class TestGraphNode:
    """Tests for GraphNode dataclass."""

    def test_create_minimal_node(self):
        node = GraphNode(hypothesis=make_hypothesis("H1", title="Auth"))

        assert node.id == "H1"
        assert node.title == "Auth"
        assert node.status == HypothesisStatus.UNVERIFIED
        assert node.child_count() == 0
        assert node.parent_count() == 0
        assert node.is_root
        assert node.is_leaf

    def test_add_child_and_parent(self):
        node = GraphNode(hypothesis=make_hypothesis("H1"))
        node.add_child(LinkRef(id="H2", link_id="L1"))
        node.add_parent(LinkRef(id="H0", link_id="L0", label="because"))

        assert node.has_child("H2")
        assert node.has_parent("H0")
        assert not node.is_root
        assert not node.is_leaf
        assert node.child_ids() == ["H2"]
        assert node.parent_ids() == ["H0"]

    def test_children_property_returns_copy(self):
        node = GraphNode(hypothesis=make_hypothesis("H1"))
        node.add_child(LinkRef(id="H2", link_id="L1"))

        node.children.clear()

        assert node.child_count() == 1

    def test_parallel_entries_are_not_merged(self):
        node = GraphNode(hypothesis=make_hypothesis("H1"))
        node.add_child(LinkRef(id="H2", link_id="L1"))
        node.add_child(LinkRef(id="H2", link_id="L2"))

        assert node.child_count() == 2
        assert [ref.link_id for ref in node.iter_children()] == ["L1", "L2"]

    def test_self_linked(self):
        node = GraphNode(hypothesis=make_hypothesis("H1"))
        assert not node.is_self_linked

        node.add_child(LinkRef(id="H1", link_id="L1"))

        assert node.is_self_linked

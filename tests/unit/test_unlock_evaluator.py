"""Unit tests for the unlock evaluator."""

import pytest

from knowledge_tree.engines.roadmap.graph import PrerequisiteGraph
from knowledge_tree.engines.roadmap.types import TopicStatus
from knowledge_tree.engines.roadmap.unlock_evaluator import UnlockEvaluator, UnlockPolicy
from tests.helpers import edge, make_topic


class TestPrerequisitePolicy:
    """Tests for the default (explicit prerequisites) policy."""

    def test_nothing_completed(self, diamond_topics, diamond_edges):
        """Only topics without prerequisites start unlocked."""
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, set())
        assert statuses == {
            "A": TopicStatus.UNLOCKED,
            "B": TopicStatus.LOCKED,
            "C": TopicStatus.LOCKED,
            "D": TopicStatus.LOCKED,
        }

    def test_completing_root_unlocks_dependents(self, diamond_topics, diamond_edges):
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"A"})
        assert statuses["A"] == TopicStatus.COMPLETED
        assert statuses["B"] == TopicStatus.UNLOCKED
        assert statuses["C"] == TopicStatus.UNLOCKED
        assert statuses["D"] == TopicStatus.LOCKED

    def test_all_prerequisites_required(self, diamond_topics, diamond_edges):
        """D needs both B and C."""
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"A", "B"})
        assert statuses["D"] == TopicStatus.LOCKED

        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"A", "B", "C"})
        assert statuses["D"] == TopicStatus.UNLOCKED

    @pytest.mark.parametrize("removed", ["B", "C"])
    def test_removing_a_prerequisite_relocks(self, diamond_topics, diamond_edges, removed):
        completed = {"A", "B", "C"} - {removed}
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, completed)
        assert statuses["D"] == TopicStatus.LOCKED

    def test_idempotent(self, diamond_topics, diamond_edges):
        first = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"A"})
        second = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"A"})
        assert first == second

    def test_completed_wins_over_locked(self, diamond_topics, diamond_edges):
        """A completed topic is reported completed even if its prerequisites are not."""
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"D"})
        assert statuses["D"] == TopicStatus.COMPLETED
        assert statuses["B"] == TopicStatus.LOCKED

    def test_every_topic_gets_exactly_one_status(self, diamond_topics, diamond_edges):
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"A", "C"})
        assert list(statuses) == ["A", "B", "C", "D"]

    def test_monotonic_under_completion(self, diamond_topics, diamond_edges):
        """Adding completions never locks a topic that was open."""
        order = ["A", "B", "C", "D"]
        completed = set()
        previous = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, completed)
        for topic_id in order:
            completed.add(topic_id)
            current = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, completed)
            for tid, status in previous.items():
                if status != TopicStatus.LOCKED:
                    assert current[tid] != TopicStatus.LOCKED
            previous = current

    def test_no_edges_everything_unlocked(self, diamond_topics):
        statuses = UnlockEvaluator.evaluate(diamond_topics, [], set())
        assert set(statuses.values()) == {TopicStatus.UNLOCKED}

    def test_empty_roadmap(self):
        assert UnlockEvaluator.evaluate([], [], set()) == {}

    def test_dangling_prerequisite_ignored(self):
        """An edge to a topic that does not exist does not lock the topic."""
        topics = [make_topic("A", 0), make_topic("B", 1)]
        edges = [edge("B", "A"), edge("A", "ghost")]
        statuses = UnlockEvaluator.evaluate(topics, edges, set())
        assert statuses["A"] == TopicStatus.UNLOCKED
        assert statuses["B"] == TopicStatus.LOCKED

    def test_cross_roadmap_edge_ignored(self):
        """Edges to topics of another roadmap are outside this graph."""
        topics = [make_topic("A", 0), make_topic("B", 1)]
        other = make_topic("X", 0, roadmap_id="rm-2")
        edges = [edge("B", other.id)]
        statuses = UnlockEvaluator.evaluate(topics, edges, set())
        assert statuses["B"] == TopicStatus.UNLOCKED

    def test_completed_ids_outside_roadmap_ignored(self, diamond_topics, diamond_edges):
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"elsewhere"})
        assert "elsewhere" not in statuses
        assert statuses["A"] == TopicStatus.UNLOCKED

    def test_cycle_members_stay_locked(self):
        """A two-node cycle can never open without an outside completion."""
        topics = [make_topic("X", 0), make_topic("Y", 1)]
        edges = [edge("X", "Y"), edge("Y", "X")]
        statuses = UnlockEvaluator.evaluate(topics, edges, set())
        assert statuses == {"X": TopicStatus.LOCKED, "Y": TopicStatus.LOCKED}

    def test_prebuilt_graph_reused(self, diamond_topics, diamond_edges):
        graph = PrerequisiteGraph.build(diamond_topics, diamond_edges)
        statuses = UnlockEvaluator.evaluate(diamond_topics, [], {"A"}, graph=graph)
        assert statuses["B"] == TopicStatus.UNLOCKED
        assert statuses["D"] == TopicStatus.LOCKED


class TestLinearPolicy:
    """Tests for the creation-order policy."""

    def test_only_first_open(self, diamond_topics, diamond_edges):
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, set(), UnlockPolicy.LINEAR)
        assert statuses == {
            "A": TopicStatus.UNLOCKED,
            "B": TopicStatus.LOCKED,
            "C": TopicStatus.LOCKED,
            "D": TopicStatus.LOCKED,
        }

    def test_edges_ignored(self, diamond_topics, diamond_edges):
        """C follows B in creation order, so completing A alone opens only B."""
        statuses = UnlockEvaluator.evaluate(diamond_topics, diamond_edges, {"A"}, UnlockPolicy.LINEAR)
        assert statuses["B"] == TopicStatus.UNLOCKED
        assert statuses["C"] == TopicStatus.LOCKED

    def test_uses_creation_time_not_input_order(self):
        topics = [make_topic("late", 5), make_topic("early", 0)]
        statuses = UnlockEvaluator.evaluate(topics, [], set(), UnlockPolicy.LINEAR)
        assert statuses["early"] == TopicStatus.UNLOCKED
        assert statuses["late"] == TopicStatus.LOCKED
        assert list(statuses) == ["late", "early"]

    def test_gap_keeps_later_topics_locked(self):
        topics = [make_topic("1", 0), make_topic("2", 1), make_topic("3", 2)]
        statuses = UnlockEvaluator.evaluate(topics, [], {"2"}, UnlockPolicy.LINEAR)
        assert statuses == {
            "1": TopicStatus.UNLOCKED,
            "2": TopicStatus.COMPLETED,
            "3": TopicStatus.LOCKED,
        }


class TestIsUnlocked:
    """Tests for the click gate helper."""

    @pytest.mark.parametrize(
        "topic_id,completed,expected",
        [
            ("A", set(), True),
            ("B", set(), False),
            ("B", {"A"}, True),
            ("A", {"A"}, True),
            ("missing", set(), False),
        ],
    )
    def test_is_unlocked(self, diamond_topics, diamond_edges, topic_id, completed, expected):
        assert UnlockEvaluator.is_unlocked(topic_id, diamond_topics, diamond_edges, completed) is expected

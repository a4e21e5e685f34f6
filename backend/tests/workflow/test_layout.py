# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for level assignment and graph layout
"""

from agentflow.workflow.layout import (
    NODE_GAP,
    LEVEL_GAP,
    root_candidates,
    compute_levels,
    derive_edges,
    derive_graph,
    execution_order,
)
from agentflow.workflow.models import WorkflowNode


def _node(node_id, next=None):
    return WorkflowNode(id=node_id, tool="text", function="transform", next=next)


class TestLevels:
    """Depth assignment along next pointers"""

    def test_three_node_chain(self, chain_nodes):
        assert compute_levels(chain_nodes) == {"1": 0, "2": 1, "3": 2}

    def test_roots_are_unpointed_ids(self, chain_nodes):
        assert root_candidates(chain_nodes) == ["1"]

    def test_disconnected_nodes_are_all_roots(self):
        nodes = [_node("a"), _node("b"), _node("c")]
        assert compute_levels(nodes) == {"a": 0, "b": 0, "c": 0}

    def test_merge_point_takes_deepest_level(self):
        """x is reached at depth 1 from b and at depth 2 from a"""
        nodes = [
            _node("b", next="x"),
            _node("a", next="a2"),
            _node("a2", next="x"),
            _node("x", next="y"),
            _node("y"),
        ]
        levels = compute_levels(nodes)
        assert levels["x"] == 2
        assert levels["y"] == 3

    def test_self_loop_terminates(self):
        """1 -> 2 -> 2: the back edge is ignored"""
        nodes = [_node("1", next="2"), _node("2", next="2")]
        assert compute_levels(nodes) == {"1": 0, "2": 1}

    def test_cycle_only_component_walked_from_list_order(self):
        nodes = [_node("a", next="b"), _node("b", next="c"), _node("c", next="a")]
        assert compute_levels(nodes) == {"a": 0, "b": 1, "c": 2}

    def test_cycle_entered_from_a_root(self):
        nodes = [_node("r", next="a"), _node("a", next="b"), _node("b", next="a")]
        assert compute_levels(nodes) == {"r": 0, "a": 1, "b": 2}

    def test_dangling_next_ends_the_walk(self):
        nodes = [_node("a", next="missing")]
        assert compute_levels(nodes) == {"a": 0}


class TestEdges:

    def test_one_edge_per_next(self, chain_nodes):
        edges = [(edge.source, edge.target) for edge in derive_edges(chain_nodes)]
        assert edges == [("1", "2"), ("2", "3")]

    def test_unresolved_next_has_no_edge(self):
        assert derive_edges([_node("a", next="missing")]) == []


class TestPositions:

    def test_chain_is_stacked_vertically(self, chain_nodes):
        graph = derive_graph(chain_nodes)
        positions = {node.id: (node.x, node.y) for node in graph.nodes}
        assert positions == {
            "1": (0, 0),
            "2": (0, LEVEL_GAP),
            "3": (0, 2 * LEVEL_GAP),
        }

    def test_rows_are_centered_against_widest(self):
        nodes = [_node("a", next="c"), _node("b", next="c"), _node("c")]
        graph = derive_graph(nodes)
        positions = {node.id: (node.x, node.y) for node in graph.nodes}
        assert positions["a"] == (0, 0)
        assert positions["b"] == (NODE_GAP, 0)
        assert positions["c"] == (NODE_GAP / 2, LEVEL_GAP)

    def test_positioned_nodes_carry_node_fields(self, chain_nodes):
        first = derive_graph(chain_nodes).nodes[0]
        assert (first.tool, first.function, first.level) == ("webscraper", "fetchPage", 0)
        assert first.params == {"url": "https://x"}

    def test_empty_list(self):
        graph = derive_graph([])
        assert graph.nodes == []
        assert graph.edges == []
        assert graph.levels == {}


def test_derivation_is_deterministic(chain_nodes):
    first = derive_graph(chain_nodes)
    second = derive_graph(chain_nodes)
    assert first == second


def test_derivation_does_not_touch_input(chain_nodes):
    before = [node.model_copy(deep=True) for node in chain_nodes]
    derive_graph(chain_nodes)
    assert chain_nodes == before


def test_graph_reports_cycle_warning():
    graph = derive_graph([_node("1", next="2"), _node("2", next="2")])
    assert graph.warnings == ["Cycle detected: 2 -> 2"]


def test_execution_order_follows_levels():
    nodes = [_node("c"), _node("b", next="c"), _node("a", next="b")]
    assert [node.id for node in execution_order(nodes)] == ["a", "b", "c"]

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for node list validation
"""

import pytest

from agentflow.workflow.models import WorkflowNode
from agentflow.workflow.validation import (
    validate_nodes,
    find_dangling_references,
    find_cycles,
    describe_problems,
)
from agentflow.workflow.exceptions import WorkflowValidationError


def _node(node_id, next=None, **params):
    return WorkflowNode(id=node_id, tool="text", function="transform", params=params, next=next)


def test_valid_chain_passes(chain_nodes):
    validate_nodes(chain_nodes)


def test_empty_list_allowed_by_default():
    validate_nodes([])


def test_empty_list_rejected_when_required():
    with pytest.raises(WorkflowValidationError, match="at least one node"):
        validate_nodes([], require_nodes=True)


def test_duplicate_node_ids():
    with pytest.raises(WorkflowValidationError, match="Duplicate node IDs") as exc_info:
        validate_nodes([_node("a"), _node("a")])
    assert exc_info.value.field == "id"


def test_dangling_next():
    with pytest.raises(WorkflowValidationError, match="non-existent node"):
        validate_nodes([_node("a", next="missing")])


def test_cycles_are_well_formed():
    """Cycles are legal; only layout has to cope with them"""
    validate_nodes([_node("1", next="2"), _node("2", next="1")])


def test_no_dangling_references_in_chain(chain_nodes):
    assert find_dangling_references(chain_nodes) == {}


def test_dangling_references_reported():
    nodes = [_node("a", text="$ghost.output")]
    assert find_dangling_references(nodes) == {"a": {"ghost"}}


def test_find_self_loop():
    nodes = [_node("1", next="2"), _node("2", next="2")]
    assert find_cycles(nodes) == [["2"]]


def test_find_two_node_cycle():
    nodes = [_node("a", next="b"), _node("b", next="a")]
    assert find_cycles(nodes) == [["a", "b"]]


def test_describe_problems_never_raises():
    nodes = [_node("a", next="b"), _node("b", next="a", text="$zzz.output")]
    problems = describe_problems(nodes)
    assert "Cycle detected: a -> b -> a" in problems
    assert any("zzz" in problem for problem in problems)


def test_describe_problems_clean_chain(chain_nodes):
    assert describe_problems(chain_nodes) == []

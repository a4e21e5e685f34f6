# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Graph Mutation Operations

Every operation takes a node list and returns a fresh one; the caller's list
and its nodes are never modified.
"""

from typing import Dict, List, Optional, Tuple

from .models import WorkflowNode
from .params import ParamScalar, references_node
from .exceptions import NodeNotFoundError, InvalidReferenceError


def _copy(nodes: List[WorkflowNode]) -> List[WorkflowNode]:
    return [node.model_copy(deep=True) for node in nodes]


def _require(nodes: List[WorkflowNode], node_id: str) -> None:
    if not any(node.id == node_id for node in nodes):
        raise NodeNotFoundError(node_id)


def generate_node_id(nodes: List[WorkflowNode], prefix: str = "node") -> str:
    """
    Next free id of the form ``<prefix>-<n>``.

    The counter starts past the current list length and only moves forward
    until it finds an id nobody uses.
    """
    existing = {node.id for node in nodes}
    counter = len(nodes) + 1
    while f"{prefix}-{counter}" in existing:
        counter += 1
    return f"{prefix}-{counter}"


def add_node(
    nodes: List[WorkflowNode],
    tool: str,
    function: str,
    params: Optional[Dict[str, ParamScalar]] = None,
    prefix: str = "node",
) -> Tuple[List[WorkflowNode], WorkflowNode]:
    """
    Append a disconnected node with a fresh id.

    Returns:
        (new node list, the added node)
    """
    new_node = WorkflowNode(
        id=generate_node_id(nodes, prefix),
        tool=tool,
        function=function,
        params=dict(params or {}),
    )
    return _copy(nodes) + [new_node], new_node.model_copy(deep=True)


def delete_node(nodes: List[WorkflowNode], node_id: str) -> List[WorkflowNode]:
    """
    Remove a node and scrub everything that pointed at it.

    Predecessors lose their next pointer (the chain is cut, not spliced) and
    any parameter mentioning ``$<node_id>.`` is blanked. Unknown ids are a
    no-op.
    """
    result = []
    for node in nodes:
        if node.id == node_id:
            continue
        updated = node.model_copy(deep=True)
        if updated.next == node_id:
            updated.next = None
        for key, value in updated.params.items():
            if references_node(value, node_id):
                updated.params[key] = ""
        result.append(updated)
    return result


def connect_nodes(nodes: List[WorkflowNode], source_id: str, target_id: str) -> List[WorkflowNode]:
    """
    Point source at target, replacing any previous successor.

    Self-connections and cycles are allowed.

    Raises:
        NodeNotFoundError: source is not in the list
        InvalidReferenceError: target is not in the list
    """
    _require(nodes, source_id)
    if not any(node.id == target_id for node in nodes):
        raise InvalidReferenceError(source_id, target_id)

    result = _copy(nodes)
    for node in result:
        if node.id == source_id:
            node.next = target_id
    return result


def disconnect_node(nodes: List[WorkflowNode], source_id: str) -> List[WorkflowNode]:
    """Drop the outgoing edge of source"""
    _require(nodes, source_id)
    result = _copy(nodes)
    for node in result:
        if node.id == source_id:
            node.next = None
    return result


def reconfigure_node(
    nodes: List[WorkflowNode],
    node_id: str,
    tool: str,
    function: str,
    params: Dict[str, ParamScalar],
) -> List[WorkflowNode]:
    """Replace tool, function and params wholesale; id and next are kept"""
    _require(nodes, node_id)
    result = _copy(nodes)
    for node in result:
        if node.id == node_id:
            node.tool = tool
            node.function = function
            node.params = dict(params)
    return result

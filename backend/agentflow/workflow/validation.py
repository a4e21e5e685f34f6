# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Validation

Well-formedness checks for a node chain. Derivation and mutation never
require a valid list; these checks gate untrusted input (generator output,
assistant proposals) and feed the editor's warnings.
"""

from typing import Dict, List, Set

from .models import WorkflowNode
from .params import collect_references
from .exceptions import WorkflowValidationError


def validate_nodes(nodes: List[WorkflowNode], require_nodes: bool = False) -> None:
    """
    Check id uniqueness and next resolution.

    Raises WorkflowValidationError if validation fails.
    """
    # 1. Empty workflow check
    if require_nodes and len(nodes) == 0:
        raise WorkflowValidationError("Workflow must have at least one node")

    # 2. Duplicate node IDs
    node_ids = [node.id for node in nodes]
    if len(node_ids) != len(set(node_ids)):
        duplicates = {nid for nid in node_ids if node_ids.count(nid) > 1}
        raise WorkflowValidationError(f"Duplicate node IDs found: {duplicates}", field="id")

    # 3. Dangling next pointers
    node_id_set = set(node_ids)
    for node in nodes:
        if node.next is not None and node.next not in node_id_set:
            raise WorkflowValidationError(
                f"Node '{node.id}' points to non-existent node: {node.next}",
                field="next"
            )


def find_dangling_references(nodes: List[WorkflowNode]) -> Dict[str, Set[str]]:
    """Map of node id -> referenced ids that are not in the list"""
    known = {node.id for node in nodes}
    dangling = {}
    for node in nodes:
        missing = collect_references(node.params, known) - known
        if missing:
            dangling[node.id] = missing
    return dangling


def find_cycles(nodes: List[WorkflowNode]) -> List[List[str]]:
    """
    Return each next-pointer cycle once, as the list of ids along it.

    Every node has at most one successor, so following next from any node
    either ends or enters exactly one cycle.
    """
    successor = {node.id: node.next for node in nodes}
    state: Dict[str, int] = {}  # 1 = on current path, 2 = finished
    cycles = []

    for start in successor:
        if start in state:
            continue
        path = []
        current = start
        while current in successor and current not in state:
            state[current] = 1
            path.append(current)
            current = successor[current]
        if current in state and state[current] == 1:
            cycles.append(path[path.index(current):])
        for node_id in path:
            state[node_id] = 2

    return cycles


def describe_problems(nodes: List[WorkflowNode]) -> List[str]:
    """Human-readable problems for display; never raises"""
    problems = []
    try:
        validate_nodes(nodes)
    except WorkflowValidationError as e:
        problems.append(e.message)
    for node_id, missing in sorted(find_dangling_references(nodes).items()):
        problems.append(f"Node '{node_id}' references unknown node(s): {sorted(missing)}")
    for cycle in find_cycles(nodes):
        problems.append(f"Cycle detected: {' -> '.join(cycle + [cycle[0]])}")
    return problems

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Graph Derivation

Turns a flat node list into levels, positions and edges for the editor.
Pure functions: the same list always yields the same graph.
"""

from typing import Dict, List, Optional

from .models import WorkflowNode, PositionedNode, GraphEdge, WorkflowGraph
from .validation import describe_problems

NODE_GAP = 250
LEVEL_GAP = 200


def _index(nodes: List[WorkflowNode]) -> Dict[str, WorkflowNode]:
    index: Dict[str, WorkflowNode] = {}
    for node in nodes:
        # First occurrence wins when ids collide
        index.setdefault(node.id, node)
    return index


def root_candidates(nodes: List[WorkflowNode]) -> List[str]:
    """Ids no node points to, in list order"""
    targets = {node.next for node in nodes if node.next is not None}
    roots = []
    for node_id in _index(nodes):
        if node_id not in targets:
            roots.append(node_id)
    return roots


def compute_levels(nodes: List[WorkflowNode]) -> Dict[str, int]:
    """
    Assign each node its depth along next pointers.

    A node reached from several roots keeps the deepest level seen. A walk
    stops when the successor is already on the walk's own path, so a back
    edge is ignored and the revisited node acts as a leaf. Nodes no root
    reaches (cycle-only components) are walked as level-0 roots in list
    order. Every node ends up with a level.
    """
    index = _index(nodes)
    levels: Dict[str, int] = {}

    def walk(start: str, depth: int) -> None:
        path = set()
        current: Optional[str] = start
        while current in index and current not in path:
            if current in levels and levels[current] >= depth:
                break
            levels[current] = depth
            path.add(current)
            current = index[current].next
            depth += 1

    for root in root_candidates(nodes):
        walk(root, 0)

    for node_id in index:
        if node_id not in levels:
            walk(node_id, 0)

    return levels


def derive_edges(nodes: List[WorkflowNode]) -> List[GraphEdge]:
    """One edge per resolvable next pointer; dangling pointers yield nothing"""
    index = _index(nodes)
    return [
        GraphEdge(source=node.id, target=node.next)
        for node in nodes
        if node.next is not None and node.next in index
    ]


def position_nodes(
    nodes: List[WorkflowNode],
    levels: Dict[str, int],
    node_gap: float = NODE_GAP,
    level_gap: float = LEVEL_GAP,
) -> List[PositionedNode]:
    """Lay levels out top to bottom, each row centered against the widest"""
    rows: Dict[int, List[WorkflowNode]] = {}
    for node in _index(nodes).values():
        rows.setdefault(levels[node.id], []).append(node)

    if not rows:
        return []

    max_width = max(len(row) for row in rows.values()) * node_gap
    positioned = []

    for level in sorted(rows):
        row = rows[level]
        center_offset = (max_width - len(row) * node_gap) / 2
        for position, node in enumerate(row):
            positioned.append(PositionedNode(
                id=node.id,
                tool=node.tool,
                function=node.function,
                params=dict(node.params),
                level=level,
                x=center_offset + position * node_gap,
                y=level * level_gap,
            ))

    return positioned


def execution_order(nodes: List[WorkflowNode]) -> List[WorkflowNode]:
    """Nodes sorted by level, list order within a level"""
    levels = compute_levels(nodes)
    index = _index(nodes)
    order = sorted(
        enumerate(index.values()),
        key=lambda item: (levels[item[1].id], item[0])
    )
    return [node for _, node in order]


def derive_graph(nodes: List[WorkflowNode]) -> WorkflowGraph:
    """Full display graph: positioned nodes, edges, levels and warnings"""
    levels = compute_levels(nodes)
    return WorkflowGraph(
        nodes=position_nodes(nodes, levels),
        edges=derive_edges(nodes),
        levels=levels,
        warnings=describe_problems(nodes),
    )

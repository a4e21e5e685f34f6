# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Models

Pydantic models for the node chain and its derived display graph.
"""

from typing import List, Dict, Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_serializer

from .params import ParamScalar


class WorkflowNode(BaseModel):
    """One step: a tool function call, optionally chained to a successor"""
    model_config = ConfigDict(extra="ignore")

    id: str
    tool: str
    function: str
    params: Dict[str, ParamScalar] = Field(default_factory=dict)
    next: Optional[str] = None  # Successor id, absent on terminal steps

    @model_serializer(mode="wrap")
    def _omit_missing_next(self, handler):
        data = handler(self)
        if data.get("next") is None:
            data.pop("next", None)
        return data


class WorkflowNodes(BaseModel):
    """The {nodes: [...]} envelope persisted in Workflow.nodes"""
    nodes: List[WorkflowNode] = Field(default_factory=list)


def parse_nodes(data: Union[Dict[str, Any], List[Any], None]) -> List[WorkflowNode]:
    """
    Parse either the envelope or a bare node list.

    Raises pydantic.ValidationError on malformed input.
    """
    if data is None:
        return []
    if isinstance(data, list):
        return WorkflowNodes(nodes=data).nodes
    return WorkflowNodes.model_validate(data).nodes


def to_envelope(nodes: List[WorkflowNode]) -> Dict[str, Any]:
    """Serialize a node list to the wire envelope"""
    return WorkflowNodes(nodes=list(nodes)).model_dump()


class PositionedNode(BaseModel):
    """Node placed for rendering"""
    id: str
    tool: str
    function: str
    params: Dict[str, ParamScalar] = Field(default_factory=dict)
    level: int
    x: float
    y: float


class GraphEdge(BaseModel):
    """Directed edge derived from a next pointer"""
    source: str
    target: str


class WorkflowGraph(BaseModel):
    """Display graph derived from a node list"""
    nodes: List[PositionedNode]
    edges: List[GraphEdge]
    levels: Dict[str, int]
    warnings: List[str] = Field(default_factory=list)


# Editor request models

class AddNodeRequest(BaseModel):
    tool: str
    function: str
    params: Dict[str, ParamScalar] = Field(default_factory=dict)


class ReconfigureNodeRequest(BaseModel):
    tool: str
    function: str
    params: Dict[str, ParamScalar] = Field(default_factory=dict)


class ConnectNodesRequest(BaseModel):
    source: str
    target: str


class LayoutRequest(BaseModel):
    nodes: List[WorkflowNode]


class GeneratedWorkflow(BaseModel):
    """Node list proposed by the generator (AI or template)"""
    name: str = "Generated Workflow"
    description: str = ""
    message: str = ""
    nodes: List[WorkflowNode] = Field(default_factory=list)
    source: str = "template"  # "ai" or "template"

    def to_response(self, prompt: str) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "prompt": prompt,
            "nodes": to_envelope(self.nodes),
            "status": "inactive",
            "message": self.message,
            "source": self.source,
        }

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Service - Stored workflows, their graph view and editor operations.

Editor operations load the node list, run a pure mutation from
agentflow.workflow.mutations, write the whole list back and return the new
layout alongside the record.
"""

from datetime import datetime, timezone
from typing import List, Optional

from agentflow.core.errors import ValidationError
from agentflow.core.logging import get_service_logger
from agentflow.models import (
    Workflow, WorkflowCreate, WorkflowUpdate,
    WorkflowEditResult, WorkflowModifyResult,
)
from agentflow.services.generator_service import WorkflowGenerator
from agentflow.store import MemoryStore
from agentflow.workflow import mutations
from agentflow.workflow.exceptions import WorkflowValidationError
from agentflow.workflow.layout import derive_graph
from agentflow.workflow.models import (
    AddNodeRequest,
    ConnectNodesRequest,
    GeneratedWorkflow,
    ReconfigureNodeRequest,
    WorkflowGraph,
    WorkflowNode,
)
from agentflow.workflow.validation import validate_nodes

logger = get_service_logger("workflow")


def _check_nodes(nodes: List[WorkflowNode]) -> None:
    try:
        validate_nodes(nodes)
    except WorkflowValidationError as e:
        raise ValidationError(e.message, field=e.field or "nodes")


class WorkflowService:
    """
    Manages workflows held in the memory store.

    Responsibilities:
    - Workflow CRUD with node list validation
    - Graph derivation for display
    - Node-level edits (add, delete, connect, disconnect, reconfigure)
    - Natural-language modification through the generator
    """

    def __init__(self, store: MemoryStore, generator: WorkflowGenerator):
        self.store = store
        self.generator = generator

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def list_workflows(self) -> List[Workflow]:
        return self.store.list_workflows()

    async def get_workflow(self, workflow_id: int) -> Workflow:
        return self.store.get_workflow(workflow_id)

    async def create_workflow(self, data: WorkflowCreate) -> Workflow:
        """
        Store a new workflow.

        Raises:
            ValidationError: Duplicate node ids or a dangling next pointer
        """
        _check_nodes(data.nodes.nodes)
        workflow = self.store.create_workflow(data)
        logger.info(f"Created workflow {workflow.id}: {workflow.name} ({len(workflow.nodes.nodes)} nodes)")
        return workflow

    async def update_workflow(self, workflow_id: int, updates: WorkflowUpdate) -> Workflow:
        if updates.nodes is not None:
            _check_nodes(updates.nodes.nodes)
        workflow = self.store.update_workflow(workflow_id, updates)
        logger.info(f"Updated workflow {workflow_id}: {sorted(updates.model_fields_set)}")
        return workflow

    async def delete_workflow(self, workflow_id: int) -> None:
        self.store.delete_workflow(workflow_id)
        logger.info(f"Deleted workflow {workflow_id}")

    # -------------------------------------------------------------------------
    # Graph view and editor operations
    # -------------------------------------------------------------------------

    async def get_graph(self, workflow_id: int) -> WorkflowGraph:
        workflow = self.store.get_workflow(workflow_id)
        return derive_graph(workflow.nodes.nodes)

    def _save(self, workflow_id: int, nodes: List[WorkflowNode], node: Optional[WorkflowNode] = None) -> WorkflowEditResult:
        workflow = self.store.replace_nodes(workflow_id, nodes)
        return WorkflowEditResult(workflow=workflow, graph=derive_graph(nodes), node=node)

    async def add_node(self, workflow_id: int, request: AddNodeRequest) -> WorkflowEditResult:
        """Append a disconnected node with a fresh id and re-derive the layout"""
        workflow = self.store.get_workflow(workflow_id)
        nodes, node = mutations.add_node(
            workflow.nodes.nodes, request.tool, request.function, request.params
        )
        logger.info(f"Added node {node.id} ({node.tool}.{node.function}) to workflow {workflow_id}")
        return self._save(workflow_id, nodes, node)

    async def delete_node(self, workflow_id: int, node_id: str) -> WorkflowEditResult:
        """Remove a node; unknown node ids leave the workflow unchanged"""
        workflow = self.store.get_workflow(workflow_id)
        nodes = mutations.delete_node(workflow.nodes.nodes, node_id)
        logger.info(f"Deleted node {node_id} from workflow {workflow_id}")
        return self._save(workflow_id, nodes)

    async def connect_nodes(self, workflow_id: int, request: ConnectNodesRequest) -> WorkflowEditResult:
        """
        Raises:
            NodeNotFoundError: Source node missing
            InvalidReferenceError: Target node missing
        """
        workflow = self.store.get_workflow(workflow_id)
        nodes = mutations.connect_nodes(workflow.nodes.nodes, request.source, request.target)
        logger.info(f"Connected {request.source} -> {request.target} in workflow {workflow_id}")
        return self._save(workflow_id, nodes)

    async def disconnect_node(self, workflow_id: int, source_id: str) -> WorkflowEditResult:
        workflow = self.store.get_workflow(workflow_id)
        nodes = mutations.disconnect_node(workflow.nodes.nodes, source_id)
        logger.info(f"Removed outgoing edge of {source_id} in workflow {workflow_id}")
        return self._save(workflow_id, nodes)

    async def reconfigure_node(
        self, workflow_id: int, node_id: str, request: ReconfigureNodeRequest
    ) -> WorkflowEditResult:
        workflow = self.store.get_workflow(workflow_id)
        nodes = mutations.reconfigure_node(
            workflow.nodes.nodes, node_id, request.tool, request.function, request.params
        )
        logger.info(f"Reconfigured node {node_id} in workflow {workflow_id} as {request.tool}.{request.function}")
        return self._save(workflow_id, nodes)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    async def generate(self, prompt: str, existing_nodes: Optional[List[WorkflowNode]] = None) -> GeneratedWorkflow:
        """Propose a workflow without storing anything"""
        return await self.generator.generate(prompt, existing_nodes, tools=self.store.list_tools())

    async def apply_generated(self, workflow_id: int, generated: GeneratedWorkflow) -> Workflow:
        """Replace a stored workflow's nodes with a generator proposal"""
        workflow = self.store.get_workflow(workflow_id)
        stamp = datetime.now(timezone.utc).isoformat()
        return self.store.update_workflow(workflow_id, WorkflowUpdate(
            nodes={"nodes": generated.nodes},
            description=f"{workflow.description} (Modified: {stamp})",
        ))

    async def modify_workflow(self, workflow_id: int, prompt: str) -> WorkflowModifyResult:
        """
        Rewrite a stored workflow from a natural-language instruction.

        Raises:
            NotFoundError: If workflow not found
        """
        workflow = self.store.get_workflow(workflow_id)
        generated = await self.generate(prompt, workflow.nodes.nodes)
        updated = await self.apply_generated(workflow_id, generated)
        logger.info(f"Modified workflow {workflow_id} via {generated.source}: {generated.message}")
        return WorkflowModifyResult(workflow=updated, message=generated.message, source=generated.source)

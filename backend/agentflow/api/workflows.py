# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow API Routes

Handles workflow management and editing:
- CRUD operations for stored workflows
- Graph view and node-level editor operations
- Natural-language generation and modification
"""

from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from agentflow.core.dependencies import get_workflow_service
from agentflow.core.errors import NotFoundError, ValidationError
from agentflow.models import (
    Workflow, WorkflowCreate, WorkflowUpdate,
    WorkflowEditResult, WorkflowModifyResult,
    PromptRequest, ModifyNodesRequest,
)
from agentflow.services.workflow_service import WorkflowService
from agentflow.workflow.exceptions import NodeNotFoundError, InvalidReferenceError
from agentflow.workflow.models import (
    AddNodeRequest, ConnectNodesRequest, ReconfigureNodeRequest, WorkflowGraph,
)

router = APIRouter(prefix="/workflows", tags=["workflows"])


# Generation Routes
@router.post("/generate")
async def generate_workflow(
    request: PromptRequest,
    service: WorkflowService = Depends(get_workflow_service)
) -> Dict[str, Any]:
    """Propose a new workflow from a prompt (nothing is stored)"""
    generated = await service.generate(request.prompt)
    return generated.to_response(request.prompt)


@router.post("/modify")
async def modify_nodes(
    request: ModifyNodesRequest,
    service: WorkflowService = Depends(get_workflow_service)
) -> Dict[str, Any]:
    """Propose a modified node list; stored when workflowId is given"""
    generated = await service.generate(request.prompt, request.nodes)
    if request.workflow_id is not None:
        try:
            await service.apply_generated(request.workflow_id, generated)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
    return generated.to_response(request.prompt)


# Workflow CRUD Routes
@router.get("", response_model=List[Workflow])
async def list_workflows(
    service: WorkflowService = Depends(get_workflow_service)
) -> List[Workflow]:
    """List all stored workflows"""
    return await service.list_workflows()


@router.get("/{workflow_id}", response_model=Workflow)
async def get_workflow(
    workflow_id: int,
    service: WorkflowService = Depends(get_workflow_service)
) -> Workflow:
    try:
        return await service.get_workflow(workflow_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=Workflow, status_code=status.HTTP_201_CREATED)
async def create_workflow(
    workflow: WorkflowCreate,
    service: WorkflowService = Depends(get_workflow_service)
) -> Workflow:
    try:
        return await service.create_workflow(workflow)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{workflow_id}", response_model=Workflow)
async def update_workflow(
    workflow_id: int,
    updates: WorkflowUpdate,
    service: WorkflowService = Depends(get_workflow_service)
) -> Workflow:
    try:
        return await service.update_workflow(workflow_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{workflow_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workflow(
    workflow_id: int,
    service: WorkflowService = Depends(get_workflow_service)
) -> Response:
    try:
        await service.delete_workflow(workflow_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{workflow_id}/modify", response_model=WorkflowModifyResult)
async def modify_workflow(
    workflow_id: int,
    request: PromptRequest,
    service: WorkflowService = Depends(get_workflow_service)
) -> WorkflowModifyResult:
    """Rewrite a stored workflow from a natural-language instruction"""
    try:
        return await service.modify_workflow(workflow_id, request.prompt)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# Editor Routes
@router.get("/{workflow_id}/graph", response_model=WorkflowGraph)
async def get_workflow_graph(
    workflow_id: int,
    service: WorkflowService = Depends(get_workflow_service)
) -> WorkflowGraph:
    """Levels, positions and edges for rendering"""
    try:
        return await service.get_graph(workflow_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{workflow_id}/nodes", response_model=WorkflowEditResult, status_code=status.HTTP_201_CREATED)
async def add_node(
    workflow_id: int,
    request: AddNodeRequest,
    service: WorkflowService = Depends(get_workflow_service)
) -> WorkflowEditResult:
    try:
        return await service.add_node(workflow_id, request)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{workflow_id}/nodes/{node_id}", response_model=WorkflowEditResult)
async def reconfigure_node(
    workflow_id: int,
    node_id: str,
    request: ReconfigureNodeRequest,
    service: WorkflowService = Depends(get_workflow_service)
) -> WorkflowEditResult:
    try:
        return await service.reconfigure_node(workflow_id, node_id, request)
    except (NotFoundError, NodeNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{workflow_id}/nodes/{node_id}", response_model=WorkflowEditResult)
async def delete_node(
    workflow_id: int,
    node_id: str,
    service: WorkflowService = Depends(get_workflow_service)
) -> WorkflowEditResult:
    try:
        return await service.delete_node(workflow_id, node_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{workflow_id}/connections", response_model=WorkflowEditResult)
async def connect_nodes(
    workflow_id: int,
    request: ConnectNodesRequest,
    service: WorkflowService = Depends(get_workflow_service)
) -> WorkflowEditResult:
    try:
        return await service.connect_nodes(workflow_id, request)
    except (NotFoundError, NodeNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidReferenceError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{workflow_id}/connections/{source_id}", response_model=WorkflowEditResult)
async def disconnect_node(
    workflow_id: int,
    source_id: str,
    service: WorkflowService = Depends(get_workflow_service)
) -> WorkflowEditResult:
    try:
        return await service.disconnect_node(workflow_id, source_id)
    except (NotFoundError, NodeNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Generation API Routes

Stateless helpers used by the builder UI:
- AI workflow generation (create or modify the editor's current nodes)
- Layout of an unsaved node list
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends

from agentflow.core.dependencies import get_workflow_service
from agentflow.models import GenerateWorkflowRequest
from agentflow.services.workflow_service import WorkflowService
from agentflow.workflow.layout import derive_graph
from agentflow.workflow.models import LayoutRequest, WorkflowGraph

router = APIRouter(tags=["generation"])


@router.post("/generate-workflow")
async def generate_workflow(
    request: GenerateWorkflowRequest,
    service: WorkflowService = Depends(get_workflow_service)
) -> Dict[str, Any]:
    """
    Generate a workflow from a prompt.

    With a non-empty currentWorkflow the prompt is treated as a change
    request against those nodes.
    """
    existing = request.current_workflow.nodes if request.current_workflow else []
    generated = await service.generate(request.prompt, existing)
    return generated.to_response(request.prompt)


@router.post("/graph/layout", response_model=WorkflowGraph)
async def layout_nodes(request: LayoutRequest) -> WorkflowGraph:
    """Derive levels, positions and edges for a node list"""
    return derive_graph(request.nodes)

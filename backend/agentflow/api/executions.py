# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution API Routes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from agentflow.core.dependencies import get_execution_service
from agentflow.core.errors import NotFoundError, ConflictError, ValidationError
from agentflow.models import Execution, ExecutionCreate, ExecutionUpdate, ExecutionComplete
from agentflow.services.execution_service import ExecutionService

router = APIRouter(prefix="/executions", tags=["executions"])


@router.get("", response_model=List[Execution])
async def list_executions(
    workflow_id: Optional[int] = Query(None, alias="workflowId"),
    agent_id: Optional[int] = Query(None, alias="agentId"),
    service: ExecutionService = Depends(get_execution_service)
) -> List[Execution]:
    """List executions, most recent first"""
    return await service.list_executions(workflow_id=workflow_id, agent_id=agent_id)


@router.get("/{execution_id}", response_model=Execution)
async def get_execution(
    execution_id: str,
    service: ExecutionService = Depends(get_execution_service)
) -> Execution:
    try:
        return await service.get_execution(execution_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=Execution, status_code=status.HTTP_201_CREATED)
async def create_execution(
    execution: ExecutionCreate,
    service: ExecutionService = Depends(get_execution_service)
) -> Execution:
    try:
        return await service.create_execution(execution)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/{execution_id}", response_model=Execution)
async def update_execution(
    execution_id: str,
    updates: ExecutionUpdate,
    service: ExecutionService = Depends(get_execution_service)
) -> Execution:
    try:
        return await service.update_execution(execution_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{execution_id}/complete", response_model=Execution)
async def complete_execution(
    execution_id: str,
    request: ExecutionComplete,
    service: ExecutionService = Depends(get_execution_service)
) -> Execution:
    """Mark an execution completed or failed and store its results"""
    try:
        return await service.complete_execution(execution_id, request.success, request.results)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

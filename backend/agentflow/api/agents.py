# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Agent API Routes

Handles agent management and runs:
- CRUD operations for agents
- Linking an agent to a workflow
- Starting a simulated run
"""

from typing import List
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status

from agentflow.core.dependencies import get_agent_service, get_execution_service
from agentflow.core.errors import NotFoundError, ValidationError
from agentflow.models import Agent, AgentCreate, AgentUpdate, AgentRunStarted
from agentflow.services.agent_service import AgentService
from agentflow.services.execution_service import ExecutionService

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("", response_model=List[Agent])
async def list_agents(
    service: AgentService = Depends(get_agent_service)
) -> List[Agent]:
    """List all agents"""
    return await service.list_agents()


@router.get("/{agent_id}", response_model=Agent)
async def get_agent(
    agent_id: int,
    service: AgentService = Depends(get_agent_service)
) -> Agent:
    """Get a specific agent"""
    try:
        return await service.get_agent(agent_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=Agent, status_code=status.HTTP_201_CREATED)
async def create_agent(
    agent: AgentCreate,
    service: AgentService = Depends(get_agent_service)
) -> Agent:
    """Create a new agent"""
    try:
        return await service.create_agent(agent)
    except NotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{agent_id}", response_model=Agent)
async def update_agent(
    agent_id: int,
    updates: AgentUpdate,
    service: AgentService = Depends(get_agent_service)
) -> Agent:
    """Update fields of an existing agent"""
    try:
        return await service.update_agent(agent_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{agent_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_agent(
    agent_id: int,
    service: AgentService = Depends(get_agent_service)
) -> Response:
    """Delete an agent"""
    try:
        await service.delete_agent(agent_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{agent_id}/link/{workflow_id}", response_model=Agent)
async def link_agent_with_workflow(
    agent_id: int,
    workflow_id: int,
    service: AgentService = Depends(get_agent_service)
) -> Agent:
    """Attach a workflow to an agent"""
    try:
        return await service.link_workflow(agent_id, workflow_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{agent_id}/execute", response_model=AgentRunStarted, status_code=status.HTTP_202_ACCEPTED)
async def execute_agent(
    agent_id: int,
    background_tasks: BackgroundTasks,
    service: ExecutionService = Depends(get_execution_service)
) -> AgentRunStarted:
    """Start a simulated run of the agent's workflow"""
    try:
        started = await service.start_agent_run(agent_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    background_tasks.add_task(service.simulate_execution, started.execution.execution_id)
    return started

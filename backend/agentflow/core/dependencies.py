# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Dependency injection for the AgentFlow backend.

Services are built per request around the objects create_app stores in
app.state (config, store, generator, assistant).
"""

from fastapi import Depends, Request

from agentflow.core.config import Config
from agentflow.store import MemoryStore


def get_current_config(request: Request) -> Config:
    """Configuration the application was created with"""
    return request.app.state.config


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store


def get_agent_service(store: MemoryStore = Depends(get_store)):
    """Get AgentService instance."""
    from agentflow.services.agent_service import AgentService
    return AgentService(store)


def get_workflow_service(request: Request, store: MemoryStore = Depends(get_store)):
    """Get WorkflowService instance."""
    from agentflow.services.workflow_service import WorkflowService
    return WorkflowService(store, generator=request.app.state.generator)


def get_execution_service(
    store: MemoryStore = Depends(get_store),
    config: Config = Depends(get_current_config),
):
    """Get ExecutionService instance."""
    from agentflow.services.execution_service import ExecutionService
    return ExecutionService(store, step_delay=config.simulation_step_delay)


def get_log_service(store: MemoryStore = Depends(get_store)):
    from agentflow.services.log_service import LogService
    return LogService(store)


def get_tool_service(store: MemoryStore = Depends(get_store)):
    from agentflow.services.tool_service import ToolService
    return ToolService(store)


def get_assistant_service(request: Request):
    """Get the AssistantService created at startup."""
    return request.app.state.assistant

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Record models for the in-memory store and API payloads.

Field names are camelCase on the wire and snake_case in Python.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel

from agentflow.workflow.models import WorkflowGraph, WorkflowNode, WorkflowNodes


AgentStatus = Literal["inactive", "active", "running", "error"]
WorkflowStatus = Literal["inactive", "active", "running", "error"]
LogLevel = Literal["info", "warn", "error", "debug"]
ExecutionStatus = Literal["pending", "running", "completed", "failed"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# AGENTS
# =============================================================================

class AgentCreate(APIModel):
    name: str
    description: str
    prompt: str
    tools: List[str] = Field(default_factory=list)  # Display names, e.g. "Gmail API"
    status: AgentStatus = "inactive"
    workflow_id: Optional[int] = None


class AgentUpdate(APIModel):
    name: Optional[str] = None
    description: Optional[str] = None
    prompt: Optional[str] = None
    tools: Optional[List[str]] = None
    status: Optional[AgentStatus] = None
    workflow_id: Optional[int] = None
    last_run: Optional[datetime] = None
    run_count: Optional[int] = None


class Agent(AgentCreate):
    id: int
    last_run: Optional[datetime] = None
    run_count: int = 0
    created_at: datetime = Field(default_factory=utcnow)


# =============================================================================
# WORKFLOWS
# =============================================================================

class WorkflowCreate(APIModel):
    name: str
    description: str = ""
    prompt: str = ""
    nodes: WorkflowNodes = Field(default_factory=WorkflowNodes)
    status: WorkflowStatus = "inactive"


class WorkflowUpdate(APIModel):
    name: Optional[str] = None
    description: Optional[str] = None
    prompt: Optional[str] = None
    nodes: Optional[WorkflowNodes] = None
    status: Optional[WorkflowStatus] = None
    last_run: Optional[datetime] = None
    run_count: Optional[int] = None


class Workflow(WorkflowCreate):
    id: int
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    last_run: Optional[datetime] = None
    run_count: int = 0


# =============================================================================
# LOGS
# =============================================================================

class LogCreate(APIModel):
    agent_id: int
    workflow_id: Optional[int] = None
    execution_id: Optional[str] = None
    level: LogLevel = "info"
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class Log(LogCreate):
    id: int
    timestamp: datetime = Field(default_factory=utcnow)


# =============================================================================
# EXECUTIONS
# =============================================================================

class ExecutionCreate(APIModel):
    execution_id: str
    workflow_id: int
    agent_id: int
    status: ExecutionStatus = "pending"
    results: Dict[str, Any] = Field(default_factory=dict)
    current_node: Optional[str] = None


class ExecutionUpdate(APIModel):
    status: Optional[ExecutionStatus] = None
    results: Optional[Dict[str, Any]] = None
    current_node: Optional[str] = None
    end_time: Optional[datetime] = None


class Execution(ExecutionCreate):
    id: int
    start_time: datetime = Field(default_factory=utcnow)
    end_time: Optional[datetime] = None


class ExecutionComplete(APIModel):
    success: StrictBool
    results: Dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# TOOL CATALOG
# =============================================================================

class ToolFunction(APIModel):
    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)
    returns: Optional[str] = None


class ToolCreate(APIModel):
    name: str
    type: str
    description: str = ""
    functions: List[ToolFunction] = Field(default_factory=list)
    auth: Dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True


class ToolUpdate(APIModel):
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    functions: Optional[List[ToolFunction]] = None
    auth: Optional[Dict[str, Any]] = None
    enabled: Optional[bool] = None


class Tool(ToolCreate):
    id: int


# =============================================================================
# GENERATION REQUESTS
# =============================================================================

class PromptRequest(APIModel):
    prompt: str = Field(min_length=1)


class CurrentWorkflow(APIModel):
    nodes: List[WorkflowNode] = Field(default_factory=list)


class GenerateWorkflowRequest(APIModel):
    prompt: str = Field(min_length=1)
    current_workflow: Optional[CurrentWorkflow] = None


class ModifyNodesRequest(APIModel):
    prompt: str = Field(min_length=1)
    nodes: List[WorkflowNode]
    workflow_id: Optional[int] = None


class WorkflowContext(APIModel):
    nodes: List[WorkflowNode] = Field(default_factory=list)
    workflow_id: Optional[int] = None
    agent_name: Optional[str] = None
    agent_description: Optional[str] = None


class AssistantChatRequest(APIModel):
    message: str = Field(min_length=1)
    workflow_context: WorkflowContext = Field(default_factory=WorkflowContext)


# =============================================================================
# EDITOR RESPONSES
# =============================================================================

class WorkflowEditResult(APIModel):
    """Stored workflow after an editor operation, with its fresh layout"""
    workflow: Workflow
    graph: WorkflowGraph
    node: Optional[WorkflowNode] = None


class WorkflowModifyResult(APIModel):
    workflow: Workflow
    message: str
    source: str


class AgentRunStarted(APIModel):
    message: str = "Execution started"
    execution: Execution
    agent: Agent

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Memory Store - In-process storage for agents, workflows, logs, executions
and the tool catalog.

Each collection is a plain dict with its own ever-increasing counter. Records
handed out are deep copies, so nothing outside the store shares its state.
One store is created per application instance.
"""

import copy
from typing import Dict, List, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from agentflow.core.errors import NotFoundError, ConflictError, ValidationError
from agentflow.models import (
    Agent, AgentCreate, AgentUpdate,
    Workflow, WorkflowCreate, WorkflowUpdate,
    Log, LogCreate,
    Execution, ExecutionCreate, ExecutionUpdate,
    Tool, ToolCreate, ToolUpdate,
    utcnow,
)
from agentflow.workflow.models import WorkflowNode, WorkflowNodes
from agentflow.seed import TOOL_CATALOG, SEED_AGENTS, SEED_LOGS

RecordT = TypeVar("RecordT", bound=BaseModel)


def _changes(update: BaseModel) -> dict:
    """Fields the caller actually sent, as model values (not dumped dicts)"""
    return copy.deepcopy({name: getattr(update, name) for name in update.model_fields_set})


def _apply(record: RecordT, changes: dict) -> RecordT:
    """
    Merge changes into a copy of record and re-validate the result.

    Raises:
        ValidationError: The merged record no longer fits its model,
            e.g. an explicit null for a required field
    """
    merged = {**record.model_dump(), **changes}
    try:
        return type(record).model_validate(merged)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(f"Invalid value for {field}: {error['msg']}", field=field)


class MemoryStore:
    """
    Keyed in-memory collections with CRUD operations.

    Lookups of unknown keys raise NotFoundError.
    """

    def __init__(self):
        self._agents: Dict[int, Agent] = {}
        self._workflows: Dict[int, Workflow] = {}
        self._logs: Dict[int, Log] = {}
        self._executions: Dict[str, Execution] = {}
        self._tools: Dict[int, Tool] = {}
        self._counters: Dict[str, int] = {
            "agent": 1, "workflow": 1, "log": 1, "execution": 1, "tool": 1,
        }

    def _next_id(self, kind: str) -> int:
        value = self._counters[kind]
        self._counters[kind] = value + 1
        return value

    # -------------------------------------------------------------------------
    # Agents
    # -------------------------------------------------------------------------

    def list_agents(self) -> List[Agent]:
        return [agent.model_copy(deep=True) for agent in self._agents.values()]

    def get_agent(self, agent_id: int) -> Agent:
        if agent_id not in self._agents:
            raise NotFoundError("Agent", agent_id)
        return self._agents[agent_id].model_copy(deep=True)

    def create_agent(self, data: AgentCreate) -> Agent:
        now = utcnow()
        agent = Agent(
            id=self._next_id("agent"),
            created_at=now,
            last_run=now if data.status == "active" else None,
            **_changes(data),
        )
        self._agents[agent.id] = agent
        return agent.model_copy(deep=True)

    def update_agent(self, agent_id: int, updates: AgentUpdate) -> Agent:
        current = self.get_agent(agent_id)
        changes = _changes(updates)
        if changes.get("status") == "active" and "last_run" not in changes:
            changes["last_run"] = utcnow()
        agent = _apply(current, changes)
        self._agents[agent_id] = agent
        return agent.model_copy(deep=True)

    def delete_agent(self, agent_id: int) -> None:
        if agent_id not in self._agents:
            raise NotFoundError("Agent", agent_id)
        del self._agents[agent_id]

    def link_agent_with_workflow(self, agent_id: int, workflow_id: int) -> Agent:
        self.get_workflow(workflow_id)
        return self.update_agent(agent_id, AgentUpdate(workflow_id=workflow_id))

    # -------------------------------------------------------------------------
    # Workflows
    # -------------------------------------------------------------------------

    def list_workflows(self) -> List[Workflow]:
        return [workflow.model_copy(deep=True) for workflow in self._workflows.values()]

    def get_workflow(self, workflow_id: int) -> Workflow:
        if workflow_id not in self._workflows:
            raise NotFoundError("Workflow", workflow_id)
        return self._workflows[workflow_id].model_copy(deep=True)

    def create_workflow(self, data: WorkflowCreate) -> Workflow:
        now = utcnow()
        workflow = Workflow(
            id=self._next_id("workflow"),
            created_at=now,
            updated_at=now,
            **_changes(data),
        )
        self._workflows[workflow.id] = workflow.model_copy(deep=True)
        return workflow

    def update_workflow(self, workflow_id: int, updates: WorkflowUpdate) -> Workflow:
        current = self.get_workflow(workflow_id)
        changes = _changes(updates)
        changes["updated_at"] = utcnow()
        workflow = _apply(current, changes)
        self._workflows[workflow_id] = workflow
        return workflow.model_copy(deep=True)

    def replace_nodes(self, workflow_id: int, nodes: List[WorkflowNode]) -> Workflow:
        return self.update_workflow(
            workflow_id, WorkflowUpdate(nodes=WorkflowNodes(nodes=nodes))
        )

    def delete_workflow(self, workflow_id: int) -> None:
        # Agents keep their workflowId; the link is a weak reference
        if workflow_id not in self._workflows:
            raise NotFoundError("Workflow", workflow_id)
        del self._workflows[workflow_id]

    # -------------------------------------------------------------------------
    # Logs
    # -------------------------------------------------------------------------

    def list_logs(
        self,
        agent_id: Optional[int] = None,
        workflow_id: Optional[int] = None,
        execution_id: Optional[str] = None,
    ) -> List[Log]:
        """Logs matching every given filter, newest first"""
        logs = [
            log for log in self._logs.values()
            if (agent_id is None or log.agent_id == agent_id)
            and (workflow_id is None or log.workflow_id == workflow_id)
            and (execution_id is None or log.execution_id == execution_id)
        ]
        logs.sort(key=lambda log: (log.timestamp, log.id), reverse=True)
        return [log.model_copy(deep=True) for log in logs]

    def create_log(self, data: LogCreate) -> Log:
        log = Log(id=self._next_id("log"), timestamp=utcnow(), **_changes(data))
        self._logs[log.id] = log.model_copy(deep=True)
        return log

    # -------------------------------------------------------------------------
    # Executions
    # -------------------------------------------------------------------------

    def list_executions(
        self,
        workflow_id: Optional[int] = None,
        agent_id: Optional[int] = None,
    ) -> List[Execution]:
        executions = [
            execution for execution in self._executions.values()
            if (workflow_id is None or execution.workflow_id == workflow_id)
            and (agent_id is None or execution.agent_id == agent_id)
        ]
        executions.sort(key=lambda execution: (execution.start_time, execution.id), reverse=True)
        return [execution.model_copy(deep=True) for execution in executions]

    def get_execution(self, execution_id: str) -> Execution:
        if execution_id not in self._executions:
            raise NotFoundError("Execution", execution_id)
        return self._executions[execution_id].model_copy(deep=True)

    def create_execution(self, data: ExecutionCreate) -> Execution:
        if data.execution_id in self._executions:
            raise ConflictError(
                f"Execution '{data.execution_id}' already exists", resource="Execution"
            )
        execution = Execution(
            id=self._next_id("execution"),
            start_time=utcnow(),
            **data.model_dump(),
        )
        self._executions[execution.execution_id] = execution.model_copy(deep=True)
        return execution

    def update_execution(self, execution_id: str, updates: ExecutionUpdate) -> Execution:
        current = self.get_execution(execution_id)
        execution = _apply(current, _changes(updates))
        self._executions[execution_id] = execution
        return execution.model_copy(deep=True)

    def complete_execution(self, execution_id: str, success: bool, results: Optional[dict] = None) -> Execution:
        return self.update_execution(execution_id, ExecutionUpdate(
            status="completed" if success else "failed",
            results=results or {},
            end_time=utcnow(),
        ))

    # -------------------------------------------------------------------------
    # Tools
    # -------------------------------------------------------------------------

    def list_tools(self) -> List[Tool]:
        return [tool.model_copy(deep=True) for tool in self._tools.values()]

    def get_tool(self, tool_id: int) -> Tool:
        if tool_id not in self._tools:
            raise NotFoundError("Tool", tool_id)
        return self._tools[tool_id].model_copy(deep=True)

    def get_tool_by_name(self, name: str) -> Tool:
        for tool in self._tools.values():
            if tool.name == name:
                return tool.model_copy(deep=True)
        raise NotFoundError("Tool", name)

    def _check_tool_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        for tool in self._tools.values():
            if tool.name == name and tool.id != exclude_id:
                raise ConflictError(f"Tool '{name}' already exists", resource="Tool")

    def create_tool(self, data: ToolCreate) -> Tool:
        self._check_tool_name(data.name)
        tool = Tool(id=self._next_id("tool"), **_changes(data))
        self._tools[tool.id] = tool.model_copy(deep=True)
        return tool

    def update_tool(self, tool_id: int, updates: ToolUpdate) -> Tool:
        current = self.get_tool(tool_id)
        changes = _changes(updates)
        if "name" in changes:
            self._check_tool_name(changes["name"], exclude_id=tool_id)
        tool = _apply(current, changes)
        self._tools[tool_id] = tool
        return tool.model_copy(deep=True)

    def delete_tool(self, tool_id: int) -> None:
        if tool_id not in self._tools:
            raise NotFoundError("Tool", tool_id)
        del self._tools[tool_id]

    # -------------------------------------------------------------------------
    # Seeding
    # -------------------------------------------------------------------------

    def seed(self) -> None:
        """Load the tool catalog and example agents with their logs"""
        for tool in TOOL_CATALOG:
            self.create_tool(ToolCreate.model_validate(tool))

        agents = [self.create_agent(AgentCreate.model_validate(agent)) for agent in SEED_AGENTS]
        for agent_index, message in SEED_LOGS:
            self.create_log(LogCreate(agent_id=agents[agent_index].id, level="info", message=message))

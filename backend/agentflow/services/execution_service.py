# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Execution Service - Execution records and the simulated agent run.

A run never calls an integration. It walks the agent's workflow in level
order, advancing the execution record and writing a log per node, then
updates the run statistics of the agent and the workflow.
"""

import asyncio
import time
import uuid
from typing import Any, Dict, List, Optional

from agentflow.core.errors import AgentFlowError, NotFoundError, ValidationError, sanitize_error_for_user
from agentflow.core.logging import get_service_logger
from agentflow.models import (
    Agent, AgentUpdate, AgentRunStarted,
    Execution, ExecutionCreate, ExecutionUpdate,
    LogCreate, WorkflowUpdate,
    utcnow,
)
from agentflow.store import MemoryStore
from agentflow.workflow.layout import execution_order

logger = get_service_logger("execution")


def new_execution_id(agent_id: int, workflow_id: int) -> str:
    millis = int(time.time() * 1000)
    return f"exec_{millis}_{agent_id}_{workflow_id}_{uuid.uuid4().hex[:6]}"


class ExecutionService:
    """
    Manages execution records.

    Responsibilities:
    - Execution CRUD and completion
    - Starting an agent run and simulating it step by step
    """

    def __init__(self, store: MemoryStore, step_delay: float = 1.0):
        """
        Args:
            store: Memory store
            step_delay: Seconds spent on each simulated node
        """
        self.store = store
        self.step_delay = step_delay

    async def list_executions(
        self,
        workflow_id: Optional[int] = None,
        agent_id: Optional[int] = None,
    ) -> List[Execution]:
        return self.store.list_executions(workflow_id=workflow_id, agent_id=agent_id)

    async def get_execution(self, execution_id: str) -> Execution:
        return self.store.get_execution(execution_id)

    async def create_execution(self, data: ExecutionCreate) -> Execution:
        """
        Raises:
            ConflictError: If the execution id is already taken
        """
        execution = self.store.create_execution(data)
        logger.info(f"Created execution {execution.execution_id} for workflow {execution.workflow_id}")
        return execution

    async def update_execution(self, execution_id: str, updates: ExecutionUpdate) -> Execution:
        return self.store.update_execution(execution_id, updates)

    async def complete_execution(
        self, execution_id: str, success: bool, results: Optional[Dict[str, Any]] = None
    ) -> Execution:
        execution = self.store.complete_execution(execution_id, success, results)
        logger.info(f"Execution {execution_id} finished with status {execution.status}")
        return execution

    # -------------------------------------------------------------------------
    # Agent runs
    # -------------------------------------------------------------------------

    async def start_agent_run(self, agent_id: int) -> AgentRunStarted:
        """
        Create a pending execution for the agent's workflow and mark the
        agent running. The caller schedules simulate_execution.

        Returns:
            AgentRunStarted with the pending execution and running agent

        Raises:
            NotFoundError: Agent or its linked workflow missing
            ValidationError: Agent has no linked workflow
        """
        agent = self.store.get_agent(agent_id)
        if agent.workflow_id is None:
            raise ValidationError("Agent has no associated workflow", field="workflowId")

        try:
            workflow = self.store.get_workflow(agent.workflow_id)
        except NotFoundError:
            raise NotFoundError("Workflow", agent.workflow_id, details={"reason": "Associated workflow not found"})

        execution = self.store.create_execution(ExecutionCreate(
            execution_id=new_execution_id(agent.id, workflow.id),
            workflow_id=workflow.id,
            agent_id=agent.id,
            status="pending",
        ))
        agent = self.store.update_agent(agent.id, AgentUpdate(status="running"))
        logger.info(f"Started execution {execution.execution_id} of workflow {workflow.id} for agent {agent.id}")
        return AgentRunStarted(execution=execution, agent=agent)

    def _log(self, execution: Execution, level: str, message: str, details: Optional[dict] = None) -> None:
        self.store.create_log(LogCreate(
            agent_id=execution.agent_id,
            workflow_id=execution.workflow_id,
            execution_id=execution.execution_id,
            level=level,
            message=message,
            details=details or {},
        ))

    async def simulate_execution(self, execution_id: str) -> Execution:
        """
        Walk the workflow of an execution node by node.

        Any failure mid-run (for example a record deleted while running)
        marks the execution failed and the agent as errored.
        """
        execution = self.store.get_execution(execution_id)
        try:
            workflow = self.store.get_workflow(execution.workflow_id)
            self._log(execution, "info", f"Starting execution of workflow '{workflow.name}'")

            steps = execution_order(workflow.nodes.nodes)
            for node in steps:
                self.store.update_execution(execution_id, ExecutionUpdate(status="running", current_node=node.id))
                self._log(
                    execution, "info",
                    f"Executing node {node.id}: {node.tool}.{node.function}",
                    details={"node": node.model_dump()},
                )
                if self.step_delay > 0:
                    await asyncio.sleep(self.step_delay)

            finished = self.store.complete_execution(execution_id, True, {
                "result": "Workflow completed successfully",
                "nodesExecuted": len(steps),
            })
            self._record_run(execution.agent_id, "active")
            self.store.update_workflow(workflow.id, WorkflowUpdate(
                last_run=utcnow(), run_count=workflow.run_count + 1,
            ))
            self._log(execution, "info", f"Workflow execution completed: {workflow.name}", {"status": "success"})
            logger.info(f"Execution {execution_id} completed ({len(steps)} nodes)", extra={"execution_id": execution_id})
            return finished

        except AgentFlowError as e:
            return self._fail(execution, sanitize_error_for_user(e, include_type=False))
        except Exception as e:
            logger.exception(f"Unexpected error in execution {execution_id}", extra={"execution_id": execution_id})
            return self._fail(execution, sanitize_error_for_user(e))

    def _fail(self, execution: Execution, reason: str) -> Execution:
        logger.error(f"Execution {execution.execution_id} failed: {reason}", extra={"execution_id": execution.execution_id})
        finished = self.store.complete_execution(execution.execution_id, False, {
            "error": "Execution failed",
            "reason": reason,
        })
        self._record_run(execution.agent_id, "error")
        self._log(execution, "error", f"Workflow execution failed: {reason}", {"error": reason})
        return finished

    def _record_run(self, agent_id: int, status: str) -> Optional[Agent]:
        try:
            agent = self.store.get_agent(agent_id)
        except NotFoundError:
            logger.warning(f"Agent {agent_id} disappeared during execution")
            return None
        return self.store.update_agent(agent_id, AgentUpdate(
            status=status, last_run=utcnow(), run_count=agent.run_count + 1,
        ))

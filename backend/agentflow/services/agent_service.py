# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Agent Service - Manages agent records and their workflow links.

Single responsibility: Agent CRUD on the memory store.
"""

from typing import List

from agentflow.core.logging import get_service_logger
from agentflow.models import Agent, AgentCreate, AgentUpdate
from agentflow.store import MemoryStore

logger = get_service_logger("agent")


class AgentService:
    """
    Manages agents held in the memory store.

    Responsibilities:
    - List, create, update and delete agents
    - Link an agent to the workflow it runs
    """

    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_agents(self) -> List[Agent]:
        return self.store.list_agents()

    async def get_agent(self, agent_id: int) -> Agent:
        """
        Get a specific agent.

        Raises:
            NotFoundError: If agent not found
        """
        return self.store.get_agent(agent_id)

    async def create_agent(self, data: AgentCreate) -> Agent:
        if data.workflow_id is not None:
            self.store.get_workflow(data.workflow_id)
        agent = self.store.create_agent(data)
        logger.info(f"Created agent {agent.id}: {agent.name}")
        return agent

    async def update_agent(self, agent_id: int, updates: AgentUpdate) -> Agent:
        """
        Apply a partial update.

        Fields left out of the request are untouched.

        Raises:
            NotFoundError: If agent not found
            ValidationError: If the merged agent is invalid (e.g. name set to null)
        """
        agent = self.store.update_agent(agent_id, updates)
        logger.info(f"Updated agent {agent_id}: {sorted(updates.model_fields_set)}")
        return agent

    async def delete_agent(self, agent_id: int) -> None:
        self.store.delete_agent(agent_id)
        logger.info(f"Deleted agent {agent_id}")

    async def link_workflow(self, agent_id: int, workflow_id: int) -> Agent:
        """
        Point an agent at a workflow.

        Raises:
            NotFoundError: If either the agent or the workflow is missing
        """
        self.store.get_agent(agent_id)
        agent = self.store.link_agent_with_workflow(agent_id, workflow_id)
        logger.info(f"Linked agent {agent_id} to workflow {workflow_id}")
        return agent

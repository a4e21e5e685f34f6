# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Log Service - Append-only activity log for agents and executions.
"""

from typing import List, Optional

from agentflow.models import Log, LogCreate
from agentflow.store import MemoryStore


class LogService:
    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_logs(
        self,
        agent_id: Optional[int] = None,
        workflow_id: Optional[int] = None,
        execution_id: Optional[str] = None,
    ) -> List[Log]:
        """Logs matching every given filter, newest first"""
        return self.store.list_logs(
            agent_id=agent_id, workflow_id=workflow_id, execution_id=execution_id
        )

    async def create_log(self, data: LogCreate) -> Log:
        """
        Append a log entry.

        Raises:
            NotFoundError: If the agent does not exist
        """
        self.store.get_agent(data.agent_id)
        return self.store.create_log(data)

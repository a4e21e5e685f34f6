# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Tool Service - The catalog of tools and functions nodes can call.
"""

from typing import List

from agentflow.core.logging import get_service_logger
from agentflow.models import Tool, ToolCreate, ToolUpdate
from agentflow.store import MemoryStore

logger = get_service_logger("tool")


class ToolService:
    """Catalog CRUD. Tool names are unique."""

    def __init__(self, store: MemoryStore):
        self.store = store

    async def list_tools(self) -> List[Tool]:
        return self.store.list_tools()

    async def get_tool(self, tool_id: int) -> Tool:
        return self.store.get_tool(tool_id)

    async def get_tool_by_name(self, name: str) -> Tool:
        return self.store.get_tool_by_name(name)

    async def create_tool(self, data: ToolCreate) -> Tool:
        """
        Add a catalog entry.

        Raises:
            ConflictError: If a tool with the same name exists
        """
        tool = self.store.create_tool(data)
        logger.info(f"Registered tool {tool.name} with {len(tool.functions)} functions")
        return tool

    async def update_tool(self, tool_id: int, updates: ToolUpdate) -> Tool:
        tool = self.store.update_tool(tool_id, updates)
        logger.info(f"Updated tool {tool_id}")
        return tool

    async def delete_tool(self, tool_id: int) -> None:
        self.store.delete_tool(tool_id)
        logger.info(f"Deleted tool {tool_id}")

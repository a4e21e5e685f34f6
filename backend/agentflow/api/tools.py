# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Tool Catalog API Routes
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status

from agentflow.core.dependencies import get_tool_service
from agentflow.core.errors import NotFoundError, ConflictError, ValidationError
from agentflow.models import Tool, ToolCreate, ToolUpdate
from agentflow.services.tool_service import ToolService

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", response_model=List[Tool])
async def list_tools(
    service: ToolService = Depends(get_tool_service)
) -> List[Tool]:
    """List the tool catalog"""
    return await service.list_tools()


@router.get("/name/{name}", response_model=Tool)
async def get_tool_by_name(
    name: str,
    service: ToolService = Depends(get_tool_service)
) -> Tool:
    """Look up a tool by its unique name"""
    try:
        return await service.get_tool_by_name(name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{tool_id}", response_model=Tool)
async def get_tool(
    tool_id: int,
    service: ToolService = Depends(get_tool_service)
) -> Tool:
    try:
        return await service.get_tool(tool_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=Tool, status_code=status.HTTP_201_CREATED)
async def create_tool(
    tool: ToolCreate,
    service: ToolService = Depends(get_tool_service)
) -> Tool:
    """Register a tool"""
    try:
        return await service.create_tool(tool)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/{tool_id}", response_model=Tool)
async def update_tool(
    tool_id: int,
    updates: ToolUpdate,
    service: ToolService = Depends(get_tool_service)
) -> Tool:
    try:
        return await service.update_tool(tool_id, updates)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{tool_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tool(
    tool_id: int,
    service: ToolService = Depends(get_tool_service)
) -> Response:
    try:
        await service.delete_tool(tool_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Log API Routes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from agentflow.core.dependencies import get_log_service
from agentflow.core.errors import NotFoundError
from agentflow.models import Log, LogCreate
from agentflow.services.log_service import LogService

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("", response_model=List[Log])
async def list_logs(
    agent_id: Optional[int] = Query(None, alias="agentId"),
    workflow_id: Optional[int] = Query(None, alias="workflowId"),
    execution_id: Optional[str] = Query(None, alias="executionId"),
    service: LogService = Depends(get_log_service)
) -> List[Log]:
    """List logs, newest first, optionally filtered"""
    return await service.list_logs(agent_id=agent_id, workflow_id=workflow_id, execution_id=execution_id)


@router.post("", response_model=Log, status_code=status.HTTP_201_CREATED)
async def create_log(
    log: LogCreate,
    service: LogService = Depends(get_log_service)
) -> Log:
    """Append a log entry"""
    try:
        return await service.create_log(log)
    except NotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))

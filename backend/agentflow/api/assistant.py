# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Assistant API Routes
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends

from agentflow.core.dependencies import get_assistant_service
from agentflow.models import AssistantChatRequest
from agentflow.services.assistant_service import AssistantService

router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.post("/chat")
async def chat(
    request: AssistantChatRequest,
    service: AssistantService = Depends(get_assistant_service)
) -> Dict[str, Any]:
    """Answer a question about the workflow, optionally proposing new nodes"""
    return await service.chat(request.message, request.workflow_context)

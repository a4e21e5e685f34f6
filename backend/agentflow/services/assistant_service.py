# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Assistant Service - Conversational help for the workflow editor.

The assistant sees the current node list and may propose a replacement.
A proposal is only passed on when it validates.
"""

import asyncio
import json
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from agentflow.core.errors import sanitize_error_for_user
from agentflow.core.logging import get_service_logger
from agentflow.llm_client import CompletionClient
from agentflow.models import WorkflowContext
from agentflow.services.generator_service import extract_json
from agentflow.workflow.exceptions import GenerationUnparsableError, WorkflowValidationError
from agentflow.workflow.models import parse_nodes, to_envelope
from agentflow.workflow.validation import validate_nodes

logger = get_service_logger("assistant")

NO_PROVIDER_MESSAGE = "No AI provider configured. Please set up OpenAI or Anthropic API keys."
FAILURE_MESSAGE = "Sorry, I encountered an error processing your request. Please try again."

ASSISTANT_SYSTEM_PROMPT = """You are a workflow assistant helping users build and modify automation workflows.

WORKFLOW CONTEXT:
Agent: {agent_name}
Description: {agent_description}
Current workflow nodes:
{nodes}

Answer the user's question about the workflow. If the user asks for a change,
also return the complete updated node list.

Each node has: id, tool, function, params, and optionally next (the id of the
following node). Parameters can reference another node's output with $nodeId.output.

RESPOND ONLY WITH A VALID JSON OBJECT:
{{
  "message": "Your answer to the user",
  "updatedWorkflow": {{"nodes": [...]}}
}}
Omit "updatedWorkflow" (or set it to null) when nothing should change."""


class AssistantService:
    """
    Chat about a workflow and optionally propose an updated node list.

    Responses always have the shape {"message": str, "updatedWorkflow": envelope | None}.
    """

    def __init__(self, client: Optional[CompletionClient], timeout: float = 30.0):
        self.client = client
        self.timeout = timeout

    async def chat(self, message: str, context: WorkflowContext) -> Dict[str, Any]:
        if self.client is None:
            return {"message": NO_PROVIDER_MESSAGE, "updatedWorkflow": None}

        system_prompt = ASSISTANT_SYSTEM_PROMPT.format(
            agent_name=context.agent_name or "Unnamed agent",
            agent_description=context.agent_description or "",
            nodes=json.dumps(to_envelope(context.nodes), indent=2),
        )

        try:
            text = await asyncio.wait_for(
                self.client.complete(system_prompt, message),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Assistant call timed out after {self.timeout}s")
            return {"message": FAILURE_MESSAGE, "updatedWorkflow": None}
        except Exception as e:
            logger.error(f"Assistant call failed: {sanitize_error_for_user(e)}")
            return {"message": FAILURE_MESSAGE, "updatedWorkflow": None}

        try:
            data = extract_json(text)
        except GenerationUnparsableError:
            # Plain prose answer
            return {"message": text.strip() or FAILURE_MESSAGE, "updatedWorkflow": None}

        reply = str(data.get("message") or "I couldn't process your request.")
        proposal = data.get("updatedWorkflow")
        if not proposal:
            return {"message": reply, "updatedWorkflow": None}

        try:
            nodes = parse_nodes(proposal)
            validate_nodes(nodes, require_nodes=True)
        except (PydanticValidationError, WorkflowValidationError) as e:
            logger.warning(f"Discarding invalid workflow proposed by assistant: {e}")
            return {
                "message": f"{reply}\n\n(The proposed workflow change was invalid and has not been applied.)",
                "updatedWorkflow": None,
            }

        logger.info(f"Assistant proposed a workflow with {len(nodes)} nodes")
        return {"message": reply, "updatedWorkflow": to_envelope(nodes)}

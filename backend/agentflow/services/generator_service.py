# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Workflow Generator Service

Turns a natural-language request (and optionally the current node list) into
a proposed node list. The LLM answer is untrusted: it must parse, match the
node model and pass validation before it is returned. Anything else falls
back to the deterministic template generator.
"""

import asyncio
import json
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from agentflow.core.errors import sanitize_error_for_user
from agentflow.core.logging import get_service_logger
from agentflow.llm_client import CompletionClient
from agentflow.models import Tool
from agentflow.workflow.exceptions import GenerationUnparsableError, WorkflowValidationError
from agentflow.workflow.models import GeneratedWorkflow, WorkflowNode, parse_nodes, to_envelope
from agentflow.workflow.templates import create_new_workflow, create_modified_workflow
from agentflow.workflow.validation import validate_nodes, find_dangling_references

logger = get_service_logger("generator")


GENERATOR_SYSTEM_PROMPT = """You are an expert workflow generator assistant.
Your task is to convert user instructions into a workflow configuration.
A workflow consists of connected nodes, where each node represents a tool/function call.
Nodes can pass their outputs to subsequent nodes as inputs.

Each node has:
- id: A unique identifier (string)
- tool: The tool to use (e.g., "webscraper", "chatgpt", "gmail")
- function: The function to call (e.g., "fetchPage", "summarizeText")
- params: Input parameters for the function (object with string, number, boolean or null values)
- next: ID of the next node (string, optional - if omitted, this is the final node)

Parameter values can reference outputs from previous nodes using the syntax: $nodeId.output

RESPOND ONLY WITH A VALID JSON OBJECT with this structure:
{{
  "name": "Descriptive workflow name",
  "description": "Detailed workflow description",
  "message": "One or two sentences telling the user what you built or changed",
  "nodes": {{
    "nodes": [
      {{"id": "1", "tool": "toolName", "function": "functionName", "params": {{"param1": "value1"}}, "next": "2"}}
    ]
  }}
}}

Available tools and functions:
{tool_catalog}"""


_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


def describe_tools(tools: List[Tool]) -> str:
    """One catalog line per enabled tool: ``- gmail: sendEmail(to, subject, body)``"""
    lines = []
    for tool in tools:
        if not tool.enabled:
            continue
        signatures = ", ".join(
            f"{function.name}({', '.join(function.parameters)})" for function in tool.functions
        )
        lines.append(f"- {tool.name}: {signatures}")
    return "\n".join(lines)


def extract_json(text: str) -> Dict[str, Any]:
    """
    Pull a JSON object out of a completion.

    Accepts bare JSON, a fenced ```json block, or an object surrounded by
    prose.

    Raises:
        GenerationUnparsableError: no JSON object could be decoded
    """
    candidates = [text.strip()]
    fenced = _FENCED_JSON_RE.search(text)
    if fenced:
        candidates.append(fenced.group(1))
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    raise GenerationUnparsableError("Response is not a JSON object", raw=text)


def parse_generation(text: str) -> GeneratedWorkflow:
    """
    Validate a completion as a whole-workflow proposal.

    Raises:
        GenerationUnparsableError: bad JSON, wrong shape, or a node list
            that breaks id uniqueness or next resolution
    """
    data = extract_json(text)

    if "nodes" not in data:
        raise GenerationUnparsableError("Response has no nodes", raw=text)

    try:
        nodes = parse_nodes(data["nodes"])
    except PydanticValidationError as e:
        raise GenerationUnparsableError(f"Nodes do not match the node model: {e}", raw=text)

    if not nodes:
        raise GenerationUnparsableError("Response contains an empty node list", raw=text)

    try:
        validate_nodes(nodes)
    except WorkflowValidationError as e:
        raise GenerationUnparsableError(f"Invalid node list: {e.message}", raw=text)

    dangling = find_dangling_references(nodes)
    if dangling:
        logger.warning(f"Generated workflow references unknown nodes: {dangling}")

    name = str(data.get("name") or "Generated Workflow")
    return GeneratedWorkflow(
        name=name,
        description=str(data.get("description") or ""),
        message=str(data.get("message") or f"Created {name} with {len(nodes)} nodes"),
        nodes=nodes,
        source="ai",
    )


class WorkflowGenerator:
    """
    AI workflow generator with template fallback.

    Responsibilities:
    - Build the prompt (tool catalog, current nodes in modify mode)
    - Call the completion provider under a timeout
    - Validate the answer
    - Fall back to templates when the provider is missing or fails
    """

    def __init__(self, client: Optional[CompletionClient], timeout: float = 30.0):
        self.client = client
        self.timeout = timeout

    @property
    def provider(self) -> str:
        return self.client.provider if self.client else "template"

    async def generate(
        self,
        prompt: str,
        existing_nodes: Optional[List[WorkflowNode]] = None,
        tools: Optional[List[Tool]] = None,
    ) -> GeneratedWorkflow:
        """
        Propose a node list for the prompt.

        Create mode when existing_nodes is empty, modify mode otherwise.
        Never raises for provider or parsing problems.
        """
        existing_nodes = existing_nodes or []

        if self.client is None:
            return self._fallback(prompt, existing_nodes)

        system_prompt = GENERATOR_SYSTEM_PROMPT.format(tool_catalog=describe_tools(tools or []))
        user_message = self._build_user_message(prompt, existing_nodes)

        try:
            text = await asyncio.wait_for(
                self.client.complete(system_prompt, user_message),
                timeout=self.timeout,
            )
            result = parse_generation(text)
        except asyncio.TimeoutError:
            logger.warning(f"{self.provider} generation timed out after {self.timeout}s, using templates")
            return self._fallback(prompt, existing_nodes)
        except GenerationUnparsableError as e:
            logger.warning(f"{self.provider} returned an unusable workflow ({e}), using templates")
            return self._fallback(prompt, existing_nodes)
        except Exception as e:
            # Provider SDK errors (auth, network, rate limits)
            logger.error(f"{self.provider} generation failed: {sanitize_error_for_user(e)}")
            return self._fallback(prompt, existing_nodes)

        logger.info(f"Generated workflow '{result.name}' with {len(result.nodes)} nodes via {self.provider}")
        return result

    def _build_user_message(self, prompt: str, existing_nodes: List[WorkflowNode]) -> str:
        if not existing_nodes:
            return prompt
        return (
            "Current workflow:\n"
            f"{json.dumps(to_envelope(existing_nodes), indent=2)}\n\n"
            f"Requested change: {prompt}\n\n"
            "Return the complete updated workflow. Keep the ids of nodes you do not change."
        )

    def _fallback(self, prompt: str, existing_nodes: List[WorkflowNode]) -> GeneratedWorkflow:
        if existing_nodes:
            result = create_modified_workflow(prompt, existing_nodes)
        else:
            result = create_new_workflow(prompt)
        logger.info(f"Template generator produced '{result.name}' with {len(result.nodes)} nodes")
        return result

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Template Workflow Generator

Deterministic, keyword-driven stand-in for the AI generator. Used when no
completion provider is configured or the provider's answer is unusable.
Best effort only: it matches substrings, not intent.
"""

import re
from typing import Iterable, List, Optional

from .models import WorkflowNode, GeneratedWorkflow
from .mutations import add_node, delete_node, connect_nodes
from .params import reference


def _word_pattern(word: str) -> "re.Pattern[str]":
    # Whole words plus simple inflections: "emails", "monitoring", "removing"
    forms = [re.escape(word)]
    if word.endswith("e"):
        forms.append(re.escape(word[:-1]) + "ing")
    return re.compile(r"\b(?:%s)(?:s|es|d|ed|ing)?\b" % "|".join(forms))


def _mentions(text: str, words: Iterable[str]) -> bool:
    return any(_word_pattern(word).search(text) for word in words)


def _node(node_id: str, tool: str, function: str, params: dict, next: Optional[str] = None) -> WorkflowNode:
    return WorkflowNode(id=node_id, tool=tool, function=function, params=params, next=next)


# =============================================================================
# CREATE MODE
# =============================================================================

def _email_notification() -> GeneratedWorkflow:
    return GeneratedWorkflow(
        name="Email Notification Workflow",
        description="Sends email notifications based on triggers",
        nodes=[
            _node("trigger-1", "trigger", "schedule", {"schedule": "0 9 * * *"}, next="ai-1"),
            _node("ai-1", "chatgpt", "generateText", {"prompt": "Generate today's summary"}, next="email-1"),
            _node("email-1", "gmail", "sendEmail", {
                "to": "user@example.com",
                "subject": "Daily Notification",
                "body": f"Here's your daily update: {reference('ai-1')}",
            }),
        ],
    )


def _website_monitor() -> GeneratedWorkflow:
    return GeneratedWorkflow(
        name="Website Monitoring Workflow",
        description="Monitors a website for changes and sends notifications",
        nodes=[
            _node("web-1", "webscraper", "fetchPage", {"url": "https://example.com"}, next="ai-1"),
            _node("ai-1", "chatgpt", "summarizeText", {"text": reference("web-1")}, next="email-1"),
            _node("email-1", "gmail", "sendEmail", {
                "to": "user@example.com",
                "subject": "Website Update",
                "body": f"Here's what changed: {reference('ai-1')}",
            }),
        ],
    )


def _ai_processing() -> GeneratedWorkflow:
    return GeneratedWorkflow(
        name="AI Processing Workflow",
        description="Uses AI to process data and generate insights",
        nodes=[
            _node("input-1", "input", "getText", {"prompt": "Enter text to analyze"}, next="ai-1"),
            _node("ai-1", "chatgpt", "analyzeText", {"text": reference("input-1")}, next="ai-2"),
            _node("ai-2", "chatgpt", "generateSummary", {"analysis": reference("ai-1")}, next="output-1"),
            _node("output-1", "output", "displayText", {"text": reference("ai-2")}),
        ],
    )


def _basic() -> GeneratedWorkflow:
    return GeneratedWorkflow(
        name="Basic Workflow",
        description="A simple workflow with input, processing, and output",
        nodes=[
            _node("input-1", "input", "getText", {"prompt": "Enter text"}, next="process-1"),
            _node("process-1", "text", "transform", {"operation": "uppercase"}, next="output-1"),
            _node("output-1", "output", "displayText", {"text": reference("process-1")}),
        ],
    )


# Checked in order; first match wins
CREATE_TEMPLATES = [
    (("email", "gmail", "notification"), _email_notification),
    (("web", "website", "monitor"), _website_monitor),
    (("ai", "chatgpt", "process"), _ai_processing),
]


def create_new_workflow(prompt: str) -> GeneratedWorkflow:
    """Pick a canned workflow by keyword"""
    lower_prompt = prompt.lower()
    build = _basic
    for keywords, template in CREATE_TEMPLATES:
        if _mentions(lower_prompt, keywords):
            build = template
            break

    workflow = build()
    workflow.message = f"Created a new {workflow.name} with {len(workflow.nodes)} nodes"
    return workflow


# =============================================================================
# MODIFY MODE
# =============================================================================

_NODE_A_RE = re.compile(r"node\s+([a-z0-9]+)", re.IGNORECASE)
_NODE_PAIR_RE = re.compile(r"node\s+([a-z0-9]+).*to.*node\s+([a-z0-9]+)", re.IGNORECASE)


def _quoted_value(prompt: str, key: str) -> Optional[str]:
    """Value of ``key: "..."`` (or ``key "..."``) in the prompt"""
    match = re.search(rf"\b{key}\s*:?\s*[\"']([^\"']+)[\"']", prompt, re.IGNORECASE)
    return match.group(1) if match else None


def _append_chained(nodes: List[WorkflowNode], tool: str, function: str, params: dict, prefix: str) -> List[WorkflowNode]:
    last = nodes[-1] if nodes else None
    updated, new_node = add_node(nodes, tool, function, params, prefix=prefix)
    if last is not None:
        updated = connect_nodes(updated, last.id, new_node.id)
    return updated


def _find_node(nodes: List[WorkflowNode], identifier: str) -> Optional[WorkflowNode]:
    for node in nodes:
        if (identifier in node.id.lower()
                or identifier in node.function.lower()
                or identifier in node.tool.lower()):
            return node
    return None


def _apply_add(lower_prompt: str, nodes: List[WorkflowNode]):
    if _mentions(lower_prompt, ("email", "gmail", "notification")):
        updated = _append_chained(nodes, "gmail", "sendEmail", {
            "to": "user@example.com",
            "subject": "Workflow Notification",
            "body": "This is an automated notification from your workflow",
        }, prefix="email")
        return updated, "Added a new email notification node to the workflow"

    if _mentions(lower_prompt, ("ai", "chatgpt", "summarize")):
        updated = _append_chained(nodes, "chatgpt", "generateText", {
            "prompt": "Generate a summary based on the input data",
        }, prefix="ai")
        return updated, "Added a new AI processing node to the workflow"

    return nodes, "Could not tell which kind of node to add"


def _apply_remove(lower_prompt: str, nodes: List[WorkflowNode]):
    if _mentions(lower_prompt, ("email", "gmail")):
        tool = "gmail"
    elif _mentions(lower_prompt, ("ai", "chatgpt")):
        tool = "chatgpt"
    elif "last" in lower_prompt:
        if not nodes:
            return nodes, "No nodes to remove"
        return delete_node(nodes, nodes[-1].id), "Removed the last node from the workflow"
    else:
        return nodes, "Could not tell which node to remove"

    targets = [node.id for node in nodes if node.tool == tool]
    if not targets:
        return nodes, f"No {tool} nodes found to remove"
    for node_id in targets:
        nodes = delete_node(nodes, node_id)
    return nodes, f"Removed {tool} nodes from the workflow"


def _apply_connect(lower_prompt: str, nodes: List[WorkflowNode]):
    first = _NODE_A_RE.search(lower_prompt)
    pair = _NODE_PAIR_RE.search(lower_prompt)
    if not (first and pair):
        return nodes, "Could not find specified nodes to connect"

    source_key, target_key = first.group(1), pair.group(2)
    if source_key == "a" and target_key == "b":
        # Generic "connect node A to node B"
        source, target = (nodes[0], nodes[1]) if len(nodes) >= 2 else (None, None)
    else:
        source, target = _find_node(nodes, source_key), _find_node(nodes, target_key)

    if source is None or target is None:
        return nodes, "Could not find specified nodes to connect"

    updated = connect_nodes(nodes, source.id, target.id)
    return updated, f"Connected {source.tool}:{source.function} to {target.tool}:{target.function}"


def _apply_update(prompt: str, lower_prompt: str, nodes: List[WorkflowNode]):
    if _mentions(lower_prompt, ("email", "gmail")):
        tool, keys = "gmail", ("subject", "body", "to")
    elif _mentions(lower_prompt, ("ai", "chatgpt")):
        tool, keys = "chatgpt", ("prompt",)
    else:
        return nodes, "Could not tell which nodes to update"

    if not any(node.tool == tool for node in nodes):
        return nodes, f"No {tool} nodes found to update"

    changes = {}
    for key in keys:
        value = _quoted_value(prompt, key)
        if value is not None:
            changes[key] = value

    updated = [node.model_copy(deep=True) for node in nodes]
    for node in updated:
        if node.tool == tool:
            node.params.update(changes)
    return updated, f"Updated parameters for {tool} nodes"


def create_modified_workflow(prompt: str, existing_nodes: List[WorkflowNode]) -> GeneratedWorkflow:
    """Apply one scripted edit chosen by keywords in the prompt"""
    lower_prompt = prompt.lower()
    nodes = [node.model_copy(deep=True) for node in existing_nodes]

    if _mentions(lower_prompt, ("add", "create", "insert")):
        nodes, message = _apply_add(lower_prompt, nodes)
    elif _mentions(lower_prompt, ("remove", "delete")):
        nodes, message = _apply_remove(lower_prompt, nodes)
    elif _mentions(lower_prompt, ("connect", "link")):
        nodes, message = _apply_connect(lower_prompt, nodes)
    elif _mentions(lower_prompt, ("update", "change", "modify")):
        nodes, message = _apply_update(prompt, lower_prompt, nodes)
    else:
        message = "No changes made: try asking to add, remove, connect or update a node"

    return GeneratedWorkflow(
        name="Modified Workflow",
        description="Workflow with modifications based on your request",
        message=message,
        nodes=nodes,
    )

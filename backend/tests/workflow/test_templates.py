# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for the template workflow generator
"""

import pytest

from agentflow.workflow.models import WorkflowNode
from agentflow.workflow.templates import create_new_workflow, create_modified_workflow
from agentflow.workflow.validation import validate_nodes


class TestCreateMode:

    @pytest.mark.parametrize("prompt,name,first_tool", [
        ("Send me an email every morning", "Email Notification Workflow", "trigger"),
        ("Monitor this website for changes", "Website Monitoring Workflow", "webscraper"),
        ("Use AI to analyze my notes", "AI Processing Workflow", "input"),
        ("Do something", "Basic Workflow", "input"),
        ("Maintain the detail page", "Basic Workflow", "input"),
        ("Send notifications when prices drop", "Email Notification Workflow", "trigger"),
        ("Keep monitoring the competitor site", "Website Monitoring Workflow", "webscraper"),
    ])
    def test_keyword_selects_template(self, prompt, name, first_tool):
        workflow = create_new_workflow(prompt)
        assert workflow.name == name
        assert workflow.nodes[0].tool == first_tool
        assert workflow.source == "template"
        validate_nodes(workflow.nodes, require_nodes=True)

    def test_message_counts_nodes(self):
        workflow = create_new_workflow("basic please")
        assert workflow.message == "Created a new Basic Workflow with 3 nodes"

    def test_response_shape(self):
        response = create_new_workflow("monitor a web page").to_response("monitor a web page")
        assert response["prompt"] == "monitor a web page"
        assert response["status"] == "inactive"
        assert response["nodes"]["nodes"][1]["params"] == {"text": "$web-1.output"}


class TestModifyMode:

    def test_add_email_chains_from_last(self, chain_nodes):
        workflow = create_modified_workflow("add an email step", chain_nodes)
        assert len(workflow.nodes) == 4
        new_node = workflow.nodes[-1]
        assert new_node.tool == "gmail"
        assert new_node.id == "email-4"
        assert workflow.nodes[2].next == "email-4"
        assert workflow.message == "Added a new email notification node to the workflow"

    def test_add_ai_node(self, chain_nodes):
        workflow = create_modified_workflow("add a chatgpt node", chain_nodes)
        assert workflow.nodes[-1].tool == "chatgpt"
        assert workflow.message == "Added a new AI processing node to the workflow"

    def test_remove_gmail_nodes(self, chain_nodes):
        workflow = create_modified_workflow("remove the email", chain_nodes)
        assert [node.id for node in workflow.nodes] == ["1", "2"]
        assert workflow.nodes[1].next is None
        assert workflow.message == "Removed gmail nodes from the workflow"

    def test_remove_last_node(self, chain_nodes):
        workflow = create_modified_workflow("delete the last step", chain_nodes)
        assert [node.id for node in workflow.nodes] == ["1", "2"]
        assert workflow.message == "Removed the last node from the workflow"

    def test_remove_ai_scrubs_references(self, chain_nodes):
        workflow = create_modified_workflow("remove chatgpt", chain_nodes)
        email = workflow.nodes[-1]
        assert email.params["body"] == ""
        assert workflow.nodes[0].next is None

    def test_connect_generic_a_to_b(self):
        nodes = [
            WorkflowNode(id="x", tool="input", function="getText"),
            WorkflowNode(id="y", tool="output", function="displayText"),
        ]
        workflow = create_modified_workflow("connect node a to node b", nodes)
        assert workflow.nodes[0].next == "y"
        assert workflow.message == "Connected input:getText to output:displayText"

    def test_connect_by_tool_name(self, chain_nodes):
        nodes = [node.model_copy(update={"next": None}) for node in chain_nodes]
        workflow = create_modified_workflow("link node webscraper to node gmail", nodes)
        assert workflow.nodes[0].next == "3"

    def test_update_email_subject(self, chain_nodes):
        workflow = create_modified_workflow('update the email subject: "Weekly report"', chain_nodes)
        assert workflow.nodes[2].params["subject"] == "Weekly report"
        assert workflow.nodes[2].params["to"] == "a@b.com"
        assert workflow.message == "Updated parameters for gmail nodes"

    def test_address_is_not_an_add_request(self, chain_nodes):
        workflow = create_modified_workflow('update the email address to "ops@b.com"', chain_nodes)
        assert len(workflow.nodes) == 3
        assert workflow.message == "Updated parameters for gmail nodes"

    def test_unrecognized_request(self, chain_nodes):
        workflow = create_modified_workflow("make it better", chain_nodes)
        assert workflow.nodes == chain_nodes
        assert workflow.message.startswith("No changes made")

    def test_input_untouched(self, chain_nodes):
        create_modified_workflow("remove the email", chain_nodes)
        assert len(chain_nodes) == 3
        assert chain_nodes[1].next == "3"

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for WorkflowService
"""

import pytest

from agentflow.core.errors import NotFoundError, ValidationError
from agentflow.models import WorkflowCreate, WorkflowUpdate
from agentflow.services.generator_service import WorkflowGenerator
from agentflow.services.workflow_service import WorkflowService
from agentflow.workflow.exceptions import NodeNotFoundError, InvalidReferenceError
from agentflow.workflow.models import (
    AddNodeRequest, ConnectNodesRequest, ReconfigureNodeRequest, WorkflowNode, WorkflowNodes,
)


@pytest.fixture
def workflow_service(store):
    return WorkflowService(store, generator=WorkflowGenerator(None))


@pytest.fixture
def stored_chain(store, chain_nodes):
    return store.create_workflow(WorkflowCreate(name="Chain", nodes=WorkflowNodes(nodes=chain_nodes)))


class TestCrud:

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_ids(self, workflow_service):
        nodes = [WorkflowNode(id="a", tool="t", function="f"), WorkflowNode(id="a", tool="t", function="g")]
        with pytest.raises(ValidationError, match="Duplicate"):
            await workflow_service.create_workflow(WorkflowCreate(name="bad", nodes=WorkflowNodes(nodes=nodes)))

    @pytest.mark.asyncio
    async def test_update_rejects_dangling_next(self, workflow_service, stored_chain):
        nodes = WorkflowNodes(nodes=[WorkflowNode(id="a", tool="t", function="f", next="zz")])
        with pytest.raises(ValidationError) as exc_info:
            await workflow_service.update_workflow(stored_chain.id, WorkflowUpdate(nodes=nodes))
        assert exc_info.value.field == "next"

    @pytest.mark.asyncio
    async def test_get_missing(self, workflow_service):
        with pytest.raises(NotFoundError):
            await workflow_service.get_workflow(7)


class TestEditor:

    @pytest.mark.asyncio
    async def test_graph(self, workflow_service, stored_chain):
        graph = await workflow_service.get_graph(stored_chain.id)
        assert graph.levels == {"1": 0, "2": 1, "3": 2}

    @pytest.mark.asyncio
    async def test_add_node_persists_and_lays_out(self, workflow_service, store, stored_chain):
        result = await workflow_service.add_node(
            stored_chain.id, AddNodeRequest(tool="slack", function="sendMessage")
        )
        assert result.node.id == "node-4"
        assert result.graph.levels["node-4"] == 0
        assert len(store.get_workflow(stored_chain.id).nodes.nodes) == 4

    @pytest.mark.asyncio
    async def test_delete_node(self, workflow_service, store, stored_chain):
        result = await workflow_service.delete_node(stored_chain.id, "2")
        nodes = {node.id: node for node in store.get_workflow(stored_chain.id).nodes.nodes}
        assert set(nodes) == {"1", "3"}
        assert nodes["1"].next is None
        assert nodes["3"].params["body"] == ""
        assert result.graph.edges == []

    @pytest.mark.asyncio
    async def test_connect_errors(self, workflow_service, stored_chain):
        with pytest.raises(NodeNotFoundError):
            await workflow_service.connect_nodes(stored_chain.id, ConnectNodesRequest(source="x", target="1"))
        with pytest.raises(InvalidReferenceError):
            await workflow_service.connect_nodes(stored_chain.id, ConnectNodesRequest(source="1", target="x"))

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self, workflow_service, stored_chain):
        result = await workflow_service.connect_nodes(stored_chain.id, ConnectNodesRequest(source="1", target="3"))
        assert ("1", "3") in [(edge.source, edge.target) for edge in result.graph.edges]
        result = await workflow_service.disconnect_node(stored_chain.id, "1")
        assert [(edge.source, edge.target) for edge in result.graph.edges] == [("2", "3")]

    @pytest.mark.asyncio
    async def test_reconfigure(self, workflow_service, stored_chain):
        result = await workflow_service.reconfigure_node(
            stored_chain.id, "2", ReconfigureNodeRequest(tool="anthropic", function="summarizeText", params={"text": "$1.output"})
        )
        node = result.workflow.nodes.nodes[1]
        assert (node.tool, node.next) == ("anthropic", "3")


class TestModify:

    @pytest.mark.asyncio
    async def test_modify_applies_template_edit(self, workflow_service, store, stored_chain):
        result = await workflow_service.modify_workflow(stored_chain.id, "remove the email")
        assert result.source == "template"
        assert result.message == "Removed gmail nodes from the workflow"
        stored = store.get_workflow(stored_chain.id)
        assert [node.id for node in stored.nodes.nodes] == ["1", "2"]
        assert "(Modified:" in stored.description

    @pytest.mark.asyncio
    async def test_modify_missing_workflow(self, workflow_service):
        with pytest.raises(NotFoundError):
            await workflow_service.modify_workflow(99, "add an email")

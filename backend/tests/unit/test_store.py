# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Unit tests for MemoryStore
"""

import pytest

from agentflow.core.errors import NotFoundError, ConflictError, ValidationError
from agentflow.models import (
    AgentCreate, AgentUpdate,
    WorkflowCreate, WorkflowUpdate,
    LogCreate,
    ExecutionCreate,
    ToolCreate, ToolUpdate,
)
from agentflow.workflow.models import WorkflowNodes


@pytest.fixture
def sample_agent():
    return AgentCreate(name="Test Agent", description="A test agent", prompt="Do things")


class TestAgents:

    def test_ids_increment(self, store, sample_agent):
        first = store.create_agent(sample_agent)
        second = store.create_agent(sample_agent)
        assert (first.id, second.id) == (1, 2)

    def test_active_agent_gets_last_run(self, store):
        agent = store.create_agent(AgentCreate(name="a", description="d", prompt="p", status="active"))
        assert agent.last_run is not None

    def test_inactive_agent_has_no_last_run(self, store, sample_agent):
        assert store.create_agent(sample_agent).last_run is None

    def test_update_is_partial(self, store, sample_agent):
        agent = store.create_agent(sample_agent)
        updated = store.update_agent(agent.id, AgentUpdate(description="changed"))
        assert updated.description == "changed"
        assert updated.name == "Test Agent"

    def test_activation_stamps_last_run(self, store, sample_agent):
        agent = store.create_agent(sample_agent)
        assert store.update_agent(agent.id, AgentUpdate(status="active")).last_run is not None

    def test_unknown_agent(self, store):
        with pytest.raises(NotFoundError):
            store.get_agent(99)
        with pytest.raises(NotFoundError):
            store.update_agent(99, AgentUpdate(name="x"))
        with pytest.raises(NotFoundError):
            store.delete_agent(99)

    def test_delete(self, store, sample_agent):
        agent = store.create_agent(sample_agent)
        store.delete_agent(agent.id)
        assert store.list_agents() == []

    def test_link_requires_workflow(self, store, sample_agent):
        agent = store.create_agent(sample_agent)
        with pytest.raises(NotFoundError):
            store.link_agent_with_workflow(agent.id, 5)
        workflow = store.create_workflow(WorkflowCreate(name="wf"))
        assert store.link_agent_with_workflow(agent.id, workflow.id).workflow_id == workflow.id

    def test_returned_records_are_copies(self, store, sample_agent):
        agent = store.create_agent(sample_agent)
        agent.tools.append("mutated")
        assert store.get_agent(agent.id).tools == []


class TestWorkflows:

    def test_create_and_get(self, store, chain_nodes):
        workflow = store.create_workflow(WorkflowCreate(name="wf", nodes=WorkflowNodes(nodes=chain_nodes)))
        assert store.get_workflow(workflow.id).nodes.nodes == chain_nodes

    def test_update_sets_updated_at(self, store):
        workflow = store.create_workflow(WorkflowCreate(name="wf"))
        updated = store.update_workflow(workflow.id, WorkflowUpdate(name="renamed"))
        assert updated.name == "renamed"
        assert updated.updated_at >= workflow.updated_at

    def test_replace_nodes(self, store, chain_nodes):
        workflow = store.create_workflow(WorkflowCreate(name="wf"))
        updated = store.replace_nodes(workflow.id, chain_nodes[:1])
        assert [node.id for node in updated.nodes.nodes] == ["1"]

    def test_stored_nodes_isolated_from_caller(self, store, chain_nodes):
        workflow = store.create_workflow(WorkflowCreate(name="wf", nodes=WorkflowNodes(nodes=chain_nodes)))
        chain_nodes[0].next = None
        workflow.nodes.nodes[0].params["url"] = "changed"
        stored = store.get_workflow(workflow.id).nodes.nodes[0]
        assert stored.next == "2"
        assert stored.params["url"] == "https://x"

    def test_delete_keeps_agent_link(self, store, sample_agent):
        workflow = store.create_workflow(WorkflowCreate(name="wf"))
        agent = store.create_agent(sample_agent.model_copy(update={"workflow_id": workflow.id}))
        store.delete_workflow(workflow.id)
        assert store.get_agent(agent.id).workflow_id == workflow.id

    def test_null_for_required_field_is_rejected(self, store, chain_nodes):
        workflow = store.create_workflow(WorkflowCreate(name="wf", nodes=WorkflowNodes(nodes=chain_nodes)))
        for updates in (WorkflowUpdate(nodes=None), WorkflowUpdate(run_count=None)):
            with pytest.raises(ValidationError):
                store.update_workflow(workflow.id, updates)
        stored = store.get_workflow(workflow.id)
        assert stored.nodes.nodes == chain_nodes
        assert stored.run_count == 0

    def test_null_for_optional_field_is_kept(self, store):
        workflow = store.create_workflow(WorkflowCreate(name="wf"))
        assert store.update_workflow(workflow.id, WorkflowUpdate(last_run=None)).last_run is None


class TestLogs:

    def test_filter_and_order(self, store):
        store.create_log(LogCreate(agent_id=1, message="first"))
        store.create_log(LogCreate(agent_id=2, message="other"))
        store.create_log(LogCreate(agent_id=1, message="second", execution_id="e1"))

        assert [log.message for log in store.list_logs(agent_id=1)] == ["second", "first"]
        assert [log.message for log in store.list_logs(execution_id="e1")] == ["second"]
        assert len(store.list_logs()) == 3


class TestExecutions:

    def test_duplicate_execution_id(self, store):
        data = ExecutionCreate(execution_id="exec-1", workflow_id=1, agent_id=1)
        store.create_execution(data)
        with pytest.raises(ConflictError):
            store.create_execution(data)

    def test_complete(self, store):
        store.create_execution(ExecutionCreate(execution_id="exec-1", workflow_id=1, agent_id=1))
        done = store.complete_execution("exec-1", False, {"error": "boom"})
        assert done.status == "failed"
        assert done.results == {"error": "boom"}
        assert done.end_time is not None

    def test_filter_by_workflow(self, store):
        store.create_execution(ExecutionCreate(execution_id="a", workflow_id=1, agent_id=1))
        store.create_execution(ExecutionCreate(execution_id="b", workflow_id=2, agent_id=1))
        assert [e.execution_id for e in store.list_executions(workflow_id=2)] == ["b"]

    def test_unknown_execution(self, store):
        with pytest.raises(NotFoundError):
            store.get_execution("missing")


class TestTools:

    def test_unique_names(self, store):
        store.create_tool(ToolCreate(name="slack", type="messaging"))
        with pytest.raises(ConflictError):
            store.create_tool(ToolCreate(name="slack", type="messaging"))

    def test_rename_into_taken_name(self, store):
        store.create_tool(ToolCreate(name="slack", type="messaging"))
        other = store.create_tool(ToolCreate(name="twitter", type="social"))
        with pytest.raises(ConflictError):
            store.update_tool(other.id, ToolUpdate(name="slack"))

    def test_get_by_name(self, seeded_store):
        gmail = seeded_store.get_tool_by_name("gmail")
        assert [fn.name for fn in gmail.functions] == ["sendEmail", "readEmails", "getAttachments"]
        with pytest.raises(NotFoundError):
            seeded_store.get_tool_by_name("fax")


def test_seed(seeded_store):
    agents = seeded_store.list_agents()
    assert [agent.name for agent in agents] == ["Price Monitor", "Email Summarizer"]
    assert len(seeded_store.list_logs(agent_id=agents[0].id)) == 4
    assert len(seeded_store.list_tools()) == 14

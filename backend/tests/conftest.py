# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Shared fixtures for the backend test suite.
"""

import pytest
from fastapi.testclient import TestClient

from agentflow.core.config import Config
from agentflow.main import create_app
from agentflow.store import MemoryStore
from agentflow.workflow.models import WorkflowNode


@pytest.fixture
def chain_nodes():
    """Scrape -> summarize -> email, each step referencing the previous output"""
    return [
        WorkflowNode(id="1", tool="webscraper", function="fetchPage",
                     params={"url": "https://x"}, next="2"),
        WorkflowNode(id="2", tool="chatgpt", function="summarizeText",
                     params={"text": "$1.output"}, next="3"),
        WorkflowNode(id="3", tool="gmail", function="sendEmail",
                     params={"to": "a@b.com", "subject": "s", "body": "$2.output"}),
    ]


@pytest.fixture
def test_config():
    """No LLM provider, no simulated delay"""
    return Config(llm_provider="none", simulation_step_delay=0, seed_data=True, log_format="text")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def seeded_store():
    store = MemoryStore()
    store.seed()
    return store


@pytest.fixture
def client(test_config):
    """TestClient over a freshly seeded app using the template generator"""
    app = create_app(config=test_config, completion_client=None)
    return TestClient(app)

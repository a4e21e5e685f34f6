# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Smoke tests for the AgentFlow backend
Tests basic functionality without requiring live AI API keys
"""

import json
import logging

import pytest
from fastapi.testclient import TestClient

from agentflow.core.config import Config, load_config
from agentflow.core.logging import JSONFormatter, get_logger
from agentflow.main import create_app
from agentflow.store import MemoryStore


class TestHealthAndBasics:
    """Test basic health endpoints and app wiring"""

    def test_health_endpoint(self, client):
        """Test /health endpoint returns 200"""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["llm_provider"] == "template"

    def test_unknown_route(self, client):
        assert client.get("/api/nothing-here").status_code == 404

    def test_unseeded_store(self):
        config = Config(llm_provider="none", seed_data=False)
        client = TestClient(create_app(config=config, completion_client=None))
        assert client.get("/api/agents").json() == []
        assert client.get("/api/tools").json() == []

    def test_injected_store_is_used(self, test_config):
        store = MemoryStore()
        client = TestClient(create_app(config=test_config, store=store, completion_client=None))
        client.post("/api/agents", json={"name": "n", "description": "d", "prompt": "p"})
        assert [agent.name for agent in store.list_agents()] == ["n"]


class TestConfig:
    """Configuration loading"""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "absent.yaml"))
        assert config == Config()

    def test_yaml_values(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("LLM_PROVIDER", raising=False)
        path = tmp_path / "agentflow.yaml"
        path.write_text(
            "server:\n  port: 8080\n"
            "llm:\n  provider: none\n  timeout: 5\n"
            "executions:\n  step_delay: 0\n"
            "store:\n  seed: false\n"
        )
        config = load_config(str(path))
        assert config.service_port == 8080
        assert config.llm_provider == "none"
        assert config.llm_timeout == 5
        assert config.simulation_step_delay == 0
        assert config.seed_data is False

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "anthropic")
        path = tmp_path / "agentflow.yaml"
        path.write_text("llm:\n  provider: openai\n")
        assert load_config(str(path)).llm_provider == "anthropic"


class TestProviderSelection:

    @pytest.fixture(autouse=True)
    def no_keys(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    def test_no_keys_means_templates(self):
        from agentflow.llm_client import build_completion_client
        assert build_completion_client(Config()) is None

    def test_disabled_provider(self, monkeypatch):
        from agentflow.llm_client import build_completion_client
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert build_completion_client(Config(llm_provider="none")) is None

    def test_auto_prefers_openai(self, monkeypatch):
        from agentflow.llm_client import build_completion_client
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        assert build_completion_client(Config()).provider == "openai"

    def test_anthropic_when_only_key(self, monkeypatch):
        from agentflow.llm_client import build_completion_client
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        assert build_completion_client(Config()).provider == "anthropic"


class TestLogging:

    def test_json_lines_carry_extras(self):
        record = logging.LogRecord(
            "agentflow.service.execution", logging.INFO, __file__, 1,
            "Execution %s completed", ("exec_1",), None,
        )
        record.execution_id = "exec_1"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "Execution exec_1 completed"
        assert entry["level"] == "INFO"
        assert entry["execution_id"] == "exec_1"
        assert "lineno" not in entry

    def test_repeated_get_logger_keeps_one_handler(self):
        get_logger("agentflow.test", log_format="text")
        logger = get_logger("agentflow.test", log_format="json")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

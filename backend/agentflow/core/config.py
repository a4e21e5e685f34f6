# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
AgentFlow Configuration - Single source of truth.
YAML is king. Env vars ONLY for secrets and deployment overrides.
"""

import os
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List


DEFAULT_CONFIG_PATH = "configs/agentflow.yaml"


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Immutable application configuration.
    All values from YAML. No hidden state.
    """

    # -- Server --
    service_host: str = "0.0.0.0"
    service_port: int = 5000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # -- Logging --
    log_level: str = "INFO"
    log_format: str = "json"

    # -- LLM --
    llm_provider: str = "auto"  # auto | openai | anthropic | none
    openai_model: str = "gpt-4o"
    anthropic_model: str = "claude-3-7-sonnet-20250219"
    llm_max_tokens: int = 4000
    llm_temperature: float = 0.7
    llm_timeout: float = 30.0

    # -- Runtime --
    simulation_step_delay: float = 1.0
    seed_data: bool = True

    def get_openai_api_key(self) -> Optional[str]:
        """Get OpenAI API key from environment"""
        return get_openai_api_key()

    def get_anthropic_api_key(self) -> Optional[str]:
        """Get Anthropic API key from environment"""
        return get_anthropic_api_key()


# =============================================================================
# SECRETS - The ONLY thing from environment variables
# =============================================================================

def get_openai_api_key() -> Optional[str]:
    """API keys cannot be in version control."""
    return os.getenv("OPENAI_API_KEY")


def get_anthropic_api_key() -> Optional[str]:
    """API keys cannot be in version control."""
    return os.getenv("ANTHROPIC_API_KEY")


# =============================================================================
# LOADER
# =============================================================================

def load_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Load configuration from YAML.
    Returns defaults if file doesn't exist.
    """
    if not Path(path).exists():
        return Config()

    with open(path) as f:
        y = yaml.safe_load(f) or {}

    # Helper to safely navigate nested dicts
    def get(d: dict, *keys, default=None):
        for k in keys:
            if not isinstance(d, dict):
                return default
            d = d.get(k, {})
        return d if d != {} else default

    defaults = Config()

    return Config(
        # Server
        service_host=get(y, "server", "host") or defaults.service_host,
        service_port=int(os.getenv("PORT", get(y, "server", "port") or defaults.service_port)),
        cors_origins=get(y, "server", "cors_origins") or ["*"],

        # Logging
        log_level=os.getenv("LOG_LEVEL", get(y, "logging", "level") or defaults.log_level),
        log_format=get(y, "logging", "format") or defaults.log_format,

        # LLM
        llm_provider=os.getenv("LLM_PROVIDER", get(y, "llm", "provider") or defaults.llm_provider),
        openai_model=get(y, "llm", "openai_model") or defaults.openai_model,
        anthropic_model=get(y, "llm", "anthropic_model") or defaults.anthropic_model,
        llm_max_tokens=get(y, "llm", "max_tokens") or defaults.llm_max_tokens,
        llm_temperature=get(y, "llm", "temperature", default=defaults.llm_temperature),
        llm_timeout=get(y, "llm", "timeout") or defaults.llm_timeout,

        # Runtime
        simulation_step_delay=get(y, "executions", "step_delay", default=defaults.simulation_step_delay),
        seed_data=get(y, "store", "seed", default=defaults.seed_data),
    )


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global config instance."""
    global _config
    if _config is None:
        config_path = os.getenv("AGENTFLOW_CONFIG_PATH", DEFAULT_CONFIG_PATH)
        _config = load_config(config_path)
    return _config


def reload_config() -> Config:
    """Force reload configuration."""
    global _config
    _config = None
    return get_config()

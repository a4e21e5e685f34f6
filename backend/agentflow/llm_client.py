# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
LLM completion clients.

Thin wrappers giving OpenAI and Anthropic the same single-call interface:
system prompt + user message in, text out. Provider selection follows the
configured provider and whichever API key is present.
"""

from typing import Optional

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from agentflow.core.config import Config
from agentflow.core.logging import get_service_logger

logger = get_service_logger("llm")


class CompletionClient:
    """Interface shared by all providers"""

    provider = "unknown"

    async def complete(self, system_prompt: str, user_message: str, json_mode: bool = True) -> str:
        raise NotImplementedError


class OpenAICompletionClient(CompletionClient):
    provider = "openai"

    def __init__(self, api_key: str, model: str, max_tokens: int, temperature: float, timeout: float):
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def complete(self, system_prompt: str, user_message: str, json_mode: bool = True) -> str:
        extra = {"response_format": {"type": "json_object"}} if json_mode else {}
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            **extra,
        )
        return response.choices[0].message.content or ""


class AnthropicCompletionClient(CompletionClient):
    provider = "anthropic"

    def __init__(self, api_key: str, model: str, max_tokens: int, temperature: float, timeout: float):
        self.client = AsyncAnthropic(api_key=api_key, timeout=timeout)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def complete(self, system_prompt: str, user_message: str, json_mode: bool = True) -> str:
        if json_mode:
            user_message = f"{user_message}\n\nRespond with a single JSON object only."
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_message}],
        )
        # Only text blocks carry the answer
        return "".join(block.text for block in response.content if block.type == "text")


def build_completion_client(config: Config) -> Optional[CompletionClient]:
    """
    Create the client for the configured provider.

    Returns None when the provider is disabled or no matching API key is
    set; callers then rely on the template generator.
    """
    provider = config.llm_provider.lower()
    if provider == "none":
        logger.info("LLM provider disabled by configuration")
        return None

    openai_key = config.get_openai_api_key()
    anthropic_key = config.get_anthropic_api_key()

    if provider in ("auto", "openai") and openai_key:
        logger.info(f"Using OpenAI model {config.openai_model} for workflow generation")
        return OpenAICompletionClient(
            api_key=openai_key,
            model=config.openai_model,
            max_tokens=config.llm_max_tokens,
            temperature=config.llm_temperature,
            timeout=config.llm_timeout,
        )

    if provider in ("auto", "anthropic") and anthropic_key:
        logger.info(f"Using Anthropic model {config.anthropic_model} for workflow generation")
        return AnthropicCompletionClient(
            api_key=anthropic_key,
            model=config.anthropic_model,
            max_tokens=config.llm_max_tokens,
            temperature=config.llm_temperature,
            timeout=config.llm_timeout,
        )

    logger.info("No LLM API key configured; using template workflow generator")
    return None

# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
AgentFlow API - Main application
Builds agents and their workflows from natural language or the visual editor
"""
# Load environment variables from .env file (local development)
from dotenv import load_dotenv
from pathlib import Path as _PathForEnv
_env_path = _PathForEnv(__file__).parent.parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agentflow import __version__
from agentflow.core.config import Config, get_config
from agentflow.core.errors import AgentFlowError
from agentflow.core.logging import get_api_logger
from agentflow.llm_client import CompletionClient, build_completion_client
from agentflow.services.assistant_service import AssistantService
from agentflow.services.generator_service import WorkflowGenerator
from agentflow.store import MemoryStore

from agentflow.api import agents, workflows, executions, logs, tools, generation, assistant

_UNSET = object()


def create_app(
    config: Optional[Config] = None,
    store: Optional[MemoryStore] = None,
    completion_client=_UNSET,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Configuration (defaults to get_config())
        store: Memory store (defaults to a fresh, optionally seeded store)
        completion_client: LLM client; None forces the template generator.
            Left out, it is built from config and environment.
    """
    config = config or get_config()
    logger = get_api_logger()

    if store is None:
        store = MemoryStore()
        if config.seed_data:
            store.seed()
            logger.info("Seeded memory store with example agents and tool catalog")

    client: Optional[CompletionClient]
    if completion_client is _UNSET:
        client = build_completion_client(config)
    else:
        client = completion_client

    app = FastAPI(
        title="AgentFlow API",
        description="Build AI agents and workflows from natural language",
        version=__version__,
    )

    # CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Runtime objects for dependency injection
    app.state.config = config
    app.state.store = store
    app.state.generator = WorkflowGenerator(client, timeout=config.llm_timeout)
    app.state.assistant = AssistantService(client, timeout=config.llm_timeout)

    @app.exception_handler(AgentFlowError)
    async def agentflow_error_handler(request: Request, exc: AgentFlowError) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    for module in (agents, workflows, executions, logs, tools, generation, assistant):
        app.include_router(module.router, prefix="/api")

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "version": __version__,
            "llm_provider": client.provider if client else "template",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    config = get_config()
    uvicorn.run(
        "agentflow.main:app",
        host=config.service_host,
        port=config.service_port,
        log_level=config.log_level.lower(),
    )

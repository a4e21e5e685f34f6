# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Structured logging for the AgentFlow backend.

Loggers live under the "agentflow" namespace ("agentflow.api",
"agentflow.service.<name>"). Level and format (json or text) come from the
logging section of the config. Fields passed through ``extra`` (for example
``execution_id`` during a simulated run) end up as top-level JSON keys.
"""

import logging
import json
import sys
from datetime import datetime, timezone


# LogRecord attributes that are not user-supplied extras
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "taskName"}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, extras included as top-level keys"""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local development"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def get_logger(name: str, log_level: str = "INFO", log_format: str = "json") -> logging.Logger:
    """
    Get a logger writing to stdout.

    Calling it again for the same name replaces the handler rather than
    adding a second one.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper()))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if log_format == "json" else TextFormatter())
    logger.handlers = [handler]
    return logger


def _configured_logger(name: str) -> logging.Logger:
    from agentflow.core.config import get_config
    config = get_config()
    return get_logger(name, log_level=config.log_level, log_format=config.log_format)


def get_api_logger() -> logging.Logger:
    """Logger for the application and its routes"""
    return _configured_logger("agentflow.api")


def get_service_logger(service_name: str) -> logging.Logger:
    """Logger for one service, e.g. get_service_logger("execution")"""
    return _configured_logger(f"agentflow.service.{service_name}")

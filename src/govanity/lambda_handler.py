"""AWS Lambda entry point for API Gateway proxy integration.

Point the Lambda handler setting at ``govanity.lambda_handler.handler``.
Configuration is read once per process from the file named by the
GOVANITY_CONFIG environment variable, falling back to auto-discovery.
"""

import logging
import os
from collections.abc import Callable
from functools import cache
from pathlib import Path
from typing import Any

from govanity.config import Config
from govanity.core.handler import handle_request

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GOVANITY_CONFIG"

LambdaHandler = Callable[[dict[str, Any], Any], dict[str, Any]]


def make_handler(config: Config) -> LambdaHandler:
    """Build an API Gateway proxy handler bound to a configuration."""

    def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
        method = event.get("httpMethod", "")
        path = event.get("path", "")
        response = handle_request(config, method, path)
        return {
            "statusCode": int(response.status),
            "headers": dict(response.headers),
            "body": response.body,
        }

    return handler


@cache
def _default_handler() -> LambdaHandler:
    config_path = os.environ.get(CONFIG_ENV_VAR)
    config = Config.load(Path(config_path) if config_path else None)
    logger.info(
        f"Loaded {len(config.packages)} packages for "
        f"{config.vanity.domain}{config.vanity.prefix}"
    )
    return make_handler(config)


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    return _default_handler()(event, context)

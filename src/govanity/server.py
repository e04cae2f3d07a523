"""aiohttp server for govanity.

Application factory and route registration for standalone server mode.
"""

import logging

from aiohttp import web

from govanity.app_keys import config_key
from govanity.config import Config
from govanity.core.handler import handle_request

logger = logging.getLogger(__name__)


async def vanity_handler(request: web.Request) -> web.Response:
    """Serve go-import metadata for any path under the configured prefix."""
    config = request.app[config_key]
    response = handle_request(config, request.method, request.path)
    logger.debug(f"{request.method} {request.path} -> {response.status}")
    return web.Response(
        status=response.status,
        headers=dict(response.headers),
        text=response.body,
    )


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    app[config_key] = config

    # Every method and path goes to the resolver, as behind API Gateway
    app.router.add_route("*", "/{path:.*}", vanity_handler)

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(
        f"Serving {len(config.packages)} packages for "
        f"{config.vanity.domain}{config.vanity.prefix}"
    )
    web.run_app(app, host=config.server.host, port=config.server.port)

"""Request handling shared by the aiohttp and Lambda front ends."""

from govanity.config import Config
from govanity.core.resolver import resolve
from govanity.core.responder import Response, render


def handle_request(config: Config, method: str, path: str) -> Response:
    """Resolve and render a single request against the configured packages."""
    vanity = config.vanity
    outcome = resolve(method, path, vanity.prefix, config.packages, vanity.index_url)
    return render(outcome, vanity.domain, vanity.prefix, method=method)

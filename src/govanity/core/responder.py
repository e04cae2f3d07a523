"""HTTP response shaping for resolution outcomes.

Meta tags are in a special format:

    <meta name="go-import" content="prefix vcs repo-root">
    <meta name="go-source" content="prefix home directory file">

See https://golang.org/cmd/go/#hdr-Remote_import_paths and
https://github.com/golang/gddo/wiki/Source-Code-Links.
"""

import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Mapping

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError
from markupsafe import escape

from govanity.core.resolver import (
    METHOD_GET,
    Found,
    MethodNotAllowed,
    NotFound,
    Outcome,
    RedirectToFallback,
)

logger = logging.getLogger(__name__)

CACHE_CONTROL = "public, max-age=300"
CONTENT_TYPE_HTML = "text/html; charset=utf-8"
CONTENT_TYPE_TEXT = "text/plain; charset=utf-8"

_environment = Environment(
    loader=PackageLoader("govanity", "templates"),
    autoescape=True,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


@dataclass(frozen=True)
class Response:
    """Framework-neutral HTTP response."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""


def html_escape(text: str) -> str:
    """Escape the five HTML-special characters.

    Quotes become numeric references (&#34; and &#39;).
    """
    return str(escape(text))


def render(
    outcome: Outcome,
    domain: str,
    prefix: str,
    *,
    method: str = METHOD_GET,
) -> Response:
    """Render an outcome to a response.

    Args:
        outcome: Result of resolve()
        domain: Vanity domain, e.g. "go.example.com"
        prefix: Path prefix between domain and package name
        method: Original request method (controls the redirect body)

    Returns:
        Response with status, headers and body
    """
    match outcome:
        case MethodNotAllowed():
            return http_error("Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)
        case RedirectToFallback(url=url):
            return http_redirect(method, url, HTTPStatus.TEMPORARY_REDIRECT)
        case NotFound():
            return http_not_found()
        case Found(head=head, tail=tail, repository=repository):
            body = render_meta(
                domain=domain,
                prefix=prefix,
                head=head,
                tail=tail,
                repository=repository,
            )
            return Response(
                status=HTTPStatus.OK,
                headers={
                    "Cache-Control": CACHE_CONTROL,
                    "Content-Type": CONTENT_TYPE_HTML,
                },
                body=body,
            )
    raise TypeError(f"Unknown outcome: {outcome!r}")


def render_meta(**context: str) -> str:
    """Render the go-import/go-source metadata document.

    A rendering failure is logged and whatever was produced before it is
    returned.
    """
    chunks: list[str] = []
    try:
        template = _environment.get_template("meta.html")
        for chunk in template.generate(**context):
            chunks.append(chunk)
    except TemplateError as e:
        logger.error(f"Failed to render template: {e}")
    return "".join(chunks)


def http_redirect(method: str, url: str, status: HTTPStatus) -> Response:
    headers = {"Location": url}
    if method in (METHOD_GET, "HEAD"):
        headers["Content-Type"] = CONTENT_TYPE_HTML

    body = ""
    if method == METHOD_GET:
        body = f'<a href="{html_escape(url)}">{status.phrase}</a>.\n'

    return Response(status=status, headers=headers, body=body)


def http_error(message: str, status: HTTPStatus) -> Response:
    return Response(
        status=status,
        headers={
            "Content-Type": CONTENT_TYPE_TEXT,
            "X-Content-Type-Options": "nosniff",
        },
        body=message,
    )


def http_not_found() -> Response:
    return http_error("404 page not found", HTTPStatus.NOT_FOUND)

"""Request resolution and response rendering."""

from govanity.core.handler import handle_request
from govanity.core.resolver import (
    Found,
    MethodNotAllowed,
    NotFound,
    Outcome,
    RedirectToFallback,
    resolve,
)
from govanity.core.responder import Response, html_escape, render

__all__ = [
    "Found",
    "MethodNotAllowed",
    "NotFound",
    "Outcome",
    "RedirectToFallback",
    "Response",
    "handle_request",
    "html_escape",
    "render",
    "resolve",
]

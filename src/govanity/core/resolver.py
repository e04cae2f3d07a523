"""Vanity import path resolution.

Maps a request method and path onto one of the outcomes the responder knows
how to render.
"""

import logging
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

METHOD_GET = "GET"


@dataclass(frozen=True)
class MethodNotAllowed:
    """Request used a method other than GET."""

    method: str


@dataclass(frozen=True)
class RedirectToFallback:
    """Request named no package; send the client to the index page."""

    url: str


@dataclass(frozen=True)
class NotFound:
    """Request named a package that is not in the mapping."""

    head: str


@dataclass(frozen=True)
class Found:
    """Request named a known package.

    head is the package name, tail the remaining sub-path (empty or starting
    with "/").
    """

    head: str
    tail: str
    repository: str


Outcome = MethodNotAllowed | RedirectToFallback | NotFound | Found


def split_path(path: str, prefix: str) -> tuple[str, str]:
    """Strip prefix and split the rest at the first "/".

    Returns:
        (head, tail) where tail keeps the leading "/" or is empty
    """
    rest = path.removeprefix(prefix)
    head, sep, tail = rest.partition("/")
    return head, sep + tail


def resolve(
    method: str,
    path: str,
    prefix: str,
    mapping: Mapping[str, str],
    fallback_url: str,
) -> Outcome:
    """Resolve a request to an outcome.

    Args:
        method: HTTP method of the request
        path: Full request path, including prefix
        prefix: Path prefix to strip before the package name
        mapping: Package name to "owner/repo"
        fallback_url: Redirect target when no package name is given

    Returns:
        The outcome to render
    """
    if method != METHOD_GET:
        return MethodNotAllowed(method)

    head, tail = split_path(path, prefix)

    if not head:
        return RedirectToFallback(fallback_url)

    repository = mapping.get(head)
    if repository is None:
        logger.debug(f"Unknown package {head!r} for path {path!r}")
        return NotFound(head)

    logger.debug(f"Resolved {path!r} to github.com/{repository} (tail {tail!r})")
    return Found(head=head, tail=tail, repository=repository)

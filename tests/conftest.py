"""Shared test fixtures."""

from collections.abc import Callable
from html.parser import HTMLParser
from types import MappingProxyType

import pytest
from govanity.config import Config, ServerConfig, VanityConfig

TEST_PACKAGES = {
    "pkg1": "me/pkg1",
    "pkg2": "org/pkg2",
    "pkg3": "org/otherreponame",
}


@pytest.fixture
def test_config() -> Config:
    """Create a configuration serving three packages under go.example.com/x/."""
    return Config(
        server=ServerConfig(),
        vanity=VanityConfig(
            domain="go.example.com",
            prefix="/x/",
            index_url="github.com/go/packages",
        ),
        packages=MappingProxyType(dict(TEST_PACKAGES)),
    )


class _MetaParser(HTMLParser):
    """Collect go-import, go-source and refresh meta contents."""

    def __init__(self) -> None:
        super().__init__()
        self.meta: dict[str, str] = {}

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "meta":
            return
        attributes = dict(attrs)
        content = attributes.get("content") or ""
        name = attributes.get("name")
        if name in ("go-import", "go-source"):
            self.meta[name] = content
        if attributes.get("http-equiv") == "refresh":
            self.meta["refresh"] = content


@pytest.fixture
def parse_meta() -> Callable[[str], dict[str, str]]:
    """Return a function extracting meta tag contents from an HTML document."""

    def parse(html: str) -> dict[str, str]:
        parser = _MetaParser()
        parser.feed(html)
        parser.close()
        return parser.meta

    return parse

"""Tests for the aiohttp server."""

from typing import Any

import pytest
from aiohttp import web
from govanity.app_keys import config_key
from govanity.config import Config
from govanity.lambda_handler import make_handler
from govanity.server import create_app


class TestCreateApp:
    """Tests for create_app()."""

    def test__valid_config__stores_config(self, test_config: Config) -> None:
        """Create app with configuration available under its key."""
        app = create_app(test_config)

        assert app[config_key] is test_config


class TestVanityHandler:
    """Tests for requests under the vanity prefix."""

    @pytest.fixture
    def app(self, test_config: Config) -> web.Application:
        return create_app(test_config)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("path", "go_import", "refresh"),
        [
            (
                "/x/pkg1",
                "go.example.com/x/pkg1 git https://github.com/me/pkg1",
                "0; url=https://godoc.org/go.example.com/x/pkg1",
            ),
            (
                "/x/pkg1/sub/pkg",
                "go.example.com/x/pkg1 git https://github.com/me/pkg1",
                "0; url=https://godoc.org/go.example.com/x/pkg1/sub/pkg",
            ),
            (
                "/x/pkg3",
                "go.example.com/x/pkg3 git https://github.com/org/otherreponame",
                "0; url=https://godoc.org/go.example.com/x/pkg3",
            ),
        ],
    )
    async def test__known_package__serves_metadata(
        self,
        aiohttp_client: Any,
        app: web.Application,
        parse_meta: Any,
        path: str,
        go_import: str,
        refresh: str,
    ) -> None:
        """Known packages get go-import metadata and a docs refresh."""
        client = await aiohttp_client(app)
        response = await client.get(path)

        assert response.status == 200
        assert response.headers["Cache-Control"] == "public, max-age=300"
        assert response.headers["Content-Type"] == "text/html; charset=utf-8"
        meta = parse_meta(await response.text())
        assert meta["go-import"] == go_import
        assert meta["refresh"] == refresh

    @pytest.mark.asyncio
    async def test__no_package__redirects_to_index(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Prefix alone redirects to the configured index URL."""
        client = await aiohttp_client(app)
        response = await client.get("/x/", allow_redirects=False)

        assert response.status == 307
        assert response.headers["Location"] == "github.com/go/packages"
        assert "Temporary Redirect" in await response.text()

    @pytest.mark.asyncio
    async def test__unknown_package__returns_404(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """Unknown package names return the plain-text 404."""
        client = await aiohttp_client(app)
        response = await client.get("/x/willnevereverexist")

        assert response.status == 404
        assert await response.text() == "404 page not found"
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["HEAD", "POST", "PUT", "DELETE", "OPTIONS"])
    async def test__non_get__returns_405(
        self,
        aiohttp_client: Any,
        app: web.Application,
        method: str,
    ) -> None:
        """Only GET is accepted."""
        client = await aiohttp_client(app)
        response = await client.request(method, "/x/pkg1")

        assert response.status == 405

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/x", "/pkg1", "/"])
    async def test__get_outside_prefix__redirects_to_index(
        self,
        aiohttp_client: Any,
        app: web.Application,
        path: str,
    ) -> None:
        """Paths outside the prefix still reach the resolver and redirect."""
        client = await aiohttp_client(app)
        response = await client.get(path, allow_redirects=False)

        assert response.status == 307
        assert response.headers["Location"] == "github.com/go/packages"

    @pytest.mark.asyncio
    async def test__non_get_outside_prefix__returns_405(
        self,
        aiohttp_client: Any,
        app: web.Application,
    ) -> None:
        """The method check applies to every path."""
        client = await aiohttp_client(app)
        response = await client.post("/other")

        assert response.status == 405

    @pytest.mark.asyncio
    async def test__matches_lambda_handler(
        self,
        aiohttp_client: Any,
        app: web.Application,
        test_config: Config,
    ) -> None:
        """Server and Lambda front ends answer the same request alike."""
        client = await aiohttp_client(app)
        lambda_handler = make_handler(test_config)

        for method, path in [("GET", "/x"), ("POST", "/other"), ("GET", "/x/pkg1")]:
            response = await client.request(method, path, allow_redirects=False)
            expected = lambda_handler({"httpMethod": method, "path": path}, None)

            assert response.status == expected["statusCode"]
            assert await response.text() == expected["body"]

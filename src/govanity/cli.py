"""CLI interface for govanity.

Command-line tool for serving and inspecting vanity import paths.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import click

from govanity.config import Config


@click.group()
def cli() -> None:
    """govanity - vanity import paths for Go packages."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover govanity.toml)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--domain",
    default=None,
    help="Vanity domain, e.g. go.example.com (overrides config)",
)
@click.option(
    "--prefix",
    default=None,
    help='Path prefix before the package name, e.g. "/x/" (overrides config)',
)
@click.option(
    "--index-url",
    default=None,
    help="Redirect target when no package is named (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log every request)",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    domain: str | None,
    prefix: str | None,
    index_url: str | None,
    verbose: bool,
) -> None:
    """Start the vanity import server."""
    from govanity.server import run_server

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    config = _load_config(
        config_path,
        host=host,
        port=port,
        domain=domain,
        prefix=prefix,
        index_url=index_url,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Import path root: {config.vanity.domain}{config.vanity.prefix}")
    click.echo(f"Index URL: {config.vanity.index_url}")
    if config.packages:
        click.echo(f"Packages: {len(config.packages)}")
    else:
        click.echo(
            click.style("Warning: no packages configured", fg="yellow"),
            err=True,
        )

    run_server(config)


@cli.command()
@click.argument("path")
@click.option(
    "--method",
    "-X",
    default="GET",
    help="HTTP method to simulate (default: GET)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover govanity.toml)",
)
def resolve(path: str, method: str, config_path: Path | None) -> None:
    """Show the response the server would send for PATH."""
    from govanity.core.handler import handle_request

    config = _load_config(config_path)
    response = handle_request(config, method, path)

    click.echo(f"Status: {int(response.status)}")
    for name, value in response.headers.items():
        click.echo(f"{name}: {value}")
    if response.body:
        click.echo()
        click.echo(response.body, nl=not response.body.endswith("\n"))


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover govanity.toml)",
)
def packages(config_path: Path | None) -> None:
    """List configured vanity import paths."""
    config = _load_config(config_path)
    if not config.packages:
        click.echo("No packages configured.")
        return

    root = f"{config.vanity.domain}{config.vanity.prefix}"
    for name in sorted(config.packages):
        click.echo(f"{root}{name} -> https://github.com/{config.packages[name]}")


def _load_config(config_path: Path | None, **overrides: Any) -> Config:
    """Load configuration or exit with error.

    Args:
        config_path: Explicit config file, or None to auto-discover
        overrides: Keyword overrides passed to Config.with_overrides

    Returns:
        Loaded configuration

    Raises:
        SystemExit: If the configuration is invalid
    """
    try:
        return Config.load(config_path).with_overrides(**overrides)
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

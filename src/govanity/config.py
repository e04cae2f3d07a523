"""Configuration management for govanity.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

CONFIG_FILENAME = "govanity.toml"


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass(frozen=True)
class VanityConfig:
    """Vanity import path configuration."""

    domain: str = "go.example.com"
    prefix: str = "/"
    index_url: str = "https://github.com"


def _empty_packages() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    vanity: VanityConfig = field(default_factory=VanityConfig)
    packages: Mapping[str, str] = field(default_factory=_empty_packages)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for govanity.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        with path.open("rb") as f:
            data = tomllib.load(f)

        return cls(
            server=cls._parse_server(data.get("server")),
            vanity=cls._parse_vanity(data.get("vanity")),
            packages=cls._parse_packages(data.get("packages")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_vanity(cls, data: object) -> VanityConfig:
        """Parse vanity configuration section.

        Args:
            data: Raw vanity section data

        Returns:
            VanityConfig instance
        """
        if data is None:
            return VanityConfig()

        if not isinstance(data, dict):
            raise ValueError("vanity section must be a dictionary")

        defaults = VanityConfig()

        domain = data.get("domain", defaults.domain)
        if not isinstance(domain, str) or not domain:
            raise ValueError("vanity.domain must be a non-empty string")

        prefix = data.get("prefix", defaults.prefix)
        if not isinstance(prefix, str):
            raise ValueError("vanity.prefix must be a string")
        _validate_prefix(prefix)

        index_url = data.get("index_url", defaults.index_url)
        if not isinstance(index_url, str) or not index_url:
            raise ValueError("vanity.index_url must be a non-empty string")

        return VanityConfig(domain=domain, prefix=prefix, index_url=index_url)

    @classmethod
    def _parse_packages(cls, data: object) -> Mapping[str, str]:
        """Parse packages table mapping vanity names to GitHub repositories.

        Args:
            data: Raw packages section data

        Returns:
            Read-only mapping of package name to "owner/repo"
        """
        if data is None:
            return _empty_packages()

        if not isinstance(data, dict):
            raise ValueError("packages section must be a dictionary")

        packages: dict[str, str] = {}
        for name, repository in data.items():
            if not name or "/" in name:
                raise ValueError(f"packages: invalid package name {name!r}")
            if not isinstance(repository, str):
                raise ValueError(f"packages.{name} must be a string")
            owner, sep, repo = repository.partition("/")
            if not sep or not owner or not repo or "/" in repo:
                raise ValueError(
                    f'packages.{name} must have "owner/repo" form, got {repository!r}'
                )
            packages[name] = repository

        return MappingProxyType(packages)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        domain: str | None = None,
        prefix: str | None = None,
        index_url: str | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Raises:
            ValueError: If the prefix override is invalid
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        vanity = self.vanity
        if domain is not None or prefix is not None or index_url is not None:
            if prefix is not None:
                _validate_prefix(prefix)
            vanity = replace(
                self.vanity,
                domain=domain if domain is not None else self.vanity.domain,
                prefix=prefix if prefix is not None else self.vanity.prefix,
                index_url=index_url if index_url is not None else self.vanity.index_url,
            )

        return replace(self, server=server, vanity=vanity)


def _validate_prefix(prefix: str) -> None:
    if not prefix.startswith("/") or not prefix.endswith("/"):
        raise ValueError(f'vanity.prefix must start and end with "/", got {prefix!r}')

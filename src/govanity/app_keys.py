"""Application keys for type-safe app configuration access."""

from aiohttp import web

from govanity.config import Config

config_key = web.AppKey("config", Config)

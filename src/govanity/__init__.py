"""govanity - vanity import paths for Go packages hosted on GitHub."""

__version__ = "0.1.0"

"""Language Server Protocol implementation for modelicafmt."""

from .server import ModelicaLanguageServer, create_server

__all__ = [
    "ModelicaLanguageServer",
    "create_server",
]

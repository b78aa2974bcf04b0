"""Ports (interfaces abstraites) implementes par la couche adapters."""

from wpmovies.core.ports.api_clients import IMovieDatabaseClient
from wpmovies.core.ports.parser import IExportParser

__all__ = [
    "IExportParser",
    "IMovieDatabaseClient",
]

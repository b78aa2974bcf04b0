"""
Utilitaires partages pour les commandes CLI de wpmovies.

Ce module fournit :
- with_container : decorateur injectant un container initialise
- resolve_export_path : chemin de l'export relatif au repertoire courant
"""

from functools import wraps
from pathlib import Path

from wpmovies.container import Container


def with_container():
    """
    Decorateur qui injecte un container en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def resolve_export_path(export_file: Path) -> Path:
    """Resout le chemin de l'export par rapport au repertoire courant s'il est relatif."""
    if export_file.is_absolute():
        return export_file
    return Path.cwd() / export_file

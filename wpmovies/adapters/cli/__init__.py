"""Interface ligne de commande (Typer)."""

from wpmovies.adapters.cli.commands import convert

__all__ = [
    "convert",
]

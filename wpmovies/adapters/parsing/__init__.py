"""Adaptateurs de parsing des exports de blog."""

from wpmovies.adapters.parsing.wordpress_parser import WordPressExportParser

__all__ = [
    "WordPressExportParser",
]

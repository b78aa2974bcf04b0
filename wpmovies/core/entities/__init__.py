"""Entités du domaine : articles bruts et fiches films migrées."""

from wpmovies.core.entities.post import MoviePost, RawPost

__all__ = [
    "MoviePost",
    "RawPost",
]

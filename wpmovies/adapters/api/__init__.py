"""
Clients API externes et cache disque.

Ce module fournit les adaptateurs pour communiquer avec TMDB et pour
persister les reponses :
- TMDBClient: fiches films, configuration de l'API, telechargement d'images
- FileCache: cache fichier avec TTL (JSON ou binaire)
- CacheError et sous-classes: echecs de validation ou d'ecriture du cache
"""

from wpmovies.adapters.api.cache import (
    CacheError,
    CacheMissError,
    CacheParseError,
    CacheStaleError,
    CacheStorageError,
    FileCache,
)
from wpmovies.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "CacheError",
    "CacheMissError",
    "CacheParseError",
    "CacheStaleError",
    "CacheStorageError",
    "FileCache",
    "TMDBClient",
]

"""
Couche application (services).

- MovieInfoResolver : fiches films, cache-first
- ConfigurationResolver : configuration TMDB, URL de base des images en memoire
- PosterResolver : affiches, cache binaire valide par la fraicheur
- MigrationService : migration d'un export, articles en parallele
"""

from wpmovies.services.api_configuration import ConfigurationResolver
from wpmovies.services.background import BackgroundTasks
from wpmovies.services.migration import MigrationService
from wpmovies.services.movie_info import MovieInfoResolver
from wpmovies.services.posters import PosterResolver
from wpmovies.services.single_flight import SingleFlight

__all__ = [
    "BackgroundTasks",
    "ConfigurationResolver",
    "MigrationService",
    "MovieInfoResolver",
    "PosterResolver",
    "SingleFlight",
]

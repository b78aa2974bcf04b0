"""
Utilitaires et constantes pour wpmovies.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from wpmovies.utils.constants import (
    DEFAULT_POSTER_SIZE,
    FREQUENCY_CATEGORIES,
    LOCATION_CATEGORIES,
    RELEVANT_MOVIE_FIELDS,
)
from wpmovies.utils.helpers import (
    classify_categories,
    get_relevant_movie_info,
    parse_pub_date,
)

__all__ = [
    "DEFAULT_POSTER_SIZE",
    "FREQUENCY_CATEGORIES",
    "LOCATION_CATEGORIES",
    "RELEVANT_MOVIE_FIELDS",
    "classify_categories",
    "get_relevant_movie_info",
    "parse_pub_date",
]

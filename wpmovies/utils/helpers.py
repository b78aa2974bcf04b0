"""
Fonctions utilitaires partagees dans le projet wpmovies.

Ce module centralise les transformations de donnees simples :
- parse_pub_date : date RFC 822 de l'export -> datetime
- classify_categories : categories WordPress -> lieu, frequence, features
- get_relevant_movie_info : fiche TMDB brute -> champs conserves
"""

from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Optional

from wpmovies.utils.constants import (
    FREQUENCY_CATEGORIES,
    LOCATION_CATEGORIES,
    RELEVANT_MOVIE_FIELDS,
)


def parse_pub_date(value: str) -> Optional[datetime]:
    """Parse une date RSS (ex: 'Tue, 30 Mar 1999 20:00:00 +0000'), None si invalide."""
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def classify_categories(categories: list[str]) -> dict[str, Any]:
    """
    Repartit les categories d'un article en lieu, frequence et features.

    Une categorie de lieu ou de frequence ecrase la precedente du meme type ;
    toute autre categorie est ajoutee aux features, dans l'ordre.

    Returns:
        Dict avec les cles location, frequency et features
    """
    classified: dict[str, Any] = {"location": None, "frequency": None, "features": []}

    for category in categories:
        if category in LOCATION_CATEGORIES:
            classified["location"] = category
        elif category in FREQUENCY_CATEGORIES:
            classified["frequency"] = FREQUENCY_CATEGORIES[category]
        else:
            classified["features"].append(category)

    return classified


def get_relevant_movie_info(movie_info: dict[str, Any]) -> dict[str, Any]:
    """
    Reduit une fiche TMDB brute aux champs utiles a l'article.

    Les genres ({id, name}) sont aplatis en liste de noms.
    """
    relevant = {
        field: movie_info[field]
        for field in RELEVANT_MOVIE_FIELDS
        if field in movie_info
    }
    relevant["genres"] = [
        genre["name"]
        for genre in movie_info.get("genres") or []
        if isinstance(genre, dict) and genre.get("name")
    ]
    return relevant

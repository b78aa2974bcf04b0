"""
Constantes globales pour wpmovies.

Ce module contient:
- La taille d'affiche par defaut
- Les champs TMDB conserves dans les fiches migrees
- Le classement des categories WordPress (lieu, frequence)
"""

# Taille d'affiche TMDB par defaut (w92, w185, w342, w500, w780, original)
DEFAULT_POSTER_SIZE = "original"

# Cle unique de la configuration TMDB dans son cache
CONFIGURATION_CACHE_KEY = "configuration"

# Champs de la fiche TMDB repris tels quels dans l'article migre
RELEVANT_MOVIE_FIELDS = ("title", "imdb_id", "poster_path", "release_date")

# Categories WordPress designant le lieu de visionnage
LOCATION_CATEGORIES = frozenset({
    "home",
    "theater",
    "plane",
})

# Categories WordPress designant la frequence de visionnage
FREQUENCY_CATEGORIES = {
    "first-view": "first",
    "functional-first-time": "functional-first",
    "repeat": "repeat",
    "regular": "regular",
}

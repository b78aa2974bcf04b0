"""
Interfaces ports pour le client de la base de films.

Le service de metadonnees est vu comme une API requete/reponse boite noire,
indexee par identifiant. Transport et authentification sont du ressort de
l'adaptateur.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any


class IMovieDatabaseClient(ABC):
    """
    Interface du client de metadonnees films (TMDB).

    Les methodes de lecture retournent le payload brut de l'API (sur-ensemble
    des champs utiles) : c'est ce payload qui est mis en cache.
    """

    @abstractmethod
    async def get_movie_info(self, tmdb_id: str) -> dict[str, Any]:
        """
        Recupere la fiche complete d'un film.

        Args :
            tmdb_id : Identifiant TMDB du film

        Retourne :
            Payload JSON brut (title, imdb_id, poster_path, release_date, genres...)

        Raises :
            httpx.HTTPError : En cas d'echec reseau ou de statut HTTP d'erreur
        """
        ...

    @abstractmethod
    async def get_configuration(self) -> dict[str, Any]:
        """
        Recupere la configuration globale du service (images.base_url...).

        Raises :
            httpx.HTTPError : En cas d'echec reseau ou de statut HTTP d'erreur
        """
        ...

    @abstractmethod
    def stream_image(self, url: str) -> AbstractAsyncContextManager[Any]:
        """
        Ouvre un telechargement en streaming d'une image.

        Le statut n'est PAS verifie : c'est a l'appelant de le controler.

        Args :
            url : URL absolue de l'image
        """
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Retourne l'identifiant de la source API (ex: 'tmdb')."""
        ...

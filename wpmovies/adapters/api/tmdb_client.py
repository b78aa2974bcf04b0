"""
Client TMDB pour la recuperation des fiches films, de la configuration
de l'API et des affiches.

Implemente l'interface IMovieDatabaseClient pour TMDB (The Movie Database).
Le client ne met rien en cache et ne relance jamais une requete : une
tentative par appel. Le cache et la deduplication sont portes par les
resolveurs de la couche services.

Usage:
    client = TMDBClient(api_key="your_key")
    info = await client.get_movie_info("603")
    config = await client.get_configuration()
    async with client.stream_image(url) as response:
        ...
    await client.close()
"""

from contextlib import AbstractAsyncContextManager
from typing import Any, Optional

import httpx
from loguru import logger

from wpmovies.core.ports.api_clients import IMovieDatabaseClient


class TMDBClient(IMovieDatabaseClient):
    """
    Client API TMDB pour les metadonnees de films.

    Deux clients HTTP distincts sont crees a la demande :
    - un client API (base_url TMDB v3, authentification)
    - un client images sans authentification, pour ne jamais envoyer la cle
      au serveur d'images

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3

    Example:
        client = TMDBClient(api_key="xxx")
        info = await client.get_movie_info("603")
        print(info["title"], info["poster_path"])
        await client.close()
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(self, api_key: Optional[str], timeout: float = 30.0) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4)
            timeout: Timeout des requetes HTTP en secondes
        """
        self._api_key = api_key or ""
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self._image_client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP de l'API, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            # Detecter le type de cle : v3 (32 hex) vs v4 (long JWT)
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=self._timeout,
            )
        return self._client

    def _get_image_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP des images (sans authentification)."""
        if self._image_client is None or self._image_client.is_closed:
            self._image_client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._image_client

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tmdb"

    async def get_movie_info(self, tmdb_id: str) -> dict[str, Any]:
        """
        Recupere la fiche brute d'un film.

        Args:
            tmdb_id: ID TMDB du film

        Returns:
            Payload JSON complet de /movie/{id}

        Raises:
            httpx.HTTPStatusError: Statut HTTP d'erreur (404 compris)
            httpx.HTTPError: Erreur de transport
        """
        response = await self._get_client().get(f"/movie/{tmdb_id}")
        response.raise_for_status()
        data = response.json()
        logger.info(f"Info for {tmdb_id} ({data.get('title')}) fetched.")
        return data

    async def get_configuration(self) -> dict[str, Any]:
        """
        Recupere la configuration de l'API (images.base_url, tailles...).

        Raises:
            httpx.HTTPStatusError: Statut HTTP d'erreur
            httpx.HTTPError: Erreur de transport
        """
        response = await self._get_client().get("/configuration")
        response.raise_for_status()
        logger.info("API configuration fetched.")
        return response.json()

    def stream_image(self, url: str) -> AbstractAsyncContextManager[httpx.Response]:
        """
        Ouvre un GET en streaming sur une URL d'image.

        Args:
            url: URL absolue (base_url + taille + poster_path)

        Returns:
            Context manager asynchrone produisant la httpx.Response
        """
        return self._get_image_client().stream("GET", url)

    async def close(self) -> None:
        """
        Ferme les clients HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
        if self._image_client is not None and not self._image_client.is_closed:
            await self._image_client.aclose()
        self._image_client = None

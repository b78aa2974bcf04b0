"""
Resolution des affiches de films vers un fichier local.

Une affiche en cache est validee par sa seule fraicheur (existence + age) :
le contenu binaire n'est jamais inspecte. Sinon elle est telechargee en
streaming depuis base_url + taille + poster_path, directement dans le cache.
"""

from pathlib import Path
from typing import Optional

import httpx
from loguru import logger

from wpmovies.adapters.api.cache import CacheError, FileCache
from wpmovies.core.ports.api_clients import IMovieDatabaseClient
from wpmovies.services.api_configuration import ConfigurationResolver
from wpmovies.services.single_flight import SingleFlight
from wpmovies.utils.constants import DEFAULT_POSTER_SIZE


class PosterResolver:
    """
    Resolveur des affiches par (poster_path, taille).

    Example:
        resolver = PosterResolver(client, posters_cache, configuration)
        path = await resolver.resolve("/poster.jpg")          # taille "original"
        thumb = await resolver.resolve("/poster.jpg", "w185")
    """

    def __init__(
        self,
        client: IMovieDatabaseClient,
        cache: FileCache,
        configuration: ConfigurationResolver,
    ) -> None:
        """
        Args:
            client: Client de l'API de films (telechargement des images)
            cache: Cache binaire des affiches (suffixe vide)
            configuration: Resolveur de l'URL de base des images
        """
        self._client = client
        self._cache = cache
        self._configuration = configuration
        self._inflight = SingleFlight()

    def path_for(self, poster_path: str, size: Optional[str] = None) -> Path:
        """Chemin local attendu pour une affiche."""
        return self._cache.path_for((size or DEFAULT_POSTER_SIZE, poster_path))

    async def resolve(self, poster_path: str, size: Optional[str] = None) -> Path:
        """
        Retourne le chemin local d'une affiche, en la telechargeant si besoin.

        Args:
            poster_path: Identifiant d'image TMDB (ex: '/poster.jpg')
            size: Variante de taille (defaut: 'original')

        Returns:
            Chemin du fichier image local

        Raises:
            httpx.HTTPStatusError: Reponse du serveur d'images differente de 200
            httpx.HTTPError: Erreur de transport
            CacheStorageError: Echec d'ecriture sur disque
        """
        size = size or DEFAULT_POSTER_SIZE
        key = (size, poster_path)
        return await self._inflight.run(key, lambda: self._resolve(poster_path, size))

    async def _resolve(self, poster_path: str, size: str) -> Path:
        try:
            path = await self._cache.validate_freshness((size, poster_path))
        except CacheError as e:
            logger.debug(f"Cache d'affiche ignore: {e}")
        else:
            logger.info(f"Poster {poster_path} found in cache.")
            return path

        return await self._download(poster_path, size)

    async def _download(self, poster_path: str, size: str) -> Path:
        base_url = await self._configuration.get_images_base_url()
        url = f"{base_url}{size}{poster_path}"
        logger.debug(f"Telechargement de l'affiche {url}")

        async with self._client.stream_image(url) as response:
            if response.status_code != 200:
                raise httpx.HTTPStatusError(
                    f"Poster download failed ({response.status_code}): {url}",
                    request=response.request,
                    response=response,
                )
            path = await self._cache.write_stream(
                (size, poster_path), response.aiter_bytes()
            )

        logger.info(f"Poster {poster_path} saved to {path}.")
        return path

"""
Resolution de la configuration de l'API TMDB (URL de base des images).

La configuration suit le meme pattern cache-first que les fiches films, sur
une cle unique. L'URL de base des images est ensuite gardee en memoire pour
toute la duree de vie du resolveur : les appels suivants ne font aucune E/S.
"""

from typing import Any, Optional

from loguru import logger

from wpmovies.adapters.api.cache import CacheError, FileCache
from wpmovies.core.ports.api_clients import IMovieDatabaseClient
from wpmovies.services.background import BackgroundTasks
from wpmovies.services.single_flight import SingleFlight
from wpmovies.utils.constants import CONFIGURATION_CACHE_KEY


class ConfigurationResolver:
    """
    Resolveur de la configuration TMDB, partage par toutes les affiches.

    Les appels concurrents a get_images_base_url() avant la premiere
    resolution partagent une seule operation : la configuration est lue ou
    telechargee au plus une fois. Un echec libere la garde, l'appel suivant
    retente.
    """

    def __init__(
        self,
        client: IMovieDatabaseClient,
        cache: FileCache,
        background: BackgroundTasks,
    ) -> None:
        self._client = client
        self._cache = cache
        self._background = background
        self._inflight = SingleFlight()
        self._images_base_url: Optional[str] = None

    @property
    def images_base_url(self) -> Optional[str]:
        """URL de base des images si deja resolue, sinon None."""
        return self._images_base_url

    async def get_configuration(self) -> dict[str, Any]:
        """
        Retourne la configuration de l'API, depuis le cache ou l'API.

        Raises:
            httpx.HTTPError: Echec du telechargement
        """
        try:
            configuration = await self._cache.validate_entry(CONFIGURATION_CACHE_KEY)
        except CacheError as e:
            logger.debug(f"Cache de configuration ignore: {e}")
        else:
            logger.info("Configuration data found in cache.")
            return configuration

        configuration = await self._client.get_configuration()
        self._background.spawn(
            self._save(configuration),
            "Sauvegarde de la configuration TMDB",
        )
        return configuration

    async def get_images_base_url(self) -> str:
        """
        Retourne l'URL de base des images (ex: 'http://image.tmdb.org/t/p/').

        Raises:
            httpx.HTTPError: Echec du telechargement de la configuration
            ValueError: Configuration sans images.base_url
        """
        if self._images_base_url is not None:
            logger.debug("Images base URL already set.")
            return self._images_base_url

        return await self._inflight.run(
            CONFIGURATION_CACHE_KEY, self._resolve_images_base_url
        )

    async def _resolve_images_base_url(self) -> str:
        configuration = await self.get_configuration()
        try:
            base_url = configuration["images"]["base_url"]
        except (KeyError, TypeError) as e:
            raise ValueError("Configuration TMDB sans images.base_url") from e

        self._images_base_url = base_url
        return base_url

    async def _save(self, configuration: dict[str, Any]) -> None:
        path = await self._cache.write(CONFIGURATION_CACHE_KEY, configuration)
        logger.info(f"{path} saved.")

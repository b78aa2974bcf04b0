"""
Resolution des fiches films TMDB avec cache disque.

Pattern cache-first : une entree valide (JSON lisible et plus recente que le
TTL) est retournee sans appel reseau. Sinon la fiche est telechargee, retournee
immediatement, et ecrite dans le cache en tache de fond.
"""

from typing import Any

from loguru import logger

from wpmovies.adapters.api.cache import CacheError, FileCache
from wpmovies.core.ports.api_clients import IMovieDatabaseClient
from wpmovies.services.background import BackgroundTasks
from wpmovies.services.single_flight import SingleFlight


class MovieInfoResolver:
    """
    Resolveur des fiches films par tmdb_id.

    Aucune politique de retry : une tentative reseau par resolution, les
    erreurs reseau (httpx.HTTPError) remontent a l'appelant. Les resolutions
    concurrentes d'un meme identifiant partagent le meme telechargement.

    Example:
        resolver = MovieInfoResolver(client, cache, background)
        info = await resolver.resolve("603")
    """

    def __init__(
        self,
        client: IMovieDatabaseClient,
        cache: FileCache,
        background: BackgroundTasks,
    ) -> None:
        """
        Args:
            client: Client de l'API de films
            cache: Cache JSON des fiches (un fichier par identifiant)
            background: Taches de fond pour les ecritures de cache
        """
        self._client = client
        self._cache = cache
        self._background = background
        self._inflight = SingleFlight()

    async def resolve(self, tmdb_id: str) -> dict[str, Any]:
        """
        Retourne la fiche brute d'un film, depuis le cache ou l'API.

        Args:
            tmdb_id: Identifiant TMDB

        Returns:
            Payload complet de l'API (sur-ensemble des champs utiles)

        Raises:
            httpx.HTTPError: Echec du telechargement
        """
        tmdb_id = str(tmdb_id)
        return await self._inflight.run(tmdb_id, lambda: self._resolve(tmdb_id))

    async def _resolve(self, tmdb_id: str) -> dict[str, Any]:
        try:
            info = await self._cache.validate_entry(tmdb_id)
        except CacheError as e:
            logger.debug(f"Cache ignore pour {tmdb_id}: {e}")
        else:
            title = info.get("title") if isinstance(info, dict) else None
            logger.info(f"Info for {tmdb_id} ({title}) found in cache.")
            return info

        info = await self._client.get_movie_info(tmdb_id)
        self._background.spawn(
            self._save(tmdb_id, info),
            f"Sauvegarde de la fiche {tmdb_id}",
        )
        return info

    async def _save(self, tmdb_id: str, info: dict[str, Any]) -> None:
        path = await self._cache.write(tmdb_id, info)
        logger.info(f"{path} saved.")

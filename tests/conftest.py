"""
Fixtures pytest partagees pour les tests wpmovies.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec repertoires temporaires
- Caches disque isoles (configuration, fiches, affiches)
- Mock du client TMDB
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from wpmovies.adapters.api.cache import FileCache
from wpmovies.config import Settings
from wpmovies.core.ports.api_clients import IMovieDatabaseClient
from wpmovies.services.background import BackgroundTasks
from tests.fixtures.tmdb_responses import (
    TMDB_CONFIGURATION_RESPONSE,
    TMDB_MOVIE_INFO_RESPONSE,
)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler le cache et les logs de chaque test.
    """
    return Settings(
        _env_file=None,  # Ignorer le fichier .env pour les tests
        tmdb_api_key="test_api_key",
        cache_dir=tmp_path / "tmdb_cache",
        log_file=tmp_path / "test.log",
        max_concurrency=4,
    )


@pytest.fixture
def movie_info_cache(tmp_path: Path) -> FileCache:
    """Cache JSON des fiches films."""
    return FileCache(tmp_path / "tmdb_cache" / "movie_info")


@pytest.fixture
def configuration_cache(tmp_path: Path) -> FileCache:
    """Cache JSON de la configuration TMDB."""
    return FileCache(tmp_path / "tmdb_cache")


@pytest.fixture
def posters_cache(tmp_path: Path) -> FileCache:
    """Cache binaire des affiches."""
    return FileCache(tmp_path / "tmdb_cache" / "posters", suffix="", rooted_keys=True)


@pytest.fixture
def background() -> BackgroundTasks:
    """Taches de fond des ecritures de cache."""
    return BackgroundTasks()


@pytest.fixture
def mock_client() -> MagicMock:
    """
    Mock de IMovieDatabaseClient.

    Les methodes async sont des AsyncMock (MagicMock avec spec=IMovieDatabaseClient) et retournent
    des reponses TMDB realistes par defaut.
    """
    client = MagicMock(spec=IMovieDatabaseClient)
    client.get_movie_info.return_value = dict(TMDB_MOVIE_INFO_RESPONSE)
    client.get_configuration.return_value = dict(TMDB_CONFIGURATION_RESPONSE)
    client.source = "tmdb"
    return client

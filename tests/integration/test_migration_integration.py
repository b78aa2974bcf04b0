"""
Tests d'integration de la migration avec les vrais adaptateurs.

Ces tests utilisent le Container et les implementations reelles (parser,
TMDBClient, FileCache, resolveurs). Seul le reseau est simule avec respx :
le flow complet export -> fiches -> cache disque est valide de bout en bout.
"""

from pathlib import Path

import httpx
import pytest
import respx

from wpmovies.config import Settings
from wpmovies.container import Container
from tests.fixtures.tmdb_responses import (
    IMAGES_BASE_URL,
    POSTER_BYTES,
    TMDB_CONFIGURATION_RESPONSE,
    TMDB_MATRIX_MINIMAL_RESPONSE,
)
from tests.fixtures.wordpress_exports import (
    MATRIX_ITEM,
    NO_TMDB_ID_ITEM,
    build_export,
    item,
)

MOVIE_URL = "https://api.themoviedb.org/3/movie/603"
CONFIGURATION_URL = "https://api.themoviedb.org/3/configuration"
POSTER_URL = f"{IMAGES_BASE_URL}original/poster.jpg"


@pytest.fixture
def export_file(tmp_path: Path) -> Path:
    path = tmp_path / "export.xml"
    path.write_text(build_export(MATRIX_ITEM, NO_TMDB_ID_ITEM), encoding="utf-8")
    return path


def _container(settings: Settings) -> Container:
    container = Container()
    container.config.override(settings)
    return container


async def _run(container: Container, export_file: Path):
    """Execute une migration complete comme le fait la CLI."""
    try:
        return await container.migration_service().migrate(export_file)
    finally:
        await container.background_tasks().drain()
        await container.tmdb_client().close()


class TestMigrationIntegrationFlow:
    """Tests d'integration du flow complet de migration."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_matrix_export_end_to_end(
        self, test_settings: Settings, export_file: Path
    ) -> None:
        """L'article Matrix est enrichi, l'article sans tmdb_id garde son imdb_id."""
        movie_route = respx.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, json=TMDB_MATRIX_MINIMAL_RESPONSE)
        )
        config_route = respx.get(CONFIGURATION_URL).mock(
            return_value=httpx.Response(200, json=TMDB_CONFIGURATION_RESPONSE)
        )
        poster_route = respx.get(POSTER_URL).mock(
            return_value=httpx.Response(200, content=POSTER_BYTES)
        )

        posts = await _run(_container(test_settings), export_file)

        matrix, unknown = posts
        assert matrix.title == "The Matrix"
        assert matrix.genres == ["Action"]
        assert matrix.location == "theater"
        assert matrix.frequency == "first"
        assert matrix.features == ["sci-fi"]
        assert matrix.poster_file == test_settings.posters_cache_dir / "original" / "poster.jpg"
        assert matrix.poster_file.read_bytes() == POSTER_BYTES

        assert unknown.missing_tmdb_id is True
        assert unknown.imdb_id == "tt0000001"
        assert unknown.title is None

        assert movie_route.call_count == 1
        assert config_route.call_count == 1
        assert poster_route.call_count == 1
        assert poster_route.calls.last.request.url.params.get("api_key") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_cache_layout_on_disk(
        self, test_settings: Settings, export_file: Path
    ) -> None:
        """Les entrees sont ecrites aux emplacements attendus."""
        respx.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, json=TMDB_MATRIX_MINIMAL_RESPONSE)
        )
        respx.get(CONFIGURATION_URL).mock(
            return_value=httpx.Response(200, json=TMDB_CONFIGURATION_RESPONSE)
        )
        respx.get(POSTER_URL).mock(return_value=httpx.Response(200, content=POSTER_BYTES))

        await _run(_container(test_settings), export_file)

        cache_dir = test_settings.cache_dir
        assert (cache_dir / "configuration.json").is_file()
        assert (cache_dir / "movie_info" / "603.json").is_file()
        assert (cache_dir / "posters" / "original" / "poster.jpg").is_file()

    @pytest.mark.asyncio
    @respx.mock
    async def test_second_run_uses_cache_only(
        self, test_settings: Settings, export_file: Path
    ) -> None:
        """Une seconde migration ne fait aucun appel reseau."""
        movie_route = respx.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, json=TMDB_MATRIX_MINIMAL_RESPONSE)
        )
        config_route = respx.get(CONFIGURATION_URL).mock(
            return_value=httpx.Response(200, json=TMDB_CONFIGURATION_RESPONSE)
        )
        poster_route = respx.get(POSTER_URL).mock(
            return_value=httpx.Response(200, content=POSTER_BYTES)
        )

        first = await _run(_container(test_settings), export_file)
        second = await _run(_container(test_settings), export_file)

        assert [p.to_dict() for p in second] == [p.to_dict() for p in first]
        assert movie_route.call_count == 1
        assert config_route.call_count == 0
        assert poster_route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_failed_movie_does_not_stop_migration(
        self, test_settings: Settings, tmp_path: Path
    ) -> None:
        """Un 404 TMDB est journalise, les autres articles sont migres."""
        export = tmp_path / "export.xml"
        export.write_text(
            build_export(
                item(postmeta={"tmdb_id": "999999999"}),
                MATRIX_ITEM,
            ),
            encoding="utf-8",
        )
        respx.get("https://api.themoviedb.org/3/movie/999999999").mock(
            return_value=httpx.Response(404, json={"status_code": 34})
        )
        respx.get(MOVIE_URL).mock(
            return_value=httpx.Response(200, json=TMDB_MATRIX_MINIMAL_RESPONSE)
        )
        respx.get(CONFIGURATION_URL).mock(
            return_value=httpx.Response(200, json=TMDB_CONFIGURATION_RESPONSE)
        )
        respx.get(POSTER_URL).mock(return_value=httpx.Response(200, content=POSTER_BYTES))

        failed, matrix = await _run(_container(test_settings), export)

        assert failed.tmdb_id == "999999999"
        assert failed.title is None
        assert failed.poster_file is None
        assert matrix.title == "The Matrix"
        assert not (test_settings.movie_info_cache_dir / "999999999.json").exists()

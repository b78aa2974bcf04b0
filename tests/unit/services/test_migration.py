"""
Tests unitaires pour MigrationService.

Les resolveurs sont mockes : ces tests verifient l'orchestration
(construction des fiches, ordre fiche puis affiche, isolation des echecs,
plafond de concurrence), pas le cache.
"""

import asyncio
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from wpmovies.adapters.parsing.wordpress_parser import WordPressExportParser
from wpmovies.core.entities.post import RawPost
from wpmovies.services.migration import MigrationService
from wpmovies.services.movie_info import MovieInfoResolver
from wpmovies.services.posters import PosterResolver
from tests.fixtures.tmdb_responses import TMDB_MATRIX_MINIMAL_RESPONSE
from tests.fixtures.wordpress_exports import (
    MATRIX_ITEM,
    NO_TMDB_ID_ITEM,
    build_export,
)


@pytest.fixture
def movie_info() -> MagicMock:
    resolver = MagicMock(spec=MovieInfoResolver)
    resolver.resolve.return_value = dict(TMDB_MATRIX_MINIMAL_RESPONSE)
    return resolver


@pytest.fixture
def posters(tmp_path: Path) -> MagicMock:
    resolver = MagicMock(spec=PosterResolver)
    resolver.resolve.return_value = tmp_path / "original" / "poster.jpg"
    return resolver


@pytest.fixture
def service(movie_info: MagicMock, posters: MagicMock) -> MigrationService:
    return MigrationService(
        parser=WordPressExportParser(),
        movie_info=movie_info,
        posters=posters,
    )


def _raw(tmdb_id=None, **meta) -> RawPost:
    postmeta = dict(meta)
    if tmdb_id is not None:
        postmeta["tmdb_id"] = tmdb_id
    return RawPost(pub_date="Tue, 30 Mar 1999 20:00:00 +0000", postmeta=postmeta)


class TestBuildPost:
    """Tests pour build_post()."""

    def test_builds_base_record(self) -> None:
        raw = RawPost(
            pub_date="Tue, 30 Mar 1999 20:00:00 +0000",
            content="<p>Great movie.</p>",
            categories=["theater", "first-view", "sci-fi"],
            postmeta={"tmdb_id": "603"},
        )

        post = MigrationService.build_post(raw)

        assert post.date.year == 1999
        assert post.content == "<p>Great movie.</p>"
        assert post.tmdb_id == "603"
        assert post.location == "theater"
        assert post.frequency == "first"
        assert post.features == ["sci-fi"]
        assert post.missing_tmdb_id is False

    def test_empty_tmdb_id_is_missing(self) -> None:
        post = MigrationService.build_post(_raw(tmdb_id=""))
        assert post.tmdb_id is None


class TestMigratePosts:
    """Tests pour migrate_posts()."""

    @pytest.mark.asyncio
    async def test_matrix_post_is_enriched(self, service, movie_info, posters, tmp_path) -> None:
        """Une fiche avec tmdb_id recoit les champs TMDB puis son affiche."""
        posts = await service.migrate_posts([_raw("603")])

        post = posts[0]
        assert post.title == "The Matrix"
        assert post.imdb_id == "tt0133093"
        assert post.release_date == "1999-03-30"
        assert post.poster_path == "/poster.jpg"
        assert post.genres == ["Action"]
        assert post.poster_file == tmp_path / "original" / "poster.jpg"
        movie_info.resolve.assert_awaited_once_with("603")
        posters.resolve.assert_awaited_once_with("/poster.jpg", "original")

    @pytest.mark.asyncio
    async def test_poster_size_is_configurable(self, movie_info, posters) -> None:
        service = MigrationService(
            parser=WordPressExportParser(),
            movie_info=movie_info,
            posters=posters,
            poster_size="w500",
        )

        await service.migrate_posts([_raw("603")])

        posters.resolve.assert_awaited_once_with("/poster.jpg", "w500")

    @pytest.mark.asyncio
    async def test_missing_tmdb_id_makes_no_calls(self, service, movie_info, posters) -> None:
        """Sans tmdb_id : aucun appel, imdb_id repris, fiche marquee."""
        posts = await service.migrate_posts([_raw(imdb_id="tt0000001")])

        post = posts[0]
        assert post.missing_tmdb_id is True
        assert post.imdb_id == "tt0000001"
        assert post.title is None
        movie_info.resolve.assert_not_called()
        posters.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_poster_path_skips_poster(self, service, movie_info, posters) -> None:
        movie_info.resolve.return_value = {"title": "No Poster", "poster_path": None}

        posts = await service.migrate_posts([_raw("1")])

        assert posts[0].title == "No Poster"
        assert posts[0].poster_file is None
        posters.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_movie_info_failure_is_isolated(self, service, movie_info, posters) -> None:
        """Un echec de fiche n'empeche pas les autres articles."""

        async def resolve(tmdb_id):
            if tmdb_id == "404":
                raise httpx.ConnectError("down")
            return dict(TMDB_MATRIX_MINIMAL_RESPONSE)

        movie_info.resolve.side_effect = resolve

        posts = await service.migrate_posts([_raw("404"), _raw("603")])

        assert posts[0].title is None
        assert posts[0].missing_tmdb_id is False
        assert posts[1].title == "The Matrix"
        posters.resolve.assert_awaited_once_with("/poster.jpg", "original")

    @pytest.mark.asyncio
    async def test_poster_failure_keeps_metadata(self, service, posters) -> None:
        """Un echec d'affiche conserve les champs TMDB deja fusionnes."""
        posters.resolve.side_effect = httpx.ConnectError("down")

        posts = await service.migrate_posts([_raw("603")])

        assert posts[0].title == "The Matrix"
        assert posts[0].poster_file is None

    @pytest.mark.asyncio
    async def test_order_matches_input(self, service, movie_info) -> None:
        """L'ordre de sortie est celui de l'export, meme si les reponses arrivent desordonnees."""
        delays = {"1": 0.03, "2": 0.0, "3": 0.01}

        async def resolve(tmdb_id):
            await asyncio.sleep(delays[tmdb_id])
            return {"title": f"Movie {tmdb_id}"}

        movie_info.resolve.side_effect = resolve

        posts = await service.migrate_posts([_raw("1"), _raw("2"), _raw("3")])

        assert [p.title for p in posts] == ["Movie 1", "Movie 2", "Movie 3"]

    @pytest.mark.asyncio
    async def test_concurrency_is_capped(self, movie_info, posters) -> None:
        """Jamais plus de max_concurrency articles enrichis a la fois."""
        active = 0
        peak = 0

        async def resolve(tmdb_id):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return {"title": tmdb_id}

        movie_info.resolve.side_effect = resolve
        service = MigrationService(
            parser=WordPressExportParser(),
            movie_info=movie_info,
            posters=posters,
            max_concurrency=2,
        )

        posts = await service.migrate_posts([_raw(str(i)) for i in range(6)])

        assert len(posts) == 6
        assert peak == 2

    @pytest.mark.asyncio
    async def test_empty_list(self, service) -> None:
        assert await service.migrate_posts([]) == []

    def test_invalid_concurrency_rejected(self, movie_info, posters) -> None:
        with pytest.raises(ValueError):
            MigrationService(
                parser=WordPressExportParser(),
                movie_info=movie_info,
                posters=posters,
                max_concurrency=0,
            )


class TestMigrate:
    """Tests pour migrate() a partir d'un fichier d'export."""

    @pytest.mark.asyncio
    async def test_migrates_export_file(self, service, movie_info, tmp_path: Path) -> None:
        export = tmp_path / "export.xml"
        export.write_text(build_export(MATRIX_ITEM, NO_TMDB_ID_ITEM), encoding="utf-8")

        posts = await service.migrate(export)

        assert [p.tmdb_id for p in posts] == ["603", None]
        assert posts[0].title == "The Matrix"
        assert posts[0].location == "theater"
        assert posts[1].missing_tmdb_id is True
        assert posts[1].imdb_id == "tt0000001"
        movie_info.resolve.assert_awaited_once_with("603")

    @pytest.mark.asyncio
    async def test_missing_export_raises(self, service, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            await service.migrate(tmp_path / "absent.xml")

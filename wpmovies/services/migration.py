"""
Service de migration des articles WordPress en fiches films.

MigrationService lit l'export, construit une fiche par article et enrichit
celles qui portent un tmdb_id avec TMDB (fiche puis affiche).

Responsabilites:
- Classer les categories WordPress (lieu, frequence, features)
- Resoudre la fiche TMDB, puis l'affiche (l'affiche depend de la fiche)
- Traiter les articles en parallele, avec un plafond de concurrence
- Isoler les echecs : un article en erreur ne bloque jamais les autres
"""

import asyncio
from pathlib import Path

from loguru import logger

from wpmovies.core.entities.post import MoviePost, RawPost
from wpmovies.core.ports.parser import IExportParser
from wpmovies.services.movie_info import MovieInfoResolver
from wpmovies.services.posters import PosterResolver
from wpmovies.utils.constants import DEFAULT_POSTER_SIZE
from wpmovies.utils.helpers import (
    classify_categories,
    get_relevant_movie_info,
    parse_pub_date,
)


class MigrationService:
    """
    Orchestrateur de la migration d'un export.

    Attributes:
        DEFAULT_MAX_CONCURRENCY: Nombre d'articles enrichis simultanement par defaut

    Example:
        service = MigrationService(
            parser=WordPressExportParser(),
            movie_info=movie_info_resolver,
            posters=poster_resolver,
        )
        posts = await service.migrate(Path("export.xml"))
        incomplete = [p for p in posts if p.missing_tmdb_id]
    """

    DEFAULT_MAX_CONCURRENCY: int = 8

    def __init__(
        self,
        parser: IExportParser,
        movie_info: MovieInfoResolver,
        posters: PosterResolver,
        poster_size: str = DEFAULT_POSTER_SIZE,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        """
        Initialise le service de migration.

        Args:
            parser: Parser de l'export
            movie_info: Resolveur des fiches TMDB
            posters: Resolveur des affiches
            poster_size: Taille d'affiche a telecharger
            max_concurrency: Nombre maximum d'articles enrichis en parallele
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency doit etre >= 1")
        self._parser = parser
        self._movie_info = movie_info
        self._posters = posters
        self._poster_size = poster_size
        self._max_concurrency = max_concurrency

    @staticmethod
    def build_post(raw: RawPost) -> MoviePost:
        """Construit la fiche de base d'un article (sans appel reseau)."""
        return MoviePost(
            date=parse_pub_date(raw.pub_date),
            content=raw.content,
            tmdb_id=raw.get_meta_value("tmdb_id"),
            **classify_categories(raw.categories),
        )

    async def migrate(self, export_path: Path) -> list[MoviePost]:
        """
        Lit un export et migre tous ses articles.

        Raises:
            OSError, ValueError: Export illisible ou invalide
        """
        raw_posts = self._parser.parse(export_path)
        return await self.migrate_posts(raw_posts)

    async def migrate_posts(self, raw_posts: list[RawPost]) -> list[MoviePost]:
        """
        Migre une liste d'articles bruts.

        Les fiches sont retournees dans l'ordre des articles, qu'elles aient
        ete enrichies ou non. Les echecs sont uniquement journalises.
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)
        posts = [self.build_post(raw) for raw in raw_posts]

        await asyncio.gather(
            *(
                self._process(post, raw, semaphore)
                for post, raw in zip(posts, raw_posts)
            )
        )
        return posts

    async def _process(
        self, post: MoviePost, raw: RawPost, semaphore: asyncio.Semaphore
    ) -> None:
        if post.tmdb_id is None:
            date = post.date.date().isoformat() if post.date else raw.pub_date
            logger.warning(f"Missing tmdb_id: {date}")
            post.missing_tmdb_id = True
            post.imdb_id = raw.get_meta_value("imdb_id")
            return

        async with semaphore:
            await self._enrich(post)

    async def _enrich(self, post: MoviePost) -> None:
        """Enrichit une fiche : fiche TMDB puis affiche."""
        try:
            info = await self._movie_info.resolve(post.tmdb_id)
            post.apply_movie_info(get_relevant_movie_info(info))
        except Exception as e:
            logger.error(f"Echec de la fiche TMDB {post.tmdb_id}: {e}")
            return

        if not post.poster_path:
            logger.warning(f"Pas d'affiche pour {post.tmdb_id} ({post.title})")
            return

        try:
            post.poster_file = await self._posters.resolve(
                post.poster_path, self._poster_size
            )
        except Exception as e:
            logger.error(
                f"Echec de l'affiche {post.poster_path} ({post.tmdb_id}): {e}"
            )

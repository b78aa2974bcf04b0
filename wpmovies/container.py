"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : configuration,
client TMDB, caches disque et resolveurs. Les resolveurs sont des singletons :
l'URL de base des images et les operations en cours sont partagees par
toute la migration.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import FileCache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.parsing.wordpress_parser import WordPressExportParser
from .config import Settings
from .services.api_configuration import ConfigurationResolver
from .services.background import BackgroundTasks
from .services.migration import MigrationService
from .services.movie_info import MovieInfoResolver
from .services.posters import PosterResolver


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        service = container.migration_service()
        posts = await service.migrate(Path("export.xml"))
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Ecritures de cache en tache de fond, partagees par tous les resolveurs
    background_tasks = providers.Singleton(BackgroundTasks)

    # Caches disque - un espace de noms (repertoire) par type d'entree
    configuration_cache = providers.Singleton(
        FileCache,
        root=config.provided.configuration_cache_dir,
        suffix=".json",
        ttl=config.provided.cache_ttl_seconds,
    )
    movie_info_cache = providers.Singleton(
        FileCache,
        root=config.provided.movie_info_cache_dir,
        suffix=".json",
        ttl=config.provided.cache_ttl_seconds,
    )
    posters_cache = providers.Singleton(
        FileCache,
        root=config.provided.posters_cache_dir,
        suffix="",
        ttl=config.provided.cache_ttl_seconds,
        rooted_keys=True,
    )

    # Client API - Singleton avec api_key depuis config
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        timeout=config.provided.request_timeout,
    )

    # Resolveurs
    configuration_resolver = providers.Singleton(
        ConfigurationResolver,
        client=tmdb_client,
        cache=configuration_cache,
        background=background_tasks,
    )
    movie_info_resolver = providers.Singleton(
        MovieInfoResolver,
        client=tmdb_client,
        cache=movie_info_cache,
        background=background_tasks,
    )
    poster_resolver = providers.Singleton(
        PosterResolver,
        client=tmdb_client,
        cache=posters_cache,
        configuration=configuration_resolver,
    )

    # Parsing de l'export (stateless - Singleton)
    export_parser = providers.Singleton(WordPressExportParser)

    # Service de migration - Factory, les parametres viennent de la config
    migration_service = providers.Factory(
        MigrationService,
        parser=export_parser,
        movie_info=movie_info_resolver,
        posters=poster_resolver,
        poster_size=config.provided.poster_size,
        max_concurrency=config.provided.max_concurrency,
    )

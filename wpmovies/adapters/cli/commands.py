"""
Commande CLI de migration d'un export WordPress.

Les fiches migrees sont ecrites en JSON sur stdout ; les logs vont sur
stderr et dans le fichier de log. Le code de sortie ne distingue pas les
articles en echec : ils n'apparaissent que dans les logs.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from wpmovies.adapters.cli.helpers import resolve_export_path, with_container


def convert(
    export_file: Annotated[
        Path,
        typer.Argument(help="Export WordPress (XML), relatif au repertoire courant"),
    ],
) -> None:
    """Migre un export WordPress en fiches films enrichies avec TMDB."""
    asyncio.run(_convert_async(export_file))


@with_container()
async def _convert_async(container, export_file: Path) -> None:
    """Implementation async de la commande de migration."""
    config = container.config()
    export_path = resolve_export_path(export_file)

    if not config.tmdb_enabled:
        logger.warning("Cle API TMDB absente : seules les fiches en cache seront enrichies")

    service = container.migration_service()
    background = container.background_tasks()
    tmdb_client = container.tmdb_client()

    try:
        posts = await service.migrate(export_path)
    finally:
        # Les ecritures de cache restantes sont attendues au plus quelques secondes
        await background.drain(timeout=config.shutdown_grace_seconds)
        await tmdb_client.close()

    missing = sum(1 for post in posts if post.missing_tmdb_id)
    logger.info(f"{len(posts)} article(s) migre(s), {missing} sans tmdb_id")

    typer.echo(
        json.dumps([post.to_dict() for post in posts], indent=2, ensure_ascii=False)
    )

"""
Configuration du logging de wpmovies via loguru.

stdout est reserve aux fiches JSON produites par la CLI : tous les logs
partent donc sur stderr (lisible par l'humain) et dans un fichier JSON
rotatif (hits/miss du cache, telechargements, echecs par article).
"""

import sys

from loguru import logger

from wpmovies.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings) -> None:
    """Configure les handlers console et fichier a partir des Settings.

    Args :
        settings : log_level (console), log_file, log_rotation_size et
            log_retention_count (fichier)
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=CONSOLE_FORMAT,
        colorize=True,
    )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug(
        "Logging configure",
        log_file=str(settings.log_file),
        cache_dir=str(settings.cache_dir),
    )

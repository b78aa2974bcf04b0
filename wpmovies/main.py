"""
Point d'entrée CLI de wpmovies.

Configure le logging et expose l'unique commande de migration :
    wpmovies chemin/vers/export.xml
"""

import typer
from loguru import logger

from .adapters.cli.commands import convert
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="wpmovies",
    help="Migration d'articles WordPress en fiches films enrichies (TMDB)",
    add_completion=False,
)
container = Container()

# Commande unique : typer l'execute sans sous-commande
app.command()(convert)


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(settings)

    logger.debug("Démarrage de wpmovies", version="0.1.0")

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()

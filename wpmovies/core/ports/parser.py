"""
Interface port pour la lecture des exports de blog.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from wpmovies.core.entities.post import RawPost


class IExportParser(ABC):
    """
    Interface pour le parsing d'un export de CMS en articles bruts.

    L'implementation par defaut lit le format WXR de WordPress.
    """

    @abstractmethod
    def parse(self, export_path: Path) -> list[RawPost]:
        """
        Lit un export et retourne les articles dans l'ordre du document.

        Args:
            export_path: Chemin du fichier d'export

        Retourne:
            Liste de RawPost (vide si le canal ne contient aucun item)

        Raises:
            ValueError: Si le document n'a pas la structure attendue
        """
        ...

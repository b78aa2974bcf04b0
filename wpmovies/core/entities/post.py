"""
Entités article.

Un RawPost est un item de l'export WordPress tel que lu par le parser.
Un MoviePost est la fiche produite par la migration, enrichie avec les
metadonnees TMDB lorsque l'article porte un tmdb_id.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional


@dataclass
class RawPost:
    """
    Item brut issu de l'export WordPress.

    Attributs :
        pub_date : Date de publication telle qu'ecrite dans l'export (RFC 822)
        content : Contenu HTML de l'article (content:encoded)
        categories : Nicenames des categories WordPress
        postmeta : Paires cle/valeur des wp:postmeta
    """

    pub_date: str
    content: str = ""
    categories: list[str] = field(default_factory=list)
    postmeta: dict[str, str] = field(default_factory=dict)

    def get_meta_value(self, meta_key: str) -> Optional[str]:
        """Retourne la valeur d'une postmeta, ou None si absente ou vide."""
        value = self.postmeta.get(meta_key)
        return value if value else None


@dataclass
class MoviePost:
    """
    Fiche film issue de la migration d'un article.

    Les champs title/imdb_id/poster_path/release_date/genres proviennent de
    TMDB quand l'article a un tmdb_id. Sinon, imdb_id est repris depuis les
    postmeta et missing_tmdb_id est positionne.

    Attributs :
        date : Date de publication de l'article
        content : Contenu HTML
        tmdb_id : Identifiant TMDB (None si absent de l'export)
        location : Lieu de visionnage (home, theater, plane)
        frequency : Frequence de visionnage (first, functional-first, repeat, regular)
        features : Autres categories de l'article
        poster_file : Chemin local de l'affiche une fois telechargee
        missing_tmdb_id : True si l'article n'a pas de tmdb_id
    """

    date: Optional[datetime]
    content: str = ""
    tmdb_id: Optional[str] = None
    location: Optional[str] = None
    frequency: Optional[str] = None
    features: list[str] = field(default_factory=list)
    title: Optional[str] = None
    imdb_id: Optional[str] = None
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    genres: list[str] = field(default_factory=list)
    poster_file: Optional[Path] = None
    missing_tmdb_id: bool = False

    def apply_movie_info(self, info: dict[str, Any]) -> None:
        """Fusionne les champs pertinents d'une fiche TMDB dans l'article."""
        for key, value in info.items():
            setattr(self, key, value)

    def to_dict(self) -> dict[str, Any]:
        """Serialise la fiche en dict compatible JSON."""
        return {
            "date": self.date.isoformat() if self.date else None,
            "content": self.content,
            "tmdb_id": self.tmdb_id,
            "location": self.location,
            "frequency": self.frequency,
            "features": list(self.features),
            "title": self.title,
            "imdb_id": self.imdb_id,
            "poster_path": self.poster_path,
            "release_date": self.release_date,
            "genres": list(self.genres),
            "poster_file": str(self.poster_file) if self.poster_file else None,
            "missing_tmdb_id": self.missing_tmdb_id,
        }

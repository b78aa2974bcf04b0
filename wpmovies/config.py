"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe WPMOVIES_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est optionnelle : sans elle, seuls les articles déjà en cache
peuvent être enrichis.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de wpmovies/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe WPMOVIES_.
    Exemple : WPMOVIES_CACHE_TTL_DAYS=7

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="WPMOVIES_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Clé API TMDB (v3 ou token v4)
    tmdb_api_key: Optional[str] = Field(default=None)
    request_timeout: float = Field(default=30.0, gt=0)

    # Cache disque
    cache_dir: Path = Field(default=Path("tmdb_cache"))
    cache_ttl_days: int = Field(default=30, ge=1)

    # Migration
    poster_size: str = Field(default="original")
    max_concurrency: int = Field(default=8, ge=1)
    shutdown_grace_seconds: float = Field(default=5.0, ge=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/wpmovies.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def cache_ttl_seconds(self) -> int:
        """TTL du cache exprimé en secondes."""
        return self.cache_ttl_days * 24 * 60 * 60

    @property
    def configuration_cache_dir(self) -> Path:
        """Répertoire contenant configuration.json."""
        return self.cache_dir

    @property
    def movie_info_cache_dir(self) -> Path:
        """Répertoire des fiches films (un fichier JSON par tmdb_id)."""
        return self.cache_dir / "movie_info"

    @property
    def posters_cache_dir(self) -> Path:
        """Répertoire des affiches (un sous-répertoire par taille)."""
        return self.cache_dir / "posters"

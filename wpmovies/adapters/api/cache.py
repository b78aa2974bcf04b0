"""
Cache disque avec TTL pour les API externes.

Chaque entree est un fichier sous une racine (un espace de noms par racine) :
- Entrees structurees : payload JSON (fiches films, configuration TMDB)
- Entrees binaires : contenu brut (affiches), valide par la fraicheur seule

La date de modification du fichier est l'unique signal de fraicheur : aucun
horodatage n'est stocke a part. Une entree perimee n'est jamais purgee,
elle est simplement reecrite au prochain telechargement.

Les acces disque bloquants passent par run_in_executor pour ne pas bloquer
la boucle d'evenements.
"""

import asyncio
import json
import os
import tempfile
import time
from functools import partial
from pathlib import Path
from typing import Any, AsyncIterator, BinaryIO, Callable, Optional, Union
from urllib.parse import quote

from loguru import logger

# Une cle est un identifiant simple ou un tuple (ex: (taille, poster_path))
CacheKey = Union[str, tuple[str, ...]]


class CacheError(Exception):
    """
    Erreur de base du cache disque.

    Attributes:
        path: Fichier de cache concerne
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}")


class CacheMissError(CacheError):
    """Aucune entree lisible pour cette cle."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Entree absente du cache")


class CacheStaleError(CacheError):
    """
    Entree plus ancienne que le TTL.

    Attributes:
        age: Age de l'entree en secondes
        ttl: TTL applique en secondes
    """

    def __init__(self, path: Path, age: float, ttl: float) -> None:
        self.age = age
        self.ttl = ttl
        super().__init__(path, f"Entree perimee ({age:.0f}s >= {ttl:.0f}s)")


class CacheParseError(CacheError):
    """Le contenu de l'entree n'est pas du JSON valide."""


class CacheStorageError(CacheError):
    """Echec d'ecriture (disque plein, permissions...)."""


# Prefixe d'un segment relatif dans un cache a chemins absolus : quote()
# ne produit jamais "%%", aucun segment absolu ne peut donc s'y confondre
RELATIVE_PREFIX = "%%"


def _encode_part(part: str) -> str:
    """Encode un segment de cle en nom de fichier sans separateur."""
    encoded = quote(part, safe="")
    if encoded in ("", ".", ".."):
        # Ni segment vide ni remontee de repertoire
        encoded = encoded.replace(".", "%2E") or "%00"
    return encoded


class FileCache:
    """
    Cache fichier asynchrone avec validation par age.

    Les operations de validation levent une sous-classe de CacheError :
    les appelants traitent CacheMissError, CacheStaleError et CacheParseError
    uniformement comme "il faut telecharger".

    Attributes:
        DEFAULT_TTL: Duree de vie par defaut des entrees (30 jours)

    Example:
        cache = FileCache("tmdb_cache/movie_info")
        try:
            info = await cache.validate_entry("603")
        except CacheError:
            info = await client.get_movie_info("603")
            await cache.write("603", info)
    """

    DEFAULT_TTL = 30 * 24 * 60 * 60  # 30 jours en secondes (2592000)

    def __init__(
        self,
        root: Union[str, Path],
        suffix: str = ".json",
        ttl: int = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
        rooted_keys: bool = False,
    ) -> None:
        """
        Initialise le cache sur un repertoire racine.

        Args:
            root: Repertoire racine de l'espace de noms (cree a la premiere ecriture)
            suffix: Extension ajoutee au dernier segment (".json", ou "" pour le binaire)
            ttl: TTL par defaut en secondes
            clock: Source de l'heure courante (epoch en secondes)
            rooted_keys: Dernier segment de cle ecrit comme un chemin TMDB
                (ex: "/poster.jpg" stocke sous "poster.jpg")
        """
        self._root = Path(root)
        self._suffix = suffix
        self._ttl = ttl
        self._clock = clock
        self._rooted_keys = rooted_keys

    @property
    def root(self) -> Path:
        """Repertoire racine de l'espace de noms."""
        return self._root

    @property
    def ttl(self) -> int:
        """TTL par defaut en secondes."""
        return self._ttl

    def path_for(self, key: CacheKey) -> Path:
        """
        Calcule le chemin du fichier associe a une cle.

        Chaque segment est encode (quote sans caractere sur) puis place dans
        un sous-repertoire : deux cles distinctes ne partagent jamais le meme
        fichier.

        Avec rooted_keys, un seul "/" en tete du dernier segment est retire
        (les poster_path TMDB commencent tous par "/"). Un dernier segment
        sans "/" initial recoit alors RELATIVE_PREFIX, pour que "/x.jpg" et
        "x.jpg" restent deux fichiers distincts.

        Args:
            key: Identifiant simple ou tuple de segments

        Returns:
            Chemin du fichier de cache

        Raises:
            ValueError: Si la cle est vide
        """
        parts = [key] if isinstance(key, str) else [str(p) for p in key]
        if not parts:
            raise ValueError("Cle de cache vide")

        encoded = [_encode_part(p) for p in parts[:-1]]
        last = parts[-1]
        if not self._rooted_keys:
            encoded.append(_encode_part(last))
        elif last.startswith("/"):
            encoded.append(_encode_part(last[1:]))
        else:
            encoded.append(RELATIVE_PREFIX + _encode_part(last))
        encoded[-1] += self._suffix
        return self._root.joinpath(*encoded)

    async def validate_freshness(self, key: CacheKey, ttl: Optional[int] = None) -> Path:
        """
        Verifie l'existence et l'age d'une entree, sans lire son contenu.

        Args:
            key: Cle de l'entree
            ttl: TTL specifique a cet appel (defaut: TTL du cache)

        Returns:
            Chemin du fichier si l'entree est fraiche

        Raises:
            CacheMissError: Fichier absent
            CacheStaleError: age >= ttl
        """
        path = self.path_for(key)
        effective_ttl = self._ttl if ttl is None else ttl
        return await self._run(self._check_freshness, path, effective_ttl)

    async def validate_contents(self, key: CacheKey) -> Any:
        """
        Lit une entree et la parse en JSON, sans regarder son age.

        Raises:
            CacheMissError: Fichier absent ou illisible
            CacheParseError: Contenu JSON invalide
        """
        path = self.path_for(key)
        return await self._run(self._read_json, path)

    async def validate_entry(self, key: CacheKey, ttl: Optional[int] = None) -> Any:
        """
        Verifie qu'une entree structuree est utilisable (contenu ET fraicheur).

        Le contenu est verifie en premier : un fichier corrompu echoue en
        CacheParseError quel que soit son age.

        Returns:
            Valeur JSON parsee

        Raises:
            CacheMissError, CacheParseError, CacheStaleError
        """
        value = await self.validate_contents(key)
        await self.validate_freshness(key, ttl)
        return value

    async def write(self, key: CacheKey, value: Any) -> Path:
        """
        Serialise une valeur en JSON et remplace atomiquement l'entree.

        Args:
            key: Cle de l'entree
            value: Valeur serialisable en JSON

        Returns:
            Chemin du fichier ecrit

        Raises:
            CacheStorageError: Valeur non serialisable ou echec disque
        """
        path = self.path_for(key)
        try:
            payload = json.dumps(value).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CacheStorageError(path, f"Valeur non serialisable ({e})") from e

        await self._run(self._write_bytes, path, payload)
        logger.debug(f"Cache ecrit: {path}")
        return path

    async def write_stream(self, key: CacheKey, chunks: AsyncIterator[bytes]) -> Path:
        """
        Ecrit un flux d'octets dans l'entree (contenu binaire).

        Le flux est ecrit dans un fichier temporaire du meme repertoire puis
        renomme atomiquement : une entree n'est jamais visible tronquee. Le
        fichier temporaire est supprime en cas d'erreur.

        Args:
            key: Cle de l'entree
            chunks: Iterateur asynchrone de blocs d'octets

        Returns:
            Chemin du fichier ecrit

        Raises:
            CacheStorageError: Echec disque
            Exception: Toute erreur levee par le flux est propagee
        """
        path = self.path_for(key)
        handle, tmp_path = await self._run(self._open_temp, path)
        try:
            async for chunk in chunks:
                await self._run(self._disk_op, path, handle.write, chunk)
            await self._run(self._disk_op, path, handle.close)
            await self._run(self._disk_op, path, os.replace, tmp_path, path)
        except BaseException:
            self._discard(handle, tmp_path)
            raise

        logger.debug(f"Cache ecrit: {path}")
        return path

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        """Execute une fonction bloquante dans l'executor par defaut."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    def _check_freshness(self, path: Path, ttl: float) -> Path:
        try:
            mtime = path.stat().st_mtime
        except OSError:
            raise CacheMissError(path) from None
        if not path.is_file():
            raise CacheMissError(path)

        age = self._clock() - mtime
        if age >= ttl:
            logger.debug(f"Fichier de cache trop ancien: {path}")
            raise CacheStaleError(path, age, ttl)
        return path

    def _read_json(self, path: Path) -> Any:
        try:
            raw = path.read_bytes()
        except OSError:
            raise CacheMissError(path) from None

        try:
            return json.loads(raw)
        except ValueError as e:
            # JSONDecodeError et UnicodeDecodeError
            raise CacheParseError(path, f"Contenu invalide ({e})") from e

    def _write_bytes(self, path: Path, payload: bytes) -> None:
        handle, tmp_path = self._open_temp(path)
        try:
            with handle:
                handle.write(payload)
            os.replace(tmp_path, path)
        except OSError as e:
            self._discard(handle, tmp_path)
            raise CacheStorageError(path, f"Ecriture impossible ({e})") from e

    def _open_temp(self, path: Path) -> tuple[BinaryIO, Path]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise CacheStorageError(path, f"Ecriture impossible ({e})") from e
        return os.fdopen(fd, "wb"), Path(tmp_name)

    @staticmethod
    def _disk_op(path: Path, func: Callable[..., Any], *args: Any) -> Any:
        """Execute une operation disque, OSError converti en CacheStorageError."""
        try:
            return func(*args)
        except OSError as e:
            raise CacheStorageError(path, f"Ecriture impossible ({e})") from e

    @staticmethod
    def _discard(handle: BinaryIO, tmp_path: Path) -> None:
        """Ferme et supprime un fichier temporaire abandonne."""
        try:
            handle.close()
        except OSError:
            pass
        tmp_path.unlink(missing_ok=True)

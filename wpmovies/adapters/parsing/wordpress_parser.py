"""
Parser des exports WordPress (format WXR, derive de RSS 2.0).

Structure lue pour chaque item du canal :
- pubDate : date de publication
- content:encoded : contenu HTML
- category[@nicename] : categories et etiquettes
- wp:postmeta/wp:meta_key + wp:meta_value : metadonnees libres (tmdb_id, imdb_id...)

La version du namespace wp (export/1.0, 1.1, 1.2) n'est pas imposee.
"""

from pathlib import Path
from typing import Optional
from xml.etree import ElementTree

from loguru import logger

from wpmovies.core.entities.post import RawPost
from wpmovies.core.ports.parser import IExportParser

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
WP_NS_PREFIX = "http://wordpress.org/export/"


def _split_tag(tag: str) -> tuple[str, str]:
    """Separe '{namespace}local' en (namespace, local)."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


def _is_wp(namespace: str) -> bool:
    return namespace.startswith(WP_NS_PREFIX)


class WordPressExportParser(IExportParser):
    """
    Implementation de IExportParser pour les exports WordPress.

    Example:
        parser = WordPressExportParser()
        for post in parser.parse(Path("export.xml")):
            print(post.pub_date, post.get_meta_value("tmdb_id"))
    """

    def parse(self, export_path: Path) -> list[RawPost]:
        """
        Lit un export WXR et retourne ses items dans l'ordre du document.

        Raises:
            OSError: Fichier illisible
            ValueError: XML invalide ou absence de rss/channel
        """
        try:
            tree = ElementTree.parse(export_path)
        except ElementTree.ParseError as e:
            raise ValueError(f"Export WordPress invalide: {export_path} ({e})") from e

        channel = tree.getroot().find("channel")
        if channel is None:
            raise ValueError(f"Export WordPress sans rss/channel: {export_path}")

        posts = [self._parse_item(item) for item in channel.findall("item")]
        logger.info(f"{len(posts)} article(s) lu(s) depuis {export_path}")
        return posts

    def _parse_item(self, item: ElementTree.Element) -> RawPost:
        """Convertit un element <item> en RawPost."""
        post = RawPost(pub_date="")

        for child in item:
            namespace, local = _split_tag(child.tag)
            if not namespace and local == "pubDate":
                post.pub_date = (child.text or "").strip()
            elif namespace == CONTENT_NS and local == "encoded":
                post.content = child.text or ""
            elif not namespace and local == "category":
                nicename = child.get("nicename")
                if nicename:
                    post.categories.append(nicename)
            elif _is_wp(namespace) and local == "postmeta":
                key, value = self._parse_postmeta(child)
                if key:
                    post.postmeta[key] = value or ""

        return post

    @staticmethod
    def _parse_postmeta(element: ElementTree.Element) -> tuple[Optional[str], Optional[str]]:
        """Extrait (meta_key, meta_value) d'un element wp:postmeta."""
        key = value = None
        for child in element:
            namespace, local = _split_tag(child.tag)
            if not _is_wp(namespace):
                continue
            if local == "meta_key":
                key = (child.text or "").strip()
            elif local == "meta_value":
                value = (child.text or "").strip()
        return key, value

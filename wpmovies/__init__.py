"""
wpmovies - Migration d'articles WordPress vers des fiches films enrichies.

Ce package lit un export WordPress, enrichit chaque article avec les
metadonnees TMDB et telecharge les affiches, en s'appuyant sur un cache
disque avec TTL pour eviter les appels reseau redondants.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports)
- services/ : Couche application (resolveurs, migration)
- adapters/ : Couche infrastructure (CLI, client TMDB, cache, parsing)
"""

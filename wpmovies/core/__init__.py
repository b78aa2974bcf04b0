"""
Couche domaine (core).

Contient les entités métier et les ports (interfaces abstraites).
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, httpx, disque).

Sous-packages :
- entities/ : Entités métier (RawPost, MoviePost)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
"""

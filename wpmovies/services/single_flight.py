"""
Deduplication des operations asynchrones concurrentes par cle.

Plusieurs appelants demandant la meme cle pendant qu'une operation est en
cours partagent cette operation au lieu d'en lancer une nouvelle. Une fois
l'operation terminee (succes ou echec), la cle est liberee : l'appel suivant
relance une operation.
"""

import asyncio
from functools import partial
from typing import Awaitable, Callable, Hashable, TypeVar

T = TypeVar("T")


class SingleFlight:
    """
    Registre des operations en cours, indexe par cle.

    L'operation partagee est protegee par asyncio.shield : l'annulation d'un
    appelant n'annule pas l'operation pour les autres.

    Example:
        flight = SingleFlight()
        results = await asyncio.gather(
            flight.run("603", lambda: client.get_movie_info("603")),
            flight.run("603", lambda: client.get_movie_info("603")),
        )
        # un seul appel a get_movie_info
    """

    def __init__(self) -> None:
        self._pending: dict[Hashable, asyncio.Future] = {}

    def in_flight(self, key: Hashable) -> bool:
        """Indique si une operation est en cours pour cette cle."""
        return key in self._pending

    async def run(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        """
        Execute factory() pour la cle, ou rejoint l'execution deja en cours.

        Args:
            key: Cle de deduplication
            factory: Fabrique de l'awaitable, appelee seulement si rien n'est en cours

        Returns:
            Resultat de l'operation partagee

        Raises:
            Exception: L'erreur de l'operation partagee, pour chaque appelant
        """
        future = self._pending.get(key)
        if future is None:
            future = asyncio.ensure_future(factory())
            self._pending[key] = future
            future.add_done_callback(partial(self._forget, key))
        return await asyncio.shield(future)

    def _forget(self, key: Hashable, future: asyncio.Future) -> None:
        if not future.cancelled():
            # Erreur consideree comme recuperee meme si tous les appelants ont ete annules
            future.exception()
        if self._pending.get(key) is future:
            del self._pending[key]

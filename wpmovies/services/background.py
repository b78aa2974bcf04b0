"""
Taches de fond "best effort" (ecritures de cache).

Les taches sont lancees sans etre attendues par l'appelant. Leurs echecs
sont journalises puis abandonnes. Une reference est conservee jusqu'a la fin
de chaque tache pour qu'elle ne soit pas collectee en cours d'execution.
"""

import asyncio
from functools import partial
from typing import Any, Coroutine, Optional

from loguru import logger


class BackgroundTasks:
    """
    Ensemble de taches de fond suivies.

    Example:
        background = BackgroundTasks()
        background.spawn(cache.write("603", info), "Sauvegarde de 603")
        ...
        await background.drain(timeout=5.0)  # optionnel, en fin de process
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], description: str) -> asyncio.Task:
        """
        Lance une coroutine en tache de fond.

        Args:
            coro: Coroutine a executer
            description: Libelle utilise dans les logs en cas d'echec

        Returns:
            La tache creee (inutile de l'attendre)
        """
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(partial(self._on_done, description))
        return task

    def _on_done(self, description: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"{description}: annulee")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"{description}: {error}")

    async def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Attend la fin des taches en cours, au plus timeout secondes.

        Les taches encore en cours a l'expiration ne sont pas annulees.

        Returns:
            True si toutes les taches sont terminees
        """
        if not self._tasks:
            return True

        _, pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        if pending:
            logger.warning(f"{len(pending)} tache(s) de fond non terminee(s)")
        return not pending

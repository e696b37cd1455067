"""Interface abstraite du lancement de sondes en arriere-plan.

Ce module definit :
    - ProbeLauncher : lance une commande sans en suivre l'issue.

Le balayage ping ne lit jamais le resultat de ses sondes : seul
l'effet de bord sur le cache de voisinage du noyau compte. Cette
interface isole ce canal lateral pour qu'il soit remplace par un
faux dans les tests, sans creation de processus.
"""

from abc import ABC, abstractmethod
from typing import List


class ProbeLauncher(ABC):
    """Interface pour le lancement fire-and-forget de commandes."""

    @abstractmethod
    def launch(self, command: List[str]) -> bool:
        """Lance une commande sans attendre sa fin.

        Args:
            command: Commande sous forme de liste.

        Returns:
            True si le processus a pu etre cree. Le code de
            retour de la commande n'est jamais observe.
        """
        pass

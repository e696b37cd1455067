"""Lanceur de sondes Linux via subprocess.

Les processus sont detaches : ni leur sortie ni leur code de retour
ne sont lus. Les objets Popen abandonnes sont recoltes par le module
subprocess lors des creations suivantes.
"""

import subprocess  # nosec B404
from typing import List

from waybar_lan.commands.base import ProbeLauncher


class LinuxProbeLauncher(ProbeLauncher):
    """Lance des commandes en arriere-plan sans supervision."""

    def launch(self, command: List[str]) -> bool:
        """Cree le processus, sorties redirigees vers /dev/null.

        Args:
            command: Commande sous forme de liste.

        Returns:
            False si le processus n'a pas pu etre cree
            (executable absent, limite de processus atteinte).
        """
        try:
            subprocess.Popen(  # nosec B603
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            return False
        return True

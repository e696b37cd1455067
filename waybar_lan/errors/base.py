"""Interfaces de traitement des erreurs de collecte."""

from abc import ABC, abstractmethod
from typing import List


class ErrorHandler(ABC):
    """Strategie de restitution d'une erreur.

    Les implementations impriment l'objet d'erreur attendu par
    Waybar ou l'enregistrent dans le journal.
    """

    @abstractmethod
    def handle(self, error: Exception) -> None:
        """Restitue l'erreur.

        Args:
            error: Exception ayant interrompu la collecte.
        """


class ErrorHandlerChain:
    """Transmet chaque erreur a tous les handlers, dans l'ordre d'ajout.

    Le CLI enregistre d'abord la sortie Waybar, puis le journal
    lorsqu'un fichier de log est disponible.
    """

    def __init__(self) -> None:
        self.handlers: List[ErrorHandler] = []

    def add_handler(self, handler: ErrorHandler) -> "ErrorHandlerChain":
        """Enregistre un handler et retourne la chaine."""
        self.handlers.append(handler)
        return self

    def handle(self, error: Exception) -> None:
        for handler in self.handlers:
            handler.handle(error)

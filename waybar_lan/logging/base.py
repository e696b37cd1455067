"""Interface abstraite du journal de la collecte reseau.

Tous les composants de collecte recoivent un Logger optionnel ;
sans logger, ils restent silencieux.
"""

from abc import ABC, abstractmethod


class Logger(ABC):
    """Journal des etapes de la collecte."""

    @abstractmethod
    def log_info(self, message: str) -> None:
        """Trace une etape normale (interfaces, voisins, services)."""

    @abstractmethod
    def log_warning(self, message: str) -> None:
        """Trace une source de decouverte degradee ou ignoree."""

    @abstractmethod
    def log_error(self, message: str) -> None:
        """Trace un echec qui interrompt la collecte."""

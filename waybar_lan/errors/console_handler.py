"""
    WaybarErrorHandler (sortie d'erreur lisible par Waybar)
"""
import json
import sys
from typing import Any, Dict, TextIO

from waybar_lan.errors.base import ErrorHandler
from waybar_lan.errors.exceptions import (ApplicationError,
                                          CollectionError,
                                          ConfigurationError)


def build_error_output(error: Exception) -> Dict[str, Any]:
    """Construit l'objet Waybar affiche quand la collecte echoue.

    Args:
        error: L'exception ayant interrompu la collecte.

    Returns:
        Dictionnaire au format Waybar (text, tooltip, alt, class).
    """
    tooltip = f"Unable to fetch network data\n\nError: {error}"
    if isinstance(error, ConfigurationError):
        tooltip += "\n\nCheck the waybar-lan configuration file."
    elif not isinstance(error, ApplicationError):
        tooltip += f"\n\nUnexpected {type(error).__name__}"
    return {
        "text": "🖧 -- Network unavailable",
        "tooltip": tooltip,
        "alt": "error",
        "class": ["error"],
    }


class WaybarErrorHandler(ErrorHandler):
    """Handler qui imprime l'objet d'erreur Waybar en JSON.

    Waybar attend une ligne JSON sur stdout meme en cas d'echec ;
    ce handler garantit que le widget affiche l'erreur plutot que
    de rester vide.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialise le handler.

        Args:
            stream: Flux de sortie (défaut: sys.stdout au moment
                de l'appel).
        """
        self._stream = stream

    def handle(self, error: Exception) -> None:
        """Imprime l'erreur au format Waybar.

        Args:
            error: L'exception à afficher.
        """
        stream = self._stream or sys.stdout
        payload = build_error_output(error)
        if isinstance(error, CollectionError):
            payload["class"].append("collection")
        print(json.dumps(payload, ensure_ascii=False), file=stream)

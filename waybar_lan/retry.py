"""Relance de la collecte tant qu'aucun peripherique n'est trouve.

Juste apres le demarrage de la session, le cache de voisinage
peut etre vide. La collecte est alors relancee selon un
calendrier fixe de delais croissants.
"""

import time
from typing import Callable, Optional, Sequence

from waybar_lan.logging.base import Logger
from waybar_lan.network.models import NetworkSnapshot

DEFAULT_DELAYS = (1, 2, 4, 8)


def collect_with_retry(
    collect: Callable[[], NetworkSnapshot],
    delays: Sequence[float] = DEFAULT_DELAYS,
    sleep: Callable[[float], None] = time.sleep,
    logger: Optional[Logger] = None,
) -> NetworkSnapshot:
    """Collecte, puis recollecte apres chaque delai si besoin.

    Soit len(delays) + 1 tentatives au maximum. Une exception
    levee par collect interrompt immediatement les relances.

    Args:
        collect: Fonction de collecte.
        delays: Pauses successives en secondes.
        sleep: Fonction de pause.
        logger: Logger optionnel.

    Returns:
        Le premier instantane contenant au moins un peripherique,
        sinon le dernier obtenu.
    """
    snapshot = collect()
    for attempt, delay in enumerate(delays, start=2):
        if snapshot.devices:
            break
        if logger:
            logger.log_info(
                f"Aucun peripherique, tentative {attempt} dans {delay}s"
            )
        sleep(delay)
        snapshot = collect()
    return snapshot

"""Resolution DNS inverse concurrente.

Une recherche par adresse, chacune dans son propre thread daemon.
Un echec ou un depassement du delai global donne un nom inconnu
pour l'adresse concernee uniquement. Une recherche bloquee dans
gethostbyaddr ne retarde pas la fin du processus.
"""

import socket
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from waybar_lan.logging.base import Logger
from waybar_lan.network.models import Hostname

LookupFunction = Callable[[str], Tuple[str, list, list]]


class ReverseResolver:
    """Resout les noms d'hote par DNS inverse.

    Attributes:
        _lookup: Fonction de resolution (socket.gethostbyaddr).
        _timeout: Delai global d'attente des resolutions.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        lookup: LookupFunction = socket.gethostbyaddr,
        timeout: float = 5.0,
        logger: Optional[Logger] = None,
    ) -> None:
        self._lookup = lookup
        self._timeout = timeout
        self._logger = logger

    def lookup(self, ip: str) -> Hostname:
        """Resout une adresse, nom inconnu en cas d'echec."""
        try:
            name, _, _ = self._lookup(ip)
        except (OSError, UnicodeError):
            return Hostname.unknown()
        return Hostname.resolved(name)

    def resolve_all(self, ips: List[str]) -> Dict[str, Hostname]:
        """Resout toutes les adresses en parallele.

        Retourne apres la fin de toutes les recherches, ou a
        l'expiration du delai global ; les recherches encore en
        cours sont alors comptees comme inconnues et abandonnees.

        Args:
            ips: Adresses a resoudre.

        Returns:
            Nom d'hote par adresse, une entree par adresse.
        """
        if not ips:
            return {}
        resolved: Dict[str, Hostname] = {}
        lock = threading.Lock()

        def worker(ip: str) -> None:
            hostname = self.lookup(ip)
            with lock:
                resolved[ip] = hostname

        threads = []
        for ip in dict.fromkeys(ips):
            thread = threading.Thread(
                target=worker, args=(ip,), name=f"rdns-{ip}", daemon=True
            )
            thread.start()
            threads.append(thread)

        deadline = time.monotonic() + self._timeout
        for thread in threads:
            thread.join(max(0.0, deadline - time.monotonic()))

        with lock:
            results = {
                ip: resolved.get(ip, Hostname.unknown())
                for ip in dict.fromkeys(ips)
            }
            pending = len(results) - len(resolved)

        if pending and self._logger:
            self._logger.log_warning(
                f"DNS inverse : {pending} recherche(s) expiree(s)"
            )
        return results

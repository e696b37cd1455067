"""Decouverte de services mDNS via zeroconf.

Un ServiceBrowser est ouvert par type de service. Les annonces
sont deposees dans une file par abonnement depuis le thread de
zeroconf ; la resolution et l'accumulation se font sur le thread
appelant, dans une boucle bornee par le delai fourni.
"""

import queue
import time
from typing import Callable, Dict, List, Optional

from zeroconf import Error as ZeroconfError
from zeroconf import ServiceBrowser, ServiceStateChange, Zeroconf

from waybar_lan.config.settings import DEFAULT_SERVICE_TYPES
from waybar_lan.errors import DiscoveryError
from waybar_lan.logging.base import Logger
from waybar_lan.network.base import ServiceDiscovery
from waybar_lan.network.models import ServiceInfo
from waybar_lan.network.validators import parse_ip


class _BrowseSubscription:
    """File des noms de services annonces pour un type."""

    def __init__(self, service_type: str) -> None:
        self.service_type = service_type
        self.names: "queue.Queue[str]" = queue.Queue()
        self.browser = None

    def on_service_state_change(
        self,
        zeroconf: Zeroconf,
        service_type: str,
        name: str,
        state_change: ServiceStateChange,
    ) -> None:
        if state_change is ServiceStateChange.Added:
            self.names.put(name)

    def next_name(self, wait: float) -> Optional[str]:
        try:
            return self.names.get(timeout=wait)
        except queue.Empty:
            return None


class ZeroconfServiceDiscovery(ServiceDiscovery):
    """Parcourt un catalogue de types de services mDNS.

    Attributes:
        _service_types: Types parcourus.
        _poll_interval: Attente max par abonnement et par tour.
        _resolve_timeout: Delai max de resolution d'un service.
        _zeroconf_factory: Fabrique de l'instance Zeroconf.
        _browser_factory: Fabrique des ServiceBrowser.
        _clock: Horloge monotone.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        service_types: Optional[List[str]] = None,
        poll_interval: float = 0.1,
        resolve_timeout: float = 1.0,
        zeroconf_factory: Callable[[], Zeroconf] = Zeroconf,
        browser_factory: Callable[..., ServiceBrowser] = ServiceBrowser,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[Logger] = None,
    ) -> None:
        self._service_types = list(
            service_types
            if service_types is not None
            else DEFAULT_SERVICE_TYPES
        )
        self._poll_interval = poll_interval
        self._resolve_timeout = resolve_timeout
        self._zeroconf_factory = zeroconf_factory
        self._browser_factory = browser_factory
        self._clock = clock
        self._logger = logger

    def discover(self, timeout: float) -> Dict[str, List[ServiceInfo]]:
        """Ecoute les annonces pendant timeout secondes.

        Args:
            timeout: Duree totale de l'ecoute en secondes.

        Returns:
            Services par adresse IP (IPv4 et IPv6), non dedoublonnes.

        Raises:
            DiscoveryError: Si Zeroconf ne peut pas etre initialise.
        """
        try:
            zc = self._zeroconf_factory()
        except (OSError, ZeroconfError) as e:
            raise DiscoveryError(
                f"Initialisation mDNS impossible : {e}"
            ) from e

        subscriptions: List[_BrowseSubscription] = []
        try:
            for service_type in self._service_types:
                subscription = self._subscribe(zc, service_type)
                if subscription is not None:
                    subscriptions.append(subscription)
            results = self._poll(zc, subscriptions, timeout)
        finally:
            for subscription in subscriptions:
                subscription.browser.cancel()
            zc.close()

        if self._logger:
            self._logger.log_info(
                f"mDNS : services trouves sur {len(results)} adresse(s)"
            )
        return results

    def _subscribe(
        self, zc: Zeroconf, service_type: str
    ) -> Optional[_BrowseSubscription]:
        subscription = _BrowseSubscription(service_type)
        try:
            subscription.browser = self._browser_factory(
                zc,
                service_type,
                handlers=[subscription.on_service_state_change],
            )
        except (OSError, ValueError, ZeroconfError) as e:
            if self._logger:
                self._logger.log_warning(
                    f"Type mDNS ignore {service_type} : {e}"
                )
            return None
        return subscription

    def _poll(
        self,
        zc: Zeroconf,
        subscriptions: List[_BrowseSubscription],
        timeout: float,
    ) -> Dict[str, List[ServiceInfo]]:
        results: Dict[str, List[ServiceInfo]] = {}
        deadline = self._clock() + timeout
        while self._clock() < deadline:
            for subscription in subscriptions:
                remaining = deadline - self._clock()
                if remaining <= 0:
                    break
                name = subscription.next_name(
                    min(self._poll_interval, remaining)
                )
                if name is not None:
                    self._resolve(
                        zc, subscription.service_type, name,
                        min(self._resolve_timeout, remaining), results,
                    )
            if not subscriptions:
                break
        return results

    def _resolve(
        self,
        zc: Zeroconf,
        service_type: str,
        name: str,
        timeout: float,
        results: Dict[str, List[ServiceInfo]],
    ) -> None:
        """Resout un service et l'ajoute pour chaque adresse annoncee.

        Un nom d'instance refuse par zeroconf est ignore.
        """
        try:
            info = zc.get_service_info(
                service_type, name, timeout=int(timeout * 1000)
            )
        except ZeroconfError as e:
            if self._logger:
                self._logger.log_warning(f"Service mDNS ignore {name} : {e}")
            return
        if info is None:
            return
        service = ServiceInfo(
            service_type=service_type,
            instance_name=name,
            port=info.port or 0,
        )
        for address in info.parsed_addresses():
            ip = parse_ip(address.split("%", 1)[0])
            if ip is not None:
                results.setdefault(str(ip), []).append(service)

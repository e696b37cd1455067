"""Orchestration d'une collecte complete du reseau local.

Pipeline : interfaces -> balayage ping -> table de voisinage ->
{mDNS, SSDP} en parallele -> fusion (avec DNS inverse) ->
passerelle et serveurs DNS -> instantane immuable.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional

from waybar_lan.commands.launcher import LinuxProbeLauncher
from waybar_lan.config.settings import AppSettings
from waybar_lan.errors import DiscoveryError
from waybar_lan.logging.base import Logger
from waybar_lan.network.base import (
    DeviceDiscovery,
    DnsServerReader,
    InterfaceEnumerator,
    NeighborTableReader,
    RouteTableReader,
    ServiceDiscovery,
)
from waybar_lan.network.fusion import IdentityFusionEngine
from waybar_lan.network.interfaces import PsutilInterfaceEnumerator
from waybar_lan.network.mdns import ZeroconfServiceDiscovery
from waybar_lan.network.models import NetworkSnapshot
from waybar_lan.network.pinger import SubnetPinger
from waybar_lan.network.proc_parsers import (
    LinuxNeighborTableReader,
    LinuxRouteTableReader,
    ResolverConfigReader,
)
from waybar_lan.network.resolver import ReverseResolver
from waybar_lan.network.ssdp import SsdpDeviceDiscovery


class NetworkCollector:
    """Produit un NetworkSnapshot par appel a collect().

    Aucun etat n'est conserve entre deux collectes.

    Attributes:
        _interfaces: Enumerateur d'interfaces.
        _pinger: Balayage ping.
        _neighbors: Lecteur de la table de voisinage.
        _mdns: Decouverte mDNS.
        _ssdp: Decouverte SSDP.
        _fusion: Moteur de fusion.
        _routes: Lecteur de la passerelle par defaut.
        _dns_servers: Lecteur des serveurs DNS.
        _mdns_timeout: Duree de l'ecoute mDNS (s).
        _ssdp_timeout: Duree de l'ecoute SSDP (s).
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        interfaces: InterfaceEnumerator,
        pinger: SubnetPinger,
        neighbors: NeighborTableReader,
        mdns: ServiceDiscovery,
        ssdp: DeviceDiscovery,
        fusion: IdentityFusionEngine,
        routes: RouteTableReader,
        dns_servers: DnsServerReader,
        mdns_timeout: float = 3.0,
        ssdp_timeout: float = 2.0,
        logger: Optional[Logger] = None,
    ) -> None:
        self._interfaces = interfaces
        self._pinger = pinger
        self._neighbors = neighbors
        self._mdns = mdns
        self._ssdp = ssdp
        self._fusion = fusion
        self._routes = routes
        self._dns_servers = dns_servers
        self._mdns_timeout = mdns_timeout
        self._ssdp_timeout = ssdp_timeout
        self._logger = logger

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        logger: Optional[Logger] = None,
    ) -> "NetworkCollector":
        """Assemble un collecteur Linux depuis la configuration.

        Args:
            settings: Configuration validee.
            logger: Logger optionnel transmis aux composants.

        Returns:
            Collecteur pret a l'emploi.
        """
        discovery = settings.discovery
        paths = settings.paths
        return cls(
            interfaces=PsutilInterfaceEnumerator(logger=logger),
            pinger=SubnetPinger(
                LinuxProbeLauncher(),
                ping_timeout=discovery.ping_timeout,
                grace_period=discovery.ping_grace_period,
                logger=logger,
            ),
            neighbors=LinuxNeighborTableReader(
                paths.neighbor_table, logger=logger
            ),
            mdns=ZeroconfServiceDiscovery(
                service_types=discovery.service_types,
                poll_interval=discovery.mdns_poll_interval,
                resolve_timeout=discovery.mdns_resolve_timeout,
                logger=logger,
            ),
            ssdp=SsdpDeviceDiscovery(
                retransmissions=discovery.ssdp_retransmissions,
                send_interval=discovery.ssdp_send_interval,
                logger=logger,
            ),
            fusion=IdentityFusionEngine(
                ReverseResolver(timeout=discovery.dns_timeout, logger=logger),
                logger=logger,
            ),
            routes=LinuxRouteTableReader(paths.route_table),
            dns_servers=ResolverConfigReader(
                paths.resolv_conf, logger=logger
            ),
            mdns_timeout=discovery.mdns_timeout,
            ssdp_timeout=discovery.ssdp_timeout,
            logger=logger,
        )

    def collect(self) -> NetworkSnapshot:
        """Execute le pipeline complet.

        Returns:
            L'instantane du reseau.

        Raises:
            CollectionError: Si les interfaces, la table de
                voisinage ou la table de routage sont illisibles.
        """
        interfaces = self._interfaces.list_interfaces()
        self._pinger.sweep(interfaces)
        devices = self._neighbors.read_devices()

        with ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="discovery"
        ) as executor:
            mdns_future = executor.submit(
                self._discover, "mDNS", self._mdns, self._mdns_timeout
            )
            ssdp_future = executor.submit(
                self._discover, "SSDP", self._ssdp, self._ssdp_timeout
            )
            services = mdns_future.result()
            upnp = ssdp_future.result()

        devices = self._fusion.fuse(devices, services, upnp)
        gateway = self._routes.default_gateway()
        dns_servers = self._dns_servers.dns_servers()

        snapshot = NetworkSnapshot(
            interfaces=interfaces,
            devices=devices,
            gateway=gateway,
            dns_servers=dns_servers,
        )
        if self._logger:
            self._logger.log_info(
                f"Collecte terminee : {len(snapshot.devices)} "
                f"peripherique(s)"
            )
        return snapshot

    def _discover(self, label: str, source, timeout: float) -> Dict:
        """Lance une source de decouverte, resultat vide si echec."""
        try:
            return source.discover(timeout)
        except DiscoveryError as e:
            if self._logger:
                self._logger.log_warning(f"Decouverte {label} ignoree : {e}")
            return {}

"""Module reseau : decouverte et identification des peripheriques.

Ce module fournit les sources de decouverte (table de voisinage,
balayage ping, mDNS, SSDP, DNS inverse), le moteur de fusion
d'identite, le collecteur et les rendus de l'instantane.
"""

from waybar_lan.network.base import (
    DeviceDiscovery,
    DnsServerReader,
    InterfaceEnumerator,
    NeighborTableReader,
    RouteTableReader,
    ServiceDiscovery,
    SnapshotReporter,
)
from waybar_lan.network.collector import NetworkCollector
from waybar_lan.network.fusion import (
    HOSTNAME_RULES,
    HostnameEvidence,
    IdentityFusionEngine,
    mdns_hostname_candidate,
    resolve_hostname,
)
from waybar_lan.network.identity import (
    CLASSIFICATION_RULES,
    ClassificationRule,
    build_identity,
    classify_device,
)
from waybar_lan.network.interfaces import PsutilInterfaceEnumerator
from waybar_lan.network.mdns import ZeroconfServiceDiscovery
from waybar_lan.network.models import (
    ActivityStatus,
    DeviceIdentity,
    DeviceType,
    Gateway,
    Hostname,
    NetworkDevice,
    NetworkInterface,
    NetworkSnapshot,
    ServiceInfo,
    UpnpInfo,
)
from waybar_lan.network.pinger import (
    SubnetPinger,
    generate_subnet_ips,
    unique_subnets,
)
from waybar_lan.network.proc_parsers import (
    LinuxNeighborTableReader,
    LinuxRouteTableReader,
    ResolverConfigReader,
)
from waybar_lan.network.reporter import (
    JsonSnapshotReporter,
    WaybarReporter,
)
from waybar_lan.network.resolver import ReverseResolver
from waybar_lan.network.ssdp import SsdpDeviceDiscovery
from waybar_lan.network.validators import (
    parse_ip,
    validate_ipv4,
    validate_mac,
)

__all__ = [
    # Modeles
    "ActivityStatus",
    "DeviceIdentity",
    "DeviceType",
    "Gateway",
    "Hostname",
    "NetworkDevice",
    "NetworkInterface",
    "NetworkSnapshot",
    "ServiceInfo",
    "UpnpInfo",
    # Interfaces abstraites
    "DeviceDiscovery",
    "DnsServerReader",
    "InterfaceEnumerator",
    "NeighborTableReader",
    "RouteTableReader",
    "ServiceDiscovery",
    "SnapshotReporter",
    # Sources
    "PsutilInterfaceEnumerator",
    "SubnetPinger",
    "generate_subnet_ips",
    "unique_subnets",
    "LinuxNeighborTableReader",
    "LinuxRouteTableReader",
    "ResolverConfigReader",
    "ZeroconfServiceDiscovery",
    "SsdpDeviceDiscovery",
    "ReverseResolver",
    # Fusion
    "CLASSIFICATION_RULES",
    "ClassificationRule",
    "build_identity",
    "classify_device",
    "HOSTNAME_RULES",
    "HostnameEvidence",
    "IdentityFusionEngine",
    "mdns_hostname_candidate",
    "resolve_hostname",
    # Orchestration et rendu
    "NetworkCollector",
    "JsonSnapshotReporter",
    "WaybarReporter",
    # Validateurs
    "parse_ip",
    "validate_ipv4",
    "validate_mac",
]

"""Modeles de donnees pour la decouverte du reseau local.

Ce module definit les objets valeur manipules par le pipeline :
interfaces locales, peripheriques, etat de resolution du nom
d'hote, services mDNS, descripteurs UPnP, identite deduite et
instantane final du reseau.
"""

import ipaddress
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Tuple

from waybar_lan.network.validators import (
    parse_ip,
    validate_ipv4,
    validate_mac,
)


def _normalize_ip(value: str) -> str:
    """Retourne la forme canonique d'une adresse IPv4/IPv6.

    Raises:
        ValueError: Si la chaine n'est pas une adresse IP.
    """
    parsed = parse_ip(value)
    if parsed is None:
        raise ValueError(f"Adresse IP invalide : {value!r}")
    return str(parsed)


def ip_sort_key(ip: str) -> Tuple[int, int]:
    """Cle de tri numerique, IPv4 avant IPv6."""
    address = ipaddress.ip_address(ip)
    return (address.version, int(address))


class HostnameState(Enum):
    """Etats de la resolution d'un nom d'hote."""

    RESOLVING = "resolving"
    RESOLVED = "resolved"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Hostname:
    """Nom d'hote a trois etats.

    Un nom resolu n'est jamais vide : ``Hostname.resolved("")``
    donne l'etat inconnu.

    Attributes:
        state: Etat de la resolution.
        name: Nom resolu, present uniquement a l'etat RESOLVED.
    """

    state: HostnameState = HostnameState.RESOLVING
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Verifie la coherence entre l'etat et le nom."""
        if self.state is HostnameState.RESOLVED and not self.name:
            raise ValueError("Un nom resolu ne peut pas etre vide.")
        if self.state is not HostnameState.RESOLVED and self.name:
            raise ValueError(
                f"Aucun nom attendu a l'etat {self.state.value}."
            )

    @classmethod
    def resolving(cls) -> "Hostname":
        return cls(HostnameState.RESOLVING)

    @classmethod
    def resolved(cls, name: str) -> "Hostname":
        """Construit un nom resolu, ou inconnu si name est vide."""
        if not name:
            return cls.unknown()
        return cls(HostnameState.RESOLVED, name)

    @classmethod
    def unknown(cls) -> "Hostname":
        return cls(HostnameState.UNKNOWN)

    @property
    def is_resolving(self) -> bool:
        return self.state is HostnameState.RESOLVING

    @property
    def is_resolved(self) -> bool:
        return self.state is HostnameState.RESOLVED

    def __str__(self) -> str:
        if self.state is HostnameState.RESOLVING:
            return "Resolving..."
        if self.state is HostnameState.RESOLVED:
            return self.name or ""
        return "Unknown"


_FRIENDLY_SERVICE_TYPES: Dict[str, str] = {
    "_airplay._tcp.local.": "AirPlay",
    "_ssh._tcp.local.": "SSH",
    "_http._tcp.local.": "HTTP",
    "_https._tcp.local.": "HTTPS",
    "_smb._tcp.local.": "File Sharing",
    "_afpovertcp._tcp.local.": "AFP",
    "_printer._tcp.local.": "Printer",
    "_ipp._tcp.local.": "Printer",
    "_googlecast._tcp.local.": "Chromecast",
    "_homekit._tcp.local.": "HomeKit",
    "_spotify-connect._tcp.local.": "Spotify",
    "_raop._tcp.local.": "AirTunes",
}


@dataclass(frozen=True)
class ServiceInfo:
    """Service annonce en mDNS.

    Attributes:
        service_type: Type complet (ex: "_airplay._tcp.local.").
        instance_name: Nom d'instance annonce.
        port: Port du service.
    """

    service_type: str
    instance_name: str
    port: int

    @property
    def friendly_type(self) -> str:
        """Libelle lisible du type de service."""
        known = _FRIENDLY_SERVICE_TYPES.get(self.service_type)
        if known:
            return known
        stripped = self.service_type
        if stripped.endswith(".local."):
            stripped = stripped[: -len(".local.")]
        return stripped.lstrip("_").split(".")[0]

    def to_dict(self) -> dict:
        return {
            "service_type": self.service_type,
            "instance_name": self.instance_name,
            "port": self.port,
        }


@dataclass(frozen=True)
class UpnpInfo:
    """Descripteur UPnP d'un peripherique, champs tous optionnels."""

    friendly_name: Optional[str] = None
    manufacturer: Optional[str] = None
    model_name: Optional[str] = None
    device_type: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "friendly_name": self.friendly_name,
            "manufacturer": self.manufacturer,
            "model_name": self.model_name,
            "device_type": self.device_type,
        }


class DeviceType(Enum):
    """Categories de peripheriques reconnues.

    Chaque membre porte un libelle d'affichage et un emoji.
    """

    TELEVISION = ("Television", "\U0001f4fa")
    PRINTER = ("Printer", "\U0001f5a8 ")
    ROUTER = ("Router", "\U0001f310")
    COMPUTER = ("Computer", "\U0001f4bb")
    NAS = ("NAS", "\U0001f5c4")
    MOBILE_DEVICE = ("Mobile Device", "\U0001f4de")
    TABLET = ("Tablet", "\U0001f4cb")
    SPEAKER = ("Speaker", "\U0001f50a")
    STREAMING_DEVICE = ("Streaming Device", "\U0001f4fa")
    SMART_HOME = ("Smart Home", "\U0001f3e0")
    UNKNOWN = ("Device", "\U0001f5a5 ")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def emoji(self) -> str:
        return self.value[1]

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class DeviceIdentity:
    """Identite deduite d'un peripherique.

    Attributes:
        device_type: Categorie deduite.
        manufacturer: Fabricant, si connu.
        model: Modele, si connu.
        friendly_name: Nom d'affichage, si connu.
    """

    device_type: DeviceType = DeviceType.UNKNOWN
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    friendly_name: Optional[str] = None

    def format(self) -> str:
        """Nom d'affichage : emoji suivi du fabricant et du modele.

        A defaut, emoji suivi du nom convivial, puis du libelle
        du type.
        """
        emoji = self.device_type.emoji
        parts = [p for p in (self.manufacturer, self.model) if p]
        if parts:
            return f"{emoji} {' '.join(parts)}"
        if self.friendly_name:
            return f"{emoji} {self.friendly_name}"
        return f"{emoji} {self.device_type.label}"

    def to_dict(self) -> dict:
        return {
            "device_type": self.device_type.name.lower(),
            "manufacturer": self.manufacturer,
            "model": self.model,
            "friendly_name": self.friendly_name,
        }


class ActivityStatus(Enum):
    """Fraicheur d'un peripherique, utilisee pour l'affichage."""

    ACTIVE = "active"
    RECENT = "recent"
    IDLE = "idle"
    STALE = "stale"

    @classmethod
    def from_last_seen(
        cls, last_seen: datetime, now: Optional[datetime] = None
    ) -> "ActivityStatus":
        """Calcule le statut depuis la derniere observation.

        Une date dans le futur compte comme une observation
        immediate.
        """
        elapsed = (now or datetime.now()) - last_seen
        if elapsed < timedelta(seconds=30):
            return cls.ACTIVE
        if elapsed < timedelta(minutes=5):
            return cls.RECENT
        if elapsed < timedelta(minutes=30):
            return cls.IDLE
        return cls.STALE

    @property
    def color(self) -> Optional[str]:
        return _ACTIVITY_COLORS[self]

    def colorize(self, text: str) -> str:
        """Entoure text d'une balise Pango coloree."""
        if self.color is None:
            return text
        return f"<span color='{self.color}'>{text}</span>"


_ACTIVITY_COLORS: Dict[ActivityStatus, Optional[str]] = {
    ActivityStatus.ACTIVE: "#00FF00",
    ActivityStatus.RECENT: "#FFFF00",
    ActivityStatus.IDLE: None,
    ActivityStatus.STALE: "#888888",
}


@dataclass(frozen=True)
class NetworkInterface:
    """Interface reseau locale.

    Attributes:
        name: Nom de l'interface (ex: "eth0").
        ip: Adresse IPv4 de l'interface.
        mac: Adresse MAC normalisee, si disponible.
    """

    name: str
    ip: str
    mac: Optional[str] = None

    def __post_init__(self) -> None:
        """Valide l'adresse IPv4 et normalise la MAC."""
        object.__setattr__(self, "ip", str(validate_ipv4(self.ip)))
        if self.mac is not None:
            object.__setattr__(self, "mac", validate_mac(self.mac))

    @property
    def is_loopback(self) -> bool:
        return ipaddress.IPv4Address(self.ip).is_loopback

    def to_dict(self) -> dict:
        return {"name": self.name, "ip": self.ip, "mac": self.mac}


@dataclass
class NetworkDevice:
    """Peripherique decouvert sur le reseau local.

    Cree depuis une ligne de la table de voisinage puis enrichi
    sur place par les etapes suivantes du pipeline.

    Attributes:
        ip: Adresse IP, cle d'identite du peripherique.
        mac: Adresse MAC normalisee.
        interface_name: Interface sur laquelle il a ete vu.
        hostname: Etat de resolution du nom d'hote.
        services: Services mDNS, doublons conserves.
        upnp_info: Descripteur UPnP, si trouve.
        last_seen: Date de derniere observation.
        identity: Identite deduite.
    """

    ip: str
    mac: str
    interface_name: str
    hostname: Hostname = field(default_factory=Hostname.resolving)
    services: List[ServiceInfo] = field(default_factory=list)
    upnp_info: Optional[UpnpInfo] = None
    last_seen: datetime = field(default_factory=datetime.now)
    identity: DeviceIdentity = field(default_factory=DeviceIdentity)

    def __post_init__(self) -> None:
        """Valide l'adresse IP et normalise la MAC."""
        self.ip = _normalize_ip(self.ip)
        self.mac = validate_mac(self.mac)

    def touch(self, now: Optional[datetime] = None) -> None:
        """Met a jour la date de derniere observation."""
        self.last_seen = now or datetime.now()

    def set_hostname(self, hostname: Hostname) -> None:
        """Fixe le nom d'hote final.

        Raises:
            ValueError: Si le nom n'est plus en cours de resolution
                ou si la nouvelle valeur est encore en resolution.
        """
        if not self.hostname.is_resolving:
            raise ValueError(
                f"Nom d'hote de {self.ip} deja fixe : {self.hostname}"
            )
        if hostname.is_resolving:
            raise ValueError(
                "Un nom d'hote ne peut pas revenir en resolution."
            )
        self.hostname = hostname

    def has_service(self, fragment: str) -> bool:
        """Indique si un service contient fragment (sans casse)."""
        needle = fragment.lower()
        return any(
            needle in service.service_type.lower()
            for service in self.services
        )

    def activity_status(
        self, now: Optional[datetime] = None
    ) -> ActivityStatus:
        return ActivityStatus.from_last_seen(self.last_seen, now)

    def build_identity(self) -> DeviceIdentity:
        """Recalcule et stocke l'identite depuis les autres champs."""
        from waybar_lan.network.identity import build_identity

        self.identity = build_identity(self)
        return self.identity

    def to_dict(self) -> dict:
        """Serialise le peripherique en dictionnaire.

        Returns:
            Dictionnaire representant le peripherique.
        """
        return {
            "ip": self.ip,
            "mac": self.mac,
            "interface": self.interface_name,
            "hostname": (
                self.hostname.name
                if self.hostname.is_resolved
                else None
            ),
            "hostname_state": self.hostname.state.value,
            "services": [s.to_dict() for s in self.services],
            "upnp": (
                self.upnp_info.to_dict()
                if self.upnp_info is not None
                else None
            ),
            "last_seen": self.last_seen.isoformat(),
            "identity": self.identity.to_dict(),
            "display_name": self.identity.format(),
        }


@dataclass(frozen=True)
class Gateway:
    """Passerelle par defaut."""

    ip: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "ip", _normalize_ip(self.ip))

    def __str__(self) -> str:
        return self.ip


@dataclass(frozen=True)
class NetworkSnapshot:
    """Resultat complet et immuable d'une collecte.

    Attributes:
        interfaces: Interfaces locales.
        devices: Peripheriques, une seule entree par IP.
        gateway: Passerelle par defaut, si presente.
        dns_servers: Serveurs DNS configures.
    """

    interfaces: Tuple[NetworkInterface, ...] = ()
    devices: Tuple[NetworkDevice, ...] = ()
    gateway: Optional[Gateway] = None
    dns_servers: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Fige les sequences et verifie l'unicite des IP."""
        object.__setattr__(self, "interfaces", tuple(self.interfaces))
        object.__setattr__(self, "devices", tuple(self.devices))
        object.__setattr__(
            self,
            "dns_servers",
            tuple(_normalize_ip(ip) for ip in self.dns_servers),
        )
        seen = set()
        for device in self.devices:
            if device.ip in seen:
                raise ValueError(
                    f"Adresse IP en double dans l'instantane : "
                    f"{device.ip}"
                )
            seen.add(device.ip)

    def devices_by_interface(self) -> Dict[str, List[NetworkDevice]]:
        """Regroupe les peripheriques par nom d'interface."""
        grouped: Dict[str, List[NetworkDevice]] = {}
        for device in self.devices:
            grouped.setdefault(device.interface_name, []).append(device)
        return grouped

    def to_dict(self) -> dict:
        """Serialise l'instantane complet.

        Returns:
            Dictionnaire pret pour json.dumps.
        """
        return {
            "interfaces": [i.to_dict() for i in self.interfaces],
            "devices": [d.to_dict() for d in self.devices],
            "gateway": str(self.gateway) if self.gateway else None,
            "dns_servers": list(self.dns_servers),
        }

"""Lecture des etats reseau exposes par le noyau et le systeme.

Ce module contient des parseurs purs pour /proc/net/arp,
/proc/net/route et /etc/resolv.conf, ainsi que les lecteurs de
fichiers qui les utilisent. Les lignes malformees sont ignorees
silencieusement ; seule l'impossibilite de lire un fichier est
signalee.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from waybar_lan.errors import NeighborTableError, RouteTableError
from waybar_lan.logging.base import Logger
from waybar_lan.network.base import (
    DnsServerReader,
    NeighborTableReader,
    RouteTableReader,
)
from waybar_lan.network.models import Gateway, NetworkDevice
from waybar_lan.network.validators import parse_ip, validate_mac

COMPLETE_FLAG = "0x2"
DEFAULT_DESTINATION = "00000000"


def parse_neighbor_table(
    content: str, now: Optional[datetime] = None
) -> List[NetworkDevice]:
    """Construit les peripheriques depuis le contenu de /proc/net/arp.

    Format : IP, type materiel, flags, MAC, masque, interface.
    Seules les entrees completes (flag 0x2) sont retenues. Une IP
    deja vue garde sa premiere ligne.

    Args:
        content: Contenu du fichier, ligne d'en-tete comprise.
        now: Date d'observation, maintenant par defaut.

    Returns:
        Peripheriques en cours de resolution.
    """
    seen_at = now or datetime.now()
    devices = []
    seen = set()
    for line in content.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 6:
            continue
        if parts[2] != COMPLETE_FLAG:
            continue
        ip = parse_ip(parts[0])
        if ip is None or str(ip) in seen:
            continue
        try:
            mac = validate_mac(parts[3])
        except ValueError:
            continue
        seen.add(str(ip))
        devices.append(
            NetworkDevice(
                ip=str(ip),
                mac=mac,
                interface_name=parts[5],
                last_seen=seen_at,
            )
        )
    return devices


def parse_hex_ip(value: str) -> str:
    """Convertit une adresse hexadecimale petit-boutiste en IPv4.

    Exemple : "0101A8C0" donne "192.168.1.1".

    Raises:
        ValueError: Si value ne fait pas 8 chiffres hexadecimaux.
    """
    if len(value) != 8:
        raise ValueError(f"Longueur invalide : {value!r}")
    octets = bytes.fromhex(value)
    if len(octets) != 4:
        raise ValueError(f"Adresse hexadecimale invalide : {value!r}")
    return ".".join(str(octet) for octet in reversed(octets))


def parse_default_gateway(content: str) -> Optional[Gateway]:
    """Retourne la passerelle de la premiere route par defaut valide.

    Args:
        content: Contenu de /proc/net/route, en-tete comprise.

    Returns:
        La passerelle ou None.
    """
    for line in content.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 3 or parts[1] != DEFAULT_DESTINATION:
            continue
        try:
            return Gateway(parse_hex_ip(parts[2]))
        except ValueError:
            continue
    return None


def parse_dns_servers(content: str) -> List[str]:
    """Extrait les adresses des lignes 'nameserver'.

    Les commentaires, lignes vides et adresses invalides sont
    ignores.
    """
    servers = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        if len(parts) < 2 or parts[0] != "nameserver":
            continue
        ip = parse_ip(parts[1])
        if ip is not None:
            servers.append(str(ip))
    return servers


class LinuxNeighborTableReader(NeighborTableReader):
    """Lit la table ARP du noyau."""

    def __init__(
        self,
        path: str = "/proc/net/arp",
        logger: Optional[Logger] = None,
    ) -> None:
        self._path = Path(path)
        self._logger = logger

    def read_devices(self) -> List[NetworkDevice]:
        """Lit et analyse la table de voisinage.

        Raises:
            NeighborTableError: Si le fichier est illisible.
        """
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise NeighborTableError(
                f"Impossible de lire {self._path} : {e}"
            ) from e
        devices = parse_neighbor_table(content)
        if self._logger:
            self._logger.log_info(
                f"{len(devices)} voisin(s) complet(s) dans {self._path}"
            )
        return devices


class LinuxRouteTableReader(RouteTableReader):
    """Lit la passerelle par defaut dans la table de routage IPv4."""

    def __init__(self, path: str = "/proc/net/route") -> None:
        self._path = Path(path)

    def default_gateway(self) -> Optional[Gateway]:
        """Retourne la passerelle par defaut.

        Raises:
            RouteTableError: Si le fichier est illisible.
        """
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise RouteTableError(
                f"Impossible de lire {self._path} : {e}"
            ) from e
        return parse_default_gateway(content)


class ResolverConfigReader(DnsServerReader):
    """Lit les serveurs DNS de la configuration du resolveur.

    Un fichier illisible donne une liste vide.
    """

    def __init__(
        self,
        path: str = "/etc/resolv.conf",
        logger: Optional[Logger] = None,
    ) -> None:
        self._path = Path(path)
        self._logger = logger

    def dns_servers(self) -> List[str]:
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as e:
            if self._logger:
                self._logger.log_warning(
                    f"Serveurs DNS indisponibles ({self._path}) : {e}"
                )
            return []
        return parse_dns_servers(content)

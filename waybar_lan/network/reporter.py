"""Rendu des instantanes reseau.

Ce module fournit les implementations de SnapshotReporter :
l'objet JSON attendu par un module personnalise de Waybar et
l'export JSON complet de l'instantane.
"""

import html
import ipaddress
import json
from datetime import datetime
from typing import Callable, List, Optional

from waybar_lan.logging.base import Logger
from waybar_lan.network.base import SnapshotReporter
from waybar_lan.network.models import (
    NetworkDevice,
    NetworkInterface,
    NetworkSnapshot,
    ip_sort_key,
)

NETWORK_ICON = "\U0001f5a7"
BRANCH = "  ├─ "
LAST_BRANCH = "  └─ "
PIPE_INDENT = "  │   "
BLANK_INDENT = "      "


def _sort_by_ip(
    devices: List[NetworkDevice],
) -> List[NetworkDevice]:
    """Trie les peripheriques par adresse IP numerique."""
    return sorted(devices, key=lambda d: ip_sort_key(d.ip))


def is_local_address(ip: str) -> bool:
    """Indique si une adresse IPv4 est dans 192.168/16, 10/8 ou 172.16/12."""
    address = ipaddress.ip_address(ip)
    if address.version != 4:
        return False
    return any(
        address in ipaddress.IPv4Network(net)
        for net in ("192.168.0.0/16", "10.0.0.0/8", "172.16.0.0/12")
    )


def device_count_text(count: int) -> str:
    if count == 0:
        return f"{NETWORK_ICON} No devices"
    if count == 1:
        return f"{NETWORK_ICON} 1 device"
    return f"{NETWORK_ICON} {count} devices"


class WaybarReporter(SnapshotReporter):
    """Rapport au format JSON d'un module personnalise Waybar.

    Le tooltip presente un arbre par interface ; le nom de chaque
    peripherique est colore selon sa fraicheur (balisage Pango).

    Attributes:
        _clock: Source de la date courante.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        logger: Optional[Logger] = None,
    ) -> None:
        self._clock = clock
        self._logger = logger

    def build_output(self, snapshot: NetworkSnapshot) -> dict:
        """Construit l'objet text/tooltip/alt/class.

        Args:
            snapshot: Instantane a rendre.

        Returns:
            Dictionnaire pret pour json.dumps.
        """
        count = len(snapshot.devices)
        classes = ["network", "active"] if count else ["network"]
        return {
            "text": device_count_text(count),
            "tooltip": self.build_tooltip(snapshot),
            "alt": "network",
            "class": classes,
        }

    def report(self, snapshot: NetworkSnapshot) -> str:
        """Genere la ligne JSON lue par Waybar.

        Args:
            snapshot: Instantane a rendre.

        Returns:
            Document JSON sur une ligne.
        """
        return json.dumps(self.build_output(snapshot), ensure_ascii=False)

    def build_tooltip(self, snapshot: NetworkSnapshot) -> str:
        if not snapshot.interfaces:
            return "No network interfaces found"

        now = self._clock()
        by_interface = snapshot.devices_by_interface()
        lines: List[str] = []
        for interface in snapshot.interfaces:
            lines.append(self._interface_header(interface))
            devices = by_interface.get(interface.name)
            if devices:
                ordered = _sort_by_ip(devices)
                for index, device in enumerate(ordered):
                    lines.extend(
                        self._device_lines(
                            device,
                            index == len(ordered) - 1,
                            snapshot,
                            now,
                        )
                    )
            else:
                lines.append(f"{LAST_BRANCH}No devices")
            lines.append("")
        return "\n".join(lines).rstrip()

    @staticmethod
    def _interface_header(interface: NetworkInterface) -> str:
        if interface.mac:
            return f"{interface.name}: {interface.ip} ({interface.mac})"
        return f"{interface.name}: {interface.ip}"

    def _device_lines(
        self,
        device: NetworkDevice,
        is_last: bool,
        snapshot: NetworkSnapshot,
        now: datetime,
    ) -> List[str]:
        branch = LAST_BRANCH if is_last else BRANCH
        indent = BLANK_INDENT if is_last else PIPE_INDENT
        name = html.escape(device.identity.format(), quote=False)
        colored = device.activity_status(now).colorize(name)
        lines = [f"{branch}{colored} ({device.ip})"]

        labels = sorted({s.friendly_type for s in device.services})
        if labels:
            lines.append(f"{indent}  Services: {', '.join(labels)}")

        gateway = snapshot.gateway
        if gateway is not None and gateway.ip == device.ip:
            if gateway.ip in snapshot.dns_servers:
                lines.append(f"{indent}  Gateway (also DNS)")
            else:
                lines.append(f"{indent}  Gateway")
            others = [
                self._dns_entry(ip)
                for ip in snapshot.dns_servers
                if ip != gateway.ip
            ]
            if others:
                lines.append(f"{indent}  DNS: {', '.join(others)}")
        return lines

    @staticmethod
    def _dns_entry(ip: str) -> str:
        scope = "local" if is_local_address(ip) else "external"
        return f"{ip} ({scope})"


class JsonSnapshotReporter(SnapshotReporter):
    """Export JSON complet de l'instantane.

    Attributes:
        _logger: Logger optionnel.
    """

    def __init__(
        self, logger: Optional[Logger] = None
    ) -> None:
        self._logger = logger

    def report(self, snapshot: NetworkSnapshot) -> str:
        """Genere un rapport JSON indente de l'instantane.

        Args:
            snapshot: Instantane a rendre.

        Returns:
            Contenu JSON.
        """
        return json.dumps(
            snapshot.to_dict(),
            indent=2,
            ensure_ascii=False,
        )

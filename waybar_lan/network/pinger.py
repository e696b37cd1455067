"""Balayage ICMP des sous-reseaux locaux.

Le balayage sert uniquement a remplir le cache de voisinage du
noyau avant la lecture de /proc/net/arp. Le resultat de chaque
sonde n'est jamais observe : apres le lancement de toutes les
sondes, une courte pause laisse aux reponses le temps d'arriver.
Les hotes lents ou filtres peuvent donc etre manques.
"""

import ipaddress
import time
from typing import Callable, List, Optional

from waybar_lan.commands.base import ProbeLauncher
from waybar_lan.commands.builder import build_ping_command
from waybar_lan.logging.base import Logger
from waybar_lan.network.models import NetworkInterface


def unique_subnets(
    interfaces: List[NetworkInterface],
) -> List[ipaddress.IPv4Address]:
    """Retourne une adresse de base par prefixe /24 distinct.

    Les interfaces loopback sont ignorees. Pour un meme prefixe,
    seule la premiere interface rencontree est conservee.

    Args:
        interfaces: Interfaces locales.

    Returns:
        Adresses des interfaces retenues, dans l'ordre d'origine.
    """
    seen = set()
    bases = []
    for interface in interfaces:
        address = ipaddress.IPv4Address(interface.ip)
        if address.is_loopback:
            continue
        prefix = address.packed[:3]
        if prefix in seen:
            continue
        seen.add(prefix)
        bases.append(address)
    return bases


def generate_subnet_ips(
    base: ipaddress.IPv4Address,
) -> List[ipaddress.IPv4Address]:
    """Genere les adresses .1 a .254 du /24 de base.

    Args:
        base: Une adresse quelconque du sous-reseau.

    Returns:
        Les 254 adresses d'hote, reseau et diffusion exclues.
    """
    prefix = base.packed[:3]
    return [
        ipaddress.IPv4Address(prefix + bytes([host]))
        for host in range(1, 255)
    ]


class SubnetPinger:
    """Lance une sonde ping par adresse des sous-reseaux locaux.

    Attributes:
        _launcher: Canal de lancement des sondes.
        _ping_timeout: Option -W de ping en secondes.
        _grace_period: Pause finale en secondes.
        _sleep: Fonction de pause.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        launcher: ProbeLauncher,
        ping_timeout: int = 1,
        grace_period: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[Logger] = None,
    ) -> None:
        self._launcher = launcher
        self._ping_timeout = ping_timeout
        self._grace_period = grace_period
        self._sleep = sleep
        self._logger = logger

    def sweep(
        self, interfaces: List[NetworkInterface]
    ) -> List[ipaddress.IPv4Address]:
        """Balaye chaque /24 distinct puis attend le delai de grace.

        Args:
            interfaces: Interfaces locales.

        Returns:
            Adresses de base des sous-reseaux balayes.
        """
        bases = unique_subnets(interfaces)
        failed = 0
        for base in bases:
            for ip in generate_subnet_ips(base):
                command = build_ping_command(str(ip), self._ping_timeout)
                if not self._launcher.launch(command):
                    failed += 1

        if self._logger:
            self._logger.log_info(
                f"Balayage ping de {len(bases)} sous-reseau(x) /24"
            )
            if failed:
                self._logger.log_warning(
                    f"{failed} sonde(s) ping non lancee(s)"
                )

        self._sleep(self._grace_period)
        return bases

"""Enumeration des interfaces reseau locales via psutil.

Ce module fournit PsutilInterfaceEnumerator, implementation de
InterfaceEnumerator basee sur psutil.net_if_addrs().
"""

import socket
from typing import Callable, Dict, List, Optional

import psutil

from waybar_lan.errors import InterfaceEnumerationError
from waybar_lan.logging.base import Logger
from waybar_lan.network.base import InterfaceEnumerator
from waybar_lan.network.models import NetworkInterface
from waybar_lan.network.validators import validate_mac


class PsutilInterfaceEnumerator(InterfaceEnumerator):
    """Liste les interfaces ayant au moins une adresse IPv4.

    Seule la premiere adresse IPv4 de chaque interface est
    retenue. L'adresse MAC est omise si elle est absente ou
    invalide (interfaces tunnel, loopback).

    Attributes:
        _addresses: Fonction retournant les adresses par interface.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        addresses: Callable[[], Dict[str, list]] = psutil.net_if_addrs,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise l'enumerateur.

        Args:
            addresses: Source des adresses, psutil par defaut.
            logger: Logger optionnel.
        """
        self._addresses = addresses
        self._logger = logger

    def list_interfaces(self) -> List[NetworkInterface]:
        """Liste les interfaces ayant une adresse IPv4.

        Returns:
            Interfaces dans l'ordre rapporte par le systeme.

        Raises:
            InterfaceEnumerationError: Si psutil echoue.
        """
        try:
            table = self._addresses()
        except (OSError, RuntimeError) as e:
            raise InterfaceEnumerationError(
                f"Impossible d'enumerer les interfaces : {e}"
            ) from e

        interfaces = []
        for name, addrs in table.items():
            ipv4 = next(
                (a.address for a in addrs if a.family == socket.AF_INET),
                None,
            )
            if ipv4 is None:
                continue
            mac = self._find_mac(addrs)
            interfaces.append(NetworkInterface(name=name, ip=ipv4, mac=mac))

        if self._logger:
            self._logger.log_info(
                f"{len(interfaces)} interface(s) IPv4 trouvee(s)"
            )
        return interfaces

    @staticmethod
    def _find_mac(addrs: list) -> Optional[str]:
        for addr in addrs:
            if addr.family != psutil.AF_LINK or not addr.address:
                continue
            try:
                return validate_mac(addr.address)
            except ValueError:
                return None
        return None

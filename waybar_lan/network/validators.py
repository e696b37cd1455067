"""Fonctions de validation pour les donnees reseau.

Ce module fournit des validateurs pour les adresses IPv4/IPv6
et les adresses MAC lues dans les tables du noyau.
"""

import ipaddress
import re
from typing import Optional, Union

IpAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_MAC_PATTERN = re.compile(r"^([0-9A-F]{2}:){5}[0-9A-F]{2}$")


def validate_ipv4(ip: str) -> ipaddress.IPv4Address:
    """Valide et retourne une adresse IPv4.

    Args:
        ip: Adresse IPv4 sous forme de chaine.

    Returns:
        L'adresse IPv4 validee.

    Raises:
        ValueError: Si l'adresse est invalide.
    """
    try:
        return ipaddress.IPv4Address(ip)
    except ipaddress.AddressValueError as exc:
        raise ValueError(f"Adresse IPv4 invalide : {ip!r}") from exc


def parse_ip(value: str) -> Optional[IpAddress]:
    """Convertit une chaine en adresse IPv4 ou IPv6.

    Args:
        value: Adresse sous forme de chaine.

    Returns:
        L'adresse, ou None si la chaine n'en est pas une.
    """
    try:
        return ipaddress.ip_address(value.strip())
    except ValueError:
        return None


def validate_mac(mac: str) -> str:
    """Valide et normalise une adresse MAC.

    Accepte les separateurs ':' et '-' et toute casse.

    Args:
        mac: Adresse MAC sous forme de chaine.

    Returns:
        L'adresse MAC normalisee (XX:XX:XX:XX:XX:XX, majuscules).

    Raises:
        ValueError: Si l'adresse MAC est invalide.
    """
    normalized = mac.strip().upper().replace("-", ":")
    if not _MAC_PATTERN.match(normalized):
        raise ValueError(f"Adresse MAC invalide : {mac!r}")
    return normalized

"""Interfaces abstraites pour le module reseau.

Ce module definit les classes de base abstraites (ABCs) des
sources de donnees du pipeline de decouverte et du rendu de
l'instantane.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from waybar_lan.network.models import (
    Gateway,
    NetworkDevice,
    NetworkInterface,
    NetworkSnapshot,
    ServiceInfo,
    UpnpInfo,
)


class InterfaceEnumerator(ABC):
    """Interface pour l'enumeration des interfaces locales."""

    @abstractmethod
    def list_interfaces(self) -> List[NetworkInterface]:
        """Liste les interfaces ayant une adresse IPv4.

        Returns:
            Liste des interfaces.

        Raises:
            InterfaceEnumerationError: Si l'enumeration echoue.
        """
        pass


class NeighborTableReader(ABC):
    """Interface pour la lecture de la table de voisinage."""

    @abstractmethod
    def read_devices(self) -> List[NetworkDevice]:
        """Lit la table et construit les peripheriques initiaux.

        Returns:
            Peripheriques en cours de resolution.

        Raises:
            NeighborTableError: Si la table est illisible.
        """
        pass


class RouteTableReader(ABC):
    """Interface pour la lecture de la passerelle par defaut."""

    @abstractmethod
    def default_gateway(self) -> Optional[Gateway]:
        """Retourne la passerelle par defaut ou None.

        Raises:
            RouteTableError: Si la table est illisible.
        """
        pass


class DnsServerReader(ABC):
    """Interface pour la lecture des serveurs DNS configures."""

    @abstractmethod
    def dns_servers(self) -> List[str]:
        """Retourne les serveurs DNS, liste vide si indisponible."""
        pass


class ServiceDiscovery(ABC):
    """Interface pour la decouverte de services mDNS."""

    @abstractmethod
    def discover(self, timeout: float) -> Dict[str, List[ServiceInfo]]:
        """Collecte les services annonces pendant timeout secondes.

        Args:
            timeout: Duree totale de l'ecoute en secondes.

        Returns:
            Services par adresse IP, partiels a l'expiration.

        Raises:
            DiscoveryError: Si l'ecoute ne peut pas demarrer.
        """
        pass


class DeviceDiscovery(ABC):
    """Interface pour la decouverte de peripheriques UPnP."""

    @abstractmethod
    def discover(self, timeout: float) -> Dict[str, UpnpInfo]:
        """Collecte les reponses SSDP pendant timeout secondes.

        Args:
            timeout: Duree totale de l'ecoute en secondes.

        Returns:
            Descripteur par adresse IP.

        Raises:
            DiscoveryError: Si la socket ne peut pas etre ouverte.
        """
        pass


class SnapshotReporter(ABC):
    """Interface pour le rendu d'un instantane."""

    @abstractmethod
    def report(self, snapshot: NetworkSnapshot) -> str:
        """Genere le rendu de l'instantane.

        Args:
            snapshot: Instantane a rendre.

        Returns:
            Document texte.
        """
        pass

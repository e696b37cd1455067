"""Fusion des observations en un enregistrement par peripherique.

Trois etapes :
    1. merge : rattache services mDNS et descripteurs UPnP aux
       peripheriques par adresse IP ;
    2. resolve_hostname : applique la priorite des noms d'hote ;
    3. finalize : fixe le nom et calcule l'identite.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from waybar_lan.logging.base import Logger
from waybar_lan.network.models import (
    Hostname,
    NetworkDevice,
    ServiceInfo,
    UpnpInfo,
)
from waybar_lan.network.resolver import ReverseResolver


def mdns_hostname_candidate(
    services: List[ServiceInfo],
) -> Optional[str]:
    """Premier label du nom d'instance du premier service.

    Exemple : "printer.local." donne "printer". Un label vide ou
    egal a "_" donne None.
    """
    if not services:
        return None
    label = services[0].instance_name.split(".")[0]
    if not label or label == "_":
        return None
    return label


@dataclass(frozen=True)
class HostnameEvidence:
    """Sources candidates du nom d'hote d'un peripherique."""

    upnp_friendly_name: Optional[str] = None
    dns: Hostname = Hostname.unknown()
    mdns_name: Optional[str] = None


@dataclass(frozen=True)
class HostnameRule:
    """Regle de priorite : retourne un nom ou None."""

    name: str
    select: Callable[[HostnameEvidence], Optional[Hostname]]


def _from_upnp(evidence: HostnameEvidence) -> Optional[Hostname]:
    if evidence.upnp_friendly_name:
        return Hostname.resolved(evidence.upnp_friendly_name)
    return None


def _from_dns(evidence: HostnameEvidence) -> Optional[Hostname]:
    return evidence.dns if evidence.dns.is_resolved else None


def _from_mdns(evidence: HostnameEvidence) -> Optional[Hostname]:
    if evidence.mdns_name:
        return Hostname.resolved(evidence.mdns_name)
    return None


HOSTNAME_RULES: Tuple[HostnameRule, ...] = (
    HostnameRule("upnp-friendly-name", _from_upnp),
    HostnameRule("reverse-dns", _from_dns),
    HostnameRule("mdns-instance", _from_mdns),
)


def resolve_hostname(
    evidence: HostnameEvidence,
    rules: Tuple[HostnameRule, ...] = HOSTNAME_RULES,
) -> Hostname:
    """Retourne le nom de la premiere regle applicable, sinon inconnu."""
    for rule in rules:
        hostname = rule.select(evidence)
        if hostname is not None:
            return hostname
    return Hostname.unknown()


class IdentityFusionEngine:
    """Fusionne les resultats de decouverte dans les peripheriques.

    Attributes:
        _resolver: Resolveur DNS inverse.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        resolver: ReverseResolver,
        logger: Optional[Logger] = None,
    ) -> None:
        self._resolver = resolver
        self._logger = logger

    def merge(
        self,
        devices: List[NetworkDevice],
        services: Dict[str, List[ServiceInfo]],
        upnp: Dict[str, UpnpInfo],
        now: Optional[datetime] = None,
    ) -> Dict[str, Optional[str]]:
        """Rattache services et descripteurs, sur place.

        Chaque rattachement met a jour la date d'observation.

        Args:
            devices: Peripheriques issus de la table de voisinage.
            services: Services mDNS par adresse IP.
            upnp: Descripteurs UPnP par adresse IP.
            now: Date d'observation, maintenant par defaut.

        Returns:
            Candidat mDNS au nom d'hote, par adresse IP.
        """
        candidates: Dict[str, Optional[str]] = {}
        for device in devices:
            found = services.get(device.ip)
            if found:
                device.services = list(found)
                device.touch(now)
            candidates[device.ip] = mdns_hostname_candidate(
                device.services
            )
            info = upnp.get(device.ip)
            if info is not None:
                device.upnp_info = info
                device.touch(now)
        return candidates

    def finalize(
        self,
        devices: List[NetworkDevice],
        dns: Dict[str, Hostname],
        candidates: Dict[str, Optional[str]],
    ) -> List[NetworkDevice]:
        """Fixe le nom d'hote de chaque peripherique et son identite.

        Args:
            devices: Peripheriques fusionnes, noms en resolution.
            dns: Resultats DNS inverse par adresse IP.
            candidates: Candidats mDNS retournes par merge.

        Returns:
            Les memes peripheriques, completes.
        """
        for device in devices:
            upnp = device.upnp_info
            evidence = HostnameEvidence(
                upnp_friendly_name=upnp.friendly_name if upnp else None,
                dns=dns.get(device.ip, Hostname.unknown()),
                mdns_name=candidates.get(device.ip),
            )
            device.set_hostname(resolve_hostname(evidence))
            device.build_identity()
        return devices

    def fuse(
        self,
        devices: List[NetworkDevice],
        services: Dict[str, List[ServiceInfo]],
        upnp: Dict[str, UpnpInfo],
    ) -> List[NetworkDevice]:
        """Enchaine rattachement, DNS inverse et finalisation."""
        candidates = self.merge(devices, services, upnp)
        dns = self._resolver.resolve_all([d.ip for d in devices])
        if self._logger:
            resolved = sum(1 for h in dns.values() if h.is_resolved)
            self._logger.log_info(
                f"DNS inverse : {resolved}/{len(devices)} nom(s) resolu(s)"
            )
        return self.finalize(devices, dns, candidates)

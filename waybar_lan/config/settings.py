"""Schemas Pydantic de la configuration de waybar-lan.

Chaque section du fichier TOML/JSON correspond a un modele.
Toutes les valeurs ont un defaut : un fichier absent equivaut
a ``AppSettings()``.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

DEFAULT_SERVICE_TYPES: List[str] = [
    "_airplay._tcp.local.",
    "_ssh._tcp.local.",
    "_http._tcp.local.",
    "_smb._tcp.local.",
    "_afpovertcp._tcp.local.",
    "_printer._tcp.local.",
    "_ipp._tcp.local.",
    "_googlecast._tcp.local.",
    "_homekit._tcp.local.",
    "_spotify-connect._tcp.local.",
    "_raop._tcp.local.",
    "_device-info._tcp.local.",
]


class DiscoverySettings(BaseModel):
    """Delais et parametres des sources de decouverte.

    Attributes:
        mdns_timeout: Duree totale du browse mDNS (s).
        mdns_poll_interval: Tranche d'attente par abonnement (s).
        mdns_resolve_timeout: Delai max de resolution d'un service (s).
        ssdp_timeout: Duree de collecte des reponses SSDP (s).
        ssdp_retransmissions: Nombre d'envois du M-SEARCH.
        ssdp_send_interval: Ecart max entre deux envois du M-SEARCH (s).
        ping_timeout: Option -W de ping (s).
        ping_grace_period: Attente apres le balayage ping (s).
        dns_timeout: Delai global des resolutions inverses (s).
        service_types: Types de services mDNS parcourus.
    """

    model_config = {"extra": "forbid"}

    mdns_timeout: float = Field(default=3.0, gt=0)
    mdns_poll_interval: float = Field(default=0.1, gt=0)
    mdns_resolve_timeout: float = Field(default=1.0, gt=0)
    ssdp_timeout: float = Field(default=2.0, gt=0)
    ssdp_retransmissions: int = Field(default=2, ge=1, le=10)
    ssdp_send_interval: float = Field(default=0.1, ge=0)
    ping_timeout: int = Field(default=1, ge=1)
    ping_grace_period: float = Field(default=0.2, ge=0)
    dns_timeout: float = Field(default=5.0, gt=0)
    service_types: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SERVICE_TYPES)
    )

    @field_validator("service_types")
    @classmethod
    def must_be_local_types(cls, v: List[str]) -> List[str]:
        for service_type in v:
            if not service_type.endswith(".local."):
                raise ValueError(
                    f"Type de service mDNS invalide : {service_type!r} "
                    "(doit se terminer par '.local.')"
                )
        return v


class PathSettings(BaseModel):
    """Chemins des tables noyau et de la configuration resolver."""

    model_config = {"extra": "forbid"}

    neighbor_table: str = "/proc/net/arp"
    route_table: str = "/proc/net/route"
    resolv_conf: str = "/etc/resolv.conf"


class RetrySettings(BaseModel):
    """Delais de la boucle de relance quand aucun appareil n'est vu."""

    model_config = {"extra": "forbid"}

    delays: List[float] = Field(default_factory=lambda: [1, 2, 4, 8])

    @field_validator("delays")
    @classmethod
    def must_be_positive(cls, v: List[float]) -> List[float]:
        if any(delay < 0 for delay in v):
            raise ValueError("Les delais de relance doivent etre >= 0")
        return v


class LoggingSettings(BaseModel):
    """Section [logging]."""

    model_config = {"extra": "forbid"}

    file: str = "~/.cache/waybar-lan/waybar-lan.log"
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    console: bool = False

    @field_validator("level")
    @classmethod
    def must_be_known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Niveau de log inconnu : {v!r}")
        return level


class AppSettings(BaseModel):
    """Configuration complete de l'application."""

    model_config = {"extra": "forbid"}

    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)
    paths: PathSettings = Field(default_factory=PathSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

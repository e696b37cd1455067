"""
waybar-lan - Decouverte et identification des peripheriques du LAN.

Modules disponibles:
- logging: Gestion des logs (Logger, FileLogger)
- config: Chargement et validation de la configuration (TOML, JSON)
- errors: Exceptions et handlers d'erreurs
- commands: Lancement des sondes ping (ProbeLauncher, CommandBuilder)
- network: Sources de decouverte, fusion d'identite, collecte et rendu
- retry: Relance de la collecte quand aucun appareil n'est vu
"""

__version__ = "1.0.0"

from waybar_lan.logging import Logger, FileLogger
from waybar_lan.config import (
    AppSettings,
    ConfigLoader,
    FileConfigLoader,
    load_settings,
)
from waybar_lan.errors import (
    ApplicationError,
    CollectionError,
    ConfigurationError,
    DiscoveryError,
    ErrorHandler,
    ErrorHandlerChain,
)
from waybar_lan.commands import (
    CommandBuilder,
    LinuxProbeLauncher,
    ProbeLauncher,
)
from waybar_lan.network import (
    DeviceIdentity,
    DeviceType,
    Hostname,
    IdentityFusionEngine,
    JsonSnapshotReporter,
    NetworkCollector,
    NetworkDevice,
    NetworkSnapshot,
    WaybarReporter,
)
from waybar_lan.retry import collect_with_retry

__all__ = [
    # Logging
    "Logger",
    "FileLogger",
    # Config
    "AppSettings",
    "ConfigLoader",
    "FileConfigLoader",
    "load_settings",
    # Erreurs
    "ApplicationError",
    "CollectionError",
    "ConfigurationError",
    "DiscoveryError",
    "ErrorHandler",
    "ErrorHandlerChain",
    # Commandes
    "CommandBuilder",
    "LinuxProbeLauncher",
    "ProbeLauncher",
    # Reseau
    "DeviceIdentity",
    "DeviceType",
    "Hostname",
    "IdentityFusionEngine",
    "JsonSnapshotReporter",
    "NetworkCollector",
    "NetworkDevice",
    "NetworkSnapshot",
    "WaybarReporter",
    # Relance
    "collect_with_retry",
]

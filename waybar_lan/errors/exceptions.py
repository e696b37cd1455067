"""
Module contenant les exceptions personnalisées de waybar-lan.

Seules les erreurs de lecture des etats systeme (interfaces, table
ARP, table de routage) interrompent une collecte. Les lignes
malformees et les sources de decouverte silencieuses ne levent rien.
"""


class ApplicationError(Exception):
    """Exception de base pour toute l'application."""
    pass


class ConfigurationError(ApplicationError):
    """Fichier de configuration absent, illisible ou invalide."""
    pass


class CollectionError(ApplicationError):
    """Echec fatal d'une collecte : aucun instantane n'est produit."""
    pass


class InterfaceEnumerationError(CollectionError):
    """Impossible d'enumerer les interfaces locales."""
    pass


class NeighborTableError(CollectionError):
    """Impossible de lire la table de voisinage (ARP) du noyau."""
    pass


class RouteTableError(CollectionError):
    """Impossible de lire la table de routage du noyau."""
    pass


class DiscoveryError(ApplicationError):
    """Echec d'initialisation d'une source mDNS ou SSDP.

    Non fatale : le collecteur la convertit en resultat vide.
    """
    pass

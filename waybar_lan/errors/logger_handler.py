"""
    LoggerErrorHandler
"""
from waybar_lan.errors.base import ErrorHandler
from waybar_lan.errors.exceptions import ApplicationError, CollectionError
from waybar_lan.logging.base import Logger


class LoggerErrorHandler(ErrorHandler):
    """Handler pour logger les erreurs.

    Enregistre les erreurs dans le fichier de log via le Logger
    injecté au constructeur.
    """

    def __init__(self, logger: Logger) -> None:
        """Initialise le handler avec un logger.

        Args:
            logger: Instance de Logger pour l'enregistrement des erreurs.
        """
        self.logger = logger

    def handle(self, error: Exception) -> None:
        """Log l'erreur avec un libellé selon sa nature.

        Args:
            error: L'exception à logger.
        """
        if isinstance(error, CollectionError):
            self.logger.log_error(
                f"Collecte abandonnee : {type(error).__name__}: {error}"
            )
        elif isinstance(error, ApplicationError):
            self.logger.log_error(f"{type(error).__name__}: {error}")
        else:
            self.logger.log_error(
                f"Erreur inattendue: {type(error).__name__}: {error}"
            )

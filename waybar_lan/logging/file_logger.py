"""Journal fichier de waybar-lan.

stdout est reserve a la ligne JSON lue par Waybar : la copie
console optionnelle du journal part donc sur stderr.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from waybar_lan.config.settings import LoggingSettings
from waybar_lan.logging.base import Logger


class FileLogger(Logger):
    """Logger ecrivant dans un fichier, vide apres chaque message.

    Un logger nomme est partage par fichier : deux instances sur
    le meme chemin reutilisent les memes handlers.

    Attributes:
        log_file: Chemin absolu du fichier de log.
        logger: Logger standard sous-jacent.
        handler: Handler fichier.
    """

    def __init__(
        self,
        log_file: str,
        settings: Optional[LoggingSettings] = None,
        console_output: Optional[bool] = None,
    ) -> None:
        """Ouvre (ou reprend) le journal.

        Args:
            log_file: Chemin du fichier, '~' accepte.
            settings: Section [logging] (niveau, format, console).
            console_output: Copie sur stderr ; None reprend
                settings.console.

        Raises:
            OSError: Si le repertoire ou le fichier ne peut pas
                etre cree.
        """
        settings = settings or LoggingSettings()
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        self.log_file = str(path)

        if console_output is None:
            console_output = settings.console
        level = logging.getLevelName(settings.level)
        if not isinstance(level, int):
            level = logging.INFO

        self.logger = logging.getLogger(f"waybar_lan:{self.log_file}")
        self.logger.setLevel(level)
        self.logger.propagate = False
        if self.logger.handlers:
            self.handler = self.logger.handlers[0]
        else:
            self.handler = self._attach_handlers(
                level, logging.Formatter(settings.format), console_output
            )

    def _attach_handlers(
        self,
        level: int,
        formatter: logging.Formatter,
        console_output: bool,
    ) -> logging.Handler:
        file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        handlers = [file_handler]
        if console_output:
            handlers.append(logging.StreamHandler(sys.stderr))
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        return file_handler

    @classmethod
    def from_settings(cls, settings: LoggingSettings) -> "FileLogger":
        """Ouvre le journal designe par la section [logging]."""
        return cls(settings.file, settings=settings)

    def _write(self, level: int, message: str) -> None:
        self.logger.log(level, message)
        self.handler.flush()

    def log_info(self, message: str) -> None:
        self._write(logging.INFO, message)

    def log_warning(self, message: str) -> None:
        self._write(logging.WARNING, message)

    def log_error(self, message: str) -> None:
        self._write(logging.ERROR, message)

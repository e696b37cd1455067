"""Module de logging."""

from waybar_lan.logging.base import Logger
from waybar_lan.logging.file_logger import FileLogger

__all__ = [
    "Logger",
    "FileLogger",
]

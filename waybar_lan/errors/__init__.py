"""Module de gestion des errors."""

from waybar_lan.errors.base import ErrorHandler, ErrorHandlerChain
from waybar_lan.errors.exceptions import (ApplicationError,
                                          ConfigurationError,
                                          CollectionError,
                                          InterfaceEnumerationError,
                                          NeighborTableError,
                                          RouteTableError,
                                          DiscoveryError)
from waybar_lan.errors.console_handler import (WaybarErrorHandler,
                                               build_error_output)
from waybar_lan.errors.logger_handler import LoggerErrorHandler


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "CollectionError",
    "InterfaceEnumerationError",
    "NeighborTableError",
    "RouteTableError",
    "DiscoveryError",
    "ErrorHandler",
    "ErrorHandlerChain",
    "WaybarErrorHandler",
    "LoggerErrorHandler",
    "build_error_output",
]

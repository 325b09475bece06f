"""Read-only ticket lookup against an external issue tracker."""

from .interfaces import (
    TrackerAuthError,
    TrackerClientProtocol,
    TrackerConfigError,
    TrackerCredentials,
    TrackerError,
    TrackerSearchError,
)
from .service import DEFAULT_CONFIG_NAME, TicketService

__all__ = [
    "TicketService",
    "DEFAULT_CONFIG_NAME",
    "TrackerClientProtocol",
    "TrackerCredentials",
    "TrackerError",
    "TrackerConfigError",
    "TrackerAuthError",
    "TrackerSearchError",
]

"""Portal management API: client and payload models."""

from portal.core.api.management.client import PortalClient
from portal.core.api.management.models import (
    Cert,
    Forwarder,
    Protocol,
    Route,
    Scheduler,
    Server,
    Service,
    Vip,
)

__all__ = [
    "PortalClient",
    "Service",
    "Server",
    "Cert",
    "Route",
    "Vip",
    "Protocol",
    "Scheduler",
    "Forwarder",
]

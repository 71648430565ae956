"""Client for the Portal load-balancer management API."""

from portal.core.api.http.errors import (
    ClientError,
    ConnectionError,
    DecodeError,
    NotFoundError,
    PortalError,
    RedirectionError,
    ServerError,
    TimeoutError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from portal.core.api.management import (
    Cert,
    Forwarder,
    PortalClient,
    Protocol,
    Route,
    Scheduler,
    Server,
    Service,
    Vip,
)

__version__ = "1.0.0"

__all__ = [
    "PortalClient",
    "PortalError",
    "ConnectionError",
    "TimeoutError",
    "RedirectionError",
    "UnauthorizedError",
    "NotFoundError",
    "ClientError",
    "ServerError",
    "UnexpectedStatusError",
    "DecodeError",
    "Service",
    "Server",
    "Cert",
    "Route",
    "Vip",
    "Protocol",
    "Scheduler",
    "Forwarder",
]

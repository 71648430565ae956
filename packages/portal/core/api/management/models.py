"""Typed payloads for the Portal management API.

These models are a convenience for building request payloads. The client
accepts plain mappings just as well and always returns decoded JSON.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Protocol(str, Enum):
    """Transport protocol of a service."""

    TCP = "tcp"
    UDP = "udp"


class Scheduler(str, Enum):
    """Load-balancing algorithm for a service."""

    ROUND_ROBIN = "rr"
    WEIGHTED_ROUND_ROBIN = "wrr"
    LEAST_CONNECTION = "lc"
    WEIGHTED_LEAST_CONNECTION = "wlc"
    LOCALITY_BASED_LEAST_CONNECTION = "lblc"
    LOCALITY_BASED_LEAST_CONNECTION_REPLICATED = "lblcr"
    DESTINATION_HASHING = "dh"
    SOURCE_HASHING = "sh"
    SHORTEST_EXPECTED_DELAY = "sed"
    NEVER_QUEUE = "nq"


class Forwarder(str, Enum):
    """Method used to forward traffic to a backend server."""

    GATEWAYING = "g"
    IPIP = "i"
    MASQUERADING = "m"


class PortalModel(BaseModel):
    """Base for payload models. Unknown fields pass through to the server."""

    model_config = ConfigDict(extra="allow", use_enum_values=True, populate_by_name=True)


class Server(PortalModel):
    """Backend real server attached to a service."""

    host: str
    port: int = Field(ge=0, le=65535)
    forwarder: Forwarder | None = None
    weight: int | None = Field(default=None, ge=0, description="0 stops new traffic")
    upper_threshold: int | None = Field(
        default=None, ge=0, description="Stop new connections at this count (0 = no limit)"
    )
    lower_threshold: int | None = Field(
        default=None, ge=0, description="Resume when drained to this count (0 = not set)"
    )


class Service(PortalModel):
    """Load-balanced virtual endpoint."""

    host: str
    port: int = Field(ge=0, le=65535)
    type: Protocol = Protocol.TCP
    scheduler: Scheduler = Scheduler.ROUND_ROBIN
    persistence: int | None = Field(
        default=None, ge=0, description="Seconds to keep a client on the same server"
    )
    netmask: str | None = None
    servers: list[Server] | None = None


class Cert(PortalModel):
    """TLS certificate for the HTTP router, as raw PEM strings."""

    cert: str
    key: str = Field(repr=False)


class Route(PortalModel):
    """HTTP routing rule mapping domain and path to backend targets."""

    subdomain: str = "*"
    domain: str = "*"
    path: str
    targets: list[str] = Field(default_factory=list)
    fwdpath: str | None = None
    page: str | None = None


class Vip(PortalModel):
    """Virtual IP bound to a network interface."""

    ip: str
    interface: str
    alias: str

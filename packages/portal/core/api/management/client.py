"""Portal management API client.

One method per resource/verb pair. Every method is a single call to
request(), which sends the payload over a shared, lazily-built connection.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from pydantic import BaseModel

from portal.core.api.http.client import ApiClient
from portal.core.api.http.config import HttpClientConfig
from portal.core.api.http.utils import JsonValue, build_base_url, quote_segment
from portal.core.config.models import PortalConfig

logger = logging.getLogger(__name__)

Payload = Mapping[str, Any] | BaseModel
PayloadList = Sequence[Payload]


class PortalClient:
    """Client for the Portal load-balancer management API.

    Args:
        host: Host or IP of the Portal endpoint, optionally with ":port" (default: config.host)
        token: Auth token sent as X-AUTH-TOKEN (default: config.token)
        config: Optional connection settings (host, token, timeouts, default port)
        transport: Optional custom httpx transport (useful for testing)

    Example:
        >>> with PortalClient("10.0.0.1", token="secret") as portal:
        ...     portal.add_service({"host": "10.0.0.1", "port": 80, "scheduler": "rr"})
        ...     portal.services()
    """

    def __init__(
        self,
        host: str | None = None,
        token: str | None = None,
        *,
        config: PortalConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        base = config or PortalConfig()
        self._config = PortalConfig.model_validate(
            {
                **base.model_dump(),
                "host": host if host is not None else base.host,
                "token": token if token is not None else base.token,
            }
        )
        self._transport = transport
        self._base_url = build_base_url(self._config.host, self._config.port)
        self._connection: ApiClient | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls, config: PortalConfig, *, transport: httpx.BaseTransport | None = None
    ) -> PortalClient:
        """Create a client from a PortalConfig."""
        return cls(config=config, transport=transport)

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def token(self) -> str:
        return self._config.token

    @property
    def config(self) -> PortalConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def connection(self) -> ApiClient:
        """Shared HTTP connection, built on first use."""
        connection = self._connection
        if connection is None:
            with self._lock:
                connection = self._connection
                if connection is None:
                    logger.debug(f"Opening Portal connection to {self._base_url}")
                    connection = ApiClient.with_token(
                        self._http_config(), self._config.token, transport=self._transport
                    )
                    self._connection = connection
        return connection

    def _http_config(self) -> HttpClientConfig:
        return HttpClientConfig(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._config.timeout_s, connect=self._config.connect_timeout_s),
            verify=self._config.verify,
            user_agent=self._config.user_agent,
        )

    def close(self) -> None:
        """Close the connection if it was opened. The next call reopens it."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def __enter__(self) -> PortalClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"PortalClient(host={self.host!r}, base_url={self._base_url!r})"

    def request(self, method: str, path: str, payload: JsonValue | Any = None) -> Any:
        """Send one request to the Portal API.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            payload: JSON body; None is sent as an empty object

        Returns:
            Decoded JSON response body

        Raises:
            PortalError: Subclass matching the transport failure or HTTP status
        """
        return self.connection.request(method, path, payload)

    # Services

    def services(self) -> Any:
        """List registered services."""
        return self.request("GET", "/services")

    def service(self, service_id: str) -> Any:
        """Fetch a single service."""
        return self.request("GET", f"/services/{quote_segment(service_id)}")

    def add_service(self, service: Payload | None = None) -> Any:
        """Add a service.

        service:
            host: IP of the host the service is bound to
            port: Port that the service listens to
            type: tcp or udp
            scheduler: rr, wrr, lc, wlc, lblc, lblcr, dh, sh, sed or nq
            persistence: Seconds to keep a client going to the same server
            netmask: How to group clients with persistence to servers
            servers: Servers attached to the service (optional)
        """
        return self.request("POST", "/services", service if service is not None else {})

    def reset_services(self, services: PayloadList | None = None) -> Any:
        """Replace every registered service with the given list."""
        return self.request("PUT", "/services", services if services is not None else [])

    def remove_service(self, service_id: str) -> Any:
        """Remove a service."""
        return self.request("DELETE", f"/services/{quote_segment(service_id)}")

    # Servers

    def _servers_path(self, service_id: str) -> str:
        return f"/services/{quote_segment(service_id)}/servers"

    def servers(self, service_id: str) -> Any:
        """List the servers of a service."""
        return self.request("GET", self._servers_path(service_id))

    def server(self, service_id: str, server_id: str) -> Any:
        """Fetch a single server of a service."""
        return self.request("GET", f"{self._servers_path(service_id)}/{quote_segment(server_id)}")

    def add_server(self, service_id: str, server: Payload | None = None) -> Any:
        """Add a server to a service.

        server:
            host: IP of the backend
            port: Port the backend listens to
            forwarder: g (gatewaying), i (ipip) or m (masquerading)
            weight: Preference weight; 0 sends no new traffic
            upper_threshold: Stop sending connections at this count. 0 is no limit
            lower_threshold: Resume when drained to this count. 0 is not set
        """
        return self.request(
            "POST", self._servers_path(service_id), server if server is not None else {}
        )

    def reset_servers(self, service_id: str, servers: PayloadList | None = None) -> Any:
        """Replace the servers of a service with the given list."""
        return self.request(
            "PUT", self._servers_path(service_id), servers if servers is not None else []
        )

    def remove_server(self, service_id: str, server_id: str) -> Any:
        """Remove a server from a service."""
        return self.request(
            "DELETE", f"{self._servers_path(service_id)}/{quote_segment(server_id)}"
        )

    # Certs

    def certs(self) -> Any:
        """List installed TLS certs."""
        return self.request("GET", "/certs")

    def register_cert(self, cert: Payload) -> Any:
        """Register a TLS cert with the HTTP router.

        cert:
            cert: Certificate as a raw, unencoded string
            key: Private key as a raw, unencoded string
        """
        return self.request("POST", "/certs", cert)

    def reset_certs(self, certs: PayloadList | None = None) -> Any:
        """Replace every registered cert with the given list."""
        return self.request("PUT", "/certs", certs if certs is not None else [])

    def remove_cert(self, cert: Payload | None = None) -> Any:
        """Remove a cert from the router."""
        return self.request("DELETE", "/certs", cert if cert is not None else {})

    # Routes

    def routes(self) -> Any:
        """List registered HTTP routes."""
        return self.request("GET", "/routes")

    def add_route(self, route: Payload | None = None) -> Any:
        """Register a route with the HTTP router.

        route:
            subdomain: Subdomain of the request. Defaults to *
            domain: Domain of the request. Defaults to *
            path: Path of the incoming request
            targets: Locations to forward the request to
            fwdpath: Path to forward to (optional)
            page: Page to render when domain and path match (optional)
        """
        return self.request("POST", "/routes", route if route is not None else {})

    def reset_routes(self, routes: PayloadList | None = None) -> Any:
        """Replace every registered route with the given list."""
        return self.request("PUT", "/routes", routes if routes is not None else [])

    def remove_route(self, route: Payload | None = None) -> Any:
        """Remove a route from the router."""
        return self.request("DELETE", "/routes", route if route is not None else {})

    # VIPs

    def vips(self) -> Any:
        """List virtual IPs."""
        return self.request("GET", "/vips")

    def add_vip(self, vip: Payload | None = None) -> Any:
        """Bind a virtual IP.

        vip:
            ip: Address to bind
            interface: Network interface (e.g. eth0)
            alias: Interface alias (e.g. eth0:1)
        """
        return self.request("POST", "/vips", vip if vip is not None else {})

    def reset_vips(self, vips: PayloadList | None = None) -> Any:
        """Replace every virtual IP with the given list."""
        return self.request("PUT", "/vips", vips if vips is not None else [])

    def remove_vip(self, vip: Payload | None = None) -> Any:
        """Unbind a virtual IP."""
        return self.request("DELETE", "/vips", vip if vip is not None else {})

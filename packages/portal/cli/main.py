"""Command-line interface for the Portal management API.

Every client operation is exposed as `portal <resource> <action>`:

    portal services list
    portal services add --data '{"host": "10.0.0.1", "port": 80, "scheduler": "rr"}'
    portal servers list svc1
    portal vips reset --data @vips.yaml
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from portal.core.api.http.errors import PortalError
from portal.core.api.management.client import PortalClient
from portal.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    parse_document,
)
from portal.core.config.models import AppConfig
from portal.core.utils.logging import get_logger

console = Console()
err_console = Console(stderr=True)


@dataclass(frozen=True)
class Action:
    """A CLI action bound to one PortalClient method."""

    method: str
    ids: tuple[str, ...]
    data: str | None
    help: str

    def call(self, client: PortalClient, ids: tuple[str, ...], data: Any) -> Any:
        args = (*ids, data) if self.data is not None else ids
        return getattr(client, self.method)(*args)


# resource -> action -> Action. `data` is None, "object" or "list".
COMMANDS: dict[str, dict[str, Action]] = {
    "services": {
        "list": Action("services", (), None, "List services"),
        "get": Action("service", ("service_id",), None, "Show a service"),
        "add": Action("add_service", (), "object", "Add a service"),
        "reset": Action("reset_services", (), "list", "Replace all services"),
        "remove": Action("remove_service", ("service_id",), None, "Remove a service"),
    },
    "servers": {
        "list": Action("servers", ("service_id",), None, "List servers of a service"),
        "get": Action("server", ("service_id", "server_id"), None, "Show a server"),
        "add": Action("add_server", ("service_id",), "object", "Add a server"),
        "reset": Action(
            "reset_servers", ("service_id",), "list", "Replace servers of a service"
        ),
        "remove": Action(
            "remove_server", ("service_id", "server_id"), None, "Remove a server"
        ),
    },
    "certs": {
        "list": Action("certs", (), None, "List certs"),
        "add": Action("register_cert", (), "object", "Register a cert"),
        "reset": Action("reset_certs", (), "list", "Replace all certs"),
        "remove": Action("remove_cert", (), "object", "Remove a cert"),
    },
    "routes": {
        "list": Action("routes", (), None, "List routes"),
        "add": Action("add_route", (), "object", "Add a route"),
        "reset": Action("reset_routes", (), "list", "Replace all routes"),
        "remove": Action("remove_route", (), "object", "Remove a route"),
    },
    "vips": {
        "list": Action("vips", (), None, "List VIPs"),
        "add": Action("add_vip", (), "object", "Add a VIP"),
        "reset": Action("reset_vips", (), "list", "Replace all VIPs"),
        "remove": Action("remove_vip", (), "object", "Remove a VIP"),
    },
}


def read_payload(value: str | None, kind: str) -> Any:
    """Parse a --data argument.

    Args:
        value: Inline JSON, "@path" to a JSON/YAML file, or None
        kind: "object" or "list"

    Returns:
        Parsed payload ({} or [] when value is None)

    Raises:
        ValueError: If the payload cannot be parsed or has the wrong shape
        FileNotFoundError: If an @file does not exist
    """
    if value is None:
        return [] if kind == "list" else {}

    if value.startswith("@"):
        path = Path(value[1:])
        if not path.exists():
            raise FileNotFoundError(f"Payload file does not exist: {path}")
        data = parse_document(path.read_text(encoding="utf-8"), detect_format(path))
    else:
        data = parse_document(value, "json")

    expected = list if kind == "list" else dict
    if not isinstance(data, expected):
        raise ValueError(f"Expected a JSON {'array' if kind == 'list' else 'object'} for --data")
    return data


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="portal",
        description="Portal - load balancer management API client",
    )
    p.add_argument("--config", default=None, help="Path to config file (JSON or YAML)")
    p.add_argument("--host", default=None, help="Portal host, optionally host:port")
    p.add_argument("--token", default=None, help="Auth token (default: $PORTAL_TOKEN)")
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides config)",
    )
    p.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")

    resources = p.add_subparsers(dest="resource", required=True)
    for resource, actions in COMMANDS.items():
        rp = resources.add_parser(resource, help=f"Manage {resource}")
        sub = rp.add_subparsers(dest="action", required=True)
        for name, action in actions.items():
            ap = sub.add_parser(name, help=action.help)
            for id_name in action.ids:
                ap.add_argument(id_name)
            if action.data is not None:
                ap.add_argument(
                    "--data",
                    default=None,
                    help=f"JSON {'array' if action.data == 'list' else 'object'} or @file",
                )

    return p


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Load app config and apply command-line overrides."""
    config = load_app_config(args.config)

    portal_updates: dict[str, Any] = {}
    if args.host:
        portal_updates["host"] = args.host
    if args.token:
        portal_updates["token"] = args.token

    logging_updates: dict[str, Any] = {}
    if args.log_level:
        logging_updates["level"] = args.log_level
    if args.json_logs:
        logging_updates["structured"] = True

    return config.model_copy(
        update={
            "portal": config.portal.model_copy(update=portal_updates),
            "logging": config.logging.model_copy(update=logging_updates),
        }
    )


def run_command(args: argparse.Namespace, client: PortalClient) -> Any:
    """Dispatch parsed arguments to the matching client method."""
    action = COMMANDS[args.resource][args.action]
    ids = tuple(getattr(args, name) for name in action.ids)
    data = read_payload(args.data, action.data) if action.data is not None else None
    return action.call(client, ids, data)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    p = build_arg_parser()
    args = p.parse_args(argv)

    try:
        config = resolve_config(args)
    except Exception as e:
        err_console.print(f"[red]ERROR: Could not load config: {escape(str(e))}[/red]")
        return 1

    configure_logging(config)
    logger = get_logger(__name__, host=config.portal.host)

    with PortalClient.from_config(config.portal) as client:
        try:
            result = run_command(args, client)
        except (ValueError, FileNotFoundError) as e:
            err_console.print(f"[red]ERROR: Invalid --data: {escape(str(e))}[/red]")
            return 1
        except PortalError as e:
            logger.debug(e.describe())
            err_console.print(f"[red]ERROR ({type(e).__name__}): {escape(str(e))}[/red]")
            return 1

    if result is not None:
        console.print_json(data=result)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface for plugcfg-lsp."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from plugcfg.logging import configure_logging, get_logger
from plugcfg.lsp.server import create_server
from plugcfg.registry.catalog import PluginRegistry, format_scope_label
from plugcfg.registry.loader import (
    RegistryFormatError,
    load_default_registry,
    load_registry,
)
from plugcfg.registry.resolver import RegistryResolver


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Options for one server run."""

    transport: Literal["stdio", "tcp"]
    host: str
    port: int
    log_level: str
    log_file: Path | None
    debug: bool
    registry: Path | None
    scope: str | None
    lookup_latency_ms: int
    debounce_ms: int
    retrigger: bool


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse plugcfg-lsp command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        CliArgs with the effective log level resolved.
    """
    parser = argparse.ArgumentParser(
        prog="plugcfg-lsp",
        description="Language server for plugin configuration lines",
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "tcp"],
        default="stdio",
        help="How the client talks to the server (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Address to bind with --transport tcp (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=4389,
        help="Port to bind with --transport tcp (default: 4389)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Verbosity of plugcfg loggers (default: INFO; DEBUG with --debug)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs to this file instead of stderr",
    )
    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Shorthand for --log-level DEBUG; an explicit --log-level wins",
    )
    parser.add_argument(
        "--registry",
        type=Path,
        default=None,
        help="Plugin registry JSON file (default: bundled registry)",
    )
    parser.add_argument(
        "--scope",
        default=None,
        help="Restrict plugin lookups to one registry key",
    )
    parser.add_argument(
        "--lookup-latency-ms",
        type=_non_negative_int,
        default=50,
        help="Simulated plugin lookup latency in milliseconds (default: 50)",
    )
    parser.add_argument(
        "--debounce-ms",
        type=_non_negative_int,
        default=400,
        help="Diagnostics debounce delay in milliseconds (default: 400)",
    )
    parser.add_argument(
        "--no-retrigger",
        dest="retrigger",
        action="store_false",
        help="Do not ask the client to reopen suggestions while typing",
    )

    args = parser.parse_args(argv)

    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    return CliArgs(
        transport=args.transport,
        host=args.host,
        port=args.port,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
        registry=args.registry,
        scope=args.scope,
        lookup_latency_ms=args.lookup_latency_ms,
        debounce_ms=args.debounce_ms,
        retrigger=args.retrigger,
    )


def build_registry(path: Path | None) -> PluginRegistry:
    """Load the registry at path, or the bundled one."""
    if path is None:
        return load_default_registry()
    return load_registry(path)


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the LSP server.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Process exit code: 0 on clean shutdown, 1 on configuration or server failure.
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")

    logger.info("Starting plugcfg-lsp server")
    logger.debug("Configuration: %s", args)

    try:
        registry = build_registry(args.registry)
    except (OSError, RegistryFormatError) as e:
        logger.error("Cannot load plugin registry: %s", e)
        return 1

    if args.scope is not None and args.scope not in registry:
        logger.error(
            "Unknown registry scope %r (available: %s)",
            args.scope,
            ", ".join(registry.scope_keys()) or "none",
        )
        return 1

    logger.info(
        "Loaded %d plugins from scopes: %s",
        len(registry),
        ", ".join(format_scope_label(key) for key in registry.scope_keys()),
    )

    try:
        server = create_server(
            registry=registry,
            resolver=RegistryResolver(registry, latency_ms=args.lookup_latency_ms),
            scope=args.scope,
            debounce_ms=args.debounce_ms,
            retrigger=args.retrigger,
        )

        if args.transport == "stdio":
            logger.info("Starting in stdio mode")
            server.start_io()
        else:
            logger.info("Starting in TCP mode on %s:%d", args.host, args.port)
            server.start_tcp(args.host, args.port)

        return 0

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0

    except Exception:
        logger.critical("Fatal error in server", exc_info=True)
        return 1


def main() -> None:
    sys.exit(run())

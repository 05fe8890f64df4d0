"""CLI entry point for the TourSearch server."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toursearch",
        description="TourSearch — federated search for the tourism site",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Server bind address (overrides config)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=None,
        help="Number of worker processes",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"TourSearch {_get_version()}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the TourSearch server."""
    args = build_parser().parse_args(argv)

    from toursearch.config.settings import Settings
    from toursearch.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    # Apply CLI overrides
    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.workers:
        settings.server.workers = args.workers
    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)

    import uvicorn

    if args.reload or settings.server.workers > 1:
        # Worker processes build their own app and read configuration from
        # the environment and toursearch-config.yaml, not from --config.
        uvicorn.run(
            "toursearch.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            workers=settings.server.workers if not args.reload else 1,
            reload=args.reload,
            log_level=settings.observability.log_level,
        )
        return

    from toursearch.api.app import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.observability.log_level,
    )


def _get_version() -> str:
    """Get the package version."""
    try:
        from toursearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()

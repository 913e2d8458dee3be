"""Command line entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from flare_edge import __version__
from flare_edge.bootstrap import run_deployment
from flare_edge.config import Settings, load_deployment_config
from flare_edge.domain.errors import DeploymentError

logger = logging.getLogger("flare_edge")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flare-edge",
        description="Deploy a local folder to a FlareEdge container.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Deployment configuration JSON (default: ./flare-edge.config.json).",
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        help="Directory archived for ServiceNow forwarding (default: current directory).",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        help="Maximum number of uploads in flight.",
    )
    parser.add_argument(
        "--release-delay",
        type=float,
        help="Seconds before a finished upload frees its slot.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging verbosity.",
    )
    parser.add_argument("--version", action="version", version=f"FlareEdge v{__version__}")
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.config is not None:
        overrides["config_file"] = args.config
    if args.project_dir is not None:
        overrides["project_dir"] = args.project_dir
    if args.concurrency is not None:
        overrides["max_concurrent_uploads"] = args.concurrency
    if args.release_delay is not None:
        overrides["release_delay_seconds"] = args.release_delay
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return Settings(**overrides)


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(level)
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def main(argv: Sequence[str] | None = None) -> int:
    """Run one deployment and return the process exit code."""

    args = _build_parser().parse_args(argv)
    try:
        settings = _settings_from_args(args)
    except ValidationError as exc:
        _configure_logging("INFO")
        logger.error("Invalid settings: %s", exc)
        return 1

    _configure_logging(settings.log_level)
    logger.info("FlareEdge v%s", __version__)

    try:
        config = load_deployment_config(settings.config_file)
        asyncio.run(run_deployment(settings, config))
    except DeploymentError as exc:
        logger.error("%s", exc)
        return 1
    return 0


def run() -> None:
    """Console script entrypoint."""

    sys.exit(main())


__all__ = ["main", "run"]

"""
Command line entry point that serves the terminal API with uvicorn.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

import uvicorn
from fastapi import FastAPI

from project_terminal.core.app.application_factory import build_app
from project_terminal.core.common.exceptions import ConfigurationError
from project_terminal.core.common.logging_utils import configure_logging
from project_terminal.core.config.app_config import AppConfig, LogLevel, load_config


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the project terminal server")
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    parser.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=[level.value for level in LogLevel],
        type=str.upper,
        default=None,
        help="Logging level",
    )
    return parser


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_cli_parser().parse_args(argv)


def apply_cli_args(args: argparse.Namespace) -> AppConfig:
    """Load the configuration and override it with CLI arguments."""
    cfg = load_config(args.config_file)
    if args.host is not None:
        cfg.host = args.host
    if args.port is not None:
        cfg.port = args.port
    if args.log_level is not None:
        cfg.logging.level = LogLevel(args.log_level)
    return cfg


def main(
    argv: list[str] | None = None,
    build_app_fn: Callable[[AppConfig], FastAPI] | None = None,
) -> None:
    args = parse_cli_args(argv)
    try:
        cfg = apply_cli_args(args)
    except ConfigurationError as e:
        sys.stderr.write(f"ERROR: {e.message}\n")
        sys.exit(1)

    configure_logging(cfg.logging)
    logging.getLogger(__name__).info("Starting project terminal on %s:%d", cfg.host, cfg.port)

    app = build_app_fn(cfg) if build_app_fn else build_app(cfg)
    uvicorn.run(app, host=cfg.host, port=cfg.port)


if __name__ == "__main__":
    main()

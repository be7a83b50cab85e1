from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from project_terminal.core import cli
from project_terminal.core.config.app_config import AppConfig, LogLevel


def test_parse_cli_args_normalizes_log_level() -> None:
    args = cli.parse_cli_args(["--port", "9001", "--log-level", "debug"])

    assert args.port == 9001
    assert args.log_level == "DEBUG"
    assert args.host is None
    assert args.config_file is None


def test_invalid_log_level_exits() -> None:
    with pytest.raises(SystemExit):
        cli.parse_cli_args(["--log-level", "loud"])


def test_apply_cli_args_overrides_file(tmp_path: Path) -> None:
    config_file = tmp_path / "terminal.yaml"
    config_file.write_text("host: 0.0.0.0\nport: 8100\n", encoding="utf-8")
    args = cli.parse_cli_args(
        ["--config", str(config_file), "--port", "9002", "--log-level", "warning"]
    )

    with patch.dict("os.environ", {}, clear=True):
        config = cli.apply_cli_args(args)

    assert config.host == "0.0.0.0"
    assert config.port == 9002
    assert config.logging.level is LogLevel.WARNING


def test_main_runs_uvicorn_with_built_app() -> None:
    built: list[AppConfig] = []

    def build(config: AppConfig) -> FastAPI:
        built.append(config)
        return FastAPI()

    with patch.dict("os.environ", {}, clear=True), patch.object(
        cli, "configure_logging"
    ) as configure, patch.object(cli.uvicorn, "run") as run:
        cli.main(["--host", "localhost", "--port", "9003"], build_app_fn=build)

    configure.assert_called_once()
    [config] = built
    run.assert_called_once()
    assert run.call_args.kwargs == {"host": "localhost", "port": 9003}
    assert config.host == "localhost"


def test_main_exits_on_configuration_error(tmp_path: Path) -> None:
    config_file = tmp_path / "terminal.yaml"
    config_file.write_text("port: [oops\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--config", str(config_file)])

    assert exc_info.value.code == 1

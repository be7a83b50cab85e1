import logging
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from project_terminal.core.common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_dotenv_loaded = False


def load_dotenv_once() -> None:
    """Load a ``.env`` file from the working directory the first time only."""
    global _dotenv_loaded
    if _dotenv_loaded:
        return
    load_dotenv()
    _dotenv_loaded = True


def str_to_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    val = val.strip().lower()
    if val in ("true", "1", "yes", "on"):
        return True
    if val in ("false", "0", "no", "off", "none"):
        return False
    return default


def read_yaml_file(path: Path) -> dict[str, Any]:
    """Read a YAML configuration file into a dictionary.

    A missing file is logged and treated as empty; a file with the wrong
    suffix or a non-mapping document is a configuration error.
    """
    if not path.exists():
        logger.warning("Configuration file not found: %s", path)
        return {}

    if path.suffix.lower() not in (".yaml", ".yml"):
        raise ConfigurationError(
            f"Unsupported configuration file format: {path.suffix}. Use YAML (.yaml/.yml)."
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        logger.critical("Error loading configuration file %s: %s", path, exc)
        raise ConfigurationError(
            f"Could not parse configuration file: {path}", details={"error": str(exc)}
        ) from exc

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping: {path}"
        )
    return data

from __future__ import annotations

import configparser
import os
from pathlib import Path

from riskrate_cli.exceptions import ConfigError
from riskrate_cli.models.config import AppConfig

CONFIG_FILENAME = ".riskrate-cli.ini"
_SECTION = "riskrate"
_REQUIRED_KEYS = ("api_url", "bearer_token", "tenant_id")


def config_exists(directory: Path) -> bool:
    return (directory / CONFIG_FILENAME).is_file()


def write_config(directory: Path, config: AppConfig) -> None:
    """Write *config* readable by the owner only; the file holds a bearer token."""
    cp = configparser.ConfigParser(interpolation=None)
    cp[_SECTION] = {key: getattr(config, key) for key in _REQUIRED_KEYS}
    path = directory / CONFIG_FILENAME
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        cp.write(f)
    os.chmod(path, 0o600)


def read_config(directory: Path) -> AppConfig:
    path = directory / CONFIG_FILENAME
    if not path.is_file():
        raise ConfigError(
            "Configuration not found. Run riskrate-cli --init first, "
            "or pass --snapshot FILE to work offline."
        )

    cp = configparser.ConfigParser(interpolation=None)
    try:
        cp.read(str(path), encoding="utf-8")
    except configparser.Error as exc:
        raise ConfigError(
            f"Invalid configuration format in {CONFIG_FILENAME}. "
            "Run riskrate-cli --init to reconfigure."
        ) from exc

    if not cp.has_section(_SECTION):
        raise ConfigError(
            f"Invalid configuration: missing [{_SECTION}] section in {CONFIG_FILENAME}."
        )

    values = {}
    for key in _REQUIRED_KEYS:
        value = cp.get(_SECTION, key, fallback="").strip()
        if not value:
            raise ConfigError(
                f"Invalid configuration: missing or empty '{key}' in {CONFIG_FILENAME}. "
                "Run riskrate-cli --init to reconfigure."
            )
        values[key] = value

    return AppConfig(**values)

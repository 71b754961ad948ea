"""
mdb2sqlite/config.py

YAML configuration file support.

Config file format:
  source:
    path: <access file>
    driver: <ODBC driver name>   # optional
  target:
    path: <sqlite file>
  log_level: INFO                # optional
"""

import os
from dataclasses import dataclass

import yaml

from mdb2sqlite.errors import ConfigError
from mdb2sqlite.source import DEFAULT_DRIVER


@dataclass
class ExportConfig:
    source: str
    target: str
    driver: str = DEFAULT_DRIVER
    log_level: str = None


def load_config_file(config_path: str) -> dict:
    """Load export configuration from YAML file"""
    if not os.path.exists(config_path):
        raise ConfigError(f"Config file '{config_path}' not found")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}") from e

    if not config:
        raise ConfigError(f"Config file '{config_path}' is empty")
    if not isinstance(config, dict):
        raise ConfigError(f"Config file '{config_path}' must contain a mapping")
    return config


def parse_config(config: dict) -> ExportConfig:
    source_config = config.get("source") or {}
    if not isinstance(source_config, dict):
        raise ConfigError("'source' must be a mapping with a 'path' key")
    if not source_config.get("path"):
        raise ConfigError("'source.path' must be specified in config file")

    target_config = config.get("target") or {}
    if not isinstance(target_config, dict):
        raise ConfigError("'target' must be a mapping with a 'path' key")
    if not target_config.get("path"):
        raise ConfigError("'target.path' must be specified in config file")

    return ExportConfig(
        source=source_config["path"],
        target=target_config["path"],
        driver=source_config.get("driver") or DEFAULT_DRIVER,
        log_level=config.get("log_level"),
    )


def read_config(config_path: str) -> ExportConfig:
    return parse_config(load_config_file(config_path))

"""YAML configuration loader for dscpctl."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from dscp_gateway import DEFAULT_ENDPOINT
from dscp_marking.errors import ConfigError
from dscp_marking.render import OutputFormat

DEFAULT_CONFIG_PATH = Path("/etc/dscpctl/config.yaml")
CONFIG_ENV = "DSCPCTL_CONFIG"


@dataclass
class CliConfig:
    endpoint: str = DEFAULT_ENDPOINT
    format: OutputFormat = OutputFormat.TREE
    verbose: int = 0


def _parse_format(value) -> OutputFormat:
    try:
        return OutputFormat(str(value).lower())
    except ValueError:
        raise ConfigError(f"unsupported output format '{value}'") from None


def _parse_verbose(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError("'verbose' must be a non-negative integer")
    return value


def parse_config(data: dict) -> CliConfig:
    config = CliConfig()
    if "endpoint" in data:
        config.endpoint = str(data["endpoint"])
    if "format" in data:
        config.format = _parse_format(data["format"])
    if "verbose" in data:
        config.verbose = _parse_verbose(data["verbose"])
    return config


def load_config(path: Optional[Path] = None) -> CliConfig:
    """Load the CLI configuration.

    ``path`` falls back to ``$DSCPCTL_CONFIG`` and then to
    ``/etc/dscpctl/config.yaml``.  Only the implicit default may be absent.
    """

    explicit = path is not None or CONFIG_ENV in os.environ
    if path is None:
        path = Path(os.environ.get(CONFIG_ENV, DEFAULT_CONFIG_PATH))

    if not path.exists():
        if explicit:
            raise ConfigError(f"configuration file {path} does not exist")
        return CliConfig()

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigError(f"failed to parse {path}: {exc}") from exc

    if data is None:
        return CliConfig()
    if not isinstance(data, dict):
        raise ConfigError("dscpctl configuration must be a mapping")
    return parse_config(data)

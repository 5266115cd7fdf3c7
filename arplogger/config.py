from __future__ import annotations

import argparse
import tomllib
from pathlib import Path
from typing import Any, Dict

from arplogger.log import get_logger

logger = get_logger("config")


def load_config() -> Dict[str, Any]:
    """
    Load configuration from:
    1. ~/.arplogger.toml
    2. ./arplogger.toml

    The local file overrides the global one.
    """
    paths = [
        Path.home() / ".arplogger.toml",
        Path("arplogger.toml"),
    ]

    config: Dict[str, Any] = {}
    for path in paths:
        if path.exists():
            try:
                with path.open("rb") as f:
                    _deep_update(config, tomllib.load(f))
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning("failed to load config %s: %s", path, e)

    return config


def _deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and key in target and isinstance(target[key], dict):
            _deep_update(target[key], value)
        else:
            target[key] = value


def apply_config(parser: argparse.ArgumentParser, config: Dict[str, Any]) -> None:
    """
    Apply configuration values to the argument parser defaults.
    Keys must match argument destinations.

    Example config:
    [global]
    interface = "eth0"

    [output]
    console = true
    log_dir = "/srv/arplogger"
    """
    defaults = dict(config.get("global", {}))

    # Other sections are flattened; the parser namespace is flat anyway.
    for section, values in config.items():
        if section == "global":
            continue
        if isinstance(values, dict):
            defaults.update(values)

    parser.set_defaults(**defaults)

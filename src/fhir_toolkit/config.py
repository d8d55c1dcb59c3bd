# src/fhir_toolkit/config.py
"""
Configuration utilities for fhir_toolkit.

Provides a simple dataclass-based configuration object and a loader that reads
YAML configuration files when present.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .core.version import resolve_version


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Attributes
    ----------
    default_version : str
        FHIR release used when a command does not name one ("R4", "R4B", "R5").
    indent : int
        Indentation of pretty-printed JSON output.
    """

    default_version: str = "R4"
    indent: int = 2


def load_config(path: Optional[Path]) -> AppConfig:
    """
    Load application configuration from a YAML file.

    Parameters
    ----------
    path : Path or None
        Path to a YAML config file. If None, defaults are used.

    Returns
    -------
    AppConfig
        The loaded configuration.

    Raises
    ------
    TypeError
        If the YAML file does not parse to a mapping at the top level, or
        ``indent`` is not an integer.
    ValueError
        If ``indent`` is negative.
    UnknownVersionError
        If ``default_version`` names no supported FHIR release.
    yaml.YAMLError
        If the file is not valid YAML.
    """
    if path is None:
        return AppConfig()

    data: Any = yaml.safe_load(path.read_text())

    if data is None:
        return AppConfig()

    if not isinstance(data, Mapping):
        raise TypeError(
            f"Config file must contain a mapping at top level, "
            f"got {type(data).__name__}. "
            f"Config file: {path}"
        )

    version = resolve_version(str(data.get("default_version", "R4"))).name

    indent = data.get("indent", 2)
    if isinstance(indent, bool) or not isinstance(indent, int):
        raise TypeError(f"indent must be int, got {type(indent).__name__}")
    if indent < 0:
        raise ValueError(f"indent must be non-negative, got {indent}")

    return AppConfig(default_version=version, indent=indent)

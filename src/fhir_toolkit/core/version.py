# src/fhir_toolkit/core/version.py
"""
FHIR release descriptors and lookup.

Each supported release (R4, R4B, R5) is a closed universe with its own
model and builder classes living in its own package. This module names the
releases and loads their packages on demand.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Dict, List, Union

from ..exceptions import UnknownVersionError

__all__ = [
    "FhirVersion",
    "R4",
    "R4B",
    "R5",
    "VERSIONS",
    "available_versions",
    "load_version",
    "resolve_version",
]

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class FhirVersion:
    """
    Immutable descriptor of a FHIR release.

    Attributes
    ----------
    name : str
        Short release name ("R4", "R4B", "R5").
    version : str
        Full version string ("4.0.1", "4.3.0", "5.0.0").
    package : str
        Import path of the package holding the release's models.
    """

    name: str
    version: str
    package: str

    def __str__(self) -> str:
        return f"{self.name} ({self.version})"


R4 = FhirVersion("R4", "4.0.1", "fhir_toolkit.r4")
R4B = FhirVersion("R4B", "4.3.0", "fhir_toolkit.r4b")
R5 = FhirVersion("R5", "5.0.0", "fhir_toolkit.r5")

VERSIONS: Dict[str, FhirVersion] = {v.name: v for v in (R4, R4B, R5)}


def available_versions() -> List[str]:
    """Return the supported release names, oldest first."""
    return list(VERSIONS)


def resolve_version(value: Union[str, FhirVersion]) -> FhirVersion:
    """
    Resolve a release name or version string to a FhirVersion.

    Parameters
    ----------
    value : str or FhirVersion
        "R4", "r4b", "5.0.0" or an existing descriptor.

    Returns
    -------
    FhirVersion

    Raises
    ------
    UnknownVersionError
        If the value names no supported release.
    """
    if isinstance(value, FhirVersion):
        return value
    if not isinstance(value, str):
        raise UnknownVersionError(
            f"FHIR version must be str or FhirVersion, got {type(value).__name__}"
        )
    key = value.strip().upper()
    if key in VERSIONS:
        return VERSIONS[key]
    for v in VERSIONS.values():
        if v.version == value.strip():
            return v
    raise UnknownVersionError(
        f"Unknown FHIR version {value!r} (expected one of "
        f"{', '.join(available_versions())})"
    )


def load_version(value: Union[str, FhirVersion]) -> ModuleType:
    """
    Import and return the package implementing a FHIR release.

    Importing the package registers its concrete resource classes.
    """
    v = resolve_version(value)
    LOG.debug("Loading FHIR %s models from %s", v, v.package)
    return importlib.import_module(v.package)

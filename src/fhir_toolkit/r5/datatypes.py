# src/fhir_toolkit/r5/datatypes.py
"""FHIR R5 datatypes."""

from __future__ import annotations

from . import _fields as f
from .base import BackboneType, DataType

__all__ = ["Extension", "Timing"]


class Extension(DataType):
    """
    Optional Extension Element - found in all resources.

    See https://hl7.org/fhir/R5/extension.html
    """

    _fields = f.EXTENSION


class Timing(BackboneType):
    """A timing schedule; a BackboneType in R5, so it may carry modifierExtension."""

    _fields = f.TIMING

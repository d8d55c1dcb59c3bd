# src/fhir_toolkit/r4/datatypes.py
"""FHIR R4 datatypes."""

from __future__ import annotations

from . import _fields as f
from .base import Element

__all__ = ["Extension"]


class Extension(Element):
    """
    Optional Extension Element - found in all resources.

    ``url`` identifies the meaning; exactly one ``value[x]`` variant (or
    nested ``extension`` entries) carries the content.

    See https://hl7.org/fhir/R4/extension.html
    """

    _fields = f.EXTENSION

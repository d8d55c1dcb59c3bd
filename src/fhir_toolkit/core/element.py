# src/fhir_toolkit/core/element.py
"""
Version-agnostic Element roles.

These classes own no properties; each FHIR release subclasses them and
declares the release's own field sets.
"""

from __future__ import annotations

from typing import Any, List

from .base import FhirBase, with_url

__all__ = ["BackboneElement", "Element"]


class Element(FhirBase):
    """Root of every FHIR datatype and backbone element."""

    def get_extensions(self, url: str) -> List[Any]:
        """Return this element's extensions with the given url, in order."""
        return with_url(vars(self).get("extension"), url)


class BackboneElement(Element):
    """Structured, non-addressable part of a resource."""

    def get_modifier_extensions(self, url: str) -> List[Any]:
        return with_url(vars(self).get("modifierExtension"), url)

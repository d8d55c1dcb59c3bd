# src/fhir_toolkit/r4b/base.py
"""
FHIR R4B base levels.

Element -> BackboneElement and Resource -> DomainResource, each level bound
to its R4B field set. Concrete R4B datatypes, backbones and resources extend
these classes and declare their own level.
"""

from __future__ import annotations

from ..core import element, resource
from ..core.version import R4B
from . import _fields as f

__all__ = ["BackboneElement", "DomainResource", "Element", "Resource"]


class Element(element.Element):
    """Base for every R4B datatype and backbone element: id, extension."""

    fhir_version = R4B
    _fields = f.ELEMENT


class BackboneElement(Element, element.BackboneElement):
    """Element plus modifierExtension."""

    _fields = f.BACKBONE_ELEMENT


class Resource(resource.Resource):
    """Base for every R4B resource: resourceType, id, meta, implicitRules, language."""

    fhir_version = R4B
    _fields = f.RESOURCE


class DomainResource(Resource, resource.DomainResource):
    """Resource plus text, contained, extension, modifierExtension."""

    _fields = f.DOMAIN_RESOURCE

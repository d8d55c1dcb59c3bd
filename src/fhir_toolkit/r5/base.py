# src/fhir_toolkit/r5/base.py
"""
FHIR R5 base levels.

R5 inserts two abstract markers that R4 lacks: DataType between Element and
the general-purpose datatypes, and BackboneType for datatypes that carry
modifierExtension (Timing, Dosage, ...).
"""

from __future__ import annotations

from typing import Any, List

from ..core import element, resource
from ..core.base import with_url
from ..core.version import R5
from . import _fields as f

__all__ = [
    "BackboneElement",
    "BackboneType",
    "DataType",
    "DomainResource",
    "Element",
    "Resource",
]


class Element(element.Element):
    """Base for every R5 datatype and backbone element: id, extension."""

    fhir_version = R5
    _fields = f.ELEMENT


class BackboneElement(Element, element.BackboneElement):
    _fields = f.BACKBONE_ELEMENT


class DataType(Element):
    """Marker for reusable datatypes; owns no properties."""


class BackboneType(DataType):
    """Datatype that may carry modifier extensions."""

    _fields = f.BACKBONE_TYPE

    def get_modifier_extensions(self, url: str) -> List[Any]:
        return with_url(vars(self).get("modifierExtension"), url)


class Resource(resource.Resource):
    """Base for every R5 resource: resourceType, id, meta, implicitRules, language."""

    fhir_version = R5
    _fields = f.RESOURCE


class DomainResource(Resource, resource.DomainResource):
    """Resource plus text, contained, extension, modifierExtension."""

    _fields = f.DOMAIN_RESOURCE

# src/fhir_toolkit/r4/builders.py
"""
FHIR R4 builders.

The base builders bind the release; each concrete builder only names the
model it produces. Field setters (``set_status``, ``add_identifier``,
``set_value("Quantity", q)``, ...) are resolved from the model's fields.
"""

from __future__ import annotations

from ..core import builder
from ..core.version import R4
from .backbones import ObservationComponent, PatientContact
from .datatypes import Extension
from .resources import Basic, Observation, Patient

__all__ = [
    "BackboneElementBuilder",
    "BasicBuilder",
    "DomainResourceBuilder",
    "ElementBuilder",
    "ExtensionBuilder",
    "ObservationBuilder",
    "ObservationComponentBuilder",
    "PatientBuilder",
    "PatientContactBuilder",
    "ResourceBuilder",
]


class ElementBuilder(builder.ElementBuilder):
    fhir_version = R4


class BackboneElementBuilder(ElementBuilder, builder.BackboneElementBuilder):
    pass


class ResourceBuilder(builder.ResourceBuilder):
    fhir_version = R4


class DomainResourceBuilder(ResourceBuilder, builder.DomainResourceBuilder):
    pass


class ExtensionBuilder(ElementBuilder):
    """Builds Extension; ``set_value(type_name, value)`` picks the variant."""

    model = Extension


class PatientContactBuilder(BackboneElementBuilder):
    model = PatientContact


class ObservationComponentBuilder(BackboneElementBuilder):
    model = ObservationComponent


class BasicBuilder(DomainResourceBuilder):
    model = Basic


class PatientBuilder(DomainResourceBuilder):
    model = Patient


class ObservationBuilder(DomainResourceBuilder):
    model = Observation

# src/fhir_toolkit/r5/builders.py
"""
FHIR R5 builders.

Same shape as the other releases, plus BackboneTypeBuilder for the R5
BackboneType datatypes and ObservationTriggeredByBuilder.
"""

from __future__ import annotations

from ..core import builder
from ..core.version import R5
from .backbones import ObservationComponent, ObservationTriggeredBy, PatientContact
from .datatypes import Extension, Timing
from .resources import Basic, Observation, Patient

__all__ = [
    "BackboneElementBuilder",
    "BackboneTypeBuilder",
    "BasicBuilder",
    "DomainResourceBuilder",
    "ElementBuilder",
    "ExtensionBuilder",
    "ObservationBuilder",
    "ObservationComponentBuilder",
    "ObservationTriggeredByBuilder",
    "PatientBuilder",
    "PatientContactBuilder",
    "ResourceBuilder",
    "TimingBuilder",
]


class ElementBuilder(builder.ElementBuilder):
    fhir_version = R5


class BackboneElementBuilder(ElementBuilder, builder.BackboneElementBuilder):
    pass


class BackboneTypeBuilder(ElementBuilder, builder.BackboneElementBuilder):
    """Base for builders of BackboneType datatypes (modifierExtension allowed)."""


class ResourceBuilder(builder.ResourceBuilder):
    fhir_version = R5


class DomainResourceBuilder(ResourceBuilder, builder.DomainResourceBuilder):
    pass


class ExtensionBuilder(ElementBuilder):
    model = Extension


class PatientContactBuilder(BackboneElementBuilder):
    model = PatientContact


class ObservationTriggeredByBuilder(BackboneElementBuilder):
    model = ObservationTriggeredBy


class ObservationComponentBuilder(BackboneElementBuilder):
    model = ObservationComponent


class BasicBuilder(DomainResourceBuilder):
    model = Basic


class PatientBuilder(DomainResourceBuilder):
    model = Patient


class TimingBuilder(BackboneTypeBuilder):
    model = Timing


class ObservationBuilder(DomainResourceBuilder):
    """Builds Observation; ``set_instantiates`` and ``add_triggered_by`` are R5 only."""

    model = Observation

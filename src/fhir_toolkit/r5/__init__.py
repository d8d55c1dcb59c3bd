# src/fhir_toolkit/r5/__init__.py
"""
FHIR R5 (5.0.0) models and builders.

Every class in this package belongs to R5 only; builders reject models of
other releases.
"""

from __future__ import annotations

from .backbones import ObservationComponent, ObservationTriggeredBy, PatientContact
from .base import (
    BackboneElement,
    BackboneType,
    DataType,
    DomainResource,
    Element,
    Resource,
)
from .builders import (
    BackboneElementBuilder,
    BackboneTypeBuilder,
    BasicBuilder,
    DomainResourceBuilder,
    ElementBuilder,
    ExtensionBuilder,
    ObservationBuilder,
    ObservationComponentBuilder,
    ObservationTriggeredByBuilder,
    PatientBuilder,
    PatientContactBuilder,
    ResourceBuilder,
    TimingBuilder,
)
from .datatypes import Extension, Timing
from .resources import Basic, Observation, Patient, registry

FHIR_VERSION = "R5"
FHIR_VERSION_STRING = "5.0.0"

from_json = registry.from_json

__all__ = [
    "FHIR_VERSION",
    "FHIR_VERSION_STRING",
    "BackboneElement",
    "BackboneElementBuilder",
    "BackboneType",
    "BackboneTypeBuilder",
    "Basic",
    "BasicBuilder",
    "DataType",
    "DomainResource",
    "DomainResourceBuilder",
    "Element",
    "ElementBuilder",
    "Extension",
    "ExtensionBuilder",
    "Observation",
    "ObservationBuilder",
    "ObservationComponent",
    "ObservationComponentBuilder",
    "ObservationTriggeredBy",
    "ObservationTriggeredByBuilder",
    "Patient",
    "PatientBuilder",
    "PatientContact",
    "PatientContactBuilder",
    "Resource",
    "ResourceBuilder",
    "Timing",
    "TimingBuilder",
    "from_json",
    "registry",
]

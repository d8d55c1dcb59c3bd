# src/fhir_toolkit/r4/__init__.py
"""
FHIR R4 (4.0.1) models and builders.

Every class in this package belongs to R4 only; builders reject models of
other releases.
"""

from __future__ import annotations

from .backbones import ObservationComponent, PatientContact
from .base import BackboneElement, DomainResource, Element, Resource
from .builders import (
    BackboneElementBuilder,
    BasicBuilder,
    DomainResourceBuilder,
    ElementBuilder,
    ExtensionBuilder,
    ObservationBuilder,
    ObservationComponentBuilder,
    PatientBuilder,
    PatientContactBuilder,
    ResourceBuilder,
)
from .datatypes import Extension
from .resources import Basic, Observation, Patient, registry

FHIR_VERSION = "R4"
FHIR_VERSION_STRING = "4.0.1"

from_json = registry.from_json

__all__ = [
    "FHIR_VERSION",
    "FHIR_VERSION_STRING",
    "BackboneElement",
    "BackboneElementBuilder",
    "Basic",
    "BasicBuilder",
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
    "Patient",
    "PatientBuilder",
    "PatientContact",
    "PatientContactBuilder",
    "Resource",
    "ResourceBuilder",
    "from_json",
    "registry",
]

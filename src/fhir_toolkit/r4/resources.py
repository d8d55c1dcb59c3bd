# src/fhir_toolkit/r4/resources.py
"""
FHIR R4 resources and the R4 resource registry.

Importing this module registers every class decorated with
``@registry.register``.
"""

from __future__ import annotations

from ..core.registry import ResourceRegistry
from ..core.version import R4
from . import _fields as f
from .base import DomainResource

__all__ = ["Basic", "Observation", "Patient", "registry"]

registry = ResourceRegistry(R4, fallback=DomainResource)


@registry.register
class Basic(DomainResource):
    """
    Resource for non-supported content.

    See https://hl7.org/fhir/R4/basic.html
    """

    resource_type = "Basic"
    _fields = f.BASIC


@registry.register
class Patient(DomainResource):
    """
    Information about an individual or animal receiving care or other
    health-related services.

    See https://hl7.org/fhir/R4/patient.html
    """

    resource_type = "Patient"
    _fields = f.PATIENT


@registry.register
class Observation(DomainResource):
    """
    Measurements and simple assertions made about a patient, device or other
    subject.

    See https://hl7.org/fhir/R4/observation.html
    """

    resource_type = "Observation"
    _fields = f.OBSERVATION

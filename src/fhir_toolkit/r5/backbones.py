# src/fhir_toolkit/r5/backbones.py
"""FHIR R5 backbone elements used by the resources of this package."""

from __future__ import annotations

from . import _fields as f
from .base import BackboneElement

__all__ = ["ObservationComponent", "ObservationTriggeredBy", "PatientContact"]


class PatientContact(BackboneElement):
    """A contact party (e.g. guardian, partner, friend) for the patient."""

    _fields = f.PATIENT_CONTACT


class ObservationTriggeredBy(BackboneElement):
    """Triggering observation(s); new in R5."""

    _fields = f.OBSERVATION_TRIGGERED_BY


class ObservationComponent(BackboneElement):
    _fields = f.OBSERVATION_COMPONENT

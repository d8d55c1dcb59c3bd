# src/fhir_toolkit/r4/backbones.py
"""FHIR R4 backbone elements used by the resources of this package."""

from __future__ import annotations

from . import _fields as f
from .base import BackboneElement

__all__ = ["ObservationComponent", "PatientContact"]


class PatientContact(BackboneElement):
    """A contact party (e.g. guardian, partner, friend) for the patient."""

    _fields = f.PATIENT_CONTACT


class ObservationComponent(BackboneElement):
    """Component results of an Observation; shares the parent's value[x] shape."""

    _fields = f.OBSERVATION_COMPONENT

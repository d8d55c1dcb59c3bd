# src/fhir_toolkit/core/__init__.py
"""
Release-independent machinery behind every FHIR model family.

The R4, R4B and R5 packages instantiate this pattern with their own field
sets; no class defined here is a member of any release.
"""

from __future__ import annotations

from .base import FhirBase, append_own_fields
from .fields import ChoiceGroup, ChoiceValue, FieldSet, choice, fields
from .registry import ResourceRegistry, get_resource_type, is_fhir_resource
from .registry import is_resource_type
from .version import FhirVersion, R4, R4B, R5, load_version, resolve_version

__all__ = [
    "ChoiceGroup",
    "ChoiceValue",
    "FhirBase",
    "FhirVersion",
    "FieldSet",
    "R4",
    "R4B",
    "R5",
    "ResourceRegistry",
    "append_own_fields",
    "choice",
    "fields",
    "get_resource_type",
    "is_fhir_resource",
    "is_resource_type",
    "load_version",
    "resolve_version",
]
